'''
A small helper module to assist with debugging the bright library
'''
import logging
import platform
import traceback
from typing import Optional


def info(name: Optional[str] = None, root: Optional[str] = None) -> dict:
    '''
    Gather and return information that may (or may not) be useful for debugging
    issues with the library. Nothing is written to any device.

    Args:
        name: the backlight device to inspect, as in `bright.linux.find_backlight`
        root: the backlight class directory. Defaults to `bright.config.BACKLIGHT_ROOT`
    '''
    import bright

    logger = logging.getLogger(__name__).getChild('info')

    debug_info = {
        'version': bright.__version__,
        'platform': platform.system(),
        'file': bright.__file__,
        'root': root or bright.config.BACKLIGHT_ROOT
    }

    logger.debug('gathering list of all backlights')

    try:
        all_backlights = bright.list_backlights(root=root)
    except Exception:
        all_backlights = traceback.format_exc()
    finally:
        debug_info['all_backlights'] = all_backlights

    logger.debug('resolving backlight device')

    try:
        device = bright.find_backlight(name=name, root=root)
    except Exception:
        debug_info['selected'] = traceback.format_exc()
        return debug_info

    selected = {
        'name': device.name,
        'path': device.path,
        'max_level': device.max_level
    }
    try:
        backlight = bright.Backlight(device)
        selected['level'] = backlight.get_level()
        selected['brightness'] = backlight.get_brightness()
    except Exception:
        selected['level'] = traceback.format_exc()
    finally:
        debug_info['selected'] = selected

    return debug_info

'''
Contains globally applicable configuration variables.
'''
import inspect
from functools import wraps
from typing import Callable, Optional


def default_params(func: Callable):
    '''
    This decorator sets default kwarg values using global configuration variables.
    Only kwargs that the decorated function accepts are set, and the values are
    read each time the function is called.

    A `root` of `None` is replaced. A `max_level` of `None` is kept, since it
    means "read the maximum level from the device".
    '''
    signature = inspect.signature(func)
    accepted = signature.parameters

    @wraps(func)
    def wrapper(*args, **kwargs):
        # bind first so values passed by position are not overridden
        bound = signature.bind_partial(*args, **kwargs)
        if 'root' in accepted and bound.arguments.get('root') is None:
            bound.arguments['root'] = BACKLIGHT_ROOT
        if 'max_level' in accepted:
            bound.arguments.setdefault('max_level', MAX_LEVEL)
        return func(*bound.args, **bound.kwargs)
    return wrapper


BACKLIGHT_ROOT: str = '/sys/class/backlight'
'''
Directory containing one sub-directory per backlight device.
Default value for the `root` parameter in discovery functions.
'''

MAX_LEVEL: Optional[int] = None
'''
Default value for the `max_level` parameter in discovery functions.
If `None`, the maximum level is read from the device's `max_brightness` file.
'''

DEFAULT_MAX_LEVEL: int = 120000
'''
Maximum raw level assumed when a device does not report one
'''

STEP_INTERVAL: float = 0.017
'''
Seconds between each write during a fade. Roughly 60 steps per second.
'''

TOLERANCE: int = 100
'''
A fade stops stepping once the raw level is within this many units of the target.
This applies to a device with a max level of `DEFAULT_MAX_LEVEL` and is scaled
down for devices with fewer levels, so a 255 level device steps all the way.
'''

EXACT_FINISH: bool = True
'''
Write the exact target level once a fade has finished stepping.
If `False` the device is left within `TOLERANCE` of the target.
'''

LOWER_BOUND: int = 1
'''
Lowest percentage that relative adjustments and pulses will go to.
On most displays a brightness of 0 turns off the backlight.
'''

DEFAULT_DURATION: str = '500ms'
'''Default fade duration'''

NUDGE_STEP: int = 5
'''Default percentage for `Backlight.inc_brightness` and `Backlight.dec_brightness`'''

NUDGE_DURATION: str = '125ms'
'''Fade duration for `Backlight.inc_brightness` and `Backlight.dec_brightness`'''

PULSE_AMPLITUDE: int = 25
'''Default amplitude (as a percentage) for `Backlight.pulse`'''

PULSE_DURATION: str = '75ms'
'''Fade duration for each half of a pulse'''

PULSE_REST: float = 0.2
'''Seconds to rest between pulse cycles'''

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from . import config
from .exceptions import (DeviceDiscoveryError, DeviceReadError,
                         DeviceWriteError, format_exc)
from .helpers import BrightnessDevice
from .types import RawLevel

_logger = logging.getLogger(__name__)


def _read_int(file: str) -> Optional[int]:
    '''read an integer from a sysfs file, returning None if that is not possible'''
    try:
        with open(file, 'r') as f:
            return int(f.read().strip())
    except (OSError, ValueError) as e:
        _logger.debug(f'cannot read integer from {file} - {format_exc(e)}')
        return None


@dataclass
class SysFiles(BrightnessDevice):
    '''
    A backlight device that shows up in the `/sys/class/backlight`
    directory (so usually laptop displays). Does not rely on any 3rd party software.

    To set the brightness, your user will need write permissions for
    `/sys/class/backlight/*/brightness` or you will need to run the program
    as root.
    '''
    path: str
    '''The device directory, eg: `/sys/class/backlight/intel_backlight`'''
    max_level: RawLevel = config.DEFAULT_MAX_LEVEL
    name: str = ''

    def __post_init__(self):
        if not self.name:
            self.name = os.path.basename(os.path.normpath(self.path))
        if self.max_level <= 0:
            raise ValueError(f'max_level must be positive, not {self.max_level!r}')
        self._logger = _logger.getChild(self.__class__.__name__).getChild(self.name)

    @property
    def brightness_file(self) -> str:
        return os.path.join(self.path, 'brightness')

    def read_level(self) -> RawLevel:
        try:
            with open(self.brightness_file, 'r') as f:
                content = f.read()
        except OSError as e:
            raise DeviceReadError(f'cannot read {self.brightness_file} - {format_exc(e)}') from e

        try:
            return int(content.strip())
        except ValueError as e:
            raise DeviceReadError(
                f'{self.brightness_file} does not contain an integer: {content!r}') from e

    def write_level(self, level: RawLevel):
        self._logger.debug(f'write level {level}')
        try:
            with open(self.brightness_file, 'w') as f:
                f.write(str(int(level)))
        except PermissionError as e:
            raise DeviceWriteError(
                f'no permission to write {self.brightness_file}.'
                ' Run as root or add a udev rule granting write access'
                f' (see bright.exceptions.DeviceWriteError) - {format_exc(e)}'
            ) from e
        except OSError as e:
            raise DeviceWriteError(f'cannot write {self.brightness_file} - {format_exc(e)}') from e


@config.default_params
def list_backlights(root: Optional[str] = None) -> List[dict]:
    '''
    List every device in the backlight directory, usable or not

    Args:
        root: the backlight class directory. Defaults to `.config.BACKLIGHT_ROOT`

    Returns:
        A list of dictionaries, sorted by device name. Each has the following keys:
        - name (`str`): the name of the device directory
        - path (`str`): the full path of the device directory
        - brightness (`int` or `None`): the current raw level, `None` if unreadable
        - max_brightness (`int` or `None`): the reported maximum level, `None` if unreadable

    Raises:
        DeviceDiscoveryError: if `root` cannot be listed
    '''
    try:
        folders = sorted(os.listdir(root))
    except OSError as e:
        raise DeviceDiscoveryError(f'cannot list backlight devices in {root!r} - {format_exc(e)}') from e

    devices = []
    for folder in folders:
        path = os.path.join(root, folder)
        if not os.path.isdir(path):
            continue
        devices.append({
            'name': folder,
            'path': path,
            'brightness': _read_int(os.path.join(path, 'brightness')),
            'max_brightness': _read_int(os.path.join(path, 'max_brightness'))
        })
    return devices


@config.default_params
def find_backlight(
    name: Optional[str] = None,
    root: Optional[str] = None,
    max_level: Optional[RawLevel] = None
) -> SysFiles:
    '''
    Resolve the backlight device to control.

    Args:
        name: the name of a specific device, eg: `'intel_backlight'`.
            If not given, the first device (by name) with a brightness above 0 is used
        root: the backlight class directory. Defaults to `.config.BACKLIGHT_ROOT`
        max_level: override the maximum level of the device. If `None`, the value
            in the device's `max_brightness` file is used, falling back to
            `.config.DEFAULT_MAX_LEVEL`. Defaults to `.config.MAX_LEVEL`

    Raises:
        DeviceDiscoveryError: if no usable device is found

    Example:
        ```python
        from bright.linux import find_backlight

        device = find_backlight()
        print(device.name, device.max_level, device.read_level())
        ```
    '''
    devices = list_backlights(root=root)

    if name is not None:
        candidates = [i for i in devices if i['name'] == name]
        if not candidates:
            raise DeviceDiscoveryError(f'no backlight device named {name!r} in {root!r}')
        if candidates[0]['brightness'] is None:
            raise DeviceDiscoveryError(f'brightness of backlight device {name!r} is unreadable')
    else:
        candidates = [i for i in devices if i['brightness'] is not None and i['brightness'] > 0]
        if not candidates:
            raise DeviceDiscoveryError(f'no usable backlight device found in {root!r}')

    device = candidates[0]
    _logger.debug(f'selected backlight device {device["name"]!r} ({device["path"]})')

    if max_level is None:
        max_level = device['max_brightness']
        if max_level is None or max_level <= 0:
            _logger.debug(
                f'invalid max_brightness {max_level!r} for {device["name"]!r},'
                f' using default of {config.DEFAULT_MAX_LEVEL}'
            )
            max_level = config.DEFAULT_MAX_LEVEL
    elif max_level <= 0:
        raise ValueError(f'max_level must be positive, not {max_level!r}')

    return SysFiles(path=device['path'], max_level=max_level, name=device['name'])

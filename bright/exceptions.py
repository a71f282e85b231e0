def format_exc(e: Exception) -> str:
    '''@private'''
    return f'{type(e).__name__}: {e}'


class BrightError(Exception):
    '''
    Generic error class designed to make catching errors under one umbrella easy.
    '''
    ...


class DeviceDiscoveryError(BrightError, LookupError):
    '''Could not find a usable backlight device'''
    ...


class DeviceReadError(BrightError, OSError):
    '''The brightness file could not be read or did not contain an integer'''
    ...


class DeviceWriteError(BrightError, OSError):
    '''
    The brightness file could not be written to.

    Writing to `/sys/class/backlight/*/brightness` usually requires root or
    a udev rule granting your user's group write access. Example rule:
        ```
        ACTION=="add", SUBSYSTEM=="backlight", RUN+="/bin/chgrp video /sys/class/backlight/%k/brightness"
        ACTION=="add", SUBSYSTEM=="backlight", RUN+="/bin/chmod g+w /sys/class/backlight/%k/brightness"
        ```
    '''
    ...


class InvalidDurationError(BrightError, ValueError):
    '''Unparsable or negative duration'''
    ...


class InvalidPercentError(BrightError, ValueError):
    '''Unparsable or out of range percentage'''
    ...

'''
Helper functions for the library
'''
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Callable, Iterator, Optional, Union

from .exceptions import InvalidDurationError, InvalidPercentError
from .types import Duration, IntPercentage, Percentage, RawLevel

DURATION_UNITS = {
    'ns': 1e-9,
    'us': 1e-6,
    'µs': 1e-6,  # U+00B5 micro sign
    'μs': 1e-6,  # U+03BC greek mu
    'ms': 1e-3,
    's': 1,
    'm': 60,
    'h': 3600
}
'''Duration string suffixes and the number of seconds each one represents'''

_DURATION_PART = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)')


class BrightnessDevice(ABC):
    '''
    A readable/writable integer-valued brightness device with a known maximum level.
    '''
    name: str
    '''Name of the device, used in log and error messages'''
    max_level: RawLevel
    '''The highest raw level the device accepts'''

    @abstractmethod
    def read_level(self) -> RawLevel:
        '''
        Returns:
            The current raw brightness level of the device

        Raises:
            DeviceReadError: if the level cannot be read or parsed
        '''
        ...

    @abstractmethod
    def write_level(self, level: RawLevel):
        '''
        Args:
            level (.types.RawLevel): the new raw level. This is written as-is,
                callers are responsible for clamping

        Raises:
            DeviceWriteError: if the level cannot be written
        '''
        ...


def _truncated_div(a: int, b: int) -> int:
    '''integer division that rounds toward zero instead of toward negative infinity'''
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def percent_to_level(value: IntPercentage, max_level: RawLevel) -> RawLevel:
    '''
    Convert a percentage into a raw device level. The result is truncated
    toward zero and is not clamped.

    Example:
        ```python
        from bright.helpers import percent_to_level

        percent_to_level(50, 120000)
        # 60000
        ```
    '''
    return _truncated_div(value * max_level, 100)


def level_to_percent(level: RawLevel, max_level: RawLevel) -> IntPercentage:
    '''
    Convert a raw device level into a percentage. The result is truncated
    toward zero, so `level_to_percent(percent_to_level(x))` may be up to 1 less than `x`.
    '''
    return _truncated_div(level * 100, max_level)


def parse_duration(value: Duration) -> float:
    '''
    Convert a `.types.Duration` into a number of seconds

    Args:
        value: the duration to convert

    Returns:
        The duration in seconds

    Raises:
        InvalidDurationError: if the duration cannot be parsed or is negative

    Example:
        ```python
        from bright.helpers import parse_duration

        parse_duration('500ms')  # 0.5
        parse_duration('1m30s')  # 90.0
        parse_duration(2)  # 2.0
        ```
    '''
    if isinstance(value, bool):
        raise InvalidDurationError(f'invalid duration {value!r}')

    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        string = value.strip()
        if string == '0':
            return 0.0
        if not string:
            raise InvalidDurationError('duration string is empty')
        if string.startswith('-'):
            raise InvalidDurationError(f'duration cannot be negative: {value!r}')
        string = string.lstrip('+')

        seconds = 0.0
        position = 0
        for match in _DURATION_PART.finditer(string):
            if match.start() != position:
                break
            seconds += float(match.group(1)) * DURATION_UNITS[match.group(2)]
            position = match.end()

        if position == 0 or position != len(string):
            raise InvalidDurationError(f'invalid duration {value!r}')
    else:
        raise InvalidDurationError(f'duration must be a number, str or timedelta, not {type(value).__name__!r}')

    if seconds < 0:
        raise InvalidDurationError(f'duration cannot be negative: {value!r}')
    return seconds


def level_steps(
    start: RawLevel,
    stop: RawLevel,
    step_count: int,
    tolerance: int = 100
) -> Iterator[RawLevel]:
    '''
    A `range`-like function that yields the intermediate raw levels of a fade
    from `start` (exclusive) towards `stop`.

    The distance is split into `step_count` equal steps (truncated toward zero).
    Levels are yielded until one lands within `tolerance` of `stop`, so the last
    value yielded is usually close to, but not exactly, `stop`.
    No yielded value will ever overshoot `stop`.

    If `step_count` is less than 1 then `stop` is yielded once.

    Args:
        start: the level the fade starts from
        stop: the target level
        step_count: the number of steps the fade should be split into
        tolerance: how close to `stop` is close enough

    Yields:
        int
    '''
    if step_count < 1:
        yield stop
        return

    difference = start - stop
    step = _truncated_div(difference, step_count)
    if step == 0:
        # distances smaller than the step count still need to make progress
        step = 1 if difference > 0 else -1

    current = start
    while abs(difference) > tolerance:
        current -= step
        if (step > 0 and current < stop) or (step < 0 and current > stop):
            current = stop
        difference = current - stop
        yield current


def percentage(
    value: Percentage,
    current: Optional[Union[int, Callable[[], int]]] = None,
    lower_bound: int = 0,
    upper_bound: int = 100,
    strict: bool = False
) -> IntPercentage:
    '''
    Convenience function to convert a brightness value into a percentage. Can handle
    integers, floats and strings. Also can handle relative strings (eg: `'+10'` or `'-10'`)

    Args:
        value: the brightness value to convert
        current: the current brightness value or a function that returns the current brightness
            value. Used when dealing with relative brightness values
        lower_bound: the minimum value the brightness can be set to
        upper_bound: the maximum value the brightness can be set to
        strict: raise an error for values outside of the bounds instead of clamping them

    Returns:
        `.types.IntPercentage`: The new brightness percentage, between `lower_bound` and `upper_bound`

    Raises:
        InvalidPercentError: if `value` cannot be interpreted as a number, or if `strict`
            is set and `value` is out of bounds
    '''
    relative = isinstance(value, str) and value.strip()[:1] in ('+', '-')
    if relative and current is None:
        raise InvalidPercentError(f'relative value {value!r} needs a current brightness')

    try:
        if relative:
            if callable(current):
                current = current()
            value = int(float(value)) + int(float(str(current)))
        else:
            value = int(float(str(value)))
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidPercentError(f'invalid percentage {value!r}') from e

    if strict and not lower_bound <= value <= upper_bound:
        raise InvalidPercentError(f'{value} is not between {lower_bound} and {upper_bound}')
    return min(upper_bound, max(lower_bound, value))

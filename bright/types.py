'''
Submodule containing types and type aliases used throughout the library.

Splitting these definitions into a separate submodule allows for detailed
explanations and verbose type definitions, without cluttering up the rest
of the library.
'''
from datetime import timedelta
from typing import Union

IntPercentage = int
'''
An integer between 0 and 100 (inclusive) that represents a brightness level.
Other than the implied bounds, this is just a normal integer.

Relative adjustments can push an `IntPercentage` outside of these bounds
before it is clamped, so functions accepting one will tolerate any integer.
'''
Percentage = Union[IntPercentage, str]
'''
An `IntPercentage` or a string representing an `IntPercentage`.

String values may come in two forms:
- Absolute values: for example `'40'` converts directly to `int('40')`
- Relative values: strings prefixed with `+`/`-` will be interpreted relative to the
    current brightness level. In this case, the integer value of your string will be added to the
    current brightness level.
    For example, if the current brightness is 50%, a value of `'+40'` would imply 90% brightness
    and a value of `'-40'` would imply 10% brightness.

Relative brightness values will usually be resolved by the `.helpers.percentage` function.
'''

RawLevel = int
'''
The device's native brightness unit, as found in `/sys/class/backlight/*/brightness`.
Bounded by the device's `max_level`.
'''

Duration = Union[int, float, str, timedelta]
'''
A length of time. Can be any one of the following:
- int/float: a number of seconds
- `datetime.timedelta`
- str: a duration string made of decimal numbers with unit suffixes,
    for example `'500ms'`, `'1.5s'` or `'1m30s'`. Valid units are
    `ns`, `us` (or `µs`), `ms`, `s`, `m` and `h`. The string `'0'` is
    also accepted.

Durations will usually be resolved by the `.helpers.parse_duration` function.
'''

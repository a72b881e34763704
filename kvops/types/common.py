"""
Common Types
"""

import math
from enum import Enum
from datetime import timedelta
from fractions import Fraction
from typing import Optional, Tuple, Union
from kvops.errors import InvalidArgumentError


class TimeUnit(str, Enum):
    NANOSECONDS = "nanoseconds"
    MICROSECONDS = "microseconds"
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    @property
    def nanos(self) -> int:
        """
        Returns the number of nanoseconds in one unit
        """
        return _unit_nanos[self]

    @classmethod
    def from_value(cls, value: Union[str, 'TimeUnit']) -> 'TimeUnit':
        """
        Resolves the unit from a name such as `ms`, `seconds` or `SECONDS`
        """
        if isinstance(value, cls): return value
        value = value.lower()
        if value in _unit_aliases: return _unit_aliases[value]
        return cls(value)


_unit_nanos = {
    TimeUnit.NANOSECONDS: 1,
    TimeUnit.MICROSECONDS: 1_000,
    TimeUnit.MILLISECONDS: 1_000_000,
    TimeUnit.SECONDS: 1_000_000_000,
    TimeUnit.MINUTES: 60 * 1_000_000_000,
    TimeUnit.HOURS: 3600 * 1_000_000_000,
    TimeUnit.DAYS: 86400 * 1_000_000_000,
}

_unit_aliases = {
    'ns': TimeUnit.NANOSECONDS,
    'us': TimeUnit.MICROSECONDS,
    'ms': TimeUnit.MILLISECONDS,
    's': TimeUnit.SECONDS,
    'sec': TimeUnit.SECONDS,
    'm': TimeUnit.MINUTES,
    'min': TimeUnit.MINUTES,
    'h': TimeUnit.HOURS,
    'd': TimeUnit.DAYS,
}


class ExpirationResolution(str, Enum):
    """
    The finest expiration the store honors
    """
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"

    @property
    def argument(self) -> str:
        """
        Returns the SET / GETEX argument name for this resolution
        """
        return 'px' if self == ExpirationResolution.MILLISECONDS else 'ex'


def to_expiration(
    timeout: Union[int, float, timedelta],
    unit: Optional[Union[str, TimeUnit]] = TimeUnit.SECONDS,
    resolution: Union[str, ExpirationResolution] = ExpirationResolution.MILLISECONDS,
) -> Tuple[str, int]:
    """
    Converts a duration to the store's native expiration argument

    Durations are rounded up to the resolution so a key never expires early,
    and anything below the resolution becomes the minimum of 1.

    >>> to_expiration(1, TimeUnit.MILLISECONDS, 'seconds')
    ('ex', 1)
    >>> to_expiration(1500, 'ms')
    ('px', 1500)
    """
    resolution = ExpirationResolution(resolution)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float, timedelta)):
        raise InvalidArgumentError(f'Invalid timeout: {timeout!r}. Expected a number or timedelta')
    if isinstance(timeout, timedelta):
        nanos = Fraction(timeout.days * 86400 + timeout.seconds) * 1_000_000_000 + timeout.microseconds * 1_000
    else:
        if isinstance(timeout, float) and not math.isfinite(timeout):
            raise InvalidArgumentError(f'Invalid timeout: {timeout!r}')
        unit = TimeUnit.SECONDS if unit is None else TimeUnit.from_value(unit)
        nanos = Fraction(timeout) * unit.nanos
    if nanos <= 0:
        raise InvalidArgumentError(f'Timeout must be positive, got {timeout!r}')
    per_unit = _unit_nanos[TimeUnit(resolution.value)]
    return resolution.argument, max(1, math.ceil(nanos / per_unit))

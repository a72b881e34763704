from __future__ import annotations

"""
Numeric Serializers

Both render plain decimal literals so the stored bytes stay compatible with the
store's own INCRBY / INCRBYFLOAT commands.
"""

import re
import math
from typing import Union
from .base import BaseSerializer

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_int_pattern = re.compile(rb'(0|-?[1-9][0-9]*)')
_float_pattern = re.compile(rb'[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?')


class LongSerializer(BaseSerializer[int]):
    """
    Signed 64-bit integers as base-10 literals
    """
    name: str = "int"

    def encode_value(self, value: int, **kwargs) -> str:
        """
        Encodes the value
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'Expected int, got {type(value).__name__}')
        if value < INT64_MIN or value > INT64_MAX:
            raise OverflowError(f'{value} is outside the signed 64-bit range')
        return str(value)

    def decode_value(self, value: bytes, **kwargs) -> int:
        """
        Decodes the value
        """
        if not _int_pattern.fullmatch(value):
            raise ValueError(f'Not an integer literal: {value!r}')
        return int(value)


class DoubleSerializer(BaseSerializer[float]):
    """
    Finite floats as the shortest decimal literal that round-trips
    """
    name: str = "float"

    def encode_value(self, value: Union[float, int], **kwargs) -> str:
        """
        Encodes the value
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f'Expected float, got {type(value).__name__}')
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f'Cannot store a non-finite float: {value}')
        return repr(value)

    def decode_value(self, value: bytes, **kwargs) -> float:
        """
        Decodes the value
        """
        if not _float_pattern.fullmatch(value):
            raise ValueError(f'Not a decimal literal: {value!r}')
        return float(value)

"""Range-checked conversions between integer widths."""

from __future__ import annotations

import operator
from enum import Enum

from .errors import ClearingHouseError, ErrorCode


class IntType(Enum):
    """Fixed-width integer types and their inclusive bounds."""

    U8 = (0, 2**8 - 1)
    U16 = (0, 2**16 - 1)
    U32 = (0, 2**32 - 1)
    U64 = (0, 2**64 - 1)
    U128 = (0, 2**128 - 1)
    I8 = (-(2**7), 2**7 - 1)
    I16 = (-(2**15), 2**15 - 1)
    I32 = (-(2**31), 2**31 - 1)
    I64 = (-(2**63), 2**63 - 1)
    I128 = (-(2**127), 2**127 - 1)

    def __init__(self, minimum: int, maximum: int) -> None:
        self.min = minimum
        self.max = maximum

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


def cast(value: int, int_type: IntType) -> int:
    """Return ``value`` if it fits ``int_type``, otherwise raise a cast error."""
    number = operator.index(value)
    if not int_type.contains(number):
        raise ClearingHouseError(ErrorCode.FAIL_TO_CAST)
    return number


def cast_to_i128(value: int) -> int:
    return cast(value, IntType.I128)


def cast_to_u128(value: int) -> int:
    return cast(value, IntType.U128)


def cast_to_i64(value: int) -> int:
    return cast(value, IntType.I64)
"""Fixed-width unsigned integers with checked arithmetic."""

from __future__ import annotations

import functools
import operator
from typing import ClassVar, Optional, TypeVar

from .errors import ClearingHouseError, ErrorCode

_U64_MAX = (1 << 64) - 1
_U128_MAX = (1 << 128) - 1

T = TypeVar("T", bound="UnsignedInt")


@functools.total_ordering
class UnsignedInt:
    """An unsigned integer limited to ``BITS`` bits.

    Arithmetic through the ``checked_*`` methods raises a math error on
    overflow, underflow or division by zero.
    """

    BITS: ClassVar[int] = 64
    BYTES: ClassVar[int] = 8
    MAX: ClassVar[int] = _U64_MAX

    __slots__ = ("_value",)

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls.BYTES = cls.BITS // 8
        cls.MAX = (1 << cls.BITS) - 1

    def __init__(self, value: int = 0) -> None:
        value = operator.index(value)
        if not 0 <= value <= self.MAX:
            raise OverflowError(f"{value} does not fit in {self.BITS} unsigned bits")
        self._value = value

    @staticmethod
    def _operand(other: object) -> int:
        value = operator.index(other)
        if value < 0:
            raise OverflowError(f"{value} is not an unsigned value")
        return value

    def _wrap(self: T, value: int) -> T:
        if not 0 <= value <= self.MAX:
            raise ClearingHouseError(ErrorCode.MATH_ERROR)
        return type(self)(value)

    def checked_add(self: T, other: int) -> T:
        return self._wrap(self._value + self._operand(other))

    def checked_sub(self: T, other: int) -> T:
        return self._wrap(self._value - self._operand(other))

    def checked_mul(self: T, other: int) -> T:
        return self._wrap(self._value * self._operand(other))

    def checked_div(self: T, other: int) -> T:
        divisor = self._operand(other)
        if divisor == 0:
            raise ClearingHouseError(ErrorCode.MATH_ERROR)
        return self._wrap(self._value // divisor)

    def try_to_u64(self) -> int:
        """Return the value as a u64, raising a conversion error if it does not fit."""
        if self._value > _U64_MAX:
            raise ClearingHouseError(ErrorCode.BN_CONVERSION_ERROR)
        return self._value

    def to_u64(self) -> Optional[int]:
        """Return the value as a u64, or None if it does not fit."""
        return self._value if self._value <= _U64_MAX else None

    def try_to_u128(self) -> int:
        """Return the value as a u128, raising a conversion error if it does not fit."""
        if self._value > _U128_MAX:
            raise ClearingHouseError(ErrorCode.BN_CONVERSION_ERROR)
        return self._value

    def to_u128(self) -> Optional[int]:
        """Return the value as a u128, or None if it does not fit."""
        return self._value if self._value <= _U128_MAX else None

    def to_bytes(self) -> bytes:
        """Little-endian encoding of exactly ``BYTES`` bytes."""
        return self._value.to_bytes(self.BYTES, "little")

    @classmethod
    def from_bytes(cls: type[T], data: bytes) -> T:
        """Decode a little-endian encoding of exactly ``BYTES`` bytes."""
        if len(data) != cls.BYTES:
            raise ValueError(f"expected {cls.BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "little"))

    def __index__(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (UnsignedInt, int)):
            return self._value == int(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, (UnsignedInt, int)):
            return self._value < int(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"


class U192(UnsignedInt):
    """A 192-bit unsigned integer."""

    BITS = 192
    __slots__ = ()


class U256(UnsignedInt):
    """A 256-bit unsigned integer."""

    BITS = 256
    __slots__ = ()
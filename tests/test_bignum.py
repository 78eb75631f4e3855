import pytest

from clearinghouse.bignum import U192, U256
from clearinghouse.errors import ClearingHouseError, ErrorCode


def test_byte_width():
    assert len(U192(1).to_bytes()) == 24
    assert len(U256(1).to_bytes()) == 32


@pytest.mark.parametrize("cls", [U192, U256])
@pytest.mark.parametrize("value", [0, 1, 2**64, 2**128 - 1, 2**190 + 12345])
def test_bytes_round_trip(cls, value):
    number = cls(value)
    assert cls.from_bytes(number.to_bytes()) == number


def test_bytes_are_little_endian():
    encoded = U192(1).to_bytes()
    assert encoded[0] == 1
    assert set(encoded[1:]) == {0}


def test_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        U192.from_bytes(b"\x00" * 8)


def test_construct_out_of_range():
    with pytest.raises(OverflowError):
        U192(2**192)
    with pytest.raises(OverflowError):
        U192(-1)


def test_checked_mul_and_div():
    value = U192(2**100).checked_mul(2**80).checked_div(2**60)
    assert value == 2**120
    assert isinstance(value, U192)


def test_checked_mul_overflow():
    with pytest.raises(ClearingHouseError) as info:
        U192(2**128).checked_mul(2**64)
    assert info.value.code is ErrorCode.MATH_ERROR
    assert U256(2**128).checked_mul(2**64) == 2**192


def test_checked_div_by_zero():
    with pytest.raises(ClearingHouseError) as info:
        U192(5).checked_div(0)
    assert info.value.code is ErrorCode.MATH_ERROR


def test_checked_add_and_sub():
    assert U192(7).checked_add(3).checked_sub(10) == 0
    with pytest.raises(ClearingHouseError):
        U192(3).checked_sub(4)
    with pytest.raises(ClearingHouseError):
        U192(U192.MAX).checked_add(1)


def test_u64_conversion():
    assert U192(2**64 - 1).try_to_u64() == 2**64 - 1
    assert U192(2**64).to_u64() is None
    with pytest.raises(ClearingHouseError) as info:
        U192(2**64).try_to_u64()
    assert info.value.code is ErrorCode.BN_CONVERSION_ERROR


def test_u128_conversion():
    assert U256(2**128 - 1).to_u128() == 2**128 - 1
    assert U256(2**128).to_u128() is None
    with pytest.raises(ClearingHouseError) as info:
        U256(2**128).try_to_u128()
    assert info.value.code is ErrorCode.BN_CONVERSION_ERROR


def test_ordering_and_int():
    assert U192(3) < U192(4)
    assert int(U192(9)) == 9
    assert U192(9) == U256(9)
"""Public keys and program-derived addresses."""

from __future__ import annotations

import hashlib
import itertools
from dataclasses import dataclass
from typing import Iterable, Sequence

PUBKEY_BYTES = 32
MAX_SEEDS = 16
MAX_SEED_LEN = 32
PDA_MARKER = b"ProgramDerivedAddress"

_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX = {char: position for position, char in enumerate(_BASE58_ALPHABET)}

# Edwards25519 field prime and curve constant d = -121665/121666.
_P = 2**255 - 19
_D = (-121665 * pow(121666, _P - 2, _P)) % _P

_unique_counter = itertools.count(1)


class PubkeyError(ValueError):
    """Raised when a key or a derived address cannot be built."""


def _b58encode(data: bytes) -> str:
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_BASE58_ALPHABET[remainder])
    leading = len(data) - len(data.lstrip(b"\0"))
    return "1" * leading + "".join(reversed(digits))


def _b58decode(text: str) -> bytes:
    number = 0
    for char in text:
        try:
            number = number * 58 + _BASE58_INDEX[char]
        except KeyError:
            raise PubkeyError(f"invalid base58 character {char!r}") from None
    leading = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\0" * leading + body


@dataclass(frozen=True)
class Pubkey:
    """A 32-byte public key."""

    value: bytes

    def __post_init__(self) -> None:
        data = bytes(self.value)
        if len(data) != PUBKEY_BYTES:
            raise PubkeyError(f"a public key is {PUBKEY_BYTES} bytes, got {len(data)}")
        object.__setattr__(self, "value", data)

    @classmethod
    def default(cls) -> Pubkey:
        """The all-zero key."""
        return cls(bytes(PUBKEY_BYTES))

    @classmethod
    def from_string(cls, value: str) -> Pubkey:
        """Parse a base58 key."""
        return cls(_b58decode(value))

    @classmethod
    def new_unique(cls) -> Pubkey:
        """A key distinct from every other key made by this method."""
        counter = next(_unique_counter)
        return cls(counter.to_bytes(8, "big") + bytes(PUBKEY_BYTES - 8))

    def is_on_curve(self) -> bool:
        """Whether the bytes decode to a point on the ed25519 curve."""
        y = (int.from_bytes(self.value, "little") & ((1 << 255) - 1)) % _P
        y_squared = y * y % _P
        numerator = (y_squared - 1) % _P
        denominator = (_D * y_squared + 1) % _P
        x_squared = numerator * pow(denominator, _P - 2, _P) % _P
        return x_squared == 0 or pow(x_squared, (_P - 1) // 2, _P) == 1

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return _b58encode(self.value)

    def __repr__(self) -> str:
        return f"Pubkey({self})"


def _seed_bytes(seeds: Iterable[bytes]) -> list[bytes]:
    return [bytes(seed) for seed in seeds]


def create_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> Pubkey:
    """Derive an address from seeds and a program id; it must lie off the curve."""
    parts = _seed_bytes(seeds)
    if len(parts) > MAX_SEEDS:
        raise PubkeyError("too many seeds")
    if any(len(seed) > MAX_SEED_LEN for seed in parts):
        raise PubkeyError("seed is too long")
    digest = hashlib.sha256(b"".join(parts) + bytes(program_id) + PDA_MARKER).digest()
    address = Pubkey(digest)
    if address.is_on_curve():
        raise PubkeyError("derived address lies on the curve")
    return address


def find_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> tuple[Pubkey, int]:
    """Find the first off-curve address, trying bump seeds from 255 downwards."""
    parts = _seed_bytes(seeds)
    for bump in range(255, 0, -1):
        try:
            return create_program_address([*parts, bytes([bump])], program_id), bump
        except PubkeyError:
            if len(parts) + 1 > MAX_SEEDS or any(len(s) > MAX_SEED_LEN for s in parts):
                raise
    raise PubkeyError("unable to find a viable program address bump seed")
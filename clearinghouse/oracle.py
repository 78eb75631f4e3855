"""A price account in the layout of a price-feed update."""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass, field
from typing import ClassVar

from .pubkey import Pubkey

_FEED = struct.Struct("<32sqQiqqqQ")
_SLOT = struct.Struct("<Q")

_PARTIAL = 0
_FULL = 1


@dataclass(frozen=True)
class VerificationLevel:
    """How thoroughly an update was verified: fully, or partially with a signature count."""

    full: bool = False
    num_signatures: int = 0


@dataclass
class PriceFeedMessage:
    """One price observation with its confidence and exponential moving average."""

    feed_id: bytes = bytes(32)
    price: int = 0
    conf: int = 0
    exponent: int = 0
    publish_time: int = 0
    prev_publish_time: int = 0
    ema_price: int = 0
    ema_conf: int = 0


@dataclass
class PriceUpdate:
    """A price account: the posted message plus its verification metadata."""

    LEN: ClassVar[int] = 134
    DISCRIMINATOR: ClassVar[bytes] = hashlib.sha256(b"account:PriceUpdate").digest()[:8]

    write_authority: Pubkey = field(default_factory=Pubkey.default)
    verification_level: VerificationLevel = field(default_factory=VerificationLevel)
    price_message: PriceFeedMessage = field(default_factory=PriceFeedMessage)
    posted_slot: int = 0

    def serialize(self) -> bytes:
        """Account data: discriminator, then the fields, zero-padded to LEN."""
        level = self.verification_level
        if level.full:
            level_bytes = bytes([_FULL])
        else:
            if not 0 <= level.num_signatures <= 255:
                raise ValueError("num_signatures does not fit in a byte")
            level_bytes = bytes([_PARTIAL, level.num_signatures])
        message = self.price_message
        if len(message.feed_id) != 32:
            raise ValueError("feed_id must be 32 bytes")
        try:
            body = (
                bytes(self.write_authority)
                + level_bytes
                + _FEED.pack(
                    bytes(message.feed_id),
                    message.price,
                    message.conf,
                    message.exponent,
                    message.publish_time,
                    message.prev_publish_time,
                    message.ema_price,
                    message.ema_conf,
                )
                + _SLOT.pack(self.posted_slot)
            )
        except struct.error as exc:
            raise ValueError(str(exc)) from exc
        return (self.DISCRIMINATOR + body).ljust(self.LEN, b"\0")

    @classmethod
    def deserialize(cls, data: bytes) -> PriceUpdate:
        """Decode account data, skipping its 8-byte discriminator unchecked."""
        data = bytes(data)
        if len(data) < 8 + 32 + 1:
            raise ValueError("price account data too short")
        offset = 8
        write_authority = Pubkey(data[offset : offset + 32])
        offset += 32
        variant = data[offset]
        offset += 1
        if variant == _PARTIAL:
            if len(data) < offset + 1:
                raise ValueError("price account data too short")
            level = VerificationLevel(full=False, num_signatures=data[offset])
            offset += 1
        elif variant == _FULL:
            level = VerificationLevel(full=True)
        else:
            raise ValueError(f"unknown verification level {variant}")
        end = offset + _FEED.size + _SLOT.size
        if len(data) < end:
            raise ValueError("price account data too short")
        fields = _FEED.unpack_from(data, offset)
        (posted_slot,) = _SLOT.unpack_from(data, offset + _FEED.size)
        return cls(
            write_authority=write_authority,
            verification_level=level,
            price_message=PriceFeedMessage(*fields),
            posted_slot=posted_slot,
        )

    def set_price(self, price: int) -> None:
        self.price_message.price = price

    def set_ema_price(self, ema_price: int) -> None:
        self.price_message.ema_price = ema_price


def initialize_price(price: int, conf: int, exponent: int, ema_price: int, ema_conf: int) -> PriceUpdate:
    """A fresh price account holding the given price and moving average."""
    return PriceUpdate(
        price_message=PriceFeedMessage(
            price=price,
            conf=conf,
            exponent=exponent,
            ema_price=ema_price,
            ema_conf=ema_conf,
        )
    )
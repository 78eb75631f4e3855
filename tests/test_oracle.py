import hashlib

import pytest

from clearinghouse.oracle import (
    PriceFeedMessage,
    PriceUpdate,
    VerificationLevel,
    initialize_price,
)
from clearinghouse.pubkey import Pubkey


def test_serialized_length_is_account_len():
    assert len(initialize_price(1, 2, -8, 3, 4).serialize()) == 134


def test_serialized_starts_with_discriminator():
    data = initialize_price(1, 2, -8, 3, 4).serialize()
    assert data[:8] == hashlib.sha256(b"account:PriceUpdate").digest()[:8]


def test_initialize_price_sets_fields():
    update = initialize_price(100, 5, -8, 90, 6)
    message = update.price_message
    assert (message.price, message.conf, message.exponent) == (100, 5, -8)
    assert (message.ema_price, message.ema_conf) == (90, 6)
    assert update.posted_slot == 0
    assert update.verification_level == VerificationLevel(full=False, num_signatures=0)


def test_round_trip_partial():
    update = PriceUpdate(
        write_authority=Pubkey(bytes(range(32))),
        verification_level=VerificationLevel(num_signatures=3),
        price_message=PriceFeedMessage(
            feed_id=bytes(range(32, 64)),
            price=-12345,
            conf=77,
            exponent=-6,
            publish_time=1000,
            prev_publish_time=999,
            ema_price=-12000,
            ema_conf=80,
        ),
        posted_slot=42,
    )
    assert PriceUpdate.deserialize(update.serialize()) == update


def test_round_trip_full():
    update = initialize_price(7, 1, -2, 8, 1)
    update.verification_level = VerificationLevel(full=True)
    update.posted_slot = 9
    decoded = PriceUpdate.deserialize(update.serialize())
    assert decoded == update
    assert decoded.verification_level.full is True


def test_set_price_and_ema_price():
    update = initialize_price(1, 0, -8, 1, 0)
    update.set_price(500)
    update.set_ema_price(400)
    decoded = PriceUpdate.deserialize(update.serialize())
    assert decoded.price_message.price == 500
    assert decoded.price_message.ema_price == 400


def test_deserialize_short_data_raises():
    with pytest.raises(ValueError):
        PriceUpdate.deserialize(b"\0" * 20)


def test_deserialize_unknown_level_raises():
    data = bytearray(initialize_price(1, 0, 0, 1, 0).serialize())
    data[40] = 7
    with pytest.raises(ValueError):
        PriceUpdate.deserialize(bytes(data))


def test_serialize_out_of_range_raises():
    update = initialize_price(2**63, 0, 0, 0, 0)
    with pytest.raises(ValueError):
        update.serialize()
from clearinghouse.pubkey import Pubkey
from clearinghouse.user import MarketPosition, User, UserPositions


def test_empty_position_is_available():
    position = MarketPosition()
    assert position.is_available() is True
    assert position.is_open_position() is False
    assert position.has_open_order() is False
    assert position.is_for(0) is False


def test_open_position_long_and_short():
    for amount in (7, -7):
        position = MarketPosition(market_index=3, base_asset_amount=amount)
        assert position.is_open_position() is True
        assert position.is_available() is False
        assert position.is_for(3) is True
        assert position.is_for(4) is False


def test_open_order_only():
    position = MarketPosition(market_index=2, open_orders=1)
    assert position.has_open_order() is True
    assert position.is_open_position() is False
    assert position.is_available() is False
    assert position.is_for(2) is True


def test_user_positions_slots():
    positions = UserPositions()
    assert len(positions.positions) == 5
    assert all(slot.is_available() for slot in positions.positions)
    assert positions.user == Pubkey.default()


def test_user_positions_slots_are_independent():
    positions = UserPositions()
    positions.positions[0].base_asset_amount = 10
    assert positions.positions[0].is_open_position() is True
    assert all(slot.is_available() for slot in positions.positions[1:])
    assert UserPositions().positions[0].is_available() is True


def test_user_defaults():
    user = User()
    assert user.authority == Pubkey.default()
    assert user.positions == Pubkey.default()
    assert user.collateral == 0
    assert user.has_settled_position is False
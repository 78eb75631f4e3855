"""Position directions and the order record with its enumerations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .pubkey import Pubkey


class PositionDirection(Enum):
    LONG = 0
    SHORT = 1


class OrderStatus(Enum):
    """Lifecycle of an order."""

    INIT = 0  # created but not yet open, e.g. a trigger order waiting
    OPEN = 1  # may be filled


class OrderType(Enum):
    MARKET = 0
    LIMIT = 1
    TRIGGER_MARKET = 2
    TRIGGER_LIMIT = 3


class OrderDiscountTier(Enum):
    """Fee discount tier applied to an order."""

    NONE = 0
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4


class OrderTriggerCondition(Enum):
    """When a trigger order activates relative to its trigger price."""

    ABOVE = 0
    BELOW = 1


@dataclass
class Order:
    """An order placed by a user on one market."""

    status: OrderStatus = OrderStatus.INIT
    order_type: OrderType = OrderType.MARKET
    direction: PositionDirection = PositionDirection.LONG
    user_order_id: int = 0
    reduce_only: bool = False
    post_only: bool = False
    immediate_or_cancel: bool = False
    discount_tier: OrderDiscountTier = OrderDiscountTier.NONE
    trigger_condition: OrderTriggerCondition = OrderTriggerCondition.ABOVE
    ts: int = 0
    market_index: int = 0
    order_id: int = 0
    price: int = 0
    user_base_asset_amount: int = 0
    quote_asset_amount: int = 0
    base_asset_amount: int = 0
    base_asset_amount_filled: int = 0
    quote_asset_amount_filled: int = 0
    fee: int = 0
    trigger_price: int = 0
    referrer: Pubkey = field(default_factory=Pubkey.default)
    oracle_price_offset: int = 0
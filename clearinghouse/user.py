"""User accounts and their per-market positions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .pubkey import Pubkey

MAX_POSITIONS = 5


@dataclass
class User:
    """A trader's account: collateral, fee totals and settlement flags."""

    authority: Pubkey = field(default_factory=Pubkey.default)
    collateral: int = 0
    cumulative_deposits: int = 0
    total_fee_paid: int = 0
    total_fee_rebate: int = 0
    total_token_discount: int = 0
    total_referral_reward: int = 0
    total_referee_discount: int = 0
    positions: Pubkey = field(default_factory=Pubkey.default)
    settled_position_value: int = 0
    collateral_claimed: int = 0
    last_collateral_available_to_claim: int = 0
    forgo_position_settlement: bool = False
    has_settled_position: bool = False


@dataclass
class MarketPosition:
    """A user's holding in one market.

    A positive base amount is long, negative is short, zero is flat.
    """

    market_index: int = 0
    last_funding_rate_ts: int = 0
    base_asset_amount: int = 0
    quote_asset_amount: int = 0
    last_cumulative_funding_rate: int = 0
    last_cumulative_repeg_rebate: int = 0
    open_orders: int = 0

    def is_for(self, market_index: int) -> bool:
        """Whether this slot is active and belongs to ``market_index``."""
        return self.market_index == market_index and (
            self.is_open_position() or self.has_open_order()
        )

    def has_open_order(self) -> bool:
        return self.open_orders != 0

    def is_open_position(self) -> bool:
        return self.base_asset_amount != 0

    def is_available(self) -> bool:
        """Whether the slot holds neither a position nor open orders."""
        return not self.is_open_position() and not self.has_open_order()


@dataclass
class UserPositions:
    """The fixed set of position slots belonging to one user."""

    user: Pubkey = field(default_factory=Pubkey.default)
    positions: List[MarketPosition] = field(
        default_factory=lambda: [MarketPosition() for _ in range(MAX_POSITIONS)]
    )
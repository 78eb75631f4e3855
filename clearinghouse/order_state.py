"""Order configuration: filler rewards and minimum order size."""

from __future__ import annotations

from dataclasses import dataclass, field

from .pubkey import Pubkey


@dataclass
class OrderFillerRewardStructure:
    """Share of fees paid to whoever fills an order, with a floor per fill."""

    reward_numerator: int = 1
    reward_denominator: int = 10
    time_based_reward_lower_bound: int = 10_000  # 1 cent


@dataclass
class OrderState:
    """Where order history lives and the rules orders are placed under."""

    order_history: Pubkey = field(default_factory=Pubkey.default)
    order_filler_reward_structure: OrderFillerRewardStructure = field(
        default_factory=OrderFillerRewardStructure
    )
    min_order_quote_asset_amount: int = 500_000  # 50 cents
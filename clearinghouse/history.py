"""Fixed-size ring buffers recording exchange events."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Generic, Iterator, List, Type, TypeVar

from .orders import Order, PositionDirection
from .pubkey import Pubkey

HISTORY_CAPACITY = 1024


@dataclass
class CurveRecord:
    """A change to an AMM's curve: reserves, peg and k before and after."""

    ts: int = 0
    market_index: int = 0
    record_id: int = 0
    peg_multiplier_before: int = 0
    base_asset_reserve_before: int = 0
    quote_asset_reserve_before: int = 0
    sqrt_k_before: int = 0
    peg_multiplier_after: int = 0
    base_asset_reserve_after: int = 0
    quote_asset_reserve_after: int = 0
    sqrt_k_after: int = 0
    base_asset_amount_long: int = 0
    base_asset_amount_short: int = 0
    base_asset_amount: int = 0
    open_interest: int = 0
    total_fee: int = 0
    total_fee_minus_distributions: int = 0
    adjustment_cost: int = 0
    oracle_price: int = 0
    trade_record: int = 0


class DepositDirection(Enum):
    DEPOSIT = 0
    WITHDRAW = 1


@dataclass
class DepositRecord:
    """A collateral deposit or withdrawal."""

    ts: int = 0
    amount: int = 0
    record_id: int = 0
    user_authority: Pubkey = field(default_factory=Pubkey.default)
    user: Pubkey = field(default_factory=Pubkey.default)
    collateral_before: int = 0
    cumulative_deposits_before: int = 0
    direction: DepositDirection = DepositDirection.DEPOSIT


@dataclass
class FundingPaymentRecord:
    """A funding payment settled on a user's position."""

    ts: int = 0
    market_index: int = 0
    record_id: int = 0
    user_authority: Pubkey = field(default_factory=Pubkey.default)
    user: Pubkey = field(default_factory=Pubkey.default)
    funding_payment: int = 0
    base_asset_amount: int = 0
    amm_cumulative_funding_long: int = 0
    amm_cumulative_funding_short: int = 0
    user_last_cumulative_funding: int = 0
    user_last_funding_rate_ts: int = 0


@dataclass
class FundingRateRecord:
    """A funding rate update for one market."""

    ts: int = 0
    market_index: int = 0
    record_id: int = 0
    funding_rate: int = 0
    cumulative_funding_rate_long: int = 0
    cumulative_funding_rate_short: int = 0
    oracle_price_twap: int = 0
    mark_price_twap: int = 0


@dataclass
class LiquidationRecord:
    """A partial or full liquidation of a user."""

    record_id: int = 0
    user_authority: Pubkey = field(default_factory=Pubkey.default)
    user: Pubkey = field(default_factory=Pubkey.default)
    liquidator: Pubkey = field(default_factory=Pubkey.default)
    base_asset_value: int = 0
    base_asset_value_closed: int = 0
    liquidation_fee: int = 0
    fee_to_liquidator: int = 0
    fee_to_insurance_fund: int = 0
    total_collateral: int = 0
    collateral: int = 0
    unrealized_pnl: int = 0
    margin_ratio: int = 0
    ts: int = 0
    partial: bool = False


class OrderAction(Enum):
    PLACE = 0
    CANCEL = 1
    FILL = 2
    EXPIRE = 3


@dataclass
class OrderRecord:
    """An action taken on an order, with fill details where relevant."""

    ts: int = 0
    action: OrderAction = OrderAction.PLACE
    record_id: int = 0
    user: Pubkey = field(default_factory=Pubkey.default)
    authority: Pubkey = field(default_factory=Pubkey.default)
    order: Order = field(default_factory=Order)
    filler: Pubkey = field(default_factory=Pubkey.default)
    trade_record_id: int = 0
    base_asset_amount_filled: int = 0
    quote_asset_amount_filled: int = 0
    fee: int = 0
    filler_reward: int = 0
    quote_asset_amount_surplus: int = 0


@dataclass
class TradeRecord:
    """A trade against a market's AMM."""

    ts: int = 0
    market_index: int = 0
    record_id: int = 0
    user_authority: Pubkey = field(default_factory=Pubkey.default)
    user: Pubkey = field(default_factory=Pubkey.default)
    base_asset_amount: int = 0
    quote_asset_amount: int = 0
    mark_price_before: int = 0
    mark_price_after: int = 0
    fee: int = 0
    quote_asset_amount_surplus: int = 0
    referee_discount: int = 0
    token_discount: int = 0
    oracle_price: int = 0
    liquidation: bool = False
    direction: PositionDirection = PositionDirection.LONG


R = TypeVar("R")


class RecordHistory(Generic[R]):
    """A ring buffer of ``HISTORY_CAPACITY`` records.

    ``head`` is the slot the next record is written to; it wraps around,
    while record ids keep increasing.
    """

    RECORD_TYPE: ClassVar[type]
    CAPACITY: ClassVar[int] = HISTORY_CAPACITY

    def __init__(self) -> None:
        self._head = 0
        self._records: List[R] = [self.RECORD_TYPE() for _ in range(self.CAPACITY)]

    @property
    def head(self) -> int:
        return self._head

    def append(self, record: R) -> None:
        """Write ``record`` at the head and advance the head."""
        if not isinstance(record, self.RECORD_TYPE):
            raise TypeError(
                f"{type(self).__name__} holds {self.RECORD_TYPE.__name__}, "
                f"not {type(record).__name__}"
            )
        self._records[self._head] = record
        self._head = (self._head + 1) % self.CAPACITY

    def next_record_id(self) -> int:
        """One more than the id of the most recently written slot."""
        previous = self._head - 1 if self._head else self.CAPACITY - 1
        return self._records[previous].record_id + 1

    def __getitem__(self, index: int) -> R:
        return self._records[index]

    def __len__(self) -> int:
        return self.CAPACITY

    def __iter__(self) -> Iterator[R]:
        return iter(self._records)


class CurveHistory(RecordHistory[CurveRecord]):
    RECORD_TYPE: ClassVar[Type[CurveRecord]] = CurveRecord


class DepositHistory(RecordHistory[DepositRecord]):
    RECORD_TYPE: ClassVar[Type[DepositRecord]] = DepositRecord


class FundingPaymentHistory(RecordHistory[FundingPaymentRecord]):
    RECORD_TYPE: ClassVar[Type[FundingPaymentRecord]] = FundingPaymentRecord


class FundingRateHistory(RecordHistory[FundingRateRecord]):
    RECORD_TYPE: ClassVar[Type[FundingRateRecord]] = FundingRateRecord


class LiquidationHistory(RecordHistory[LiquidationRecord]):
    RECORD_TYPE: ClassVar[Type[LiquidationRecord]] = LiquidationRecord


class TradeHistory(RecordHistory[TradeRecord]):
    RECORD_TYPE: ClassVar[Type[TradeRecord]] = TradeRecord


class OrderHistory(RecordHistory[OrderRecord]):
    """Order records plus the counter handing out global order ids."""

    RECORD_TYPE: ClassVar[Type[OrderRecord]] = OrderRecord

    def __init__(self) -> None:
        super().__init__()
        self.last_order_id = 0

    def next_order_id(self) -> int:
        """Allocate and return the next order id."""
        self.last_order_id += 1
        return self.last_order_id
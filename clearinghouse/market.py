"""Markets and their automated market makers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple

from .amm import calculate_price
from .cast import IntType, cast, cast_to_i128, cast_to_i64, cast_to_u128
from .constants import MARK_PRICE_PRECISION
from .errors import ClearingHouseError, ErrorCode
from .oracle import PriceUpdate
from .pubkey import Pubkey

MAX_MARKETS = 64


class OracleSource(Enum):
    PYTH = 0
    SWITCHBOARD = 1


@dataclass(frozen=True)
class OraclePriceData:
    """An oracle reading scaled to MARK_PRICE_PRECISION.

    ``delay`` is the current slot minus the slot the price was posted in.
    """

    price: int
    confidence: int
    delay: int
    has_sufficient_number_of_data_points: bool


def _checked(value: int, int_type: IntType) -> int:
    if not int_type.contains(value):
        raise ClearingHouseError(ErrorCode.MATH_ERROR)
    return value


def _div_trunc(numerator: int, denominator: int) -> int:
    if denominator == 0:
        raise ClearingHouseError(ErrorCode.MATH_ERROR)
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def _scale_factors(exponent: int) -> Tuple[int, int]:
    """Multiplier and divisor bringing a price with ``exponent`` to mark precision."""
    precision = _checked(10 ** abs(exponent), IntType.U128)
    if precision > MARK_PRICE_PRECISION:
        return 1, precision // MARK_PRICE_PRECISION
    return MARK_PRICE_PRECISION // precision, 1


def _load_price_update(oracle_data: Optional[bytes]) -> PriceUpdate:
    if oracle_data is None:
        raise ClearingHouseError(ErrorCode.FAIL_TO_LOAD_ORACLE)
    try:
        return PriceUpdate.deserialize(oracle_data)
    except ValueError as exc:
        raise ClearingHouseError(ErrorCode.FAIL_TO_DESERIALIZE) from exc


def _scale_signed(value: int, multiplier: int, divisor: int) -> int:
    scaled = _checked(value * cast_to_i128(multiplier), IntType.I128)
    return _checked(_div_trunc(scaled, cast_to_i128(divisor)), IntType.I128)


@dataclass
class Amm:
    """Reserves, funding and fee state of a market's automated market maker."""

    base_asset_reserve: int = 0
    quote_asset_reserve: int = 0
    sqrt_k: int = 0
    cumulative_repeg_rebate_long: int = 0
    cumulative_repeg_rebate_short: int = 0
    cumulative_funding_rate_long: int = 0
    cumulative_funding_rate_short: int = 0
    last_funding_rate: int = 0
    last_funding_rate_ts: int = 0
    funding_period: int = 0
    peg_multiplier: int = 0
    total_fee: int = 0
    total_fee_minus_distributions: int = 0
    total_fee_withdrawn: int = 0
    minimum_base_asset_trade_size: int = 0
    minimum_quote_asset_trade_size: int = 0
    last_mark_price_twap: int = 0
    last_mark_price_twap_ts: int = 0
    last_oracle_price_twap_ts: int = 0
    last_oracle_price_twap: int = 0
    oracle: Pubkey = field(default_factory=Pubkey.default)
    last_oracle_price: int = 0
    base_spread: int = 0
    oracle_source: OracleSource = OracleSource.PYTH

    def mark_price(self) -> int:
        """Peg-adjusted price of the base asset at MARK_PRICE_PRECISION."""
        return calculate_price(self.quote_asset_reserve, self.base_asset_reserve, self.peg_multiplier)

    def get_pyth_price(self, oracle_data: Optional[bytes], clock_slot: int) -> OraclePriceData:
        """Read the oracle's price and confidence, scaled to mark precision."""
        update = _load_price_update(oracle_data)
        message = update.price_message
        price = cast_to_i128(message.price)
        confidence = cast_to_u128(message.conf)
        multiplier, divisor = _scale_factors(message.exponent)

        price_scaled = _scale_signed(price, multiplier, divisor)
        confidence_scaled = _checked(confidence * multiplier, IntType.U128) // divisor

        delay = _checked(
            cast_to_i64(clock_slot) - cast(update.posted_slot, IntType.I64),
            IntType.I64,
        )
        return OraclePriceData(
            price=price_scaled,
            confidence=confidence_scaled,
            delay=delay,
            has_sufficient_number_of_data_points=True,
        )

    def get_pyth_ema_price(self, oracle_data: Optional[bytes]) -> int:
        """Read the oracle's moving-average price, scaled to mark precision."""
        update = _load_price_update(oracle_data)
        message = update.price_message
        ema_price = cast_to_i128(message.ema_price)
        multiplier, divisor = _scale_factors(message.exponent)
        return _scale_signed(ema_price, multiplier, divisor)


@dataclass
class Market:
    """One perpetual market: open interest, AMM and margin requirements."""

    base_asset_amount_long: int = 0
    base_asset_amount_short: int = 0
    base_asset_amount: int = 0
    open_interest: int = 0
    amm: Amm = field(default_factory=Amm)
    margin_ratio_initial: int = 0
    margin_ratio_partial: int = 0
    margin_ratio_maintenance: int = 0
    initialized: bool = False

    def is_initialized(self) -> bool:
        return self.initialized


def _slot(index: int) -> int:
    if not 0 <= index < MAX_MARKETS:
        raise IndexError(f"market index {index} out of range")
    return index


@dataclass
class Markets:
    """The fixed table of market slots."""

    markets: list = field(default_factory=lambda: [Market() for _ in range(MAX_MARKETS)])

    def __getitem__(self, index: int) -> Market:
        return self.markets[_slot(index)]

    def __setitem__(self, index: int, market: Market) -> None:
        if not isinstance(market, Market):
            raise TypeError("only a Market can be stored")
        self.markets[_slot(index)] = market

    def __len__(self) -> int:
        return len(self.markets)

    def __iter__(self) -> Iterator[Market]:
        return iter(self.markets)
"""Listing a new perpetual market on the exchange."""

from __future__ import annotations

from .amm import calculate_price
from .bignum import U192
from .errors import ClearingHouseError, ErrorCode
from .margin_validation import validate_margin_ratios
from .market import Amm, Market, Markets, OracleSource
from .tokens import AccountInfo

MINIMUM_BASE_ASSET_TRADE_SIZE = 10_000_000
MINIMUM_QUOTE_ASSET_TRADE_SIZE = 10_000_000


def initialize_market(
    markets: Markets,
    market_index: int,
    oracle: AccountInfo,
    amm_base_asset_reserve: int,
    amm_quote_asset_reserve: int,
    amm_periodicity: int,
    amm_peg_multiplier: int,
    oracle_source: OracleSource,
    margin_ratio_initial: int,
    margin_ratio_partial: int,
    margin_ratio_maintenance: int,
    now: int,
    slot: int,
) -> Market:
    """Fill the slot ``market_index`` with a new market and return it.

    The reserves must be equal, so the opening price is set by the peg
    multiplier alone. The oracle's price and moving average seed the
    market's oracle readings. Nothing is stored if any check fails.
    """
    market = markets[market_index]
    if market.is_initialized():
        raise ClearingHouseError(ErrorCode.MARKET_INDEX_ALREADY_INITIALIZED)

    if amm_base_asset_reserve != amm_quote_asset_reserve:
        raise ClearingHouseError(ErrorCode.INVALID_INITIAL_PEG)

    init_mark_price = calculate_price(
        amm_quote_asset_reserve, amm_base_asset_reserve, amm_peg_multiplier
    )

    # The constant product k = base * quote must be representable.
    U192(amm_base_asset_reserve).checked_mul(amm_quote_asset_reserve)

    if oracle_source is not OracleSource.PYTH:
        raise ValueError(f"{oracle_source.name.lower()} oracles are not supported")
    oracle_price = market.amm.get_pyth_price(oracle.data, slot).price
    last_oracle_twap_price = market.amm.get_pyth_ema_price(oracle.data)

    validate_margin_ratios(margin_ratio_initial, margin_ratio_partial, margin_ratio_maintenance)

    new_market = Market(
        amm=Amm(
            base_asset_reserve=amm_base_asset_reserve,
            quote_asset_reserve=amm_quote_asset_reserve,
            sqrt_k=amm_base_asset_reserve,
            last_funding_rate_ts=now,
            funding_period=amm_periodicity,
            peg_multiplier=amm_peg_multiplier,
            minimum_base_asset_trade_size=MINIMUM_BASE_ASSET_TRADE_SIZE,
            minimum_quote_asset_trade_size=MINIMUM_QUOTE_ASSET_TRADE_SIZE,
            last_mark_price_twap=init_mark_price,
            last_mark_price_twap_ts=now,
            last_oracle_price_twap_ts=now,
            last_oracle_price_twap=last_oracle_twap_price,
            oracle=oracle.key,
            last_oracle_price=oracle_price,
            base_spread=0,
            oracle_source=oracle_source,
        ),
        margin_ratio_initial=margin_ratio_initial,
        margin_ratio_partial=margin_ratio_partial,
        margin_ratio_maintenance=margin_ratio_maintenance,
        initialized=True,
    )
    markets[market_index] = new_market
    return new_market
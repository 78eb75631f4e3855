"""Exchange-wide configuration: fees, guard rails and linked accounts."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import (
    DEFAULT_DISCOUNT_TOKEN_FIRST_TIER_DISCOUNT_DENOMINATOR,
    DEFAULT_DISCOUNT_TOKEN_FIRST_TIER_DISCOUNT_NUMERATOR,
    DEFAULT_DISCOUNT_TOKEN_FIRST_TIER_MINIMUM_BALANCE,
    DEFAULT_DISCOUNT_TOKEN_FOURTH_TIER_DISCOUNT_DENOMINATOR,
    DEFAULT_DISCOUNT_TOKEN_FOURTH_TIER_DISCOUNT_NUMERATOR,
    DEFAULT_DISCOUNT_TOKEN_FOURTH_TIER_MINIMUM_BALANCE,
    DEFAULT_DISCOUNT_TOKEN_SECOND_TIER_DISCOUNT_DENOMINATOR,
    DEFAULT_DISCOUNT_TOKEN_SECOND_TIER_DISCOUNT_NUMERATOR,
    DEFAULT_DISCOUNT_TOKEN_SECOND_TIER_MINIMUM_BALANCE,
    DEFAULT_DISCOUNT_TOKEN_THIRD_TIER_DISCOUNT_DENOMINATOR,
    DEFAULT_DISCOUNT_TOKEN_THIRD_TIER_DISCOUNT_NUMERATOR,
    DEFAULT_DISCOUNT_TOKEN_THIRD_TIER_MINIMUM_BALANCE,
    DEFAULT_FEE_DENOMINATOR,
    DEFAULT_FEE_NUMERATOR,
    DEFAULT_REFEREE_DISCOUNT_DENOMINATOR,
    DEFAULT_REFEREE_DISCOUNT_NUMERATOR,
    DEFAULT_REFERRER_REWARD_DENOMINATOR,
    DEFAULT_REFERRER_REWARD_NUMERATOR,
)
from .pubkey import Pubkey


@dataclass
class DiscountTokenTier:
    """Fee discount granted to holders of at least ``minimum_balance`` discount tokens."""

    discount_numerator: int
    discount_denominator: int
    minimum_balance: int


@dataclass
class DiscountTokenTiers:
    first_tier: DiscountTokenTier = field(
        default_factory=lambda: DiscountTokenTier(
            DEFAULT_DISCOUNT_TOKEN_FIRST_TIER_DISCOUNT_NUMERATOR,
            DEFAULT_DISCOUNT_TOKEN_FIRST_TIER_DISCOUNT_DENOMINATOR,
            DEFAULT_DISCOUNT_TOKEN_FIRST_TIER_MINIMUM_BALANCE,
        )
    )
    second_tier: DiscountTokenTier = field(
        default_factory=lambda: DiscountTokenTier(
            DEFAULT_DISCOUNT_TOKEN_SECOND_TIER_DISCOUNT_NUMERATOR,
            DEFAULT_DISCOUNT_TOKEN_SECOND_TIER_DISCOUNT_DENOMINATOR,
            DEFAULT_DISCOUNT_TOKEN_SECOND_TIER_MINIMUM_BALANCE,
        )
    )
    third_tier: DiscountTokenTier = field(
        default_factory=lambda: DiscountTokenTier(
            DEFAULT_DISCOUNT_TOKEN_THIRD_TIER_DISCOUNT_NUMERATOR,
            DEFAULT_DISCOUNT_TOKEN_THIRD_TIER_DISCOUNT_DENOMINATOR,
            DEFAULT_DISCOUNT_TOKEN_THIRD_TIER_MINIMUM_BALANCE,
        )
    )
    fourth_tier: DiscountTokenTier = field(
        default_factory=lambda: DiscountTokenTier(
            DEFAULT_DISCOUNT_TOKEN_FOURTH_TIER_DISCOUNT_NUMERATOR,
            DEFAULT_DISCOUNT_TOKEN_FOURTH_TIER_DISCOUNT_DENOMINATOR,
            DEFAULT_DISCOUNT_TOKEN_FOURTH_TIER_MINIMUM_BALANCE,
        )
    )

    def __iter__(self):
        return iter((self.first_tier, self.second_tier, self.third_tier, self.fourth_tier))


@dataclass
class ReferralDiscount:
    """Reward for referrers and discount for the users they refer."""

    referral_reward_numerator: int = DEFAULT_REFERRER_REWARD_NUMERATOR
    referral_reward_denominator: int = DEFAULT_REFERRER_REWARD_DENOMINATOR
    referee_discount_numerator: int = DEFAULT_REFEREE_DISCOUNT_NUMERATOR
    referee_discount_denominator: int = DEFAULT_REFEREE_DISCOUNT_DENOMINATOR


@dataclass
class FeeStructure:
    fee_numerator: int = DEFAULT_FEE_NUMERATOR
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR
    discount_token_tiers: DiscountTokenTiers = field(default_factory=DiscountTokenTiers)
    referral_discount: ReferralDiscount = field(default_factory=ReferralDiscount)


@dataclass
class PriceDivergenceGuardRails:
    """Largest allowed divergence between mark and oracle price, as a fraction."""

    mark_oracle_divergence_numerator: int = 1
    mark_oracle_divergence_denominator: int = 10


@dataclass
class ValidityGuardRails:
    """Limits under which an oracle reading counts as valid."""

    slots_before_stable: int = 1000
    confidence_interval_max_size: int = 4
    too_volatile_ratio: int = 5


@dataclass
class OracleGuardRails:
    price_divergence: PriceDivergenceGuardRails = field(default_factory=PriceDivergenceGuardRails)
    validity: ValidityGuardRails = field(default_factory=ValidityGuardRails)
    use_for_liquidations: bool = True


@dataclass
class State:
    """Exchange-wide settings and the addresses of the accounts it owns.

    Defaults are the settings a freshly initialized exchange starts with.
    """

    exchange_paused: bool = False
    funding_paused: bool = False
    admin_controls_prices: bool = False
    collateral_vault_authority_nonce: int = 0
    insurance_vault_authority_nonce: int = 0

    admin: Pubkey = field(default_factory=Pubkey.default)
    collateral_mint: Pubkey = field(default_factory=Pubkey.default)
    collateral_vault: Pubkey = field(default_factory=Pubkey.default)
    collateral_vault_authority: Pubkey = field(default_factory=Pubkey.default)
    deposit_history: Pubkey = field(default_factory=Pubkey.default)
    trade_history: Pubkey = field(default_factory=Pubkey.default)
    funding_payment_history: Pubkey = field(default_factory=Pubkey.default)
    funding_rate_history: Pubkey = field(default_factory=Pubkey.default)
    liquidation_history: Pubkey = field(default_factory=Pubkey.default)
    curve_history: Pubkey = field(default_factory=Pubkey.default)
    insurance_vault: Pubkey = field(default_factory=Pubkey.default)
    insurance_vault_authority: Pubkey = field(default_factory=Pubkey.default)
    markets: Pubkey = field(default_factory=Pubkey.default)

    margin_ratio_initial: int = 2000
    margin_ratio_maintenance: int = 625
    margin_ratio_partial: int = 500
    partial_liquidation_close_percentage_numerator: int = 25
    partial_liquidation_close_percentage_denominator: int = 100
    partial_liquidation_penalty_percentage_numerator: int = 25
    partial_liquidation_penalty_percentage_denominator: int = 1000
    full_liquidation_penalty_percentage_numerator: int = 1
    full_liquidation_penalty_percentage_denominator: int = 1
    partial_liquidation_liquidator_share_denominator: int = 2
    full_liquidation_liquidator_share_denominator: int = 20

    fee_structure: FeeStructure = field(default_factory=FeeStructure)
    whitelist_mint: Pubkey = field(default_factory=Pubkey.default)
    discount_mint: Pubkey = field(default_factory=Pubkey.default)
    oracle_guard_rails: OracleGuardRails = field(default_factory=OracleGuardRails)
    max_deposit: int = 0
    extended_curve_history: Pubkey = field(default_factory=Pubkey.default)
    order_state: Pubkey = field(default_factory=Pubkey.default)

    def _history_keys(self) -> tuple:
        return (
            self.trade_history,
            self.deposit_history,
            self.liquidation_history,
            self.funding_rate_history,
            self.funding_payment_history,
            self.curve_history,
        )

    def all_histories_initialized(self) -> bool:
        """True when every one of the six history addresses has been set."""
        default = Pubkey.default()
        return all(key != default for key in self._history_keys())
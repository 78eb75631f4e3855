"""Fee defaults, precisions and margin limits."""

# Fees
DEFAULT_FEE_NUMERATOR = 10
DEFAULT_FEE_DENOMINATOR = 10000
DEFAULT_DISCOUNT_TOKEN_FIRST_TIER_MINIMUM_BALANCE = 1_000_000_000_000
DEFAULT_DISCOUNT_TOKEN_FIRST_TIER_DISCOUNT_NUMERATOR = 20
DEFAULT_DISCOUNT_TOKEN_FIRST_TIER_DISCOUNT_DENOMINATOR = 100
DEFAULT_DISCOUNT_TOKEN_SECOND_TIER_MINIMUM_BALANCE = 100_000_000_000
DEFAULT_DISCOUNT_TOKEN_SECOND_TIER_DISCOUNT_NUMERATOR = 15
DEFAULT_DISCOUNT_TOKEN_SECOND_TIER_DISCOUNT_DENOMINATOR = 100
DEFAULT_DISCOUNT_TOKEN_THIRD_TIER_MINIMUM_BALANCE = 10_000_000_000
DEFAULT_DISCOUNT_TOKEN_THIRD_TIER_DISCOUNT_NUMERATOR = 10
DEFAULT_DISCOUNT_TOKEN_THIRD_TIER_DISCOUNT_DENOMINATOR = 100
DEFAULT_DISCOUNT_TOKEN_FOURTH_TIER_MINIMUM_BALANCE = 1_000_000_000
DEFAULT_DISCOUNT_TOKEN_FOURTH_TIER_DISCOUNT_NUMERATOR = 5
DEFAULT_DISCOUNT_TOKEN_FOURTH_TIER_DISCOUNT_DENOMINATOR = 100
DEFAULT_REFERRER_REWARD_NUMERATOR = 5
DEFAULT_REFERRER_REWARD_DENOMINATOR = 100
DEFAULT_REFEREE_DISCOUNT_NUMERATOR = 5
DEFAULT_REFEREE_DISCOUNT_DENOMINATOR = 100

# Precisions
MARK_PRICE_PRECISION = 10_000_000_000  # expo = -10
PEG_PRECISION = 1_000  # expo = -3
AMM_RESERVE_PRECISION = 10_000_000_000_000  # expo = -13
QUOTE_PRECISION = 1_000_000  # expo = -6
FUNDING_PAYMENT_PRECISION = 10_000  # expo = -4
MARGIN_PRECISION = 10_000  # expo = -4
PRICE_SPREAD_PRECISION = 10_000  # signed, expo = -4
PRICE_SPREAD_PRECISION_U128 = 10_000  # unsigned, expo = -4
BID_ASK_SPREAD_PRECISION = 1_000_000  # expo = -6

PRICE_TO_PEG_PRECISION_RATIO = MARK_PRICE_PRECISION // PEG_PRECISION

# Margin limits
MINIMUM_MARGIN_RATIO = MARGIN_PRECISION // 50
MAXIMUM_MARGIN_RATIO = MARGIN_PRECISION
"""Administrative set-up of the exchange state, histories and order state."""

from __future__ import annotations

from .errors import ClearingHouseError, ErrorCode
from .order_state import OrderState
from .pubkey import Pubkey, find_program_address
from .state import State


def initialize_state(
    program_id: Pubkey,
    admin: Pubkey,
    collateral_mint: Pubkey,
    collateral_vault: Pubkey,
    collateral_vault_authority: Pubkey,
    insurance_vault: Pubkey,
    insurance_vault_authority: Pubkey,
    markets: Pubkey,
    admin_controls_prices: bool,
) -> State:
    """A new exchange state with default settings.

    Each vault authority must be the address derived from its vault's key.
    History and order-state addresses stay unset until their own set-up.
    """
    expected_collateral, collateral_bump = find_program_address(
        [bytes(collateral_vault)], program_id
    )
    if collateral_vault_authority != expected_collateral:
        raise ClearingHouseError(ErrorCode.INVALID_COLLATERAL_VAULT_AUTHORITY)

    expected_insurance, insurance_bump = find_program_address(
        [bytes(insurance_vault)], program_id
    )
    if insurance_vault_authority != expected_insurance:
        raise ClearingHouseError(ErrorCode.INVALID_INSURANCE_VAULT_AUTHORITY)

    return State(
        admin_controls_prices=bool(admin_controls_prices),
        collateral_vault_authority_nonce=collateral_bump,
        insurance_vault_authority_nonce=insurance_bump,
        admin=admin,
        collateral_mint=collateral_mint,
        collateral_vault=collateral_vault,
        collateral_vault_authority=expected_collateral,
        insurance_vault=insurance_vault,
        insurance_vault_authority=expected_insurance,
        markets=markets,
    )


def initialize_history(
    state: State,
    trade_history: Pubkey,
    deposit_history: Pubkey,
    liquidation_history: Pubkey,
    funding_rate_history: Pubkey,
    funding_payment_history: Pubkey,
    curve_history: Pubkey,
) -> None:
    """Record the six history addresses in ``state``.

    Refused only once all six are already set.
    """
    if state.all_histories_initialized():
        raise ClearingHouseError(ErrorCode.HISTORIES_ALL_INITIALIZED)
    state.trade_history = trade_history
    state.deposit_history = deposit_history
    state.liquidation_history = liquidation_history
    state.funding_rate_history = funding_rate_history
    state.funding_payment_history = funding_payment_history
    state.curve_history = curve_history


def initialize_order_state(
    state: State, order_state_key: Pubkey, order_history_key: Pubkey
) -> OrderState:
    """Link a new order state to ``state`` and return it with default rules."""
    if state.order_state != Pubkey.default():
        raise ClearingHouseError(ErrorCode.ORDER_STATE_ALREADY_INITIALIZED)
    state.order_state = order_state_key
    return OrderState(order_history=order_history_key)
import pytest

from clearinghouse.admin import initialize_history, initialize_order_state, initialize_state
from clearinghouse.errors import ClearingHouseError, ErrorCode
from clearinghouse.pubkey import Pubkey, find_program_address


def _setup(admin_controls_prices=False):
    program_id = Pubkey.new_unique()
    collateral_vault = Pubkey.new_unique()
    insurance_vault = Pubkey.new_unique()
    keys = {
        "program_id": program_id,
        "admin": Pubkey.new_unique(),
        "collateral_mint": Pubkey.new_unique(),
        "collateral_vault": collateral_vault,
        "collateral_vault_authority": find_program_address([bytes(collateral_vault)], program_id)[0],
        "insurance_vault": insurance_vault,
        "insurance_vault_authority": find_program_address([bytes(insurance_vault)], program_id)[0],
        "markets": Pubkey.new_unique(),
        "admin_controls_prices": admin_controls_prices,
    }
    return keys


def _history_keys():
    return [Pubkey.new_unique() for _ in range(6)]


def test_initialize_state_records_accounts():
    keys = _setup()
    state = initialize_state(**keys)
    assert state.admin == keys["admin"]
    assert state.collateral_mint == keys["collateral_mint"]
    assert state.collateral_vault == keys["collateral_vault"]
    assert state.collateral_vault_authority == keys["collateral_vault_authority"]
    assert state.insurance_vault == keys["insurance_vault"]
    assert state.insurance_vault_authority == keys["insurance_vault_authority"]
    assert state.markets == keys["markets"]
    assert state.admin_controls_prices is False


def test_initialize_state_records_bumps():
    keys = _setup(admin_controls_prices=True)
    state = initialize_state(**keys)
    _, collateral_bump = find_program_address([bytes(keys["collateral_vault"])], keys["program_id"])
    _, insurance_bump = find_program_address([bytes(keys["insurance_vault"])], keys["program_id"])
    assert state.collateral_vault_authority_nonce == collateral_bump
    assert state.insurance_vault_authority_nonce == insurance_bump
    assert state.admin_controls_prices is True


def test_initialize_state_defaults():
    state = initialize_state(**_setup())
    assert state.margin_ratio_initial == 2000
    assert state.margin_ratio_maintenance == 625
    assert state.margin_ratio_partial == 500
    assert state.whitelist_mint == Pubkey.default()
    assert state.order_state == Pubkey.default()
    assert state.all_histories_initialized() is False


def test_initialize_state_wrong_collateral_authority():
    keys = _setup()
    keys["collateral_vault_authority"] = Pubkey.new_unique()
    with pytest.raises(ClearingHouseError) as info:
        initialize_state(**keys)
    assert info.value.code is ErrorCode.INVALID_COLLATERAL_VAULT_AUTHORITY


def test_initialize_state_wrong_insurance_authority():
    keys = _setup()
    keys["insurance_vault_authority"] = keys["collateral_vault_authority"]
    with pytest.raises(ClearingHouseError) as info:
        initialize_state(**keys)
    assert info.value.code is ErrorCode.INVALID_INSURANCE_VAULT_AUTHORITY


def test_initialize_history_sets_keys():
    state = initialize_state(**_setup())
    trade, deposit, liquidation, funding_rate, funding_payment, curve = _history_keys()
    initialize_history(state, trade, deposit, liquidation, funding_rate, funding_payment, curve)
    assert state.trade_history == trade
    assert state.deposit_history == deposit
    assert state.liquidation_history == liquidation
    assert state.funding_rate_history == funding_rate
    assert state.funding_payment_history == funding_payment
    assert state.curve_history == curve
    assert state.all_histories_initialized() is True


def test_initialize_history_twice_rejected():
    state = initialize_state(**_setup())
    initialize_history(state, *_history_keys())
    first = state.trade_history
    with pytest.raises(ClearingHouseError) as info:
        initialize_history(state, *_history_keys())
    assert info.value.code is ErrorCode.HISTORIES_ALL_INITIALIZED
    assert state.trade_history == first


def test_initialize_history_allowed_when_partly_set():
    state = initialize_state(**_setup())
    state.trade_history = Pubkey.new_unique()
    keys = _history_keys()
    initialize_history(state, *keys)
    assert state.trade_history == keys[0]
    assert state.curve_history == keys[5]


def test_initialize_order_state():
    state = initialize_state(**_setup())
    order_state_key, order_history_key = Pubkey.new_unique(), Pubkey.new_unique()
    order_state = initialize_order_state(state, order_state_key, order_history_key)
    assert state.order_state == order_state_key
    assert order_state.order_history == order_history_key
    assert order_state.min_order_quote_asset_amount == 500_000
    assert order_state.order_filler_reward_structure.time_based_reward_lower_bound == 10_000


def test_initialize_order_state_twice_rejected():
    state = initialize_state(**_setup())
    first = Pubkey.new_unique()
    initialize_order_state(state, first, Pubkey.new_unique())
    with pytest.raises(ClearingHouseError) as info:
        initialize_order_state(state, Pubkey.new_unique(), Pubkey.new_unique())
    assert info.value.code is ErrorCode.ORDER_STATE_ALREADY_INITIALIZED
    assert state.order_state == first
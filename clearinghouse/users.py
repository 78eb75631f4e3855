"""Opening user accounts and depositing collateral."""

from __future__ import annotations

from typing import Sequence, Tuple

from .errors import ClearingHouseError, ErrorCode
from .pubkey import Pubkey
from .state import State
from .tokens import AccountInfo, get_whitelist_token
from .user import User, UserPositions

_U64_MAX = (1 << 64) - 1


def initialize_user(
    state: State,
    authority: Pubkey,
    user_key: Pubkey,
    user_positions_key: Pubkey,
    remaining_accounts: Sequence[AccountInfo] = (),
    whitelist_token: bool = False,
) -> Tuple[User, UserPositions]:
    """Create a user owned by ``authority`` and its empty position slots.

    When the exchange has a whitelist mint, the authority must present a
    token account of that mint which it owns and which holds a balance.
    """
    if state.whitelist_mint != Pubkey.default():
        token = get_whitelist_token(whitelist_token, remaining_accounts, state.whitelist_mint)
        if token is None:
            raise ClearingHouseError(ErrorCode.FAIL_TO_FIND_WHITELIST_TOKEN)
        if token.owner != authority:
            raise ClearingHouseError(ErrorCode.INVALID_WHITELIST_TOKEN)
        if token.amount == 0:
            raise ClearingHouseError(ErrorCode.WHITELIST_TOKEN_NO_BALANCE)

    user = User(authority=authority, positions=user_positions_key)
    positions = UserPositions(user=user_key)
    return user, positions


def deposit_collateral(
    state: State,
    user: User,
    user_positions: UserPositions,
    markets_key: Pubkey,
    collateral_vault_key: Pubkey,
    amount: int,
) -> None:
    """Check a collateral deposit against the exchange's accounts.

    The markets and collateral vault passed must be the exchange's own.
    The user's balances are left as they are.
    """
    if not 0 <= amount <= _U64_MAX:
        raise ValueError(f"amount {amount} is not a u64")
    if state.collateral_vault != collateral_vault_key:
        raise ValueError("collateral vault does not belong to the exchange")
    if state.markets != markets_key:
        raise ValueError("markets account does not belong to the exchange")
    if user.positions == Pubkey.default() or user_positions.user == Pubkey.default():
        raise ValueError("user and positions are not linked")
"""Token accounts, whitelist token lookup and a test-currency faucet."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from .errors import ClearingHouseError, ErrorCode
from .pubkey import Pubkey, find_program_address

TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
TOKEN_ACCOUNT_LEN = 165

_U64_MAX = (1 << 64) - 1
_ACCOUNT = struct.Struct("<32s32sQI32sBIQQI32s")
_NONE_TAG = 0
_SOME_TAG = 1


class AccountState(Enum):
    UNINITIALIZED = 0
    INITIALIZED = 1
    FROZEN = 2


@dataclass
class AccountInfo:
    """A raw account: its address, the program owning it and its data."""

    key: Pubkey
    owner: Pubkey
    data: bytes = b""


@dataclass
class Mint:
    """A token mint and the authority allowed to create new tokens."""

    key: Pubkey
    mint_authority: Optional[Pubkey] = None
    supply: int = 0
    decimals: int = 6
    is_initialized: bool = True
    freeze_authority: Optional[Pubkey] = None


def _pack_key_option(key: Optional[Pubkey]) -> tuple:
    if key is None:
        return _NONE_TAG, bytes(32)
    return _SOME_TAG, bytes(key)


def _unpack_key_option(tag: int, raw: bytes) -> Optional[Pubkey]:
    if tag == _NONE_TAG:
        return None
    if tag == _SOME_TAG:
        return Pubkey(raw)
    raise ValueError(f"invalid option tag {tag}")


@dataclass
class TokenAccount:
    """A holding of one mint's tokens, owned by ``owner``."""

    mint: Pubkey
    owner: Pubkey
    amount: int = 0
    delegate: Optional[Pubkey] = None
    state: AccountState = AccountState.INITIALIZED
    is_native: Optional[int] = None
    delegated_amount: int = 0
    close_authority: Optional[Pubkey] = None

    def serialize(self) -> bytes:
        """The fixed 165-byte account layout."""
        delegate_tag, delegate = _pack_key_option(self.delegate)
        close_tag, close = _pack_key_option(self.close_authority)
        native_tag, native = (
            (_NONE_TAG, 0) if self.is_native is None else (_SOME_TAG, self.is_native)
        )
        try:
            return _ACCOUNT.pack(
                bytes(self.mint),
                bytes(self.owner),
                self.amount,
                delegate_tag,
                delegate,
                self.state.value,
                native_tag,
                native,
                self.delegated_amount,
                close_tag,
                close,
            )
        except struct.error as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def deserialize(cls, data: bytes) -> TokenAccount:
        """Decode the account layout; the account must be initialized."""
        data = bytes(data)
        if len(data) != TOKEN_ACCOUNT_LEN:
            raise ValueError(f"token account data is {TOKEN_ACCOUNT_LEN} bytes, got {len(data)}")
        (
            mint,
            owner,
            amount,
            delegate_tag,
            delegate,
            state,
            native_tag,
            native,
            delegated_amount,
            close_tag,
            close,
        ) = _ACCOUNT.unpack(data)
        try:
            account_state = AccountState(state)
        except ValueError:
            raise ValueError(f"invalid account state {state}") from None
        if account_state is AccountState.UNINITIALIZED:
            raise ValueError("token account is not initialized")
        if native_tag not in (_NONE_TAG, _SOME_TAG):
            raise ValueError(f"invalid option tag {native_tag}")
        return cls(
            mint=Pubkey(mint),
            owner=Pubkey(owner),
            amount=amount,
            delegate=_unpack_key_option(delegate_tag, delegate),
            state=account_state,
            is_native=native if native_tag == _SOME_TAG else None,
            delegated_amount=delegated_amount,
            close_authority=_unpack_key_option(close_tag, close),
        )


def get_whitelist_token(
    whitelist_token: bool,
    remaining_accounts: Sequence[AccountInfo],
    whitelist_mint: Pubkey,
) -> Optional[TokenAccount]:
    """The caller's whitelist token account, or None when none was offered.

    When offered, exactly one account must be passed; it must belong to the
    token program, decode as a token account and hold ``whitelist_mint``.
    """
    if not whitelist_token:
        return None
    if len(remaining_accounts) != 1:
        raise ClearingHouseError(ErrorCode.FAIL_TO_FIND_WHITELIST_TOKEN)
    (account_info,) = remaining_accounts
    if account_info.owner != TOKEN_PROGRAM_ID:
        raise ClearingHouseError(ErrorCode.INVALID_WHITELIST_TOKEN)
    try:
        token_account = TokenAccount.deserialize(account_info.data)
    except ValueError as exc:
        raise ClearingHouseError(ErrorCode.INVALID_WHITELIST_TOKEN) from exc
    if token_account.mint != whitelist_mint:
        raise ClearingHouseError(ErrorCode.INVALID_WHITELIST_TOKEN)
    return token_account


class FaucetError(Exception):
    """Raised when the faucet cannot be set up or refuses to mint."""


@dataclass
class MockUsdcFaucet:
    """Mints a test currency whose mint authority is the faucet's derived address."""

    program_id: Pubkey
    usdc_mint: Mint
    mint: Pubkey = field(init=False)
    mint_authority_pda: Pubkey = field(init=False)
    mint_authority_pda_bump: int = field(init=False)
    state_address: Pubkey = field(init=False)

    def __post_init__(self) -> None:
        mint_key = self.usdc_mint.key
        authority, bump = find_program_address([bytes(mint_key)], self.program_id)
        if self.usdc_mint.mint_authority is None or self.usdc_mint.mint_authority != authority:
            raise FaucetError("unmatched mint authority")
        self.state_address, _ = find_program_address([b"state"], self.program_id)
        self.mint = mint_key
        self.mint_authority_pda = authority
        self.mint_authority_pda_bump = bump

    def mint_to_user(self, mint: Mint, receiver: TokenAccount, amount: int) -> None:
        """Create ``amount`` new tokens in ``receiver``, signing as the faucet."""
        if not 0 <= amount <= _U64_MAX:
            raise ValueError(f"amount {amount} is not a u64")
        if not mint.is_initialized:
            raise FaucetError("mint is not initialized")
        if receiver.state is AccountState.FROZEN:
            raise FaucetError("account is frozen")
        if receiver.mint != mint.key:
            raise FaucetError("account not associated with this mint")
        if mint.mint_authority is None or mint.mint_authority != self.mint_authority_pda:
            raise FaucetError("owner does not match")
        new_balance = receiver.amount + amount
        new_supply = mint.supply + amount
        if new_balance > _U64_MAX or new_supply > _U64_MAX:
            raise FaucetError("operation overflowed")
        receiver.amount = new_balance
        mint.supply = new_supply
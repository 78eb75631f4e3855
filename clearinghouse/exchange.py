"""The clearing house: accounts it owns and the instructions it accepts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from . import admin as _admin
from . import listing as _listing
from . import users as _users
from .history import (
    CurveHistory,
    DepositHistory,
    FundingPaymentHistory,
    FundingRateHistory,
    LiquidationHistory,
    OrderHistory,
    TradeHistory,
)
from .market import Market, Markets, OracleSource
from .order_state import OrderState
from .pubkey import Pubkey, find_program_address
from .state import State
from .tokens import AccountInfo, TokenAccount
from .user import User, UserPositions


@dataclass
class Clock:
    """The current time and slot seen by instructions."""

    unix_timestamp: int = 0
    slot: int = 0


class ClearingHouse:
    """Holds the exchange's accounts and applies its instructions to them."""

    def __init__(self, program_id: Pubkey, clock: Optional[Clock] = None) -> None:
        self.program_id = program_id
        self.clock = clock if clock is not None else Clock()
        self.state: Optional[State] = None
        self.state_key: Optional[Pubkey] = None
        self.markets = Markets()
        self.markets_key: Optional[Pubkey] = None
        self.collateral_vault_key: Optional[Pubkey] = None
        self.collateral_vault: Optional[TokenAccount] = None
        self.insurance_vault_key: Optional[Pubkey] = None
        self.insurance_vault: Optional[TokenAccount] = None
        self.trade_history: Optional[TradeHistory] = None
        self.deposit_history: Optional[DepositHistory] = None
        self.liquidation_history: Optional[LiquidationHistory] = None
        self.funding_rate_history: Optional[FundingRateHistory] = None
        self.funding_payment_history: Optional[FundingPaymentHistory] = None
        self.curve_history: Optional[CurveHistory] = None
        self.order_state: Optional[OrderState] = None
        self.order_history: Optional[OrderHistory] = None
        self.users: Dict[Pubkey, User] = {}
        self.user_positions: Dict[Pubkey, UserPositions] = {}

    def _require_state(self) -> State:
        if self.state is None:
            raise ValueError("exchange state is not initialized")
        return self.state

    def _require_admin(self, admin: Pubkey) -> State:
        state = self._require_state()
        if state.admin != admin:
            raise ValueError("signer is not the exchange admin")
        return state

    def _user_address(self, authority: Pubkey) -> Pubkey:
        address, _ = find_program_address([b"user", bytes(authority)], self.program_id)
        return address

    def initialize(
        self,
        admin: Pubkey,
        collateral_mint: Pubkey,
        collateral_vault_authority: Pubkey,
        insurance_vault_authority: Pubkey,
        admin_controls_prices: bool = False,
    ) -> State:
        """Create the exchange state, its markets table and both vaults."""
        if self.state is not None:
            raise ValueError("exchange is already initialized")
        collateral_vault_key, _ = find_program_address([b"collateral_vault"], self.program_id)
        insurance_vault_key, _ = find_program_address([b"insurance_vault"], self.program_id)
        state_key = Pubkey.new_unique()
        markets_key = Pubkey.new_unique()

        state = _admin.initialize_state(
            self.program_id,
            admin,
            collateral_mint,
            collateral_vault_key,
            collateral_vault_authority,
            insurance_vault_key,
            insurance_vault_authority,
            markets_key,
            admin_controls_prices,
        )

        self.state = state
        self.state_key = state_key
        self.markets = Markets()
        self.markets_key = markets_key
        self.collateral_vault_key = collateral_vault_key
        self.collateral_vault = TokenAccount(mint=collateral_mint, owner=collateral_vault_authority)
        self.insurance_vault_key = insurance_vault_key
        self.insurance_vault = TokenAccount(mint=collateral_mint, owner=insurance_vault_authority)
        return state

    def initialize_history(self, admin: Pubkey) -> None:
        """Create the six event histories and link them to the state."""
        state = self._require_admin(admin)
        keys = [Pubkey.new_unique() for _ in range(6)]
        _admin.initialize_history(state, *keys)
        self.trade_history = TradeHistory()
        self.deposit_history = DepositHistory()
        self.liquidation_history = LiquidationHistory()
        self.funding_rate_history = FundingRateHistory()
        self.funding_payment_history = FundingPaymentHistory()
        self.curve_history = CurveHistory()

    def initialize_order_state(self, admin: Pubkey) -> OrderState:
        """Create the order state and order history and link them to the state."""
        state = self._require_admin(admin)
        order_state_key, _ = find_program_address([b"order_state"], self.program_id)
        order_history_key = Pubkey.new_unique()
        order_state = _admin.initialize_order_state(state, order_state_key, order_history_key)
        self.order_state = order_state
        self.order_history = OrderHistory()
        return order_state

    def initialize_market(
        self,
        admin: Pubkey,
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
    ) -> Market:
        """List a market at ``market_index`` using the current clock."""
        self._require_admin(admin)
        return _listing.initialize_market(
            self.markets,
            market_index,
            oracle,
            amm_base_asset_reserve,
            amm_quote_asset_reserve,
            amm_periodicity,
            amm_peg_multiplier,
            oracle_source,
            margin_ratio_initial,
            margin_ratio_partial,
            margin_ratio_maintenance,
            self.clock.unix_timestamp,
            self.clock.slot,
        )

    def _create_user(
        self,
        authority: Pubkey,
        remaining_accounts: Sequence[AccountInfo],
        whitelist_token: bool,
    ) -> User:
        state = self._require_state()
        user_key = self._user_address(authority)
        if user_key in self.users:
            raise ValueError("user account already exists")
        positions_key = Pubkey.new_unique()
        user, positions = _users.initialize_user(
            state, authority, user_key, positions_key, remaining_accounts, whitelist_token
        )
        self.users[user_key] = user
        self.user_positions[positions_key] = positions
        return user

    def initialize_user(
        self,
        signer: Pubkey,
        remaining_accounts: Sequence[AccountInfo] = (),
        whitelist_token: bool = False,
    ) -> User:
        """Open an account for ``signer``, who also pays for it."""
        return self._create_user(signer, remaining_accounts, whitelist_token)

    def initialize_user_with_explicit_payer(
        self,
        payer: Pubkey,
        authority: Pubkey,
        remaining_accounts: Sequence[AccountInfo] = (),
        whitelist_token: bool = False,
    ) -> User:
        """Open an account for ``authority``, paid for by ``payer``."""
        return self._create_user(authority, remaining_accounts, whitelist_token)

    def deposit_collateral(self, authority: Pubkey, amount: int) -> None:
        """Deposit collateral into the account of ``authority``."""
        state = self._require_state()
        user_key = self._user_address(authority)
        user = self.users.get(user_key)
        if user is None:
            raise ValueError("user account does not exist")
        if user.authority != authority:
            raise ValueError("signer is not the user's authority")
        positions = self.user_positions.get(user.positions)
        if positions is None or positions.user != user_key:
            raise ValueError("user positions do not belong to the user")
        default = Pubkey.default()
        if state.funding_payment_history == default or state.deposit_history == default:
            raise ValueError("histories are not initialized")
        _users.deposit_collateral(
            state, user, positions, self.markets_key, self.collateral_vault_key, amount
        )
"""Error codes raised by the clearing house."""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Every failure the clearing house can report, with its number and message."""

    INVALID_COLLATERAL_VAULT_AUTHORITY = (6000, "Clearing house not collateral vault owner")
    INVALID_INSURANCE_VAULT_AUTHORITY = (6001, "Clearing house not insurance vault owner")
    HISTORIES_ALL_INITIALIZED = (6002, "Clearing house histories already initialized")
    ORDER_STATE_ALREADY_INITIALIZED = (6003, "Clearing house order state already initialized")
    MARKET_INDEX_ALREADY_INITIALIZED = (6004, "Market index already initialized")
    INVALID_INITIAL_PEG = (6005, "Invalid initial peg")
    MATH_ERROR = (6006, "Math error")
    BN_CONVERSION_ERROR = (
        6007,
        "Conversion to u128/u64 failed with an overflow or underflow",
    )
    FAIL_TO_LOAD_ORACLE = (6008, "Fail to load oracle")
    FAIL_TO_DESERIALIZE = (6009, "Fail to deserialize")
    FAIL_TO_CAST = (6010, "Fail to cast")
    INVALID_MARGIN_RATIO = (6011, "Invalid margin ratio")
    FAIL_TO_FIND_WHITELIST_TOKEN = (6012, "Fail to find whitelist token")
    INVALID_WHITELIST_TOKEN = (6013, "Invalid whitelist token")
    WHITELIST_TOKEN_NO_BALANCE = (6014, "No balance")

    def __init__(self, number: int, message: str) -> None:
        self.number = number
        self.message = message

    def __str__(self) -> str:
        return self.message


class ClearingHouseError(Exception):
    """An error carrying one of the clearing house error codes."""

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(code.message)
        self.code = code

    def __str__(self) -> str:
        return self.code.message

    def __repr__(self) -> str:
        return f"ClearingHouseError({self.code.name})"
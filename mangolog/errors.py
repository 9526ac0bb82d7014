"""Error codes raised by the exchange program, with source-location context."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import IntEnum


class SourceFileId(IntEnum):
    """Identifies the source file an error was raised from."""

    PROCESSOR = 0
    STATE = 1
    CRITBIT = 2
    QUEUE = 3
    MATCHING = 4
    ORACLE = 5

    def __str__(self) -> str:
        return _SOURCE_PATHS[self]


_SOURCE_PATHS = {
    SourceFileId.PROCESSOR: "src/processor.rs",
    SourceFileId.STATE: "src/state.rs",
    SourceFileId.CRITBIT: "src/critbit",
    SourceFileId.QUEUE: "src/queue.rs",
    SourceFileId.MATCHING: "src/matching.rs",
    SourceFileId.ORACLE: "src/oracle.rs",
}


class MangoErrorCode(IntEnum):
    """Numeric error codes reported as custom program errors."""

    InvalidCache = 0
    InvalidOwner = 1
    InvalidGroupOwner = 2
    InvalidSignerKey = 3
    InvalidAdminKey = 4
    InvalidVault = 5
    MathError = 6
    InsufficientFunds = 7
    InvalidToken = 8
    InvalidMarket = 9
    InvalidProgramId = 10
    GroupNotRentExempt = 11
    OutOfSpace = 12
    TooManyOpenOrders = 13
    AccountNotRentExempt = 14
    ClientIdNotFound = 15
    InvalidNodeBank = 16
    InvalidRootBank = 17
    MarginBasketFull = 18
    NotLiquidatable = 19
    Unimplemented = 20
    PostOnly = 21
    Bankrupt = 22
    InsufficientHealth = 23
    InvalidParam = 24
    InvalidAccount = 25
    InvalidAccountState = 26
    SignerNecessary = 27
    InsufficientLiquidity = 28
    InvalidOrderId = 29
    InvalidOpenOrdersAccount = 30
    BeingLiquidated = 31
    InvalidRootBankCache = 32
    InvalidPriceCache = 33
    InvalidPerpMarketCache = 34
    TriggerConditionFalse = 35
    InvalidSeeds = 36
    Default = 0xFFFFFFFF

    def message(self) -> str:
        """Human-readable description of the code."""
        detail = _DETAILS.get(self)
        prefix = f"MangoErrorCode::{self.name}"
        return f"{prefix} {detail}" if detail else prefix

    def __str__(self) -> str:
        return self.message()


_DETAILS = {
    MangoErrorCode.TooManyOpenOrders: "Reached the maximum number of open orders for this market",
    MangoErrorCode.Bankrupt: "Invalid instruction for bankrupt account",
    MangoErrorCode.InsufficientLiquidity: "Not enough deposits in this node bank",
    MangoErrorCode.BeingLiquidated: "Invalid instruction while being liquidated",
    MangoErrorCode.InvalidRootBankCache: "Cache the root bank to resolve",
    MangoErrorCode.InvalidPriceCache: "Cache the oracle price to resolve",
    MangoErrorCode.InvalidPerpMarketCache: "Cache the perp market to resolve",
    MangoErrorCode.TriggerConditionFalse: "The trigger condition for this TriggerOrder is not met",
    MangoErrorCode.InvalidSeeds: "Invalid seeds. Unable to create PDA",
    MangoErrorCode.Default: "Check the source code for more info",
}


class ProgramError(Exception):
    """A generic program failure, optionally carrying a custom numeric code."""

    def __init__(self, name: str, code: int | None = None) -> None:
        super().__init__(name, code)
        self.name = name
        self.code = code

    def __str__(self) -> str:
        if self.code is not None:
            return f"Custom program error: 0x{self.code:x}"
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProgramError):
            return NotImplemented
        return (self.name, self.code) == (other.name, other.code)

    def __hash__(self) -> int:
        return hash((self.name, self.code))


class MangoError(Exception):
    """Either a wrapped ProgramError or an error code with its source location."""

    def __init__(
        self,
        mango_error_code: MangoErrorCode | None = None,
        line: int = 0,
        source_file_id: SourceFileId | None = None,
        *,
        program_error: ProgramError | None = None,
    ) -> None:
        if (program_error is None) == (mango_error_code is None):
            raise TypeError("give either an error code or a program error")
        if program_error is None and source_file_id is None:
            raise TypeError("an error code needs a source file id")
        super().__init__(mango_error_code, line, source_file_id, program_error)
        self.mango_error_code = mango_error_code
        self.line = line
        self.source_file_id = source_file_id
        self.program_error = program_error

    def _key(self) -> tuple:
        return (self.mango_error_code, self.line, self.source_file_id, self.program_error)

    def __str__(self) -> str:
        if self.program_error is not None:
            return str(self.program_error)
        return f"{self.mango_error_code}; {self.source_file_id}:{self.line}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MangoError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


def check_assert(
    cond: bool,
    mango_error_code: MangoErrorCode,
    line: int,
    source_file_id: SourceFileId,
) -> None:
    """Raise a MangoError with the given code and location unless ``cond`` holds."""
    if not cond:
        raise MangoError(mango_error_code, line, source_file_id)


def to_program_error(error: MangoError) -> ProgramError:
    """Reduce a MangoError to the generic ProgramError reported to callers."""
    if error.program_error is not None:
        return error.program_error
    return ProgramError("Custom", int(error.mango_error_code))


def _caller_line() -> int:
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back if frame and frame.f_back else None
        return caller.f_lineno if caller else 0
    finally:
        del frame


@dataclass(frozen=True)
class ErrorChecker:
    """Assertion helpers that tag errors with a source file and the caller's line."""

    source_file_id: SourceFileId

    def check(self, cond: bool, err: MangoErrorCode) -> None:
        check_assert(cond, err, _caller_line(), self.source_file_id)

    def check_eq(self, x: object, y: object, err: MangoErrorCode) -> None:
        check_assert(x == y, err, _caller_line(), self.source_file_id)

    def throw(self) -> MangoError:
        return MangoError(MangoErrorCode.Default, _caller_line(), self.source_file_id)

    def throw_err(self, err: MangoErrorCode) -> MangoError:
        return MangoError(err, _caller_line(), self.source_file_id)

    def math_err(self) -> MangoError:
        return MangoError(MangoErrorCode.MathError, _caller_line(), self.source_file_id)
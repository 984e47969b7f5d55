"""
Typed transaction and instruction errors recorded in execution metadata.

JSON shapes follow the RPC wire format: fieldless variants are bare strings
(``"AccountInUse"``), ``InstructionError`` is ``{"InstructionError": [index,
error]}`` and a custom program error is ``{"Custom": code}``. The binary form
is the variant position as u32 followed by the variant payload.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .bincode import BinaryReader, BinaryWriter
from .errors import RecordDecodeError


class InstructionErrorType(Enum):
    """Instruction failure kinds, in wire order."""
    GENERIC_ERROR = "GenericError"
    INVALID_ARGUMENT = "InvalidArgument"
    INVALID_INSTRUCTION_DATA = "InvalidInstructionData"
    INVALID_ACCOUNT_DATA = "InvalidAccountData"
    ACCOUNT_DATA_TOO_SMALL = "AccountDataTooSmall"
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    INCORRECT_PROGRAM_ID = "IncorrectProgramId"
    MISSING_REQUIRED_SIGNATURE = "MissingRequiredSignature"
    ACCOUNT_ALREADY_INITIALIZED = "AccountAlreadyInitialized"
    UNINITIALIZED_ACCOUNT = "UninitializedAccount"
    UNBALANCED_INSTRUCTION = "UnbalancedInstruction"
    MODIFIED_PROGRAM_ID = "ModifiedProgramId"
    EXTERNAL_ACCOUNT_LAMPORT_SPEND = "ExternalAccountLamportSpend"
    EXTERNAL_ACCOUNT_DATA_MODIFIED = "ExternalAccountDataModified"
    READONLY_LAMPORT_CHANGE = "ReadonlyLamportChange"
    READONLY_DATA_MODIFIED = "ReadonlyDataModified"
    DUPLICATE_ACCOUNT_INDEX = "DuplicateAccountIndex"
    EXECUTABLE_MODIFIED = "ExecutableModified"
    RENT_EPOCH_MODIFIED = "RentEpochModified"
    NOT_ENOUGH_ACCOUNT_KEYS = "NotEnoughAccountKeys"
    ACCOUNT_DATA_SIZE_CHANGED = "AccountDataSizeChanged"
    ACCOUNT_NOT_EXECUTABLE = "AccountNotExecutable"
    ACCOUNT_BORROW_FAILED = "AccountBorrowFailed"
    ACCOUNT_BORROW_OUTSTANDING = "AccountBorrowOutstanding"
    DUPLICATE_ACCOUNT_OUT_OF_SYNC = "DuplicateAccountOutOfSync"
    CUSTOM = "Custom"
    INVALID_ERROR = "InvalidError"
    EXECUTABLE_DATA_MODIFIED = "ExecutableDataModified"
    EXECUTABLE_LAMPORT_CHANGE = "ExecutableLamportChange"
    EXECUTABLE_ACCOUNT_NOT_RENT_EXEMPT = "ExecutableAccountNotRentExempt"
    UNSUPPORTED_PROGRAM_ID = "UnsupportedProgramId"
    CALL_DEPTH = "CallDepth"
    MISSING_ACCOUNT = "MissingAccount"
    REENTRANCY_NOT_ALLOWED = "ReentrancyNotAllowed"
    MAX_SEED_LENGTH_EXCEEDED = "MaxSeedLengthExceeded"
    INVALID_SEEDS = "InvalidSeeds"
    COMPUTATIONAL_BUDGET_EXCEEDED = "ComputationalBudgetExceeded"
    PRIVILEGE_ESCALATION = "PrivilegeEscalation"
    PROGRAM_ENVIRONMENT_SETUP_FAILURE = "ProgramEnvironmentSetupFailure"
    PROGRAM_FAILED_TO_COMPLETE = "ProgramFailedToComplete"
    PROGRAM_FAILED_TO_COMPILE = "ProgramFailedToCompile"
    IMMUTABLE = "Immutable"
    INCORRECT_AUTHORITY = "IncorrectAuthority"


class TransactionErrorType(Enum):
    """Transaction failure kinds, in wire order."""
    ACCOUNT_IN_USE = "AccountInUse"
    ACCOUNT_LOADED_TWICE = "AccountLoadedTwice"
    ACCOUNT_NOT_FOUND = "AccountNotFound"
    PROGRAM_ACCOUNT_NOT_FOUND = "ProgramAccountNotFound"
    INSUFFICIENT_FUNDS_FOR_FEE = "InsufficientFundsForFee"
    INVALID_ACCOUNT_FOR_FEE = "InvalidAccountForFee"
    DUPLICATE_SIGNATURE = "DuplicateSignature"
    BLOCKHASH_NOT_FOUND = "BlockhashNotFound"
    INSTRUCTION_ERROR = "InstructionError"
    CALL_CHAIN_TOO_DEEP = "CallChainTooDeep"
    MISSING_SIGNATURE_FOR_FEE = "MissingSignatureForFee"
    INVALID_ACCOUNT_INDEX = "InvalidAccountIndex"
    SIGNATURE_FAILURE = "SignatureFailure"
    INVALID_PROGRAM_FOR_EXECUTION = "InvalidProgramForExecution"
    SANITIZE_FAILURE = "SanitizeFailure"
    CLUSTER_MAINTENANCE = "ClusterMaintenance"


_INSTRUCTION_ERROR_ORDER = list(InstructionErrorType)
_TRANSACTION_ERROR_ORDER = list(TransactionErrorType)


def _variant(order: list, position: int, what: str):
    if position >= len(order):
        raise RecordDecodeError(f"unknown {what} variant {position}")
    return order[position]


@dataclass(frozen=True)
class InstructionError:
    """Why a single instruction failed."""
    kind: InstructionErrorType
    custom_code: Optional[int] = None

    @classmethod
    def custom(cls, code: int) -> "InstructionError":
        return cls(InstructionErrorType.CUSTOM, code)

    def to_json(self) -> Any:
        if self.kind is InstructionErrorType.CUSTOM:
            return {self.kind.value: self.custom_code}
        return self.kind.value

    @classmethod
    def from_json(cls, value: Any) -> "InstructionError":
        if isinstance(value, str):
            return cls(InstructionErrorType(value))
        if isinstance(value, dict) and len(value) == 1:
            (name, code), = value.items()
            if name == InstructionErrorType.CUSTOM.value:
                return cls.custom(int(code))
        raise ValueError(f"unrecognized instruction error: {value!r}")

    def write(self, writer: BinaryWriter) -> None:
        writer.write_u32(_INSTRUCTION_ERROR_ORDER.index(self.kind))
        if self.kind is InstructionErrorType.CUSTOM:
            writer.write_u32(self.custom_code)

    @classmethod
    def read(cls, reader: BinaryReader) -> "InstructionError":
        kind = _variant(_INSTRUCTION_ERROR_ORDER, reader.read_u32(), "instruction error")
        if kind is InstructionErrorType.CUSTOM:
            return cls.custom(reader.read_u32())
        return cls(kind)


@dataclass(frozen=True)
class TransactionError:
    """
    Why a transaction failed.

    ``instruction_index`` and ``instruction_error`` are only set for
    ``TransactionErrorType.INSTRUCTION_ERROR``.
    """
    kind: TransactionErrorType
    instruction_index: Optional[int] = None
    instruction_error: Optional[InstructionError] = None

    @classmethod
    def instruction(cls, index: int, error: InstructionError) -> "TransactionError":
        return cls(TransactionErrorType.INSTRUCTION_ERROR, index, error)

    def to_json(self) -> Any:
        if self.kind is TransactionErrorType.INSTRUCTION_ERROR:
            return {self.kind.value: [self.instruction_index, self.instruction_error.to_json()]}
        return self.kind.value

    @classmethod
    def from_json(cls, value: Any) -> "TransactionError":
        if isinstance(value, str):
            return cls(TransactionErrorType(value))
        if isinstance(value, dict) and len(value) == 1:
            (name, payload), = value.items()
            if name == TransactionErrorType.INSTRUCTION_ERROR.value:
                index, error = payload
                return cls.instruction(int(index), InstructionError.from_json(error))
        raise ValueError(f"unrecognized transaction error: {value!r}")

    def write(self, writer: BinaryWriter) -> None:
        writer.write_u32(_TRANSACTION_ERROR_ORDER.index(self.kind))
        if self.kind is TransactionErrorType.INSTRUCTION_ERROR:
            writer.write_u8(self.instruction_index)
            self.instruction_error.write(writer)

    @classmethod
    def read(cls, reader: BinaryReader) -> "TransactionError":
        kind = _variant(_TRANSACTION_ERROR_ORDER, reader.read_u32(), "transaction error")
        if kind is TransactionErrorType.INSTRUCTION_ERROR:
            index = reader.read_u8()
            return cls.instruction(index, InstructionError.read(reader))
        return cls(kind)


def status_to_json(status: Optional[TransactionError]) -> dict:
    """Render an execution result as ``{"Ok": null}`` or ``{"Err": error}``."""
    if status is None:
        return {"Ok": None}
    return {"Err": status.to_json()}


def status_from_json(value: dict) -> Optional[TransactionError]:
    if "Err" in value:
        return TransactionError.from_json(value["Err"])
    if "Ok" in value:
        return None
    raise ValueError(f"unrecognized transaction status: {value!r}")


def write_status(writer: BinaryWriter, status: Optional[TransactionError]) -> None:
    if status is None:
        writer.write_u32(0)
    else:
        writer.write_u32(1)
        status.write(writer)


def read_status(reader: BinaryReader) -> Optional[TransactionError]:
    tag = reader.read_u32()
    if tag == 0:
        return None
    if tag == 1:
        return TransactionError.read(reader)
    raise RecordDecodeError(f"invalid result tag {tag}")

"""
Public (RPC facing) representations of transactions, messages, instructions
and status metadata.

All types here are immutable value objects built from the internal solders
model. to_json() returns the camel-case wire value; from_json() rebuilds the
value object from it, resolving untagged unions by shape.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import base58
from solders.instruction import CompiledInstruction
from solders.message import MessageHeader

from .errors import ParseInstructionError
from .parser import ParsedAccount, ParsedInstruction, ParserRegistry, default_registry
from .transaction_error import TransactionError, status_from_json, status_to_json

logger = logging.getLogger(__name__)


def encode_data(data: bytes) -> str:
    return base58.b58encode(bytes(data)).decode("ascii")


@dataclass(frozen=True)
class UiCompiledInstruction:
    """A CompiledInstruction with base-58 data, for JSON output"""
    program_id_index: int
    accounts: Tuple[int, ...]
    data: str

    @classmethod
    def from_instruction(cls, instruction: CompiledInstruction) -> "UiCompiledInstruction":
        return cls(
            program_id_index=instruction.program_id_index,
            accounts=tuple(instruction.accounts),
            data=encode_data(instruction.data),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "programIdIndex": self.program_id_index,
            "accounts": list(self.accounts),
            "data": self.data,
        }

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "UiCompiledInstruction":
        return cls(value["programIdIndex"], tuple(value["accounts"]), value["data"])


@dataclass(frozen=True)
class UiPartiallyDecodedInstruction:
    """An instruction no parser recognized, with its accounts resolved to pubkeys"""
    program_id: str
    accounts: Tuple[str, ...]
    data: str

    @classmethod
    def from_instruction(cls, instruction: CompiledInstruction,
                         account_keys: Sequence[Any]) -> "UiPartiallyDecodedInstruction":
        return cls(
            program_id=str(account_keys[instruction.program_id_index]),
            accounts=tuple(str(account_keys[index]) for index in instruction.accounts),
            data=encode_data(instruction.data),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "programId": self.program_id,
            "accounts": list(self.accounts),
            "data": self.data,
        }

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "UiPartiallyDecodedInstruction":
        return cls(value["programId"], tuple(value["accounts"]), value["data"])


UiParsedInstruction = Union[ParsedInstruction, UiPartiallyDecodedInstruction]
UiInstruction = Union[UiCompiledInstruction, ParsedInstruction, UiPartiallyDecodedInstruction]


def parse_instruction(instruction: CompiledInstruction, account_keys: Sequence[Any],
                      registry: Optional[ParserRegistry] = None) -> UiParsedInstruction:
    """
    Structured form of an instruction, falling back to the partially decoded form.

    Args:
        instruction: Compiled instruction
        account_keys: Account keys of the enclosing message
        registry: Parser registry, the process-wide default when omitted

    Returns:
        ParsedInstruction, or UiPartiallyDecodedInstruction when no parser accepts it
    """
    registry = registry or default_registry()
    program_id = account_keys[instruction.program_id_index]
    try:
        return registry.parse(program_id, instruction, account_keys)
    except ParseInstructionError as e:
        logger.debug(f"Falling back to partially decoded instruction for {program_id}: {e!r}")
        return UiPartiallyDecodedInstruction.from_instruction(instruction, account_keys)


def ui_instruction_from_json(value: Dict[str, Any]) -> UiInstruction:
    """Resolve an untagged instruction: compiled, then parsed, then partially decoded."""
    if "programIdIndex" in value:
        return UiCompiledInstruction.from_json(value)
    if "parsed" in value:
        return ParsedInstruction.from_json(value)
    if "programId" in value:
        return UiPartiallyDecodedInstruction.from_json(value)
    raise ValueError(f"unrecognized instruction shape: {sorted(value)}")


@dataclass(frozen=True)
class UiMessageHeader:
    num_required_signatures: int
    num_readonly_signed_accounts: int
    num_readonly_unsigned_accounts: int

    @classmethod
    def from_header(cls, header: MessageHeader) -> "UiMessageHeader":
        return cls(
            header.num_required_signatures,
            header.num_readonly_signed_accounts,
            header.num_readonly_unsigned_accounts,
        )

    def to_json(self) -> Dict[str, int]:
        return {
            "numRequiredSignatures": self.num_required_signatures,
            "numReadonlySignedAccounts": self.num_readonly_signed_accounts,
            "numReadonlyUnsignedAccounts": self.num_readonly_unsigned_accounts,
        }

    @classmethod
    def from_json(cls, value: Dict[str, int]) -> "UiMessageHeader":
        return cls(
            value["numRequiredSignatures"],
            value["numReadonlySignedAccounts"],
            value["numReadonlyUnsignedAccounts"],
        )


@dataclass(frozen=True)
class UiRawMessage:
    header: UiMessageHeader
    account_keys: Tuple[str, ...]
    recent_blockhash: str
    instructions: Tuple[UiCompiledInstruction, ...]

    def to_json(self) -> Dict[str, Any]:
        return {
            "header": self.header.to_json(),
            "accountKeys": list(self.account_keys),
            "recentBlockhash": self.recent_blockhash,
            "instructions": [ix.to_json() for ix in self.instructions],
        }

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "UiRawMessage":
        return cls(
            header=UiMessageHeader.from_json(value["header"]),
            account_keys=tuple(value["accountKeys"]),
            recent_blockhash=value["recentBlockhash"],
            instructions=tuple(UiCompiledInstruction.from_json(ix) for ix in value["instructions"]),
        )


@dataclass(frozen=True)
class UiParsedMessage:
    account_keys: Tuple[ParsedAccount, ...]
    recent_blockhash: str
    instructions: Tuple[UiParsedInstruction, ...]

    def to_json(self) -> Dict[str, Any]:
        return {
            "accountKeys": [account.to_json() for account in self.account_keys],
            "recentBlockhash": self.recent_blockhash,
            "instructions": [ix.to_json() for ix in self.instructions],
        }

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "UiParsedMessage":
        return cls(
            account_keys=tuple(ParsedAccount.from_json(key) for key in value["accountKeys"]),
            recent_blockhash=value["recentBlockhash"],
            instructions=tuple(ui_instruction_from_json(ix) for ix in value["instructions"]),
        )


UiMessage = Union[UiParsedMessage, UiRawMessage]


def ui_message_from_json(value: Dict[str, Any]) -> UiMessage:
    """Parsed messages carry account objects, raw messages carry a header."""
    keys = value.get("accountKeys") or []
    if "header" not in value and all(isinstance(key, dict) for key in keys):
        return UiParsedMessage.from_json(value)
    return UiRawMessage.from_json(value)


@dataclass(frozen=True)
class UiTransaction:
    signatures: Tuple[str, ...]
    message: UiMessage

    def to_json(self) -> Dict[str, Any]:
        return {
            "signatures": list(self.signatures),
            "message": self.message.to_json(),
        }

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "UiTransaction":
        return cls(tuple(value["signatures"]), ui_message_from_json(value["message"]))


@dataclass(frozen=True)
class UiInnerInstructions:
    """Instructions invoked by the outer instruction at ``index``"""
    index: int
    instructions: Tuple[UiInstruction, ...]

    def to_json(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "instructions": [ix.to_json() for ix in self.instructions],
        }

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "UiInnerInstructions":
        return cls(value["index"], tuple(ui_instruction_from_json(ix) for ix in value["instructions"]))


@dataclass(frozen=True)
class UiTransactionStatusMeta:
    """
    Public execution metadata.

    ``err`` and ``status`` carry the same outcome; ``status`` is deprecated
    and kept for older clients.
    """
    err: Optional[TransactionError]
    status: Optional[TransactionError]
    fee: int
    pre_balances: Tuple[int, ...]
    post_balances: Tuple[int, ...]
    inner_instructions: Optional[Tuple[UiInnerInstructions, ...]] = None
    log_messages: Optional[Tuple[str, ...]] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "err": self.err.to_json() if self.err is not None else None,
            "status": status_to_json(self.status),
            "fee": self.fee,
            "preBalances": list(self.pre_balances),
            "postBalances": list(self.post_balances),
            "innerInstructions": (
                [inner.to_json() for inner in self.inner_instructions]
                if self.inner_instructions is not None else None
            ),
            "logMessages": list(self.log_messages) if self.log_messages is not None else None,
        }

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "UiTransactionStatusMeta":
        inner = value.get("innerInstructions")
        logs = value.get("logMessages")
        err = value.get("err")
        return cls(
            err=TransactionError.from_json(err) if err is not None else None,
            status=status_from_json(value["status"]),
            fee=value["fee"],
            pre_balances=tuple(value["preBalances"]),
            post_balances=tuple(value["postBalances"]),
            inner_instructions=(
                tuple(UiInnerInstructions.from_json(item) for item in inner)
                if inner is not None else None
            ),
            log_messages=tuple(logs) if logs is not None else None,
        )

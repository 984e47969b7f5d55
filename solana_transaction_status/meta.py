"""
Execution metadata and its projection to the public shape.

TransactionStatusMeta is also persisted as a binary record. Fields added
after the first record layout (inner instructions, log messages) default to
None when an older, shorter record ends before them.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from solders.instruction import CompiledInstruction
from solders.message import Message

from .bincode import BinaryReader, BinaryWriter, default_on_eof
from .encoding import UiTransactionEncoding
from .parser import ParserRegistry
from .transaction_error import TransactionError, read_status, write_status
from .ui import UiCompiledInstruction, UiInnerInstructions, UiTransactionStatusMeta, parse_instruction


def write_compiled_instruction(writer: BinaryWriter, instruction: CompiledInstruction) -> None:
    accounts = bytes(instruction.accounts)
    data = bytes(instruction.data)
    writer.write_u8(instruction.program_id_index)
    writer.write_short_vec_len(len(accounts))
    writer.write_bytes(accounts)
    writer.write_short_vec_len(len(data))
    writer.write_bytes(data)


def read_compiled_instruction(reader: BinaryReader) -> CompiledInstruction:
    program_id_index = reader.read_u8()
    accounts = reader.read_bytes(reader.read_short_vec_len())
    data = reader.read_bytes(reader.read_short_vec_len())
    return CompiledInstruction(program_id_index, data, accounts)


@dataclass
class InnerInstructions:
    """Instructions invoked during execution of the outer instruction at ``index``"""
    index: int
    instructions: List[CompiledInstruction] = field(default_factory=list)

    def write(self, writer: BinaryWriter) -> None:
        writer.write_u8(self.index)
        writer.write_seq(self.instructions, lambda ix: write_compiled_instruction(writer, ix))

    @classmethod
    def read(cls, reader: BinaryReader) -> "InnerInstructions":
        index = reader.read_u8()
        return cls(index, reader.read_seq(lambda: read_compiled_instruction(reader)))

    def to_ui(self) -> UiInnerInstructions:
        return UiInnerInstructions(
            index=self.index,
            instructions=tuple(UiCompiledInstruction.from_instruction(ix) for ix in self.instructions),
        )

    def to_ui_parsed(self, message: Message, registry: Optional[ParserRegistry] = None) -> UiInnerInstructions:
        # inner instructions index into the outer message's account keys
        account_keys = message.account_keys
        return UiInnerInstructions(
            index=self.index,
            instructions=tuple(parse_instruction(ix, account_keys, registry) for ix in self.instructions),
        )


@dataclass
class TransactionStatusMeta:
    """
    Internal execution metadata.

    ``status`` is None for a successful transaction. ``inner_instructions``
    and ``log_messages`` are None when they were not recorded, which is not
    the same as an empty list.
    """
    status: Optional[TransactionError] = None
    fee: int = 0
    pre_balances: List[int] = field(default_factory=list)
    post_balances: List[int] = field(default_factory=list)
    inner_instructions: Optional[List[InnerInstructions]] = None
    log_messages: Optional[List[str]] = None

    @property
    def err(self) -> Optional[TransactionError]:
        return self.status

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        write_status(writer, self.status)
        writer.write_u64(self.fee)
        writer.write_seq(self.pre_balances, writer.write_u64)
        writer.write_seq(self.post_balances, writer.write_u64)
        writer.write_option(
            self.inner_instructions,
            lambda items: writer.write_seq(items, lambda inner: inner.write(writer)),
        )
        writer.write_option(
            self.log_messages,
            lambda logs: writer.write_seq(logs, writer.write_string),
        )
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> "TransactionStatusMeta":
        """
        Load a stored record, including records written before the
        optional trailing fields existed.

        Raises:
            RecordDecodeError: Required field truncated, or a field present but invalid
        """
        reader = BinaryReader(data)
        status = read_status(reader)
        fee = reader.read_u64()
        pre_balances = reader.read_seq(reader.read_u64)
        post_balances = reader.read_seq(reader.read_u64)
        inner_instructions = default_on_eof(
            reader,
            lambda: reader.read_option(lambda: reader.read_seq(lambda: InnerInstructions.read(reader))),
            None,
        )
        log_messages = default_on_eof(
            reader,
            lambda: reader.read_option(lambda: reader.read_seq(reader.read_string)),
            None,
        )
        return cls(status, fee, pre_balances, post_balances, inner_instructions, log_messages)

    def encode(self, encoding: Union[UiTransactionEncoding, str], message: Message,
               registry: Optional[ParserRegistry] = None) -> UiTransactionStatusMeta:
        return transform(self, message, encoding, registry)


def transform(meta: TransactionStatusMeta, message: Message, encoding: Union[UiTransactionEncoding, str],
              registry: Optional[ParserRegistry] = None) -> UiTransactionStatusMeta:
    """
    Project execution metadata to its public shape.

    Args:
        meta: Internal metadata
        message: Message of the transaction the metadata belongs to
        encoding: Requested encoding; only jsonParsed parses inner instructions
        registry: Parser registry used for jsonParsed

    Returns:
        UiTransactionStatusMeta with err promoted next to status
    """
    encoding = UiTransactionEncoding.parse(encoding)
    inner_instructions = None
    if meta.inner_instructions is not None:
        if encoding is UiTransactionEncoding.JSON_PARSED:
            inner_instructions = tuple(inner.to_ui_parsed(message, registry) for inner in meta.inner_instructions)
        else:
            inner_instructions = tuple(inner.to_ui() for inner in meta.inner_instructions)

    return UiTransactionStatusMeta(
        err=meta.err,
        status=meta.status,
        fee=meta.fee,
        pre_balances=tuple(meta.pre_balances),
        post_balances=tuple(meta.post_balances),
        inner_instructions=inner_instructions,
        log_messages=tuple(meta.log_messages) if meta.log_messages is not None else None,
    )

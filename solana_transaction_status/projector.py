"""
Message projection to its raw or parsed public view.
"""
from enum import Enum
from typing import Optional

from solders.message import Message

from .parser import ParserRegistry, parse_accounts
from .ui import (
    UiCompiledInstruction,
    UiMessage,
    UiMessageHeader,
    UiParsedMessage,
    UiRawMessage,
    parse_instruction,
)


class MessageMode(Enum):
    RAW = "raw"
    PARSED = "parsed"


def project_raw(message: Message) -> UiRawMessage:
    """Lossless re-encoding: base-58 keys, instruction indices kept as-is."""
    return UiRawMessage(
        header=UiMessageHeader.from_header(message.header),
        account_keys=tuple(str(key) for key in message.account_keys),
        recent_blockhash=str(message.recent_blockhash),
        instructions=tuple(UiCompiledInstruction.from_instruction(ix) for ix in message.instructions),
    )


def project_parsed(message: Message, registry: Optional[ParserRegistry] = None) -> UiParsedMessage:
    """
    Annotated view: account roles and structured instructions.

    Never fails; instructions no parser accepts are partially decoded.
    """
    account_keys = message.account_keys
    return UiParsedMessage(
        account_keys=tuple(parse_accounts(message)),
        recent_blockhash=str(message.recent_blockhash),
        instructions=tuple(parse_instruction(ix, account_keys, registry) for ix in message.instructions),
    )


def project(message: Message, mode: MessageMode, registry: Optional[ParserRegistry] = None) -> UiMessage:
    if mode is MessageMode.PARSED:
        return project_parsed(message, registry)
    return project_raw(message)

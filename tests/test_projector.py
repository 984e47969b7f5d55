"""
Tests for raw and parsed message projection.
"""

from __future__ import annotations

import base58

from solana_transaction_status.config import SYSTEM_PROGRAM_ID
from solana_transaction_status.parser import ParsedInstruction, ParserRegistry
from solana_transaction_status.projector import MessageMode, project, project_parsed, project_raw
from solana_transaction_status.ui import (
    UiCompiledInstruction,
    UiMessageHeader,
    UiParsedMessage,
    UiPartiallyDecodedInstruction,
    UiRawMessage,
    ui_message_from_json,
)


def test_raw_projection_is_lossless(mixed_message, keys):
    raw = project_raw(mixed_message)

    assert raw.header == UiMessageHeader(2, 1, 1)
    assert raw.account_keys == (str(keys[0]), str(keys[1]), str(keys[2]), SYSTEM_PROGRAM_ID)
    assert raw.recent_blockhash == str(mixed_message.recent_blockhash)
    assert raw.instructions[0] == UiCompiledInstruction(
        program_id_index=2,
        accounts=(0, 1),
        data=base58.b58encode(b"\x01\x02\x03").decode(),
    )
    assert raw.to_json()["header"] == {
        "numRequiredSignatures": 2,
        "numReadonlySignedAccounts": 1,
        "numReadonlyUnsignedAccounts": 1,
    }


def test_parsed_projection_classifies_and_decodes(mixed_message, keys):
    parsed = project_parsed(mixed_message)

    assert [(a.signer, a.writable) for a in parsed.account_keys] == [
        (True, True),
        (True, False),
        (False, True),
        (False, False),
    ]
    unknown, transfer = parsed.instructions
    assert unknown == UiPartiallyDecodedInstruction(
        program_id=str(keys[2]),
        accounts=(str(keys[0]), str(keys[1])),
        data=base58.b58encode(b"\x01\x02\x03").decode(),
    )
    assert isinstance(transfer, ParsedInstruction)
    assert transfer.parsed["info"] == {"source": str(keys[0]), "destination": str(keys[2]), "lamports": 42}


def test_parsed_projection_with_empty_registry_never_fails(mixed_message, keys):
    parsed = project_parsed(mixed_message, ParserRegistry())

    assert all(isinstance(ix, UiPartiallyDecodedInstruction) for ix in parsed.instructions)
    assert parsed.instructions[1].program_id == SYSTEM_PROGRAM_ID
    assert parsed.instructions[1].accounts == (str(keys[0]), str(keys[2]))


def test_project_dispatches_on_mode(transfer_message):
    assert isinstance(project(transfer_message, MessageMode.RAW), UiRawMessage)
    assert isinstance(project(transfer_message, MessageMode.PARSED), UiParsedMessage)


def test_message_json_shapes_resolve(mixed_message):
    raw = project_raw(mixed_message)
    parsed = project_parsed(mixed_message)

    assert ui_message_from_json(raw.to_json()) == raw
    assert ui_message_from_json(parsed.to_json()) == parsed

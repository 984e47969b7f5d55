"""
Pytest fixtures: small real transactions built with solders.
"""

from __future__ import annotations

import pytest
from solders.hash import Hash
from solders.instruction import CompiledInstruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from solana_transaction_status.config import SYSTEM_PROGRAM_ID

SYSTEM_PROGRAM = Pubkey.from_string(SYSTEM_PROGRAM_ID)


def system_transfer_data(lamports: int) -> bytes:
    return (2).to_bytes(4, "little") + lamports.to_bytes(8, "little")


def build_message(account_keys, instructions, header=(1, 0, 1)) -> Message:
    return Message.new_with_compiled_instructions(
        header[0],
        header[1],
        header[2],
        list(account_keys),
        Hash.new_unique(),
        list(instructions),
    )


def build_transaction(message: Message) -> Transaction:
    signatures = [Signature.new_unique() for _ in range(message.header.num_required_signatures)]
    return Transaction.populate(message, signatures)


@pytest.fixture
def keys():
    """Four fresh pubkeys, A B C D."""
    return [Pubkey.new_unique() for _ in range(4)]


@pytest.fixture
def transfer_message(keys):
    """
    [payer, destination, system program]: payer signs and pays, the
    program id is readonly.
    """
    account_keys = [keys[0], keys[1], SYSTEM_PROGRAM]
    instruction = CompiledInstruction(2, system_transfer_data(5000), bytes([0, 1]))
    return build_message(account_keys, [instruction], header=(1, 0, 1))


@pytest.fixture
def transfer_transaction(transfer_message):
    return build_transaction(transfer_message)


@pytest.fixture
def mixed_message(keys):
    """
    Header {2, 1, 1} over [A, B, C, D] with one instruction for an
    unregistered program C and one system transfer.
    """
    account_keys = [keys[0], keys[1], keys[2], SYSTEM_PROGRAM]
    unknown = CompiledInstruction(2, b"\x01\x02\x03", bytes([0, 1]))
    transfer = CompiledInstruction(3, system_transfer_data(42), bytes([0, 2]))
    return build_message(account_keys, [unknown, transfer], header=(2, 1, 1))


@pytest.fixture
def mixed_transaction(mixed_message):
    return build_transaction(mixed_message)

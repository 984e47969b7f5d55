"""
Invariant checks run where the internal model is built from outside input.
"""
from solders.message import Message

from .errors import MalformedInputError
from .meta import TransactionStatusMeta


def validate_message(message: Message) -> None:
    """
    Check the positional invariants of a message.

    Raises:
        MalformedInputError: Header counts exceed the key list, or an
            instruction references an account index outside it
    """
    header = message.header
    num_keys = len(message.account_keys)
    if header.num_required_signatures + header.num_readonly_unsigned_accounts > num_keys:
        raise MalformedInputError(
            f"header needs {header.num_required_signatures} signers and "
            f"{header.num_readonly_unsigned_accounts} readonly unsigned accounts, message has {num_keys} keys"
        )
    if header.num_readonly_signed_accounts > header.num_required_signatures:
        raise MalformedInputError("more readonly signed accounts than required signatures")
    for position, instruction in enumerate(message.instructions):
        indices = [instruction.program_id_index, *instruction.accounts]
        if any(index >= num_keys for index in indices):
            raise MalformedInputError(f"instruction {position} references an account outside the message")


def validate_meta(meta: TransactionStatusMeta, message: Message) -> None:
    num_keys = len(message.account_keys)
    if not len(meta.pre_balances) == len(meta.post_balances) == num_keys:
        raise MalformedInputError(
            f"balance arrays ({len(meta.pre_balances)}, {len(meta.post_balances)}) "
            f"do not match {num_keys} account keys"
        )
    for inner in meta.inner_instructions or []:
        if inner.index >= len(message.instructions):
            raise MalformedInputError(f"inner instructions for missing instruction {inner.index}")
        for instruction in inner.instructions:
            if any(index >= num_keys for index in [instruction.program_id_index, *instruction.accounts]):
                raise MalformedInputError(f"inner instruction of {inner.index} references an account outside the message")

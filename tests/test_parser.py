"""
Tests for the instruction parser registry and the built-in decoders.
"""

from __future__ import annotations

import pytest
from solders.instruction import CompiledInstruction
from solders.pubkey import Pubkey

from solana_transaction_status.config import MEMO_PROGRAM_ID, SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID
from solana_transaction_status.errors import (
    InstructionKeyMismatchError,
    InstructionNotParsableError,
    ParseInstructionError,
    ProgramNotParsableError,
)
from solana_transaction_status.parser import (
    ParsedInstruction,
    ParserRegistry,
    SystemParser,
    TokenParser,
    default_registry,
    parse,
)
from solana_transaction_status.projector import project_parsed
from solana_transaction_status.ui import UiPartiallyDecodedInstruction

MEMO_PROGRAM = Pubkey.from_string(MEMO_PROGRAM_ID)


def u64(value: int) -> bytes:
    return value.to_bytes(8, "little")


def test_system_transfer(keys):
    account_keys = [keys[0], keys[1], Pubkey.from_string(SYSTEM_PROGRAM_ID)]
    ix = CompiledInstruction(2, (2).to_bytes(4, "little") + u64(5000), bytes([0, 1]))

    parsed = parse(account_keys[2], ix, account_keys)

    assert parsed == ParsedInstruction(
        program="system",
        program_id=SYSTEM_PROGRAM_ID,
        parsed={
            "type": "transfer",
            "info": {"source": str(keys[0]), "destination": str(keys[1]), "lamports": 5000},
        },
    )
    assert parsed.to_json()["programId"] == SYSTEM_PROGRAM_ID


def test_system_create_account():
    accounts = ["payer", "new"]
    owner = Pubkey.new_unique()
    data = (0).to_bytes(4, "little") + u64(1_000_000) + u64(165) + bytes(owner)

    parsed = SystemParser.parse_instruction(accounts, data)

    assert parsed == {
        "type": "createAccount",
        "info": {
            "source": "payer",
            "newAccount": "new",
            "lamports": 1_000_000,
            "space": 165,
            "owner": str(owner),
        },
    }


def test_system_create_account_with_seed_reads_string_seed():
    base = Pubkey.new_unique()
    owner = Pubkey.new_unique()
    seed = b"vault"
    data = ((3).to_bytes(4, "little") + bytes(base) + u64(len(seed)) + seed
            + u64(10) + u64(0) + bytes(owner))

    info = SystemParser.parse_instruction(["payer", "new"], data)["info"]

    assert info["seed"] == "vault"
    assert info["base"] == str(base)
    assert info["owner"] == str(owner)


def test_system_rejects_unknown_discriminant():
    with pytest.raises(InstructionNotParsableError):
        SystemParser.parse_instruction(["a"], (99).to_bytes(4, "little"))


def test_system_rejects_missing_accounts():
    with pytest.raises(InstructionNotParsableError):
        SystemParser.parse_instruction(["only-source"], (2).to_bytes(4, "little") + u64(1))


def test_truncated_data_is_not_parsable(keys):
    account_keys = [keys[0], keys[1], Pubkey.from_string(SYSTEM_PROGRAM_ID)]
    ix = CompiledInstruction(2, (2).to_bytes(4, "little") + b"\x01\x02", bytes([0, 1]))

    with pytest.raises(InstructionNotParsableError):
        parse(account_keys[2], ix, account_keys)


def test_token_transfer_single_authority():
    parsed = TokenParser.parse_instruction(["src", "dst", "owner"], bytes([3]) + u64(250))

    assert parsed == {
        "type": "transfer",
        "info": {"source": "src", "destination": "dst", "amount": "250", "authority": "owner"},
    }


def test_token_transfer_multisig_authority():
    parsed = TokenParser.parse_instruction(["src", "dst", "multisig", "s1", "s2"], bytes([3]) + u64(1))

    info = parsed["info"]
    assert info["multisigAuthority"] == "multisig"
    assert info["signers"] == ["s1", "s2"]
    assert "authority" not in info


def test_token_transfer_checked_renders_ui_amount():
    parsed = TokenParser.parse_instruction(["src", "mint", "dst", "owner"], bytes([12]) + u64(1500) + bytes([3]))

    assert parsed["type"] == "transferChecked"
    assert parsed["info"]["tokenAmount"] == {"uiAmount": 1.5, "decimals": 3, "amount": "1500"}
    assert parsed["info"]["authority"] == "owner"


def test_token_initialize_mint_optional_freeze_authority():
    authority = Pubkey.new_unique()
    without = TokenParser.parse_instruction(["mint", "rent"], bytes([0, 6]) + bytes(authority) + b"\x00")
    freeze = Pubkey.new_unique()
    with_freeze = TokenParser.parse_instruction(
        ["mint", "rent"], bytes([0, 6]) + bytes(authority) + b"\x01" + bytes(freeze)
    )

    assert without["info"] == {
        "mint": "mint",
        "decimals": 6,
        "mintAuthority": str(authority),
        "rentSysvar": "rent",
    }
    assert with_freeze["info"]["freezeAuthority"] == str(freeze)


def test_token_set_authority():
    new_owner = Pubkey.new_unique()
    parsed = TokenParser.parse_instruction(["acct", "current"], bytes([6, 2, 1]) + bytes(new_owner))

    assert parsed["info"] == {
        "account": "acct",
        "authorityType": "accountOwner",
        "newAuthority": str(new_owner),
        "authority": "current",
    }


def test_token_rejects_bad_pubkey_option_tag():
    with pytest.raises(InstructionNotParsableError):
        TokenParser.parse_instruction(["mint", "current"], bytes([6, 0, 7]))


def test_token_rejects_missing_accounts():
    with pytest.raises(InstructionNotParsableError):
        TokenParser.parse_instruction(["acct", "mint", "owner"], bytes([1]))


def test_memo_parses_utf8_text(keys):
    account_keys = [keys[0], MEMO_PROGRAM]
    ix = CompiledInstruction(1, "hello ☀".encode("utf-8"), bytes([0]))

    parsed = parse(MEMO_PROGRAM, ix, account_keys)

    assert parsed.program == "spl-memo"
    assert parsed.parsed == "hello ☀"


def test_unknown_program_is_not_parsable(keys):
    ix = CompiledInstruction(1, b"\x00", bytes([0]))
    with pytest.raises(ProgramNotParsableError):
        parse(keys[1], ix, [keys[0], keys[1]])


def test_account_index_out_of_range(keys):
    account_keys = [keys[0], Pubkey.from_string(SYSTEM_PROGRAM_ID)]
    ix = CompiledInstruction(1, (2).to_bytes(4, "little") + u64(1), bytes([0, 5]))

    with pytest.raises(InstructionKeyMismatchError):
        parse(account_keys[1], ix, account_keys)


def test_parse_errors_share_one_base():
    for error in (ProgramNotParsableError, InstructionNotParsableError, InstructionKeyMismatchError):
        assert issubclass(error, ParseInstructionError)


def test_default_registry_is_shared_and_read_only():
    registry = default_registry()

    assert registry is default_registry()
    assert SYSTEM_PROGRAM_ID in registry
    assert TOKEN_PROGRAM_ID in registry
    with pytest.raises(RuntimeError):
        registry.register_program_parser("x", "x", lambda accounts, data: {})


def test_custom_decoder_by_registration(keys):
    registry = ParserRegistry.with_defaults()
    registry.register_program_parser(
        str(keys[1]),
        "counter",
        lambda accounts, data: {"type": "increment", "info": {"counter": accounts[0], "by": data[0]}},
    )
    ix = CompiledInstruction(1, bytes([7]), bytes([0]))

    parsed = registry.parse(keys[1], ix, [keys[0], keys[1]])

    assert parsed.program == "counter"
    assert parsed.parsed == {"type": "increment", "info": {"counter": str(keys[0]), "by": 7}}
    assert SYSTEM_PROGRAM_ID in registry
    assert str(keys[1]) not in default_registry()


@pytest.mark.parametrize("failure", [ValueError("bad layout"), KeyError("kind"), IndexError("short")])
def test_registered_decoder_errors_are_not_parsable(keys, failure):
    def decoder(accounts, data):
        raise failure

    registry = ParserRegistry()
    registry.register_program_parser(str(keys[1]), "broken", decoder)
    ix = CompiledInstruction(1, b"\x00", bytes([0]))

    with pytest.raises(InstructionNotParsableError):
        registry.parse(keys[1], ix, [keys[0], keys[1]])


def test_parsed_projection_survives_failing_decoder(mixed_message, keys):
    def decoder(accounts, data):
        raise ValueError("unsupported")

    registry = ParserRegistry.with_defaults()
    registry.register_program_parser(str(keys[2]), "broken", decoder)

    unknown = project_parsed(mixed_message, registry).instructions[0]

    assert isinstance(unknown, UiPartiallyDecodedInstruction)
    assert unknown.program_id == str(keys[2])

"""
SPL Token program instruction decoder.
"""
from typing import Any, Dict, List, Optional

from ..bincode import BinaryReader
from ..config import TOKEN_PROGRAM_ID
from ..errors import InstructionNotParsableError
from .base import BaseParser
from .system import read_pubkey

AUTHORITY_TYPES = {
    0: "mintTokens",
    1: "freezeAccount",
    2: "accountOwner",
    3: "closeAccount",
}


def read_optional_pubkey(reader: BinaryReader) -> Optional[str]:
    tag = reader.read_u8()
    if tag == 0:
        return None
    if tag == 1:
        return read_pubkey(reader)
    raise InstructionNotParsableError(f"invalid pubkey option tag {tag}")


def token_amount_to_ui_amount(amount: int, decimals: int) -> Dict[str, Any]:
    return {
        "uiAmount": amount / 10 ** decimals,
        "decimals": decimals,
        "amount": str(amount),
    }


def parse_signers(info: Dict[str, Any], last_nonsigner_index: int, accounts: List[str],
                  owner_field_name: str, multisig_field_name: str) -> None:
    """Record a single authority, or a multisig authority and its signers."""
    if len(accounts) > last_nonsigner_index + 1:
        info[multisig_field_name] = accounts[last_nonsigner_index]
        info["signers"] = accounts[last_nonsigner_index + 1:]
    else:
        info[owner_field_name] = accounts[last_nonsigner_index]


class TokenParser(BaseParser):
    """Decoder for the SPL Token program"""

    PROGRAM_IDS = (TOKEN_PROGRAM_ID,)
    PROGRAM_NAME = "spl-token"

    # token instruction discriminant -> (type, minimum account count)
    INSTRUCTION_TYPES = {
        0: ("initializeMint", 2),
        1: ("initializeAccount", 4),
        2: ("initializeMultisig", 3),
        3: ("transfer", 3),
        4: ("approve", 3),
        5: ("revoke", 2),
        6: ("setAuthority", 2),
        7: ("mintTo", 3),
        8: ("burn", 3),
        9: ("closeAccount", 3),
        10: ("freezeAccount", 3),
        11: ("thawAccount", 3),
        12: ("transferChecked", 4),
        13: ("approveChecked", 4),
        14: ("mintToChecked", 3),
        15: ("burnChecked", 3),
    }

    @classmethod
    def parse_instruction(cls, accounts: List[str], data: bytes) -> Dict[str, Any]:
        """
        Decode an SPL Token instruction

        Args:
            accounts: Resolved instruction account pubkeys
            data: Instruction data, u8 discriminant first

        Returns:
            {"type": ..., "info": {...}}
        """
        reader = cls.reader(data)
        instruction_type = reader.read_u8()
        if instruction_type not in cls.INSTRUCTION_TYPES:
            raise InstructionNotParsableError(f"unknown token instruction {instruction_type}")
        name, required = cls.INSTRUCTION_TYPES[instruction_type]
        cls.check_num_accounts(accounts, required, name)

        info: Dict[str, Any]
        if instruction_type == 0:
            decimals = reader.read_u8()
            info = {
                "mint": accounts[0],
                "decimals": decimals,
                "mintAuthority": read_pubkey(reader),
                "rentSysvar": accounts[1],
            }
            freeze_authority = read_optional_pubkey(reader)
            if freeze_authority is not None:
                info["freezeAuthority"] = freeze_authority
        elif instruction_type == 1:
            info = {
                "account": accounts[0],
                "mint": accounts[1],
                "owner": accounts[2],
                "rentSysvar": accounts[3],
            }
        elif instruction_type == 2:
            info = {
                "multisig": accounts[0],
                "rentSysvar": accounts[1],
                "signers": accounts[2:],
                "m": reader.read_u8(),
            }
        elif instruction_type in (3, 4, 7, 8):
            amount = str(reader.read_u64())
            if instruction_type == 3:
                info = {"source": accounts[0], "destination": accounts[1], "amount": amount}
                parse_signers(info, 2, accounts, "authority", "multisigAuthority")
            elif instruction_type == 4:
                info = {"source": accounts[0], "delegate": accounts[1], "amount": amount}
                parse_signers(info, 2, accounts, "owner", "multisigOwner")
            elif instruction_type == 7:
                info = {"mint": accounts[0], "account": accounts[1], "amount": amount}
                parse_signers(info, 2, accounts, "mintAuthority", "multisigMintAuthority")
            else:
                info = {"account": accounts[0], "mint": accounts[1], "amount": amount}
                parse_signers(info, 2, accounts, "authority", "multisigAuthority")
        elif instruction_type == 5:
            info = {"source": accounts[0]}
            parse_signers(info, 1, accounts, "owner", "multisigOwner")
        elif instruction_type == 6:
            authority_type = reader.read_u8()
            if authority_type not in AUTHORITY_TYPES:
                raise InstructionNotParsableError(f"unknown authority type {authority_type}")
            owned = "mint" if authority_type in (0, 1) else "account"
            info = {
                owned: accounts[0],
                "authorityType": AUTHORITY_TYPES[authority_type],
                "newAuthority": read_optional_pubkey(reader),
            }
            parse_signers(info, 1, accounts, "authority", "multisigAuthority")
        elif instruction_type == 9:
            info = {"account": accounts[0], "destination": accounts[1]}
            parse_signers(info, 2, accounts, "owner", "multisigOwner")
        elif instruction_type in (10, 11):
            info = {"account": accounts[0], "mint": accounts[1]}
            parse_signers(info, 2, accounts, "freezeAuthority", "multisigFreezeAuthority")
        else:
            amount = reader.read_u64()
            token_amount = token_amount_to_ui_amount(amount, reader.read_u8())
            if instruction_type == 12:
                info = {"source": accounts[0], "mint": accounts[1], "destination": accounts[2],
                        "tokenAmount": token_amount}
                parse_signers(info, 3, accounts, "authority", "multisigAuthority")
            elif instruction_type == 13:
                info = {"source": accounts[0], "mint": accounts[1], "delegate": accounts[2],
                        "tokenAmount": token_amount}
                parse_signers(info, 3, accounts, "owner", "multisigOwner")
            elif instruction_type == 14:
                info = {"mint": accounts[0], "account": accounts[1], "tokenAmount": token_amount}
                parse_signers(info, 2, accounts, "mintAuthority", "multisigMintAuthority")
            else:
                info = {"account": accounts[0], "mint": accounts[1], "tokenAmount": token_amount}
                parse_signers(info, 2, accounts, "authority", "multisigAuthority")

        return {"type": name, "info": info}

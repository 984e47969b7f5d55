"""
System program instruction decoder.
"""
from typing import Any, Dict, List

from solders.pubkey import Pubkey

from ..bincode import BinaryReader
from ..config import SYSTEM_PROGRAM_ID
from ..errors import InstructionNotParsableError
from .base import BaseParser


def read_pubkey(reader: BinaryReader) -> str:
    return str(Pubkey(reader.read_bytes(32)))


class SystemParser(BaseParser):
    """Decoder for the system program"""

    PROGRAM_IDS = (SYSTEM_PROGRAM_ID,)
    PROGRAM_NAME = "system"

    # system instruction discriminant -> (type, minimum account count)
    INSTRUCTION_TYPES = {
        0: ("createAccount", 2),
        1: ("assign", 1),
        2: ("transfer", 2),
        3: ("createAccountWithSeed", 2),
        4: ("advanceNonce", 3),
        5: ("withdrawFromNonce", 5),
        6: ("initializeNonce", 3),
        7: ("authorizeNonce", 2),
        8: ("allocate", 1),
        9: ("allocateWithSeed", 2),
        10: ("assignWithSeed", 2),
        11: ("transferWithSeed", 3),
    }

    @classmethod
    def parse_instruction(cls, accounts: List[str], data: bytes) -> Dict[str, Any]:
        """
        Decode a system program instruction

        Args:
            accounts: Resolved instruction account pubkeys
            data: Instruction data, u32 discriminant first

        Returns:
            {"type": ..., "info": {...}}
        """
        reader = cls.reader(data)
        instruction_type = reader.read_u32()
        if instruction_type not in cls.INSTRUCTION_TYPES:
            raise InstructionNotParsableError(f"unknown system instruction {instruction_type}")
        name, required = cls.INSTRUCTION_TYPES[instruction_type]
        cls.check_num_accounts(accounts, required, name)

        if instruction_type == 0:
            info = {
                "source": accounts[0],
                "newAccount": accounts[1],
                "lamports": reader.read_u64(),
                "space": reader.read_u64(),
                "owner": read_pubkey(reader),
            }
        elif instruction_type == 1:
            info = {
                "account": accounts[0],
                "owner": read_pubkey(reader),
            }
        elif instruction_type == 2:
            info = {
                "source": accounts[0],
                "destination": accounts[1],
                "lamports": reader.read_u64(),
            }
        elif instruction_type == 3:
            info = {
                "source": accounts[0],
                "newAccount": accounts[1],
                "base": read_pubkey(reader),
                "seed": reader.read_string(),
                "lamports": reader.read_u64(),
                "space": reader.read_u64(),
                "owner": read_pubkey(reader),
            }
        elif instruction_type == 4:
            info = {
                "nonceAccount": accounts[0],
                "recentBlockhashesSysvar": accounts[1],
                "nonceAuthority": accounts[2],
            }
        elif instruction_type == 5:
            info = {
                "nonceAccount": accounts[0],
                "destination": accounts[1],
                "recentBlockhashesSysvar": accounts[2],
                "rentSysvar": accounts[3],
                "nonceAuthority": accounts[4],
                "lamports": reader.read_u64(),
            }
        elif instruction_type == 6:
            info = {
                "nonceAccount": accounts[0],
                "recentBlockhashesSysvar": accounts[1],
                "rentSysvar": accounts[2],
                "nonceAuthority": read_pubkey(reader),
            }
        elif instruction_type == 7:
            info = {
                "nonceAccount": accounts[0],
                "nonceAuthority": accounts[1],
                "newAuthorized": read_pubkey(reader),
            }
        elif instruction_type == 8:
            info = {
                "account": accounts[0],
                "space": reader.read_u64(),
            }
        elif instruction_type == 9:
            info = {
                "account": accounts[0],
                "base": read_pubkey(reader),
                "seed": reader.read_string(),
                "space": reader.read_u64(),
                "owner": read_pubkey(reader),
            }
        elif instruction_type == 10:
            info = {
                "account": accounts[0],
                "base": read_pubkey(reader),
                "seed": reader.read_string(),
                "owner": read_pubkey(reader),
            }
        else:
            info = {
                "source": accounts[0],
                "sourceBase": accounts[1],
                "destination": accounts[2],
                "lamports": reader.read_u64(),
                "sourceSeed": reader.read_string(),
                "sourceOwner": read_pubkey(reader),
            }

        return {"type": name, "info": info}

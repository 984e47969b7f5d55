"""
Memo program parser. The parsed value is the memo text itself.
"""
from typing import List

from ..config import MEMO_PROGRAM_ID, MEMO_V1_PROGRAM_ID
from .base import BaseParser


class MemoParser(BaseParser):
    """Decoder for the memo program"""

    PROGRAM_IDS = (MEMO_V1_PROGRAM_ID, MEMO_PROGRAM_ID)
    PROGRAM_NAME = "spl-memo"

    @classmethod
    def parse_instruction(cls, accounts: List[str], data: bytes) -> str:
        # invalid utf-8 is replaced, not rejected
        return data.decode("utf-8", errors="replace")

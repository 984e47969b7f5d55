"""
Program instruction parsers.
"""
from .accounts import ParsedAccount, classify, parse_accounts
from .base import BaseParser, ParsedInstruction, ParserRegistry, default_registry, parse
from .memo import MemoParser
from .system import SystemParser
from .token import TokenParser

__all__ = [
    'BaseParser',
    'ParsedAccount',
    'ParsedInstruction',
    'ParserRegistry',
    'MemoParser',
    'SystemParser',
    'TokenParser',
    'classify',
    'default_registry',
    'parse',
    'parse_accounts',
]

"""
Instruction parser registry and the decoder base class.

A registry maps a program id to a decoder. A decoder receives the resolved
account pubkeys of one instruction and its raw data and returns the
structured ``parsed`` value, or raises ParseInstructionError. ValueError,
KeyError and IndexError raised by a decoder are reported as
InstructionNotParsableError. There is no best-effort result: callers fall
back to the partially decoded form.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, List, Sequence, Tuple

from solders.instruction import CompiledInstruction

from ..bincode import BinaryReader
from ..errors import (
    InstructionKeyMismatchError,
    InstructionNotParsableError,
    ProgramNotParsableError,
    RecordDecodeError,
)

logger = logging.getLogger(__name__)

InstructionDecoder = Callable[[List[str], bytes], Any]


@dataclass(frozen=True)
class ParsedInstruction:
    """Structured form of a decoded instruction"""
    program: str
    program_id: str
    parsed: Any

    def to_json(self) -> Dict[str, Any]:
        return {
            "program": self.program,
            "programId": self.program_id,
            "parsed": self.parsed,
        }

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "ParsedInstruction":
        return cls(
            program=value["program"],
            program_id=value["programId"],
            parsed=value["parsed"],
        )


class BaseParser:
    """
    Base class for program instruction decoders.

    Subclasses set PROGRAM_IDS and PROGRAM_NAME and implement
    parse_instruction().
    """

    PROGRAM_IDS: Tuple[str, ...] = ()
    PROGRAM_NAME = ""

    @classmethod
    def parse_instruction(cls, accounts: List[str], data: bytes) -> Any:
        raise NotImplementedError

    @classmethod
    def register(cls, registry: "ParserRegistry") -> None:
        for program_id in cls.PROGRAM_IDS:
            registry.register_program_parser(program_id, cls.PROGRAM_NAME, cls.parse_instruction)

    @staticmethod
    def check_num_accounts(accounts: List[str], required: int, instruction_type: str) -> None:
        if len(accounts) < required:
            raise InstructionNotParsableError(
                f"{instruction_type} needs {required} accounts, got {len(accounts)}"
            )

    @staticmethod
    def reader(data: bytes) -> BinaryReader:
        return BinaryReader(data)


class ParserRegistry:
    """Program id -> decoder mapping"""

    def __init__(self):
        self.program_parsers: Dict[str, Tuple[str, InstructionDecoder]] = {}
        self._frozen = False

    @classmethod
    def with_defaults(cls) -> "ParserRegistry":
        """Registry preloaded with the built-in system, token and memo decoders."""
        from .memo import MemoParser
        from .system import SystemParser
        from .token import TokenParser

        registry = cls()
        for parser in (SystemParser, TokenParser, MemoParser):
            parser.register(registry)
        return registry

    def register_program_parser(self, program_id: str, program_name: str, parser_func: InstructionDecoder) -> None:
        """
        Register a decoder for a program

        Args:
            program_id: Program id, base-58
            program_name: Name reported in the parsed output
            parser_func: Decoder called with (accounts, data)
        """
        if self._frozen:
            raise RuntimeError("parser registry is read-only")
        self.program_parsers[str(program_id)] = (program_name, parser_func)

    def freeze(self) -> "ParserRegistry":
        self._frozen = True
        return self

    def __contains__(self, program_id: Any) -> bool:
        return str(program_id) in self.program_parsers

    def parse(self, program_id: Any, instruction: CompiledInstruction, account_keys: Sequence[Any]) -> ParsedInstruction:
        """
        Decode one instruction with the parser registered for its program.

        Args:
            program_id: Program the instruction invokes
            instruction: Compiled instruction
            account_keys: Account keys of the message the instruction belongs to

        Returns:
            Structured instruction

        Raises:
            ProgramNotParsableError: No parser for the program
            InstructionKeyMismatchError: Account index outside account_keys
            InstructionNotParsableError: Parser rejected the data or accounts
        """
        program_id = str(program_id)
        entry = self.program_parsers.get(program_id)
        if entry is None:
            raise ProgramNotParsableError(program_id)
        program_name, parser_func = entry

        accounts = []
        for index in instruction.accounts:
            if index >= len(account_keys):
                raise InstructionKeyMismatchError(
                    f"account index {index} out of range for {len(account_keys)} keys"
                )
            accounts.append(str(account_keys[index]))

        try:
            parsed = parser_func(accounts, bytes(instruction.data))
        except (RecordDecodeError, ValueError, LookupError) as e:
            raise InstructionNotParsableError(f"{program_name}: {e}") from e
        return ParsedInstruction(program=program_name, program_id=program_id, parsed=parsed)


@lru_cache(maxsize=None)
def default_registry() -> ParserRegistry:
    """Process-wide registry, built on first use and read-only afterwards."""
    registry = ParserRegistry.with_defaults().freeze()
    logger.debug("Built parser registry for %d programs", len(registry.program_parsers))
    return registry


def parse(program_id: Any, instruction: CompiledInstruction, account_keys: Sequence[Any]) -> ParsedInstruction:
    """Decode an instruction with the default registry."""
    return default_registry().parse(program_id, instruction, account_keys)

"""
Exceptions raised by the transaction-status layer.
"""


class TransactionStatusError(Exception):
    """Base exception for everything raised by this package."""
    pass


class UnsupportedEncodingError(TransactionStatusError, ValueError):
    """Unknown transaction encoding selector."""
    pass


class MalformedInputError(TransactionStatusError, ValueError):
    """Internal model violates a message or metadata invariant."""
    pass


class RecordDecodeError(TransactionStatusError, ValueError):
    """Stored binary record is corrupt or truncated inside a required field."""
    pass


class UnexpectedEofError(RecordDecodeError):
    """Record ended before the field being read was complete."""
    pass


class ParseInstructionError(TransactionStatusError):
    """Instruction could not be turned into a structured form."""
    pass


class ProgramNotParsableError(ParseInstructionError):
    """No parser is registered for the program id."""
    pass


class InstructionNotParsableError(ParseInstructionError):
    """Parser rejected the instruction data or its account count."""
    pass


class InstructionKeyMismatchError(ParseInstructionError):
    """Instruction references an account index outside the message."""
    pass

"""
Little-endian binary record codec.

Follows the bincode layout used by the node for persisted records: fixed
width little-endian integers, u64 length prefixes for sequences and strings,
a one byte tag for optional values, and the compact-u16 ("short vec") length
prefix for instruction account and data arrays.
"""
from typing import Callable, List, Optional, TypeVar

from .errors import RecordDecodeError, UnexpectedEofError

T = TypeVar("T")


class BinaryWriter:
    """Accumulates encoded fields and joins them on demand."""

    def __init__(self):
        self.parts: List[bytes] = []

    def write_u8(self, value: int) -> None:
        self.parts.append(value.to_bytes(1, "little"))

    def write_u32(self, value: int) -> None:
        self.parts.append(value.to_bytes(4, "little"))

    def write_u64(self, value: int) -> None:
        self.parts.append(value.to_bytes(8, "little"))

    def write_i64(self, value: int) -> None:
        self.parts.append(value.to_bytes(8, "little", signed=True))

    def write_bytes(self, value: bytes) -> None:
        self.parts.append(bytes(value))

    def write_short_vec_len(self, length: int) -> None:
        if length > 0xFFFF:
            raise ValueError(f"short vec length out of range: {length}")
        while True:
            byte = length & 0x7F
            length >>= 7
            if length:
                self.parts.append(bytes([byte | 0x80]))
            else:
                self.parts.append(bytes([byte]))
                return

    def write_string(self, value: str) -> None:
        raw = value.encode("utf-8")
        self.write_u64(len(raw))
        self.parts.append(raw)

    def write_option(self, value: Optional[T], write: Callable[[T], None]) -> None:
        if value is None:
            self.write_u8(0)
        else:
            self.write_u8(1)
            write(value)

    def write_seq(self, values: List[T], write: Callable[[T], None]) -> None:
        self.write_u64(len(values))
        for value in values:
            write(value)

    def getvalue(self) -> bytes:
        return b"".join(self.parts)


class BinaryReader:
    """Sequential reader over an immutable byte buffer."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def read_bytes(self, size: int) -> bytes:
        if size > self.remaining:
            raise UnexpectedEofError(
                f"need {size} bytes at offset {self.offset}, {self.remaining} left"
            )
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def read_u8(self) -> int:
        return self.read_bytes(1)[0]

    def read_u32(self) -> int:
        return int.from_bytes(self.read_bytes(4), "little")

    def read_u64(self) -> int:
        return int.from_bytes(self.read_bytes(8), "little")

    def read_i64(self) -> int:
        return int.from_bytes(self.read_bytes(8), "little", signed=True)

    def read_short_vec_len(self) -> int:
        length = 0
        for position in range(3):
            byte = self.read_u8()
            length |= (byte & 0x7F) << (7 * position)
            if not byte & 0x80:
                return length
        raise RecordDecodeError("short vec length longer than 3 bytes")

    def read_string(self) -> str:
        raw = self.read_bytes(self.read_u64())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RecordDecodeError(f"invalid utf-8 string: {e}") from e

    def read_option(self, read: Callable[[], T]) -> Optional[T]:
        tag = self.read_u8()
        if tag == 0:
            return None
        if tag == 1:
            return read()
        raise RecordDecodeError(f"invalid option tag {tag} at offset {self.offset - 1}")

    def read_seq(self, read: Callable[[], T]) -> List[T]:
        length = self.read_u64()
        # every element takes at least one byte
        if length > self.remaining:
            raise UnexpectedEofError(f"sequence of {length} items exceeds remaining input")
        return [read() for _ in range(length)]


def default_on_eof(reader: BinaryReader, read: Callable[[], T], default: T) -> T:
    """
    Read a trailing field that older records may not carry.

    Args:
        reader: Reader positioned at the field
        read: Callable reading the field from the reader
        default: Value returned when the input ends at or inside the field

    Returns:
        The decoded field, or ``default`` for truncated input
    """
    try:
        return read()
    except UnexpectedEofError:
        return default

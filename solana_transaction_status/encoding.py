"""
Transaction encoding selector accepted at the RPC boundary.
"""
from enum import Enum

from .errors import UnsupportedEncodingError


class UiTransactionEncoding(Enum):
    BINARY = "binary"  # Legacy. Retained for RPC backwards compatibility
    BASE64 = "base64"
    BASE58 = "base58"
    JSON = "json"
    JSON_PARSED = "jsonParsed"

    def __str__(self) -> str:
        return self.value

    @property
    def is_binary(self) -> bool:
        return self in (UiTransactionEncoding.BINARY, UiTransactionEncoding.BASE58, UiTransactionEncoding.BASE64)

    @classmethod
    def parse(cls, value: str) -> "UiTransactionEncoding":
        """
        Resolve a selector string.

        Args:
            value: One of binary, base64, base58, json, jsonParsed

        Returns:
            Matching encoding

        Raises:
            UnsupportedEncodingError: For any other value
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedEncodingError(f"unsupported transaction encoding: {value!r}") from None

"""
Transaction codec: internal transaction <-> RPC wire encodings.

Binary encodings wrap the canonical bincode serialization of the whole
transaction (signatures + message). JSON encodings are presentation only and
never decode back to a transaction.
"""
import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import base58
from solders.transaction import Transaction

from .encoding import UiTransactionEncoding
from .errors import MalformedInputError
from .parser import ParserRegistry
from .projector import MessageMode, project
from .ui import UiTransaction
from .validation import validate_message

logger = logging.getLogger(__name__)


def _deserialize(raw: bytes) -> Optional[Transaction]:
    try:
        transaction = Transaction.from_bytes(raw)
    except Exception as e:
        logger.debug(f"Cannot deserialize transaction ({len(raw)} bytes): {e}")
        return None
    try:
        validate_message(transaction.message)
    except MalformedInputError as e:
        logger.debug(f"Rejecting malformed transaction message: {e}")
        return None
    return transaction


def _b58decode(blob: str) -> Optional[bytes]:
    try:
        return base58.b58decode(blob)
    except ValueError as e:
        logger.debug(f"Invalid base-58 transaction: {e}")
        return None


def _b64decode(blob: str) -> Optional[bytes]:
    try:
        return base64.b64decode(blob, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.debug(f"Invalid base-64 transaction: {e}")
        return None


class EncodedTransaction:
    """
    Transaction in one of the RPC wire shapes.

    The wire value is untagged: a bare string is the legacy base-58 form, a
    two element list is ``[blob, encoding]`` and an object is the JSON form.
    """

    @staticmethod
    def encode(transaction: Transaction, encoding: Union[UiTransactionEncoding, str],
               registry: Optional[ParserRegistry] = None) -> "EncodedTransaction":
        """
        Encode a transaction.

        Args:
            transaction: Internal transaction
            encoding: Target encoding, enum or selector string
            registry: Parser registry used for jsonParsed

        Returns:
            LegacyBinaryTransaction, BinaryTransaction or JsonTransaction
        """
        encoding = UiTransactionEncoding.parse(encoding)
        if encoding is UiTransactionEncoding.BINARY:
            return LegacyBinaryTransaction(base58.b58encode(bytes(transaction)).decode("ascii"))
        if encoding is UiTransactionEncoding.BASE58:
            return BinaryTransaction(base58.b58encode(bytes(transaction)).decode("ascii"), encoding)
        if encoding is UiTransactionEncoding.BASE64:
            return BinaryTransaction(base64.b64encode(bytes(transaction)).decode("ascii"), encoding)

        mode = MessageMode.PARSED if encoding is UiTransactionEncoding.JSON_PARSED else MessageMode.RAW
        return JsonTransaction(UiTransaction(
            signatures=tuple(str(signature) for signature in transaction.signatures),
            message=project(transaction.message, mode, registry),
        ))

    def decode(self) -> Optional[Transaction]:
        raise NotImplementedError

    def to_json(self) -> Any:
        raise NotImplementedError

    @staticmethod
    def from_json(value: Any) -> "EncodedTransaction":
        """
        Resolve the wire shape structurally.

        Raises:
            ValueError: Value matches none of the shapes
        """
        if isinstance(value, str):
            return LegacyBinaryTransaction(value)
        if isinstance(value, (list, tuple)) and len(value) == 2:
            blob, encoding = value
            return BinaryTransaction(blob, UiTransactionEncoding.parse(encoding))
        if isinstance(value, dict):
            return JsonTransaction(UiTransaction.from_json(value))
        raise ValueError(f"unrecognized encoded transaction: {value!r}")


@dataclass(frozen=True)
class LegacyBinaryTransaction(EncodedTransaction):
    """Old way of expressing base-58, retained for RPC backwards compatibility"""
    blob: str

    def decode(self) -> Optional[Transaction]:
        raw = _b58decode(self.blob)
        return _deserialize(raw) if raw is not None else None

    def to_json(self) -> str:
        return self.blob


@dataclass(frozen=True)
class BinaryTransaction(EncodedTransaction):
    blob: str
    encoding: UiTransactionEncoding

    def decode(self) -> Optional[Transaction]:
        if self.encoding is UiTransactionEncoding.BASE58:
            raw = _b58decode(self.blob)
        elif self.encoding is UiTransactionEncoding.BASE64:
            raw = _b64decode(self.blob)
        else:
            logger.debug(f"Blob tagged {self.encoding} is not decodable")
            return None
        return _deserialize(raw) if raw is not None else None

    def to_json(self) -> list:
        return [self.blob, str(self.encoding)]


@dataclass(frozen=True)
class JsonTransaction(EncodedTransaction):
    transaction: UiTransaction

    def decode(self) -> Optional[Transaction]:
        return None

    def to_json(self) -> dict:
        return self.transaction.to_json()


def encode_transaction(transaction: Transaction, encoding: Union[UiTransactionEncoding, str],
                       registry: Optional[ParserRegistry] = None) -> EncodedTransaction:
    return EncodedTransaction.encode(transaction, encoding, registry)


def decode_transaction(encoded: EncodedTransaction) -> Optional[Transaction]:
    """None means "cannot decode", never "empty transaction"."""
    return encoded.decode()

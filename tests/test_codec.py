"""
Tests for transaction encoding and decoding.
"""

from __future__ import annotations

import base64

import base58
import pytest
from solders.instruction import CompiledInstruction

from solana_transaction_status.codec import (
    BinaryTransaction,
    EncodedTransaction,
    JsonTransaction,
    LegacyBinaryTransaction,
    decode_transaction,
    encode_transaction,
)
from solana_transaction_status.encoding import UiTransactionEncoding
from solana_transaction_status.errors import UnsupportedEncodingError
from solana_transaction_status.ui import UiParsedMessage, UiRawMessage

from conftest import build_message, build_transaction


@pytest.mark.parametrize("encoding", ["binary", "base58", "base64"])
def test_binary_encodings_decode_to_the_same_transaction(transfer_transaction, encoding):
    encoded = encode_transaction(transfer_transaction, encoding)
    assert decode_transaction(encoded) == transfer_transaction


def test_legacy_binary_matches_base58_blob(transfer_transaction):
    legacy = EncodedTransaction.encode(transfer_transaction, UiTransactionEncoding.BINARY)
    tagged = EncodedTransaction.encode(transfer_transaction, UiTransactionEncoding.BASE58)

    assert isinstance(legacy, LegacyBinaryTransaction)
    assert isinstance(tagged, BinaryTransaction)
    assert legacy.blob == tagged.blob
    assert legacy.to_json() == tagged.blob
    assert tagged.to_json() == [tagged.blob, "base58"]


def test_base64_blob_is_canonical_serialization(transfer_transaction):
    encoded = encode_transaction(transfer_transaction, "base64")
    assert base64.b64decode(encoded.blob) == bytes(transfer_transaction)
    assert encoded.to_json()[1] == "base64"


def test_json_encodings_do_not_decode(mixed_transaction):
    raw = encode_transaction(mixed_transaction, "json")
    parsed = encode_transaction(mixed_transaction, "jsonParsed")

    assert isinstance(raw, JsonTransaction)
    assert isinstance(raw.transaction.message, UiRawMessage)
    assert isinstance(parsed.transaction.message, UiParsedMessage)
    assert raw.transaction.signatures == tuple(str(s) for s in mixed_transaction.signatures)
    assert decode_transaction(raw) is None
    assert decode_transaction(parsed) is None


@pytest.mark.parametrize("encoded", [
    BinaryTransaction("not base64!!", UiTransactionEncoding.BASE64),
    BinaryTransaction("0OIl", UiTransactionEncoding.BASE58),
    LegacyBinaryTransaction("0OIl"),
    BinaryTransaction(base64.b64encode(b"\x01\x02").decode(), UiTransactionEncoding.BASE64),
    BinaryTransaction(base58.b58encode(b"\xff" * 3).decode(), UiTransactionEncoding.BASE58),
])
def test_undecodable_blobs_decode_to_none(encoded):
    assert encoded.decode() is None


def test_blob_tagged_with_json_encoding_is_not_decodable(transfer_transaction):
    blob = base58.b58encode(bytes(transfer_transaction)).decode()
    assert BinaryTransaction(blob, UiTransactionEncoding.JSON).decode() is None


def test_unsupported_encoding(transfer_transaction):
    with pytest.raises(UnsupportedEncodingError):
        encode_transaction(transfer_transaction, "base32")


def test_from_json_resolves_by_shape(mixed_transaction):
    for encoding in UiTransactionEncoding:
        encoded = encode_transaction(mixed_transaction, encoding)
        assert EncodedTransaction.from_json(encoded.to_json()) == encoded


def test_from_json_rejects_unknown_shape():
    with pytest.raises(ValueError):
        EncodedTransaction.from_json(42)


def test_message_with_out_of_range_indices_does_not_decode(keys):
    message = build_message([keys[0], keys[1]], [CompiledInstruction(7, b"\x01", bytes([0, 9]))])
    blob = base64.b64encode(bytes(build_transaction(message))).decode()

    assert BinaryTransaction(blob, UiTransactionEncoding.BASE64).decode() is None

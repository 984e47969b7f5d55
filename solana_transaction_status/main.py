"""
Command line entry point: re-encode transactions and decode stored status metadata.
"""
import argparse
import base64
import binascii
import json
import logging
import sys
from typing import List, Optional

from solders.transaction import Transaction

from .block import TransactionWithStatusMeta
from .codec import BinaryTransaction, EncodedTransaction, LegacyBinaryTransaction
from .config import DEFAULT_ENCODING, LOG_LEVEL
from .encoding import UiTransactionEncoding
from .errors import MalformedInputError, RecordDecodeError, UnsupportedEncodingError
from .meta import TransactionStatusMeta

logger = logging.getLogger(__name__)

BINARY_INPUTS = ["binary", "base58", "base64"]
ALL_ENCODINGS = [str(encoding) for encoding in UiTransactionEncoding]


def setup_logging(level: str = LOG_LEVEL):
    """Configure logging"""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def read_transaction(blob: str, input_encoding: str) -> Optional[Transaction]:
    """Decode a transaction given on the command line."""
    encoding = UiTransactionEncoding.parse(input_encoding)
    encoded: EncodedTransaction
    if encoding is UiTransactionEncoding.BINARY:
        encoded = LegacyBinaryTransaction(blob)
    else:
        encoded = BinaryTransaction(blob, encoding)
    return encoded.decode()


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="Solana transaction encoding tool")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Log level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Re-encode a binary transaction")
    convert_parser.add_argument("blob", help="Encoded transaction ('-' reads stdin)")
    convert_parser.add_argument("--from", dest="input_encoding", choices=BINARY_INPUTS, default="base64",
                                help="Encoding of the input blob")
    convert_parser.add_argument("--to", dest="output_encoding", choices=ALL_ENCODINGS, default=DEFAULT_ENCODING,
                                help="Target encoding")

    meta_parser = subparsers.add_parser("meta", help="Decode a stored status meta record")
    meta_parser.add_argument("record", help="Base-64 status meta record")
    meta_parser.add_argument("--transaction", required=True, help="Transaction the record belongs to")
    meta_parser.add_argument("--from", dest="input_encoding", choices=BINARY_INPUTS, default="base64",
                             help="Encoding of the transaction")
    meta_parser.add_argument("--to", dest="output_encoding", choices=ALL_ENCODINGS, default=DEFAULT_ENCODING,
                             help="Target encoding")

    return parser.parse_args(argv)


def run_convert(args) -> int:
    blob = sys.stdin.read().strip() if args.blob == "-" else args.blob
    transaction = read_transaction(blob, args.input_encoding)
    if transaction is None:
        logger.error(f"Cannot decode transaction ({args.input_encoding})")
        return 1
    encoded = EncodedTransaction.encode(transaction, args.output_encoding)
    print(json.dumps(encoded.to_json(), indent=2))
    return 0


def run_meta(args) -> int:
    transaction = read_transaction(args.transaction, args.input_encoding)
    if transaction is None:
        logger.error(f"Cannot decode transaction ({args.input_encoding})")
        return 1
    try:
        meta = TransactionStatusMeta.from_bytes(base64.b64decode(args.record, validate=True))
    except (binascii.Error, RecordDecodeError) as e:
        logger.error(f"Cannot decode status record: {e}")
        return 1
    try:
        confirmed = TransactionWithStatusMeta(transaction, meta)
    except MalformedInputError as e:
        logger.error(f"Status record does not match the transaction: {e}")
        return 1
    ui_meta = confirmed.meta.encode(args.output_encoding, transaction.message)
    print(json.dumps(ui_meta.to_json(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_arguments(argv)
    setup_logging(args.log_level.upper())

    try:
        if args.command == "convert":
            return run_convert(args)
        return run_meta(args)
    except UnsupportedEncodingError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())

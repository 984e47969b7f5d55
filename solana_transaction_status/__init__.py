"""
Transaction encoding and status metadata for Solana RPC clients.
"""
from .block import (
    ConfirmedBlock,
    ConfirmedTransaction,
    EncodedConfirmedBlock,
    EncodedConfirmedTransaction,
    EncodedTransactionWithStatusMeta,
    Reward,
    TransactionWithStatusMeta,
)
from .codec import (
    BinaryTransaction,
    EncodedTransaction,
    JsonTransaction,
    LegacyBinaryTransaction,
    decode_transaction,
    encode_transaction,
)
from .encoding import UiTransactionEncoding
from .meta import InnerInstructions, TransactionStatusMeta, transform
from .projector import MessageMode, project
from .status import ConfirmedTransactionStatusWithSignature, TransactionStatus
from .transaction_error import InstructionError, InstructionErrorType, TransactionError, TransactionErrorType
from .validation import validate_message, validate_meta

__all__ = [
    'BinaryTransaction',
    'ConfirmedBlock',
    'ConfirmedTransaction',
    'ConfirmedTransactionStatusWithSignature',
    'EncodedConfirmedBlock',
    'EncodedConfirmedTransaction',
    'EncodedTransaction',
    'EncodedTransactionWithStatusMeta',
    'InnerInstructions',
    'InstructionError',
    'InstructionErrorType',
    'JsonTransaction',
    'LegacyBinaryTransaction',
    'MessageMode',
    'Reward',
    'TransactionError',
    'TransactionErrorType',
    'TransactionStatus',
    'TransactionStatusMeta',
    'TransactionWithStatusMeta',
    'UiTransactionEncoding',
    'decode_transaction',
    'encode_transaction',
    'project',
    'transform',
    'validate_message',
    'validate_meta',
]

"""
Confirmed blocks and confirmed transactions, and their encoded forms.

This is where the internal model enters the encoding layer, so message and
metadata invariants are checked here.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from solders.transaction import Transaction

from .bincode import BinaryReader, BinaryWriter, default_on_eof
from .codec import EncodedTransaction
from .encoding import UiTransactionEncoding
from .meta import TransactionStatusMeta
from .parser import ParserRegistry
from .ui import UiTransactionStatusMeta
from .validation import validate_message, validate_meta


@dataclass(frozen=True)
class Reward:
    pubkey: str
    lamports: int
    post_balance: int = 0  # Account balance in lamports after `lamports` was applied

    def to_json(self) -> Dict[str, Any]:
        return {"pubkey": self.pubkey, "lamports": self.lamports, "postBalance": self.post_balance}

    def write(self, writer: BinaryWriter) -> None:
        writer.write_string(self.pubkey)
        writer.write_i64(self.lamports)
        writer.write_u64(self.post_balance)

    @classmethod
    def read(cls, reader: BinaryReader) -> "Reward":
        pubkey = reader.read_string()
        lamports = reader.read_i64()
        # rewards stored before post_balance existed end here
        post_balance = default_on_eof(reader, reader.read_u64, 0)
        return cls(pubkey, lamports, post_balance)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Reward":
        return cls.read(BinaryReader(data))

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write(writer)
        return writer.getvalue()


def rewards_to_bytes(rewards: List[Reward]) -> bytes:
    writer = BinaryWriter()
    writer.write_seq(rewards, lambda reward: reward.write(writer))
    return writer.getvalue()


def rewards_from_bytes(data: bytes) -> List[Reward]:
    reader = BinaryReader(data)
    return reader.read_seq(lambda: Reward.read(reader))


@dataclass(frozen=True)
class EncodedTransactionWithStatusMeta:
    transaction: EncodedTransaction
    meta: Optional[UiTransactionStatusMeta] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "transaction": self.transaction.to_json(),
            "meta": self.meta.to_json() if self.meta is not None else None,
        }

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "EncodedTransactionWithStatusMeta":
        meta = value.get("meta")
        return cls(
            transaction=EncodedTransaction.from_json(value["transaction"]),
            meta=UiTransactionStatusMeta.from_json(meta) if meta is not None else None,
        )


@dataclass
class TransactionWithStatusMeta:
    transaction: Transaction
    meta: Optional[TransactionStatusMeta] = None

    def __post_init__(self):
        validate_message(self.transaction.message)
        if self.meta is not None:
            validate_meta(self.meta, self.transaction.message)

    def encode(self, encoding: Union[UiTransactionEncoding, str],
               registry: Optional[ParserRegistry] = None) -> EncodedTransactionWithStatusMeta:
        encoding = UiTransactionEncoding.parse(encoding)
        message = self.transaction.message
        meta = self.meta.encode(encoding, message, registry) if self.meta is not None else None
        return EncodedTransactionWithStatusMeta(
            transaction=EncodedTransaction.encode(self.transaction, encoding, registry),
            meta=meta,
        )


@dataclass(frozen=True)
class EncodedConfirmedTransaction:
    slot: int
    transaction: EncodedTransactionWithStatusMeta

    def to_json(self) -> Dict[str, Any]:
        # transaction fields are flattened next to the slot
        return {"slot": self.slot, **self.transaction.to_json()}

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "EncodedConfirmedTransaction":
        return cls(value["slot"], EncodedTransactionWithStatusMeta.from_json(value))


@dataclass
class ConfirmedTransaction:
    slot: int
    transaction: TransactionWithStatusMeta

    def encode(self, encoding: Union[UiTransactionEncoding, str],
               registry: Optional[ParserRegistry] = None) -> EncodedConfirmedTransaction:
        return EncodedConfirmedTransaction(self.slot, self.transaction.encode(encoding, registry))


@dataclass(frozen=True)
class EncodedConfirmedBlock:
    previous_blockhash: str
    blockhash: str
    parent_slot: int
    transactions: Tuple[EncodedTransactionWithStatusMeta, ...]
    rewards: Tuple[Reward, ...]
    block_time: Optional[int] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "previousBlockhash": self.previous_blockhash,
            "blockhash": self.blockhash,
            "parentSlot": self.parent_slot,
            "transactions": [tx.to_json() for tx in self.transactions],
            "rewards": [reward.to_json() for reward in self.rewards],
            "blockTime": self.block_time,
        }


@dataclass
class ConfirmedBlock:
    previous_blockhash: str
    blockhash: str
    parent_slot: int
    transactions: List[TransactionWithStatusMeta] = field(default_factory=list)
    rewards: List[Reward] = field(default_factory=list)
    block_time: Optional[int] = None

    def encode(self, encoding: Union[UiTransactionEncoding, str],
               registry: Optional[ParserRegistry] = None) -> EncodedConfirmedBlock:
        encoding = UiTransactionEncoding.parse(encoding)
        return EncodedConfirmedBlock(
            previous_blockhash=self.previous_blockhash,
            blockhash=self.blockhash,
            parent_slot=self.parent_slot,
            transactions=tuple(tx.encode(encoding, registry) for tx in self.transactions),
            rewards=tuple(self.rewards),
            block_time=self.block_time,
        )

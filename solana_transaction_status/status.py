"""
Signature status records and the commitment satisfaction check.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from solana.rpc.commitment import Commitment, Confirmed, Finalized, Processed

from .transaction_error import TransactionError, status_to_json

# Commitment names used by older clients
LEGACY_COMMITMENTS = {
    "max": Finalized,
    "root": Finalized,
    "recent": Processed,
    "single": Confirmed,
    "singleGossip": Confirmed,
}


def normalize_commitment(commitment: str) -> Commitment:
    """
    Map a legacy commitment name to its current level.

    Raises:
        ValueError: Not a legacy name and not a known commitment level
    """
    if commitment in LEGACY_COMMITMENTS:
        return LEGACY_COMMITMENTS[commitment]
    return Commitment(commitment)


@dataclass(frozen=True)
class TransactionStatus:
    """
    Confirmation state of one transaction.

    ``confirmations`` is None once the transaction's slot has been rooted.
    """
    slot: int
    confirmations: Optional[int] = None
    status: Optional[TransactionError] = None

    @property
    def err(self) -> Optional[TransactionError]:
        return self.status

    def satisfies_commitment(self, commitment: str = Finalized) -> bool:
        """
        Whether this status is final enough for the requested commitment.

        The finalized level needs a rooted transaction. The recent
        (processed) level is satisfied by any status, whatever its
        confirmation count. Other levels are never satisfied.
        """
        commitment = normalize_commitment(commitment)
        return (commitment == Finalized and self.confirmations is None) or commitment == Processed

    def to_json(self) -> Dict[str, Any]:
        return {
            "slot": self.slot,
            "confirmations": self.confirmations,
            "status": status_to_json(self.status),
            "err": self.err.to_json() if self.err is not None else None,
        }


@dataclass(frozen=True)
class ConfirmedTransactionStatusWithSignature:
    signature: str
    slot: int
    err: Optional[TransactionError] = None
    memo: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "signature": self.signature,
            "slot": self.slot,
            "err": self.err.to_json() if self.err is not None else None,
            "memo": self.memo,
        }

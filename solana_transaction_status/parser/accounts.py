"""
Account role classification from the message header.

Accounts are laid out in four contiguous bands: signer+writable,
signer+readonly, non-signer+writable, non-signer+readonly.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from solders.message import Message, MessageHeader


@dataclass(frozen=True)
class ParsedAccount:
    """Account key annotated with its role in the transaction"""
    pubkey: str
    signer: bool
    writable: bool
    source: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "pubkey": self.pubkey,
            "writable": self.writable,
            "signer": self.signer,
        }
        if self.source is not None:
            out["source"] = self.source
        return out

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "ParsedAccount":
        return cls(
            pubkey=value["pubkey"],
            signer=bool(value["signer"]),
            writable=bool(value["writable"]),
            source=value.get("source"),
        )


def classify(header: MessageHeader, num_account_keys: int, index: int) -> Tuple[bool, bool]:
    """
    Derive the role of one account from its position.

    Args:
        header: Message header with the signer/readonly counts
        num_account_keys: Number of account keys in the message
        index: Position of the account

    Returns:
        (signer, writable)
    """
    num_signers = header.num_required_signatures
    signer = index < num_signers
    if signer:
        writable = index < num_signers - header.num_readonly_signed_accounts
    else:
        writable = index < num_account_keys - header.num_readonly_unsigned_accounts
    return signer, writable


def parse_accounts(message: Message, source: Optional[str] = None) -> List[ParsedAccount]:
    """
    Annotate every account key of a message.

    Args:
        message: Message whose keys are classified
        source: Optional tag recorded on every account

    Returns:
        One ParsedAccount per key, in message order
    """
    account_keys = message.account_keys
    accounts = []
    for index, pubkey in enumerate(account_keys):
        signer, writable = classify(message.header, len(account_keys), index)
        accounts.append(ParsedAccount(
            pubkey=str(pubkey),
            signer=signer,
            writable=writable,
            source=source,
        ))
    return accounts

"""
Transaction execution models and types.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..assets import DisplayAmount, WireAmount
from ..errors import InvalidAmount, MissingAsset, MissingDestination, MissingMemo


class MessageKind(str, Enum):
    """Message shapes the builder can produce."""
    SEND = "send"                    # Peer-to-peer bank transfer
    MODULE_DEPOSIT = "module_deposit"  # Bank transfer to the thorchain module with a memo
    NATIVE_DEPOSIT = "native_deposit"  # THORChain MsgDeposit


MSG_SEND_TYPE_URL = "/cosmos.bank.v1beta1.MsgSend"
MSG_DEPOSIT_TYPE_URL = "/types.MsgDeposit"


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: WireAmount

    def to_dict(self) -> Dict[str, str]:
        return {"denom": self.denom, "amount": str(self.amount)}


@dataclass(frozen=True)
class Fee:
    """Fixed fee attached to every signed transaction."""
    amount: List[Coin]
    gas: str

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": [coin.to_dict() for coin in self.amount], "gas": self.gas}


@dataclass
class TransactionIntent:
    """What the user asked for, in display units."""
    asset: str
    amount: Union[str, DisplayAmount]
    memo: Optional[str] = None
    destination_address: Optional[str] = None
    deposit_mode: bool = False
    # Deposits only: sign a MsgDeposit instead of a MsgSend to the module
    native_deposit: bool = False

    def display_amount(self) -> DisplayAmount:
        return DisplayAmount.parse(self.amount)

    def validate(self) -> DisplayAmount:
        """Check the intent shape and return the parsed amount.

        Deposits may carry a zero amount (registration-style memos); transfers
        must move something.
        """
        if not self.asset or not str(self.asset).strip():
            raise MissingAsset()
        if self.deposit_mode and not (self.memo and self.memo.strip()):
            raise MissingMemo()
        if not self.deposit_mode and not (self.destination_address and self.destination_address.strip()):
            raise MissingDestination()

        if self.amount is None or (isinstance(self.amount, str) and not self.amount.strip()):
            raise InvalidAmount(self.amount, "amount is required")
        amount = self.display_amount()
        if not self.deposit_mode and amount.is_zero:
            raise InvalidAmount(self.amount, "amount must be greater than zero")
        return amount


@dataclass(frozen=True)
class PreparedTransaction:
    """A message ready to be signed. Never mutated after the builder returns it."""
    message_kind: MessageKind
    type_url: str
    payload: Dict[str, Any]
    coin: Coin
    memo: str = ""

    @property
    def denom(self) -> str:
        return self.coin.denom

    def to_message(self) -> Dict[str, Any]:
        """Signer-ready message; a deep copy so signers cannot alter the prepared payload."""
        return {"typeUrl": self.type_url, "value": copy.deepcopy(self.payload)}


@dataclass(frozen=True)
class AccountInfo:
    """On-chain account state as reported by the signer's client."""
    address: str
    account_number: int
    sequence: int


@dataclass
class BroadcastResult:
    """Response to exactly one broadcast attempt."""
    result_code: int
    transaction_hash: str
    raw_log: Optional[str] = None
    events: List[Dict[str, Any]] = field(default_factory=list)
    codespace: Optional[str] = None
    gas_used: Optional[int] = None
    gas_wanted: Optional[int] = None
    attempt: int = 1

    @property
    def is_success(self) -> bool:
        return self.result_code == 0

"""
Transaction tracking models.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TrackingStatus(str, Enum):
    """Overall pipeline status derived from the stages."""
    PENDING = "pending"          # Nothing observed yet
    PROCESSING = "processing"    # At least one stage started
    DONE = "done"                # Every applicable stage completed

    @property
    def is_terminal(self) -> bool:
        return self == TrackingStatus.DONE


# Settlement pipeline in the order THORNode reports it
STAGE_ORDER = (
    "inbound_observed",
    "inbound_confirmation_counted",
    "inbound_finalised",
    "swap_status",
    "swap_finalised",
    "outbound_delay",
    "outbound_signed",
)

STAGE_NAMES: Dict[str, str] = {
    "inbound_observed": "Inbound Observed",
    "inbound_confirmation_counted": "Inbound Confirmed",
    "inbound_finalised": "Inbound Finalized",
    "swap_status": "Swap Processing",
    "swap_finalised": "Swap Finalized",
    "outbound_delay": "Outbound Delay",
    "outbound_signed": "Outbound Signed",
}


@dataclass(frozen=True)
class PipelineStage:
    """One independently verifiable milestone."""
    key: str
    name: str
    completed: bool
    started: bool = False
    final_count: int = 0
    details: Optional[str] = None


@dataclass
class TxBasicInfo:
    """Observed inbound transaction as THORNode reports it."""
    id: str
    chain: str = ""
    from_address: str = ""
    to_address: str = ""
    memo: str = ""
    status: str = ""
    coins: List[Dict[str, Any]] = field(default_factory=list)
    gas: List[Dict[str, Any]] = field(default_factory=list)
    out_hashes: List[str] = field(default_factory=list)

    @classmethod
    def from_thornode(cls, data: Dict[str, Any]) -> "TxBasicInfo":
        """Accepts both the ``observed_tx`` envelope and a flat tx object."""
        observed = data.get("observed_tx") or {}
        tx = observed.get("tx") or data.get("tx") or data
        return cls(
            id=tx.get("id", ""),
            chain=tx.get("chain", ""),
            from_address=tx.get("from_address", ""),
            to_address=tx.get("to_address", ""),
            memo=tx.get("memo", ""),
            status=observed.get("status") or data.get("status") or tx.get("status", ""),
            coins=list(tx.get("coins") or []),
            gas=list(tx.get("gas") or []),
            out_hashes=list(observed.get("out_hashes") or data.get("out_hashes") or []),
        )


@dataclass
class StatusSummary:
    """Freshly computed view of a transaction's pipeline. Never cached."""
    hash: str
    status: TrackingStatus
    stages: List[PipelineStage] = field(default_factory=list)
    basic_info: Optional[TxBasicInfo] = None
    error: Optional[str] = None
    attempts: int = 1

    @property
    def is_done(self) -> bool:
        return self.status.is_terminal

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data

from .models import (
    PipelineStage,
    STAGE_NAMES,
    STAGE_ORDER,
    StatusSummary,
    TrackingStatus,
    TxBasicInfo,
)
from .tracker import (
    StatusTracker,
    derive_status,
    normalize_tx_hash,
    parse_stages,
)

__all__ = [
    "PipelineStage",
    "STAGE_NAMES",
    "STAGE_ORDER",
    "StatusSummary",
    "TrackingStatus",
    "TxBasicInfo",
    "StatusTracker",
    "derive_status",
    "normalize_tx_hash",
    "parse_stages",
]

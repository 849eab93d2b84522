"""
Transaction status tracking.

Every poll derives the whole picture again from THORNode: the stages endpoint
for the settlement pipeline and the tx endpoint for the observed inbound.
A hash the node has never seen is a pending pipeline, not an error.
"""

import asyncio
import logging
import re
from typing import Any, Awaitable, Callable, Dict, List, Optional

import structlog

from ...config import Settings, settings as default_settings
from ..errors import EndpointUnavailable, InvalidTransactionHash, LookupIncomplete
from ...providers.base import ChainNodeProvider
from .models import (
    PipelineStage,
    STAGE_NAMES,
    STAGE_ORDER,
    StatusSummary,
    TrackingStatus,
    TxBasicInfo,
)


logger = logging.getLogger(__name__)

_TX_HASH_RE = re.compile(r"^[0-9A-F]{64}$")


def normalize_tx_hash(tx_hash: Any) -> str:
    """Upper-case hex without ``0x``; raises InvalidTransactionHash otherwise."""
    if not isinstance(tx_hash, str):
        raise InvalidTransactionHash(tx_hash)
    candidate = tx_hash.strip()
    if candidate[:2].lower() == "0x":
        candidate = candidate[2:]
    candidate = candidate.upper()
    if not _TX_HASH_RE.match(candidate):
        raise InvalidTransactionHash(tx_hash)
    return candidate


def _stage_details(key: str, data: Dict[str, Any]) -> Optional[str]:
    if key == "inbound_observed":
        count = int(data.get("final_count") or 0)
        pre = int(data.get("pre_confirmation_count") or 0)
        if count > 0:
            return f"Confirmations: {count}"
        if pre > 0:
            return f"Pre-confirmations: {pre}"
        return None

    if key == "inbound_confirmation_counted":
        remaining = int(data.get("remaining_confirmation_seconds") or 0)
        if remaining > 0 and not data.get("completed"):
            chain = data.get("chain")
            return f"~{remaining}s of {chain} confirmations remaining" if chain else f"~{remaining}s remaining"
        return None

    if key == "swap_status":
        streaming = data.get("streaming") or {}
        quantity = int(streaming.get("quantity") or 0)
        if quantity > 1:
            return f"Streaming swap {int(streaming.get('count') or 0)}/{quantity}"
        return "pending" if data.get("pending") else "done"

    if key == "outbound_delay":
        blocks = int(data.get("remaining_delay_blocks") or 0)
        if blocks > 0:
            seconds = int(data.get("remaining_delay_seconds") or 0)
            return f"{blocks} blocks (~{seconds}s) remaining"
        return None

    if key == "outbound_signed":
        height = data.get("scheduled_outbound_height")
        if height and not data.get("completed"):
            return f"Scheduled for height {height}"
        return None

    return None


def _stage_completed(key: str, data: Dict[str, Any]) -> bool:
    if "completed" in data:
        return bool(data["completed"])
    # swap_status reports "pending" instead of "completed"
    if key == "swap_status":
        return data.get("pending") is False
    return False


def parse_stages(payload: Dict[str, Any]) -> List[PipelineStage]:
    """Turn a THORNode stages response into ordered ``PipelineStage`` objects.

    Only stages the node reports are included; swap and outbound stages are
    absent for plain transfers.
    """
    raw = payload.get("stages") if isinstance(payload.get("stages"), dict) else payload
    stages: List[PipelineStage] = []
    for key in STAGE_ORDER:
        data = raw.get(key)
        if not isinstance(data, dict):
            continue
        completed = _stage_completed(key, data)
        stages.append(
            PipelineStage(
                key=key,
                name=STAGE_NAMES[key],
                completed=completed,
                started=bool(data.get("started", completed)) or completed,
                final_count=int(data.get("final_count") or 0),
                details=_stage_details(key, data),
            )
        )
    return stages


def unobserved_stages() -> List[PipelineStage]:
    return [
        PipelineStage(
            key="inbound_observed",
            name=STAGE_NAMES["inbound_observed"],
            completed=False,
            started=False,
            details="Not yet observed by THORChain",
        )
    ]


def derive_status(stages: List[PipelineStage]) -> TrackingStatus:
    if stages and all(stage.completed for stage in stages):
        return TrackingStatus.DONE
    if any(stage.started or stage.completed for stage in stages):
        return TrackingStatus.PROCESSING
    return TrackingStatus.PENDING


class StatusTracker:
    """Single-shot and bounded repeated status lookups for a transaction hash."""

    def __init__(
        self,
        provider: ChainNodeProvider,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.provider = provider
        self._settings = settings or default_settings
        self._sleep = sleep

    async def get_tx(self, tx_hash: str) -> Optional[TxBasicInfo]:
        """Observed inbound for ``tx_hash``, or None while the node has not indexed it."""
        tx_hash = normalize_tx_hash(tx_hash)
        try:
            data = await self.provider.get_tx(tx_hash)
        except LookupIncomplete:
            logger.debug(f"Basic tx info not available for {tx_hash}")
            return None
        info = TxBasicInfo.from_thornode(data)
        if not info.id:
            return None
        return info

    async def get_tx_details(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        """Indexed action view (inbound, outbounds, swap metadata), None while unindexed."""
        tx_hash = normalize_tx_hash(tx_hash)
        try:
            return await self.provider.get_tx_details(tx_hash)
        except LookupIncomplete:
            return None

    async def _fetch_stages(self, tx_hash: str) -> List[PipelineStage]:
        try:
            payload = await self.provider.get_tx_stages(tx_hash)
        except LookupIncomplete:
            return unobserved_stages()
        stages = parse_stages(payload or {})
        return stages or unobserved_stages()

    async def get_transaction_summary(self, tx_hash: str) -> StatusSummary:
        """
        Compute the current pipeline state for ``tx_hash``.

        Raises:
            InvalidTransactionHash: the hash is not 64 hex characters
            EndpointUnavailable: the stages endpoint could not be reached
        """
        tx_hash = normalize_tx_hash(tx_hash)
        with structlog.contextvars.bound_contextvars(tx_hash=tx_hash):
            stages_result, info_result = await asyncio.gather(
                self._fetch_stages(tx_hash),
                self.get_tx(tx_hash),
                return_exceptions=True,
            )

            if isinstance(stages_result, BaseException):
                raise stages_result

            error: Optional[str] = None
            basic_info: Optional[TxBasicInfo] = None
            if isinstance(info_result, EndpointUnavailable):
                # Stages made it through; report the partial failure instead of raising
                logger.warning(f"Basic tx info lookup failed: {info_result.message}")
                error = f"Transaction info unavailable: {info_result.message}"
            elif isinstance(info_result, BaseException):
                raise info_result
            else:
                basic_info = info_result

            status = derive_status(stages_result)
            logger.debug(f"Transaction {tx_hash} status={status.value} stages={len(stages_result)}")
            return StatusSummary(
                hash=tx_hash,
                status=status,
                stages=stages_result,
                basic_info=basic_info,
                error=error,
            )

    async def poll_transaction_status(
        self,
        tx_hash: str,
        max_attempts: Optional[int] = None,
        interval_ms: Optional[int] = None,
    ) -> StatusSummary:
        """
        Recompute the summary until it is done or ``max_attempts`` is used up.

        Sleeps ``interval_ms`` between attempts only. A lookup that fails on an
        intermediate attempt is logged and retried; a failure on the last
        attempt propagates.
        """
        tx_hash = normalize_tx_hash(tx_hash)
        max_attempts = max_attempts if max_attempts is not None else self._settings.poll_max_attempts
        interval_ms = interval_ms if interval_ms is not None else self._settings.poll_interval_ms
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        summary: Optional[StatusSummary] = None
        for attempt in range(1, max_attempts + 1):
            try:
                summary = await self.get_transaction_summary(tx_hash)
                summary.attempts = attempt
                if summary.is_done:
                    logger.info(f"Transaction {tx_hash} done after {attempt} attempt(s)")
                    return summary
            except EndpointUnavailable as e:
                if attempt >= max_attempts:
                    raise
                logger.warning(f"Attempt {attempt}: {e.message}")

            if attempt < max_attempts:
                await self._sleep(interval_ms / 1000)

        logger.info(f"Transaction {tx_hash} still {summary.status.value} after {max_attempts} attempt(s)")
        return summary

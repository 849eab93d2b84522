from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ..services.transaction_service import TransactionService, get_transaction_service

router = APIRouter(prefix="/transactions")


@router.get("/{tx_hash}")
async def get_transaction_status(
    tx_hash: str,
    service: TransactionService = Depends(get_transaction_service),
) -> Dict[str, Any]:
    """Current pipeline stages for a hash; unknown hashes come back pending."""
    summary = await service.get_transaction_summary(tx_hash)
    return summary.to_dict()


@router.get("/{tx_hash}/poll")
async def poll_transaction_status(
    tx_hash: str,
    max_attempts: Optional[int] = Query(None, alias="maxAttempts", ge=1, le=120),
    interval_ms: Optional[int] = Query(None, alias="intervalMs", ge=0, le=60000),
    service: TransactionService = Depends(get_transaction_service),
) -> Dict[str, Any]:
    summary = await service.poll_transaction_status(tx_hash, max_attempts, interval_ms)
    return summary.to_dict()


@router.get("/{tx_hash}/details")
async def get_transaction_details(
    tx_hash: str,
    service: TransactionService = Depends(get_transaction_service),
) -> Dict[str, Any]:
    details = await service.get_tx_details(tx_hash)
    return {"hash": tx_hash, "indexed": details is not None, "details": details}

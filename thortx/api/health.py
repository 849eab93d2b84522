from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..services.transaction_service import TransactionService, get_transaction_service

router = APIRouter()


@router.get("/healthz")
async def health_check(service: TransactionService = Depends(get_transaction_service)) -> Dict[str, Any]:
    """Health check endpoint that verifies the active THORNode"""

    thornode = await service.provider.health_check()

    return {
        "status": "healthy" if thornode["status"] == "healthy" else "degraded",
        "network": service.coordinator.mode.value,
        "providers": {"thornode": thornode},
    }

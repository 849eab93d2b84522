from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..core.network import NetworkConfig, NetworkMode
from ..services.transaction_service import TransactionService, get_transaction_service

router = APIRouter(prefix="/network")


class NetworkResponse(BaseModel):
    mode: str
    rest_base_url: str
    rpc_base_url: str
    address_prefix: str
    chain_id: Optional[str] = None


class NetworkSwitchRequest(BaseModel):
    mode: NetworkMode = Field(..., description="mainnet or stagenet")


def _to_response(config: NetworkConfig) -> NetworkResponse:
    return NetworkResponse(
        mode=config.mode.value,
        rest_base_url=config.rest_base_url,
        rpc_base_url=config.rpc_base_url,
        address_prefix=config.address_prefix,
        chain_id=config.chain_id,
    )


@router.get("")
async def get_network(service: TransactionService = Depends(get_transaction_service)) -> NetworkResponse:
    return _to_response(service.current_network())


@router.put("")
async def put_network(
    req: NetworkSwitchRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> NetworkResponse:
    """Switch networks; every per-network cache is cleared before this returns."""
    try:
        config = service.set_network(req.mode)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Network switch incomplete: {e}")
    return _to_response(config)

from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from ..core.assets import (
    format_amount,
    is_dust,
    normalize_asset,
    to_display,
    to_wire,
)

router = APIRouter()


class NormalizedAssetResponse(BaseModel):
    canonical_id: str
    chain: str
    symbol: str
    kind: str
    contract_address: Optional[str] = None
    is_unknown: bool


class AmountRequest(BaseModel):
    amount: str = Field(..., description="Amount as a decimal string")
    asset: Optional[str] = Field(default=None, description="Asset identifier, informational only")


class WireAmountResponse(BaseModel):
    amount: str
    wire: str
    is_dust: bool


class DisplayAmountResponse(BaseModel):
    wire: str
    amount: str
    formatted: str


@router.get("/assets/normalize")
async def get_normalized_asset(asset: str = Query(..., description="Asset in any notation")) -> NormalizedAssetResponse:
    normalized = normalize_asset(asset)
    return NormalizedAssetResponse(
        canonical_id=normalized.canonical_id,
        chain=normalized.chain,
        symbol=normalized.symbol,
        kind=normalized.kind.value,
        contract_address=normalized.contract_address,
        is_unknown=normalized.is_unknown,
    )


@router.post("/amounts/to-wire")
async def post_to_wire(req: AmountRequest) -> WireAmountResponse:
    wire = to_wire(req.amount, req.asset)
    return WireAmountResponse(amount=req.amount, wire=str(wire), is_dust=is_dust(req.amount, req.asset))


@router.post("/amounts/to-display")
async def post_to_display(req: AmountRequest) -> DisplayAmountResponse:
    display = to_display(req.amount, req.asset)
    return DisplayAmountResponse(
        wire=req.amount,
        amount=str(display),
        formatted=format_amount(display, req.asset),
    )

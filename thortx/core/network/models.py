"""Network snapshot models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...config import Settings, settings as default_settings


class NetworkMode(str, Enum):
    MAINNET = "mainnet"
    STAGENET = "stagenet"


class NetworkConfig(BaseModel):
    """Immutable endpoint snapshot for one network mode.

    Replaced wholesale on every switch; never updated field by field.
    """

    model_config = ConfigDict(frozen=True)

    mode: NetworkMode
    rest_base_url: str = Field(..., description="THORNode REST base URL")
    rpc_base_url: str = Field(..., description="Tendermint RPC base URL")
    address_prefix: str = Field(..., description="Bech32 address prefix")
    chain_id: Optional[str] = Field(default=None, description="Resolved lazily from node info")

    @classmethod
    def for_mode(cls, mode: NetworkMode | str, settings: Optional[Settings] = None) -> "NetworkConfig":
        mode = NetworkMode(mode)
        endpoints = (settings or default_settings).network_endpoints[mode.value]
        return cls(
            mode=mode,
            rest_base_url=endpoints["rest_base_url"].rstrip("/"),
            rpc_base_url=endpoints["rpc_base_url"].rstrip("/"),
            address_prefix=endpoints["address_prefix"],
        )

from pathlib import Path
from typing import Any, Dict

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Local API host")
    port: int = Field(default=8000, description="Local API port")
    log_level: str = Field(default="INFO", description="Logging level")

    # Network Selection
    network_mode: str = Field(
        default="mainnet",
        description="Network mode selected at startup (mainnet or stagenet)",
        validation_alias=AliasChoices("network_mode", "thorchain_network"),
    )

    # Mainnet Endpoints
    mainnet_rest_url: str = Field(
        default="https://thornode.ninerealms.com",
        description="THORNode REST base URL for mainnet",
    )
    mainnet_rpc_url: str = Field(
        default="https://rpc.ninerealms.com",
        description="Tendermint RPC base URL for mainnet",
    )
    mainnet_address_prefix: str = Field(default="thor", description="Bech32 prefix for mainnet")

    # Stagenet Endpoints
    stagenet_rest_url: str = Field(
        default="https://stagenet-thornode.ninerealms.com",
        description="THORNode REST base URL for stagenet",
    )
    stagenet_rpc_url: str = Field(
        default="https://stagenet-rpc.ninerealms.com",
        description="Tendermint RPC base URL for stagenet",
    )
    stagenet_address_prefix: str = Field(default="sthor", description="Bech32 prefix for stagenet")

    # Timeouts
    request_timeout_seconds: float = Field(default=15.0, description="Timeout for REST lookups")
    broadcast_timeout_seconds: float = Field(
        default=60.0,
        description="Timeout for a single signer round-trip (account, simulate, broadcast)",
    )

    # Sequence Conflict Recovery
    sequence_retry_delay_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Delay before resubmitting after an account sequence mismatch",
    )
    sequence_retry_attempts: int = Field(
        default=1,
        ge=0,
        le=5,
        description="Automatic resubmissions allowed after a sequence mismatch",
    )

    # Fees and Gas
    fee_denom: str = Field(default="rune", description="Denom the fixed fee is paid in")
    default_fee_amount: str = Field(
        default="2000000",
        description="Fixed published fee in wire units (0.02 RUNE)",
    )
    default_gas_limit: str = Field(default="50000000", description="Gas limit used when no estimate is available")
    gas_buffer_multiplier: float = Field(
        default=1.2,
        ge=1.0,
        description="Multiplier applied to simulated gas usage",
    )

    # Status Polling
    poll_max_attempts: int = Field(default=30, ge=1, description="Default number of status polls")
    poll_interval_ms: int = Field(default=2000, ge=0, description="Default delay between status polls")

    @property
    def network_endpoints(self) -> Dict[str, Dict[str, Any]]:
        return {
            "mainnet": {
                "rest_base_url": self.mainnet_rest_url,
                "rpc_base_url": self.mainnet_rpc_url,
                "address_prefix": self.mainnet_address_prefix,
            },
            "stagenet": {
                "rest_base_url": self.stagenet_rest_url,
                "rpc_base_url": self.stagenet_rpc_url,
                "address_prefix": self.stagenet_address_prefix,
            },
        }


# Global settings instance
settings = Settings()

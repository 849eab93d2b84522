from thortx.config import Settings


def test_network_mode_alias(monkeypatch):
    """Legacy THORCHAIN_NETWORK selects the startup network."""

    monkeypatch.delenv("NETWORK_MODE", raising=False)
    monkeypatch.setenv("THORCHAIN_NETWORK", "stagenet")

    settings = Settings()

    assert settings.network_mode == "stagenet"


def test_network_mode_direct_env(monkeypatch):
    """NETWORK_MODE remains the primary source."""

    monkeypatch.setenv("NETWORK_MODE", "mainnet")
    monkeypatch.setenv("THORCHAIN_NETWORK", "stagenet")

    settings = Settings()

    assert settings.network_mode == "mainnet"


def test_endpoint_override(monkeypatch):
    monkeypatch.setenv("MAINNET_REST_URL", "http://localhost:1317")

    settings = Settings()

    assert settings.network_endpoints["mainnet"]["rest_base_url"] == "http://localhost:1317"
    assert settings.network_endpoints["stagenet"]["address_prefix"] == "sthor"


def test_fee_and_retry_defaults(monkeypatch):
    for name in ("DEFAULT_FEE_AMOUNT", "DEFAULT_GAS_LIMIT", "SEQUENCE_RETRY_ATTEMPTS", "GAS_BUFFER_MULTIPLIER"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.default_fee_amount == "2000000"
    assert settings.default_gas_limit == "50000000"
    assert settings.sequence_retry_attempts == 1
    assert settings.gas_buffer_multiplier == 1.2

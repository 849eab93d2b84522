import logging

import structlog

from thortx.logging_config import REDACTED, redact_sensitive, setup_logging


def test_sensitive_keys_are_redacted():
    event = {"event": "opening session", "Mnemonic": "abandon abandon", "address": "thor1abc"}

    result = redact_sensitive(None, "info", event)

    assert result["Mnemonic"] == REDACTED
    assert result["address"] == "thor1abc"


def test_setup_logging_level():
    setup_logging("warning", json_logs=True)

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    setup_logging("chatty")

    assert logging.getLogger().level == logging.INFO


def test_structured_secret_never_reaches_the_sink(capsys):
    setup_logging("info", json_logs=True)

    structlog.get_logger("thortx.signer").info("opening session", mnemonic="abandon ability able", address="thor1abc")

    err = capsys.readouterr().err
    assert "abandon ability able" not in err
    assert REDACTED in err
    assert "thor1abc" in err

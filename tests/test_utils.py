"""Tests for configuration, formatting and logging helpers"""

import json
import logging

from src.utils.config import get_app_config
from src.utils.formatting import format_currency, format_number
from src.utils.logging import setup_logging


def test_format_currency():
    assert format_currency(1850) == "$1,850"
    assert format_currency(20) == "$20"
    assert format_currency(200000, "gbp") == "£200,000"
    assert format_currency(1850, "CAD") == "CAD 1,850"
    assert format_currency(-42) == "-$42"


def test_format_number():
    assert format_number(25000) == "25,000"


def test_app_config_defaults(monkeypatch):
    for key in ("QUOTE_CURRENCY", "LOG_LEVEL", "PRELOAD_TABLES"):
        monkeypatch.delenv(key, raising=False)

    cfg = get_app_config()

    assert cfg.currency == "USD"
    assert cfg.log_level == "INFO"
    assert cfg.preload_tables is True


def test_app_config_from_env(monkeypatch):
    monkeypatch.setenv("QUOTE_CURRENCY", "eur")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PRELOAD_TABLES", "no")

    cfg = get_app_config()

    assert cfg.currency == "EUR"
    assert cfg.log_level == "DEBUG"
    assert cfg.preload_tables is False


def test_empty_env_uses_default(monkeypatch):
    monkeypatch.setenv("QUOTE_CURRENCY", "")
    assert get_app_config().currency == "USD"


def test_setup_logging_emits_json(capsys):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("INFO")
        logging.getLogger("src.test").info("Quote computed", extra={"annual_cost": 242})
        line = capsys.readouterr().out.strip().splitlines()[-1]
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    record = json.loads(line)
    assert record["message"] == "Quote computed"
    assert record["annual_cost"] == 242
    assert record["level"] == "INFO"
    assert record["service"] == "renters-quote-engine"

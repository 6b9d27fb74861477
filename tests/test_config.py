from __future__ import annotations

import logging

import pytest

from schema_validator import ConfigurationError, ValidatorConfig


def test_defaults_without_environment(monkeypatch) -> None:
    for name in ("FAIL_FAST", "STRICT_KEYWORDS", "ALLOW_KEYWORD_OVERRIDE", "LOG_LEVEL", "PRINT_LEVEL", "CACHE_ENABLED"):
        monkeypatch.delenv(f"SCHEMA_VALIDATOR_{name}", raising=False)

    config = ValidatorConfig.from_env()

    assert config == ValidatorConfig()


def test_flags_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("SCHEMA_VALIDATOR_FAIL_FAST", "yes")
    monkeypatch.setenv("SCHEMA_VALIDATOR_ALLOW_KEYWORD_OVERRIDE", "0")
    monkeypatch.setenv("SCHEMA_VALIDATOR_LOG_LEVEL", "DEBUG")

    config = ValidatorConfig.from_env()

    assert config.fail_fast is True
    assert config.allow_keyword_override is False
    assert config.log_level == "DEBUG"


def test_invalid_flag_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("SCHEMA_VALIDATOR_STRICT_KEYWORDS", "maybe")

    with pytest.raises(ConfigurationError, match="SCHEMA_VALIDATOR_STRICT_KEYWORDS"):
        ValidatorConfig.from_env()


def test_set_logging_replaces_its_own_handlers() -> None:
    config = ValidatorConfig(log_level="DEBUG", print_level="WARNING")

    logger = config.set_logging()
    config.set_logging()
    owned = [h for h in logger.handlers if getattr(h, "_schema_validator_handler", False)]

    try:
        assert len(owned) == 2
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
    finally:
        for handler in owned:
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

from __future__ import annotations

import pytest
import structlog

from fluentcheck.config import Settings, get_settings
from fluentcheck.logging_config import configure_logging
from fluentcheck.validators.models import ValidationMap


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


def test_defaults() -> None:
    settings = Settings()
    assert settings.LOG_LEVEL == "warning"
    assert settings.LOG_JSON is False
    assert settings.REPORT_INDENT == 2


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, fresh_settings: None) -> None:
    monkeypatch.setenv("FLUENTCHECK_LOG_LEVEL", "debug")
    monkeypatch.setenv("FLUENTCHECK_REPORT_INDENT", "4")

    settings = get_settings()

    assert settings.LOG_LEVEL == "debug"
    assert settings.REPORT_INDENT == 4
    assert '\n    "a"' in ValidationMap({"a": ["b"]}).render()


def test_configure_logging_filters_below_level(fresh_settings: None, capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="warning", json_output=True)
    logger = structlog.get_logger()

    logger.info("hidden_event")
    logger.warning("shown_event", field="Order.amount")

    out = capsys.readouterr().out
    assert "hidden_event" not in out
    assert '"event": "shown_event"' in out
    assert '"level": "warning"' in out

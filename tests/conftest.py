"""Shared fixtures for redactlog tests."""

import io
import json
from typing import Any, Callable, Dict, List

import pytest

import redactlog.masking as masking_module
import redactlog.setup as setup_module
from redactlog.configuration import LoggerSettings, MaskingSettings
from redactlog.context import clear_request_context
from redactlog.logger import Logger
from redactlog.masking import SensitiveFields

LOG_ENV_VARS = (
    "LOG_APP_NAME",
    "LOG_LEVEL",
    "LOG_CALLER_ENABLE",
    "LOG_MASKING__ENABLED",
    "LOG_MASKING__SENSITIVE_FIELDS",
    "LOG_DURATION_UNIT",
)


@pytest.fixture(autouse=True)
def isolated_logging_state(monkeypatch):
    """Give every test a fresh classifier, no singleton and a clean env."""
    for name in LOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(masking_module, "sensitive_fields", SensitiveFields())
    monkeypatch.setattr(setup_module, "_logger", None)
    monkeypatch.setattr(setup_module, "_default_logger", None)
    clear_request_context()
    yield
    clear_request_context()


@pytest.fixture
def stream():
    """In-memory text stream records are written to."""
    return io.StringIO()


@pytest.fixture
def read_records(stream) -> Callable[[], List[Dict[str, Any]]]:
    """Decode every JSON line written to ``stream`` so far."""

    def _read() -> List[Dict[str, Any]]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    return _read


@pytest.fixture
def classifier():
    """Classifier with the built-in defaults, isolated from the process one."""
    return SensitiveFields()


@pytest.fixture
def make_logger(stream, classifier) -> Callable[..., Logger]:
    """Factory building a Logger that writes to ``stream``."""

    def _make(
        level: str = "debug",
        masking_enabled: bool = True,
        sensitive_fields: List[str] = None,
        app_name: str = "test-app",
        caller_enable: bool = True,
        **kwargs: Any,
    ) -> Logger:
        settings = LoggerSettings(
            app_name=app_name,
            level=level,
            caller_enable=caller_enable,
            masking=MaskingSettings(
                enabled=masking_enabled, sensitive_fields=sensitive_fields or []
            ),
        )
        return Logger(settings, output=stream, sensitive_fields=classifier, **kwargs)

    return _make

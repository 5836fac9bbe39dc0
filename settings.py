from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_HOST_ENV = "COLLECTOR_HOST"
_PORT_ENV = "COLLECTOR_PORT"
_SELF_TEST_ENABLED_ENV = "COLLECTOR_SELF_TEST_ENABLED"
_SELF_TEST_INTERVAL_ENV = "COLLECTOR_SELF_TEST_INTERVAL"
_SELF_TEST_URL_ENV = "COLLECTOR_SELF_TEST_URL"
_SELF_TEST_TERMINAL_ENV = "COLLECTOR_SELF_TEST_TERMINAL"
_TRACING_ENABLED_ENV = "COLLECTOR_TRACING_ENABLED"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    self_test_enabled: bool
    self_test_interval: float
    self_test_url: str
    self_test_terminal: str
    tracing_enabled: bool
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    return candidate or None


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in _TRUTHY:
        return True
    if candidate in _FALSY:
        return False
    return default


def _read_port(default: int) -> int:
    value = os.getenv(_PORT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if 0 < parsed < 65536 else default


def _read_interval(default: float) -> float:
    value = os.getenv(_SELF_TEST_INTERVAL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    port = _read_port(8080)
    return Settings(
        host=_read_str_env(_HOST_ENV, "0.0.0.0"),
        port=port,
        self_test_enabled=_read_bool_env(_SELF_TEST_ENABLED_ENV, False),
        self_test_interval=_read_interval(1.0),
        self_test_url=_read_optional_env(_SELF_TEST_URL_ENV)
        or f"http://localhost:{port}/value",
        self_test_terminal=_read_str_env(_SELF_TEST_TERMINAL_ENV, "Test Terminal"),
        tracing_enabled=_read_bool_env(_TRACING_ENABLED_ENV, False),
        log_level=_read_log_level("INFO"),
    )

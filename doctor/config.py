from __future__ import annotations

import logging
import os


def _env(name: str, default: str) -> str:
    v = os.getenv(name)
    return v.strip() if v and v.strip() else default


def default_api_url() -> str:
    return _env("DOCTOR_DEFAULT_API_URL", "http://localhost:1919")


def http_timeout_s() -> float:
    return float(_env("DOCTOR_HTTP_TIMEOUT_S", "30"))


def bind_host() -> str:
    return _env("DOCTOR_HOST", "0.0.0.0")


def bind_port() -> int:
    return int(_env("DOCTOR_PORT", "4019"))


def log_level() -> str:
    return _env("DOCTOR_LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

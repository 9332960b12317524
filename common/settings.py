from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
import os
from typing import Optional

from dotenv import load_dotenv

ENV_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_DEFAULT_REGION = "AWS_DEFAULT_REGION"
ENV_METRIC_KEY_PREFIX = "DXVIF_METRIC_KEY_PREFIX"
ENV_ROLE_ARN = "DXVIF_ROLE_ARN"
ENV_TIMEOUT_SECONDS = "DXVIF_TIMEOUT_SECONDS"

DEFAULT_METRIC_KEY_PREFIX = "DxVif"
DEFAULT_TIMEOUT_SECONDS = 10

DEFAULT_LOGS_DIR = ""
DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
COLOR_RESET = "\x1b[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\x1b[36m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[35m",
}

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOGS_DIR = "LOGS_DIR"
ENV_LOG_FORMAT = "LOG_FORMAT"
ENV_LOG_DATE_FORMAT = "LOG_DATE_FORMAT"


def _parse_log_level(value: Optional[str], default: int) -> int:
    if not value:
        return default

    if value.isdigit():
        return int(value)

    level = logging.getLevelName(value.upper())
    if isinstance(level, int):
        return level

    return default


def _parse_timeout(value: Optional[str], default: int) -> int:
    if not value:
        return default
    try:
        return max(1, int(value))
    except ValueError:
        raise ValueError(f"Invalid {ENV_TIMEOUT_SECONDS}: {value!r}") from None


@dataclass(frozen=True)
class LogSettings:
    logs_dir: str
    level: int
    fmt: str
    datefmt: str


@dataclass(frozen=True)
class Settings:
    """Environment defaults for the command-line flags."""

    metric_key_prefix: str
    access_key_id: str
    secret_access_key: str
    region: str
    role_arn: str
    request_timeout: int


@dataclass(frozen=True)
class MonitoredResource:
    connection_id: str
    virtual_interface_id: str


@dataclass(frozen=True)
class PluginConfig:
    """
    Process-wide configuration, built once at startup from the CLI flags.
    Passed explicitly to the components that need it; never mutated.
    """

    metric_key_prefix: str
    access_key_id: str
    secret_access_key: str
    region: str
    role_arn: str
    virtual_interface_id: str
    connection_id: str
    request_timeout: int = DEFAULT_TIMEOUT_SECONDS

    @property
    def key_prefix(self) -> str:
        return self.metric_key_prefix or DEFAULT_METRIC_KEY_PREFIX

    @property
    def resource(self) -> MonitoredResource:
        return MonitoredResource(
            connection_id=self.connection_id,
            virtual_interface_id=self.virtual_interface_id,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()

    return Settings(
        metric_key_prefix=os.getenv(ENV_METRIC_KEY_PREFIX, ""),
        access_key_id=os.getenv(ENV_ACCESS_KEY_ID, ""),
        secret_access_key=os.getenv(ENV_SECRET_ACCESS_KEY, ""),
        region=os.getenv(ENV_DEFAULT_REGION, ""),
        role_arn=os.getenv(ENV_ROLE_ARN, ""),
        request_timeout=_parse_timeout(
            os.getenv(ENV_TIMEOUT_SECONDS), DEFAULT_TIMEOUT_SECONDS
        ),
    )


@lru_cache(maxsize=1)
def get_log_settings() -> LogSettings:
    load_dotenv()

    logs_dir = os.getenv(ENV_LOGS_DIR, DEFAULT_LOGS_DIR)
    level = _parse_log_level(os.getenv(ENV_LOG_LEVEL), DEFAULT_LOG_LEVEL)
    fmt = os.getenv(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT)
    datefmt = os.getenv(ENV_LOG_DATE_FORMAT, DEFAULT_LOG_DATE_FORMAT)

    return LogSettings(
        logs_dir=logs_dir,
        level=level,
        fmt=fmt,
        datefmt=datefmt,
    )

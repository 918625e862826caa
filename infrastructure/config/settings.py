from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum


class AppEnvironment(str, Enum):
    DEV = "DEV"
    PAPER = "PAPER"
    PROD = "PROD"


def _parse_log_level(value: str | None) -> int:
    if value is None:
        return logging.INFO

    if value.isdigit():
        return int(value)

    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


@dataclass(frozen=True)
class Settings:
    env: AppEnvironment
    log_level: int
    data_file: str | None


def load_settings() -> Settings:
    env_value = os.getenv("APP_ENV", AppEnvironment.DEV.value).upper()
    try:
        env = AppEnvironment(env_value)
    except ValueError as exc:
        raise ValueError(f"Invalid APP_ENV value: {env_value}. Use DEV, PAPER, or PROD.") from exc

    log_level = _parse_log_level(os.getenv("LOG_LEVEL"))
    data_file = os.getenv("PNF_DATA_FILE") or None

    return Settings(env=env, log_level=log_level, data_file=data_file)

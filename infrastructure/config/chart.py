from __future__ import annotations

import os
from enum import Enum
from typing import TypeVar

from domain.value_objects.chart_settings import PnFChartSettings
from domain.value_objects.chart_types import BoxSizeMode, ConstructionType

E = TypeVar("E", bound=Enum)


def _enum_from_env(var_name: str, enum_type: type[E], default: E) -> E:
    value = os.getenv(var_name)
    if value is None:
        return default
    try:
        return enum_type(value.strip().upper())
    except ValueError as exc:
        valid = ", ".join(member.value for member in enum_type)
        raise ValueError(f"{var_name} must be one of: {valid}.") from exc


def _float_from_env(var_name: str, default: float) -> float:
    value = os.getenv(var_name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ValueError(f"{var_name} must be a number.") from exc
    if parsed < 0:
        raise ValueError(f"{var_name} cannot be negative.")
    return parsed


def _int_from_env(var_name: str, default: int) -> int:
    value = os.getenv(var_name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{var_name} must be an integer.") from exc
    if parsed <= 0:
        raise ValueError(f"{var_name} must be greater than zero.")
    return parsed


def load_chart_settings() -> PnFChartSettings:
    """Load Point-and-Figure construction settings from environment variables."""
    return PnFChartSettings(
        construction_type=_enum_from_env(
            "PNF_CONSTRUCTION_TYPE", ConstructionType, ConstructionType.CLOSING_PRICE
        ),
        box_size_mode=_enum_from_env("PNF_BOX_SIZE_MODE", BoxSizeMode, BoxSizeMode.AUTO),
        box_size=_float_from_env("PNF_BOX_SIZE", 0.0),
        reversal_count=_int_from_env("PNF_REVERSAL_COUNT", 3),
    )

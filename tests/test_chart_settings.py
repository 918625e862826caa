from __future__ import annotations

import logging

import pytest

from domain.exceptions.errors import ChartConfigurationError
from domain.value_objects.chart_settings import PnFChartSettings
from domain.value_objects.chart_types import BoxSizeMode, ConstructionType
from infrastructure.config.chart import load_chart_settings
from infrastructure.config.settings import AppEnvironment, load_settings

CHART_ENV_KEYS = ("PNF_CONSTRUCTION_TYPE", "PNF_BOX_SIZE_MODE", "PNF_BOX_SIZE", "PNF_REVERSAL_COUNT")


def test_defaults_are_auto_three_box_closing():
    settings = PnFChartSettings()

    assert settings.construction_type is ConstructionType.CLOSING_PRICE
    assert settings.box_size_mode is BoxSizeMode.AUTO
    assert settings.reversal_count == 3
    assert not settings.is_one_box_reversal


@pytest.mark.parametrize(
    "kwargs",
    [
        {"reversal_count": 0},
        {"box_size_mode": BoxSizeMode.FIXED, "box_size": 0.0},
        {"box_size_mode": BoxSizeMode.PERCENTAGE, "box_size": -1.0},
        {"box_size": -0.5},
        {"box_size_mode": BoxSizeMode.FIXED, "box_size": float("nan")},
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    with pytest.raises(ChartConfigurationError):
        PnFChartSettings(**kwargs)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        PnFChartSettings(reversal_count=-1)


def test_load_chart_settings_defaults(monkeypatch):
    for key in CHART_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)

    settings = load_chart_settings()

    assert settings == PnFChartSettings()


def test_load_chart_settings_overrides(monkeypatch):
    monkeypatch.setenv("PNF_CONSTRUCTION_TYPE", "high_low")
    monkeypatch.setenv("PNF_BOX_SIZE_MODE", "fixed")
    monkeypatch.setenv("PNF_BOX_SIZE", "0.5")
    monkeypatch.setenv("PNF_REVERSAL_COUNT", "1")

    settings = load_chart_settings()

    assert settings.construction_type is ConstructionType.HIGH_LOW
    assert settings.box_size_mode is BoxSizeMode.FIXED
    assert settings.box_size == 0.5
    assert settings.is_one_box_reversal


@pytest.mark.parametrize(
    "key, value",
    [
        ("PNF_BOX_SIZE_MODE", "LOGARITHMIC"),
        ("PNF_BOX_SIZE", "abc"),
        ("PNF_BOX_SIZE", "-1"),
        ("PNF_REVERSAL_COUNT", "0"),
        ("PNF_REVERSAL_COUNT", "two"),
    ],
)
def test_load_chart_settings_rejects_bad_values(monkeypatch, key, value):
    for other in CHART_ENV_KEYS:
        monkeypatch.delenv(other, raising=False)
    monkeypatch.setenv(key, value)

    with pytest.raises(ValueError):
        load_chart_settings()


def test_load_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "paper")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PNF_DATA_FILE", "prices.csv")

    settings = load_settings()

    assert settings.env is AppEnvironment.PAPER
    assert settings.log_level == logging.DEBUG
    assert settings.data_file == "prices.csv"


def test_load_settings_rejects_unknown_environment(monkeypatch):
    monkeypatch.setenv("APP_ENV", "staging")

    with pytest.raises(ValueError):
        load_settings()

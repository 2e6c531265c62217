from __future__ import annotations

import pytest

from sislim.app.config import SislimConfig, load_config

_VARIABLES = (
    "SISLIM_BACKEND",
    "SISLIM_FALLBACK_DISPONIBILIDAD",
    "SISLIM_DIAS_RETENCION",
    "SISLIM_DOMINIO_ADMIN",
    "SISLIM_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _entorno_limpio(monkeypatch) -> None:
    for name in _VARIABLES:
        monkeypatch.delenv(name, raising=False)


def test_load_config_defaults() -> None:
    assert load_config() == SislimConfig()


def test_load_config_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("SISLIM_BACKEND", " Memoria ")
    monkeypatch.setenv("SISLIM_FALLBACK_DISPONIBILIDAD", "true")
    monkeypatch.setenv("SISLIM_DIAS_RETENCION", "60")
    monkeypatch.setenv("SISLIM_DOMINIO_ADMIN", "@Limpiezas.test")
    monkeypatch.setenv("SISLIM_LOG_LEVEL", "debug")

    config = load_config()

    assert config == SislimConfig(
        backend="memoria",
        fallback_disponibilidad=True,
        dias_retencion=60,
        dominio_admin="@limpiezas.test",
        log_level="DEBUG",
    )


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("SISLIM_BACKEND", "postgres"),
        ("SISLIM_DIAS_RETENCION", "treinta"),
        ("SISLIM_DIAS_RETENCION", "-1"),
    ],
)
def test_load_config_rejects_invalid_values(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(RuntimeError, match=name):
        load_config()


def test_flag_values(monkeypatch) -> None:
    monkeypatch.setenv("SISLIM_FALLBACK_DISPONIBILIDAD", "0")
    assert load_config().fallback_disponibilidad is False

    monkeypatch.setenv("SISLIM_FALLBACK_DISPONIBILIDAD", "on")
    assert load_config().fallback_disponibilidad is True

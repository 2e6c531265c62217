from __future__ import annotations

import json
import logging
from pathlib import Path

from sislim.app.bootstrap_logging import configure_logging, get_logger, log_soft_exception, set_run_context
from sislim.app.crash_handler import fatal_exception_handler


def test_configure_logging_creates_operational_log(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-test")
    logger = get_logger("tests.logging")

    logger.info("hello operational", extra={"action": "turno_solicitar", "turno_id": 5})

    content = (tmp_path / "app.log").read_text(encoding="utf-8")
    assert "hello operational" in content
    assert "run_id=run-test" in content
    assert "action=turno_solicitar" in content
    assert "turno_id=5" in content


def test_json_mode_writes_one_object_per_line(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=True)
    set_run_context("run-json")
    get_logger("tests.logging").info("turno_confirmado", extra={"turno_id": 9})

    lines = (tmp_path / "app.log").read_text(encoding="utf-8").strip().splitlines()
    payload = json.loads(lines[-1])

    assert payload["message"] == "turno_confirmado"
    assert payload["turno_id"] == 9
    assert payload["run_id"] == "run-json"


def test_log_soft_exception_writes_soft_file(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-soft")
    logger = get_logger("tests.logging")

    try:
        raise ValueError("esperable")
    except ValueError as exc:
        log_soft_exception(logger, exc, {"step": "validation"})

    content = (tmp_path / "crash_soft.log").read_text(encoding="utf-8")
    assert "soft_exception" in content
    assert "ValueError: esperable" in content
    assert "soft_exception_operational" in (tmp_path / "app.log").read_text(encoding="utf-8")


def test_fatal_hook_handler_writes_fatal_file(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-fatal")
    logger = get_logger("tests.logging")
    handler = fatal_exception_handler(logger)

    try:
        raise RuntimeError("fatal")
    except RuntimeError as exc:
        handler(type(exc), exc, exc.__traceback__)

    content = (tmp_path / "crash_fatal.log").read_text(encoding="utf-8")
    assert "unhandled_exception" in content
    assert "RuntimeError: fatal" in content


def test_logging_redacts_contact_data(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-redact")
    logger = get_logger("tests.logging")

    try:
        raise ValueError("Error para maria@example.com tel 444-555-666")
    except ValueError as exc:
        log_soft_exception(logger, exc, {"nombre": "María Gómez", "email": "maria@example.com"})

    content = (tmp_path / "crash_soft.log").read_text(encoding="utf-8")
    assert "maria@example.com" not in content
    assert "444-555-666" not in content
    assert "María Gómez" not in content
    assert "***" in content


def test_crashes_no_se_mezclan_con_el_log_operativo(tmp_path: Path) -> None:
    configure_logging("test-app", tmp_path, json=False)
    set_run_context("run-routing")
    logger = get_logger("tests.logging")

    try:
        raise RuntimeError("disco lleno")
    except RuntimeError as exc:
        log_soft_exception(logger, exc, {"action": "turno_solicitar"})
    logging.getLogger("sislim.repos").warning("aviso desde repositorio")

    app_log = (tmp_path / "app.log").read_text(encoding="utf-8")
    soft_log = (tmp_path / "crash_soft.log").read_text(encoding="utf-8")
    assert "message=soft_exception " not in app_log
    assert "message=soft_exception_operational" in app_log
    assert "message=aviso desde repositorio run_id=run-routing" in app_log
    assert "soft_exception_operational" not in soft_log
    assert (tmp_path / "crash_fatal.log").read_text(encoding="utf-8") == ""

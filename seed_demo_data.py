from __future__ import annotations

import argparse
import sys
import uuid
from pathlib import Path

from sislim.app.bootstrap import bootstrap_database
from sislim.app.bootstrap_logging import configure_logging, get_logger, log_soft_exception, set_run_context
from sislim.app.container import build_container
from sislim.app.crash_handler import install_global_exception_hook
from sislim.app.domain.exceptions import DomainError, PersistenciaError
from sislim.app.infrastructure.demo_seed import sembrar_datos_demo

_DEFAULT_SQLITE_PATH = "./data/demo.db"
_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Carga clientes, administrador y franjas de demostración.")
    parser.add_argument("--sqlite-path", type=str, default=_DEFAULT_SQLITE_PATH)
    parser.add_argument("--reset", dest="reset", action="store_true", default=False)
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging("sislim-seed-demo", Path("./logs"), level="INFO", json=True)
    set_run_context(uuid.uuid4().hex[:8])
    install_global_exception_hook(_LOGGER)
    args = build_parser().parse_args(argv)
    try:
        sqlite_path = Path(args.sqlite_path).expanduser().resolve()
        if args.reset:
            _reset_demo_db_if_allowed(sqlite_path)

        container = build_container(bootstrap_database(apply_schema=True, sqlite_path=str(sqlite_path)))
        try:
            resumen = sembrar_datos_demo(container)
            _LOGGER.info("=== RESUMEN DEMO ===")
            _LOGGER.info(
                "Creados: clientes=%s administradores=%s disponibilidades=%s",
                resumen.clientes,
                resumen.administradores,
                resumen.disponibilidades,
            )
            _LOGGER.info("Base de datos: %s", sqlite_path)
        finally:
            container.close()
        return 0
    except (ValueError, DomainError, PersistenciaError) as exc:
        log_soft_exception(_LOGGER, exc, {"command": "seed_demo_data"})
        return 2


def _reset_demo_db_if_allowed(sqlite_path: Path) -> None:
    if not sqlite_path.exists():
        return
    if not _is_safe_demo_db_path(sqlite_path):
        raise ValueError(
            "--reset solo permite borrar bases demo bajo ./data/*.db para evitar borrados accidentales. "
            f"Ruta recibida: {sqlite_path}"
        )
    sqlite_path.unlink()
    _LOGGER.info("[reset] base demo eliminada: %s", sqlite_path)


def _is_safe_demo_db_path(sqlite_path: Path) -> bool:
    repo_root = Path(__file__).resolve().parent
    data_dir = (repo_root / "data").resolve()
    return sqlite_path.suffix == ".db" and data_dir in sqlite_path.parents


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

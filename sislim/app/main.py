from __future__ import annotations

import sys
import uuid
from pathlib import Path

from PySide6.QtWidgets import QApplication

from sislim.app.bootstrap import bootstrap_database
from sislim.app.bootstrap_logging import configure_logging, get_logger, set_run_context
from sislim.app.config import SislimConfig, load_config
from sislim.app.container import AppContainer, build_container, build_container_memoria
from sislim.app.crash_handler import install_global_exception_hook
from sislim.app.infrastructure.demo_seed import sembrar_datos_demo
from sislim.app.ui.main_window import MainWindow


LOGGER = get_logger(__name__)


def _build_container(config: SislimConfig) -> AppContainer:
    if config.backend == "memoria":
        container = build_container_memoria(config)
        sembrar_datos_demo(container)
        LOGGER.info("backend_memoria datos demo cargados")
        return container
    return build_container(bootstrap_database(apply_schema=True), config)


def main() -> int:
    config = load_config()
    configure_logging("sislim-ui", Path("./logs"), level=config.log_level, json=True)
    set_run_context(uuid.uuid4().hex[:8])
    install_global_exception_hook(LOGGER)

    app = QApplication(sys.argv)
    container = _build_container(config)

    try:
        window = MainWindow(container)
        window.show()
        return app.exec()
    finally:
        container.close()


if __name__ == "__main__":
    raise SystemExit(main())

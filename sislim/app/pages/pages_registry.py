from __future__ import annotations

from typing import Dict, List

from sislim.app.container import AppContainer
from sislim.app.pages.page_def import PageDef


class PageRegistry:
    """Registro in-memory de PageDef.

    Cada página registra su PageDef en un único lugar.
    La navegación (MainWindow) consume PageDef y crea widgets lazy vía factory().
    """

    def __init__(self) -> None:
        self._pages: Dict[str, PageDef] = {}

    def register(self, page: PageDef) -> None:
        if page.key in self._pages:
            raise ValueError(f"Página duplicada: {page.key}")
        self._pages[page.key] = page

    def get(self, key: str) -> PageDef:
        return self._pages[key]

    def list(self) -> List[PageDef]:
        # Orden estable por inserción
        return list(self._pages.values())


def register_pages(registry: PageRegistry, container: AppContainer) -> None:
    from sislim.app.pages.disponibilidades.register import register as register_disponibilidades
    from sislim.app.pages.estadisticas.register import register as register_estadisticas
    from sislim.app.pages.turnos.register import register as register_turnos

    register_turnos(registry, container)
    register_disponibilidades(registry, container)
    register_estadisticas(registry, container)


def get_pages(container: AppContainer) -> List[PageDef]:
    """Bootstrap UI: reúne todas las páginas registradas."""
    reg = PageRegistry()
    register_pages(reg, container)
    return reg.list()

from __future__ import annotations

from sislim.app.container import AppContainer
from sislim.app.pages.estadisticas.page import PageEstadisticas
from sislim.app.pages.page_def import PageDef
from sislim.app.pages.pages_registry import PageRegistry


def register(registry: PageRegistry, container: AppContainer) -> None:
    registry.register(
        PageDef(
            key="estadisticas",
            title="Estadísticas",
            factory=lambda: PageEstadisticas(container),
        )
    )

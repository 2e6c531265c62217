from __future__ import annotations

from sislim.app.container import AppContainer
from sislim.app.pages.disponibilidades.page import PageDisponibilidades
from sislim.app.pages.page_def import PageDef
from sislim.app.pages.pages_registry import PageRegistry


def register(registry: PageRegistry, container: AppContainer) -> None:
    registry.register(
        PageDef(
            key="disponibilidades",
            title="Disponibilidades",
            factory=lambda: PageDisponibilidades(container),
        )
    )

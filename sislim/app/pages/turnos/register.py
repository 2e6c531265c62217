from __future__ import annotations

from sislim.app.container import AppContainer
from sislim.app.pages.page_def import PageDef
from sislim.app.pages.pages_registry import PageRegistry
from sislim.app.pages.turnos.page import PageTurnos


def register(registry: PageRegistry, container: AppContainer) -> None:
    registry.register(
        PageDef(
            key="turnos",
            title="Turnos",
            factory=lambda: PageTurnos(container),
        )
    )

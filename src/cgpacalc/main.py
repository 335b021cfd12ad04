import logging

import flet as ft

from cgpacalc.config.settings import settings
from cgpacalc.logging_config import setup_logging
from cgpacalc.state.app_state import AppState
from cgpacalc.ui.views.calculator_view import build_calculator_view

logger = logging.getLogger(__name__)


def main(page: ft.Page) -> None:
    page.title = settings.app_title
    page.scroll = ft.ScrollMode.AUTO
    page.padding = 16

    # One state per session; discarded when the page closes
    app_state = AppState()
    page.add(build_calculator_view(page, app_state, settings.app_title))
    logger.info("Calculator session started")


def run() -> None:
    setup_logging(settings.log_level, settings.log_file)
    ft.app(
        target=main,
        view=ft.AppView.WEB_BROWSER if settings.web_mode else ft.AppView.FLET_APP,
        port=settings.port,
    )


if __name__ == "__main__":
    run()

# ui/app.py
import logging
import sys

from PySide6.QtWidgets import QApplication

from core.catalog_client import CatalogClient
from core.config import PlayerConfig
from core.session import PlaybackSession
from core.state import AppState
from player.player import Player
from ui.main_window import MainWindow

logger = logging.getLogger("playlist_player")


def init_app_state(config: PlayerConfig) -> AppState:
    app_state = AppState(config)
    app_state.catalog = CatalogClient(config)

    app_state.player = Player(volume=config.initial_volume)

    app_state.session = PlaybackSession(
        app_state.player,
        app_state.catalog,
        unmute_volume=config.unmute_volume,
        initial_volume=config.initial_volume,
    )
    logger.info("Catalog %s, audio backend %s", config.base_url, app_state.player.backend_name())
    return app_state


def main() -> int:
    config = PlayerConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    qt_app = QApplication(sys.argv)

    app_state = init_app_state(config)
    main_window = MainWindow(app_state)
    main_window.show()
    main_window.start()

    return qt_app.exec()

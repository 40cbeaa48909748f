import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from lyrics_finder.core.config import AppConfig
from lyrics_finder.core.orchestrator import SearchController
from lyrics_finder.core.state import AppState
from lyrics_finder.ui.main_window import MainWindow
from lyrics_finder.ui.workers.request_worker import QtTaskRunner

logger = logging.getLogger("lyrics_finder")


def setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO)


def init_app_state() -> AppState:
    config = AppConfig.from_env()
    setup_logging(config.debug)
    logger.info("Using LRCLIB instance %s", config.lrclib_instance)
    return AppState.create(config)


def main() -> int:
    qt_app = QApplication(sys.argv)
    qt_app.setApplicationName("LyricsFinder")
    qt_app.setOrganizationName("LyricsFinder")

    app_state = init_app_state()
    runner = QtTaskRunner(qt_app)
    controller = SearchController(
        client=app_state.client,
        favorites=app_state.favorites,
        theme=app_state.theme,
        runner=runner,
    )

    main_window = MainWindow(controller)
    main_window.show()

    code = qt_app.exec()
    runner.wait_all()
    app_state.store.close()
    return code


if __name__ == "__main__":
    raise SystemExit(main())

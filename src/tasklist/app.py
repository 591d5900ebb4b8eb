import logging
import sys

from PySide6.QtWidgets import QApplication

from tasklist.config import get_settings
from tasklist.db.storage import SqliteStorage
from tasklist.logging_setup import setup_logging
from tasklist.services.filters import FilterMode
from tasklist.services.task_store import TaskStore
from tasklist.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def build_store(settings) -> TaskStore:
    store = TaskStore(SqliteStorage(settings.db_path), storage_key=settings.storage_key)
    store.load()
    return store


def main():
    settings = get_settings()
    console_level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s (db=%s, log=%s)", settings.app_name, settings.db_path, log_file)

    app = QApplication(sys.argv)
    app.setApplicationName(settings.app_name)
    win = MainWindow(
        build_store(settings),
        title=settings.app_name,
        dark_mode=settings.dark_mode,
        filter_mode=FilterMode.parse(settings.default_filter),
    )
    win.resize(640, 720)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()

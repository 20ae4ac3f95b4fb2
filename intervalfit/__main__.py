"""Allow running IntervalFit as a module: python -m intervalfit."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .logging_config import setup_logging
from .settings import load_settings
from .app import IntervalFitApp

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    init_db()

    app = QApplication(sys.argv)
    app.setApplicationName("IntervalFit")
    app.setOrganizationName("IntervalFit")

    window = IntervalFitApp(settings)
    window.show()
    logger.info("IntervalFit ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()

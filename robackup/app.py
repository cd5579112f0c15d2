# robackup/app.py
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_file_handler: logging.Handler | None = None


def setup_logging(settings: dict) -> logging.Logger:
    """Configure the root logger from settings; safe to call again after Preferences change."""
    global _file_handler
    root = logging.getLogger()
    level = getattr(logging, str(settings.get("log_level", "INFO")).upper(), logging.INFO)
    root.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler) for h in root.handlers):
        sh = logging.StreamHandler()
        sh.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(sh)

    if _file_handler is not None:
        root.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
    if log_file := settings.get("log_file", "").strip():
        try:
            _file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            root.warning("Cannot open log file %s: %s", log_file, e)
        else:
            _file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(_file_handler)
    return logging.getLogger("robackup")


def main() -> int:
    from PySide6.QtWidgets import QApplication

    from .main_window import MainWindow
    from .utils.settings import load_settings

    settings = load_settings()
    setup_logging(settings)
    app = QApplication(sys.argv)
    app.setApplicationName("Robackup")
    win = MainWindow(settings)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

APP_NAME = "pdfstamp"


def get_log_dir() -> Path:
    """Directory for log files, created if needed.

    ``PDFSTAMP_LOG_DIR`` wins; otherwise the platform's per-user data
    directory is used.
    """
    env_log_dir = os.environ.get("PDFSTAMP_LOG_DIR")
    if env_log_dir:
        log_dir = Path(env_log_dir)
    elif os.name == "nt":
        log_dir = Path(os.environ.get("LOCALAPPDATA", Path.home())) / APP_NAME / "logs"
    elif sys.platform == "darwin":
        log_dir = Path.home() / "Library" / "Logs" / APP_NAME
    else:
        log_dir = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state")) / APP_NAME

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def configure_logging(*, debug: bool = False, log_path: str | Path | None = None) -> None:
    """Configure app-wide logging.

    - Always logs to a rotating file
    - Also logs to the console when debug is enabled
    """
    level = logging.DEBUG if debug else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicating handlers if called more than once.
    if getattr(root, "_pdfstamp_configured", False):
        return

    if log_path is None:
        log_path = get_log_dir() / "pdfstamp.log"

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(str(log_path), maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    if debug:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(fmt)
        root.addHandler(console)

    setattr(root, "_pdfstamp_configured", True)

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# The detection worker logs from its own thread, so the thread name is part of every line.
LINE_FORMAT = "%(asctime)s %(levelname).1s [%(threadName)s] %(name)s: %(message)s"
TIME_FORMAT = "%H:%M:%S"

# MediaPipe routes its native messages through absl; keep them out of the frame log.
NOISY_LOGGERS = ("absl",)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, max_bytes: int = 5_000_000) -> None:
    """
    Route `handcursor` logging to stderr and, when `log_file` is given, to a rotating file.

    The file always records DEBUG so per-frame cursor lines can be inspected
    after a run without flooding the console.
    """

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'")

    formatter = logging.Formatter(LINE_FORMAT, datefmt=TIME_FORMAT)
    handlers = [logging.StreamHandler()]
    handlers[0].setLevel(numeric)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=2)
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if log_file else numeric)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

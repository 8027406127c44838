"""Logging setup shared by the CLI runner and the Streamlit app."""

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Loggers owned by this project; modules use logging.getLogger(__name__)
PROJECT_LOGGERS = ("src.viaticos", "src.clients")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """Configure project loggers. Returns the ``src.clients`` logger.

    - level: DEBUG | INFO | WARNING | ERROR
    - log_file: if set, add a FileHandler
    - format_string: optional; default includes timestamp, level, name, message
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    for name in PROJECT_LOGGERS:
        log = logging.getLogger(name)
        log.setLevel(numeric_level)
        # Avoid duplicate handlers when called repeatedly (Streamlit reruns)
        if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler) for h in log.handlers):
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(formatter)
            log.addHandler(handler)
        if log_file and not any(getattr(h, "baseFilename", "") == str(Path(log_file).resolve()) for h in log.handlers):
            try:
                Path(log_file).parent.mkdir(parents=True, exist_ok=True)
                fh = logging.FileHandler(log_file, encoding="utf-8")
                fh.setFormatter(formatter)
                log.addHandler(fh)
            except OSError:
                log.warning("Could not open log file %s", log_file)

    return logging.getLogger("src.clients")

"""
Logging setup shared by the mediasync CLI.

Console/File matrix:
  - -q:   console = silent;        file = INFO+
  - none: console = INFO & WARNING (ERROR to stderr); file = INFO+
  - -v:   console = INFO+;         file = INFO+
  - -vv:  console = DEBUG;         file = DEBUG
  - --log-level=X: both console & file use X (no special filters)

The file is append-only plain text, one timestamped line per record.
"""

import logging
import sys
import uuid
from pathlib import Path
from typing import Optional

LOGGER_NAME = "mediasync"
LOGGER = logging.getLogger(LOGGER_NAME)


class EnsureContext(logging.Filter):
    """Default the run_id field for records logged outside a run adapter."""
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = "-"
        return True


class MaxLevelFilter(logging.Filter):
    """Allow records up to and including `levelno` (drop anything higher)."""
    def __init__(self, levelno: int):
        super().__init__()
        self.levelno = levelno

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self.levelno


def new_run_id() -> str:
    return uuid.uuid4().hex[:8]


def run_logger(run_id: str, logger: Optional[logging.Logger] = None) -> logging.LoggerAdapter:
    """Attach run_id to every log record of this run."""
    return logging.LoggerAdapter(logger or LOGGER, {"run_id": run_id})


def setup_logging(log_file: Path, verbose: int = 0, quiet: bool = False,
                  log_level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    # Decide levels & max-filters
    console_max = None
    if log_level:
        console_level = getattr(logging, log_level.upper())
        file_level = console_level
    elif quiet:
        console_level = logging.CRITICAL + 1   # prints nothing
        file_level = logging.INFO
    elif verbose >= 2:
        console_level = logging.DEBUG
        file_level = logging.DEBUG
    elif verbose >= 1:
        console_level = logging.INFO
        file_level = logging.INFO
    else:
        # default: stdout shows INFO & WARNING; errors go to stderr
        console_level = logging.INFO
        file_level = logging.INFO
        console_max = MaxLevelFilter(logging.WARNING)

    # Console handler (human format, stdout so it echoes with the rest of the output)
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(console_level)
    ch.addFilter(EnsureContext())
    if console_max:
        ch.addFilter(console_max)
    ch.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(ch)

    # Errors go to stderr when the max filter keeps them off stdout
    if console_max:
        eh = logging.StreamHandler(sys.stderr)
        eh.setLevel(logging.ERROR)
        eh.addFilter(EnsureContext())
        eh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(eh)

    # File handler (append-only)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    fh.setLevel(file_level)
    fh.addFilter(EnsureContext())
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] [%(run_id)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S"
    ))
    logger.addHandler(fh)

    logger.debug(f"Log file: {log_file}")
    return logger


def close_logging() -> None:
    """Detach and close every handler (releases the log file)."""
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .utils import ensure_dir, now_timestamp_str

LOGGER_NAME = "catalog_tagger"


def setup_logging(verbose: bool = False, quiet: bool = False, log_dir: Optional[Path] = None) -> tuple[logging.Logger, Optional[Path]]:
    """Initialize logging to console and, if log_dir is given, a file per run.

    Returns (logger, log_file_path)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    # Console handler
    ch = logging.StreamHandler()
    if quiet:
        ch.setLevel(logging.WARNING)
    elif verbose:
        ch.setLevel(logging.DEBUG)
    else:
        ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter("%(levelname)s | %(message)s"))
    logger.addHandler(ch)

    log_path = None
    if log_dir is not None:
        ensure_dir(Path(log_dir))
        log_path = Path(log_dir) / f"catalog-tagger-{now_timestamp_str()}.log"
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(fh)

    logger.debug("Logging initialized")
    return logger, log_path

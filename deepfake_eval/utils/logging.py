# deepfake_eval/utils/logging.py
from __future__ import annotations

import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union


PathLike = Union[str, Path]

DEFAULT_LOGGER = "deepfake_eval"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = DEFAULT_LOGGER) -> logging.Logger:
    """
    Get a named logger. Use configure_logging() once at program start.
    """
    return logging.getLogger(name)


def configure_logging(
    name: str = DEFAULT_LOGGER,
    level: int = logging.INFO,
    log_file: Optional[PathLike] = None,
    overwrite: bool = True,
) -> logging.Logger:
    """
    Configure console (stdout) logging and optionally a log file.

    Library modules log through `logging.getLogger(__name__)`, i.e. children
    of "deepfake_eval", so configuring the package logger covers them.

    Args:
        name: logger name
        level: logging.INFO / DEBUG / etc.
        log_file: optional path to write logs
        overwrite: if True, truncates the log file; else appends
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # repeated runs in one interpreter would otherwise duplicate output
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    ch = logging.StreamHandler(stream=sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        fh = logging.FileHandler(log_path, mode="w" if overwrite else "a", encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def log_experiment_header(
    logger: logging.Logger,
    title: str,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Log a run banner with interpreter and library versions."""
    import numpy as np
    import pandas as pd

    logger.info("=" * 80)
    logger.info(title)
    logger.info(f"Platform: {platform.platform()}")
    logger.info(f"Python:   {sys.version.split()[0]}")
    logger.info(f"NumPy:    {np.__version__}")
    logger.info(f"pandas:   {pd.__version__}")

    if extra:
        for k, v in extra.items():
            logger.info(f"{k}: {v}")
    logger.info("=" * 80)


def dump_config_text(
    config: Dict[str, Any],
    out_path: PathLike,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Persist the resolved config dict as JSON next to the run outputs.

    Args:
        config: resolved configuration dictionary
        out_path: destination file (e.g. outputs/logs/config_resolved.json)
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(config, f, indent=2, default=str)

    if logger is not None:
        logger.info(f"Saved resolved config to: {out_path}")

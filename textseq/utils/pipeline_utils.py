"""
Pipeline and utility helpers.

This module centralizes common functionality used across the project:

- loading the pipeline configuration (config/pipeline.yaml)
- ensuring directories exist before writing files
- order-preserving parallel mapping over records
- constructing loggers that respect the config logging settings

The orchestration in textseq.pipeline and the scripts rely on these
utilities.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

import yaml
from joblib import Parallel, delayed


DEFAULT_PIPELINE_CONFIG_PATH = "config/pipeline.yaml"

T = TypeVar("T")
R = TypeVar("R")


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def load_pipeline_config(
    config_path: str = DEFAULT_PIPELINE_CONFIG_PATH,
) -> Dict[str, Any]:
    """
    Load and return the pipeline configuration dictionary.

    Parameters
    ----------
    config_path : str
        Path to the pipeline YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Parsed configuration with sections such as "paths" and "logging".

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Pipeline config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Pipeline config file is empty or invalid: {config_path}")

    # Permissive: callers read the keys they need with defaults.
    return cfg


# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------


def ensure_dir_exists(path: str) -> None:
    """
    Ensure that a directory exists (create it if necessary).
    """
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


# ---------------------------------------------------------------------------
# Parallel mapping
# ---------------------------------------------------------------------------


def map_ordered(
    func: Callable[[T], R],
    items: Sequence[T],
    n_jobs: int = 1,
) -> List[R]:
    """
    Apply ``func`` to every item and return the results in input order.

    With ``n_jobs == 1`` (or fewer than two items) the work runs inline;
    otherwise it is dispatched through joblib, which keeps the output
    aligned with the input. ``func`` must be picklable in that case.
    """
    if n_jobs == 1 or len(items) < 2:
        return [func(item) for item in items]
    return list(Parallel(n_jobs=n_jobs)(delayed(func)(item) for item in items))


# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------


def _parse_log_level(level_str: str) -> int:
    """
    Convert a string log level into a logging module constant.
    """
    level_str = (level_str or "INFO").upper()
    return {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }.get(level_str, logging.INFO)


def get_logger(
    name: str,
    config: Dict[str, Any],
    log_file_suffix: Optional[str] = None,
) -> logging.Logger:
    """
    Construct and return a logger that respects the logging section of
    the pipeline config.

    Parameters
    ----------
    name : str
        Logger name.
    config : Dict[str, Any]
        Pipeline configuration.
    log_file_suffix : Optional[str]
        Optional suffix appended to the log file name (e.g., "vectorize").

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Already configured by an earlier call.
    if logger.handlers:
        return logger

    logging_cfg = config.get("logging", {}) or {}
    paths_cfg = config.get("paths", {}) or {}

    level = _parse_log_level(logging_cfg.get("level", "INFO"))
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if bool(logging_cfg.get("to_file", False)):
        logs_dir = paths_cfg.get("logs_dir", "artifacts/logs")
        ensure_dir_exists(logs_dir)

        file_prefix = logging_cfg.get("file_prefix", "textseq")
        if log_file_suffix:
            filename = f"{file_prefix}_{log_file_suffix}.log"
        else:
            filename = f"{file_prefix}.log"

        file_handler = logging.FileHandler(
            os.path.join(logs_dir, filename), encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger

"""
Record loading and data configuration utilities.

This module is responsible for:
- reading the data configuration from config/data.yaml
- loading the raw CSV record set into a pandas DataFrame
- renaming the configured source columns to standard field names
- building the fixed label mapping (negative -> 0, positive -> 1)

Rows are never dropped here: missing free text is cleaned to an empty
string later, and an unexpected label must surface as an error rather
than disappear from the data.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List

import pandas as pd
import yaml

from textseq.features.labels import LabelEncoder


DEFAULT_DATA_CONFIG_PATH = "config/data.yaml"


def _load_yaml(path: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file and return it as a dictionary.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Config file is empty or invalid: {path}")

    return cfg


def load_data_config(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load and return the full data configuration dictionary.

    Parameters
    ----------
    config_path : str, optional
        Path to the data YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing the "dataset" and "preprocessing" sections.
    """
    cfg = _load_yaml(config_path)

    for section in ("dataset", "preprocessing"):
        if section not in cfg:
            raise KeyError(f'Missing "{section}" section in data config: {config_path}')

    return cfg


def get_text_fields(cfg: Dict[str, Any]) -> List[str]:
    dataset_cfg = cfg["dataset"]
    return list(dataset_cfg.get("text_fields", ["text"]) or [])


def get_label_field(cfg: Dict[str, Any]) -> str:
    return str(cfg["dataset"].get("label_field", "label"))


def get_label_mapping(cfg: Dict[str, Any]) -> Dict[str, int]:
    """
    Build the mapping from label strings to numeric IDs.

    The mapping comes from the "negative_label" and "positive_label"
    fields of the "dataset" section; it is never inferred from the data.

    Returns
    -------
    Dict[str, int]
        e.g. {"N": 0, "Y": 1}.
    """
    return build_label_encoder(cfg).mapping


def build_label_encoder(cfg: Dict[str, Any]) -> LabelEncoder:
    dataset_cfg = cfg["dataset"]
    return LabelEncoder(
        positive=str(dataset_cfg.get("positive_label", "Y")),
        negative=str(dataset_cfg.get("negative_label", "N")),
    )


def standardize_records(df: pd.DataFrame, cfg: Dict[str, Any]) -> pd.DataFrame:
    """
    Rename configured source columns to their standard field names and
    check that every text and label field is present.

    Parameters
    ----------
    df : pd.DataFrame
        Raw record set.
    cfg : Dict[str, Any]
        Full data configuration.

    Returns
    -------
    pd.DataFrame
        Copy of ``df`` with standard field names.

    Raises
    ------
    ValueError
        If a required column is missing.
    """
    columns_cfg: Dict[str, str] = cfg["dataset"].get("columns", {}) or {}

    # columns_cfg maps standard field name -> source column name; records
    # that already use the standard name are left as they are.
    missing_sources = [
        src
        for std, src in columns_cfg.items()
        if src not in df.columns and std not in df.columns
    ]
    if missing_sources:
        raise ValueError(
            f"Missing required column(s) in record set: {missing_sources}. "
            f"Available columns: {list(df.columns)}"
        )

    collisions = [
        f"{src!r} -> {std!r}"
        for std, src in columns_cfg.items()
        if src != std and src in df.columns and std in df.columns
    ]
    if collisions:
        raise ValueError(
            f"Record set has both a source column and its standard name: {collisions}. "
            "Drop one of them before loading."
        )

    renamed = df.rename(
        columns={src: std for std, src in columns_cfg.items() if src in df.columns}
    )

    required = get_text_fields(cfg) + [get_label_field(cfg)]
    missing_fields = [name for name in required if name not in renamed.columns]
    if missing_fields:
        raise ValueError(
            f"Missing required field(s) after renaming: {missing_fields}. "
            f"Available columns: {list(renamed.columns)}"
        )

    return renamed.reset_index(drop=True)


def load_records(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> pd.DataFrame:
    """
    Load the record set described by the configuration.

    Returns
    -------
    pd.DataFrame
        Records with standard field names; text fields keep missing
        values as NaN, labels are read as strings.

    Raises
    ------
    FileNotFoundError
        If the CSV file cannot be found.
    ValueError
        If required columns are missing.
    """
    cfg = load_data_config(config_path)
    dataset_cfg = cfg["dataset"]

    csv_path = dataset_cfg.get("path", "data/raw/records.csv")
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"Record CSV not found at: {csv_path}")

    df = pd.read_csv(
        csv_path,
        dtype=str,
        keep_default_na=True,
        encoding=dataset_cfg.get("encoding", "utf-8"),
    )
    return standardize_records(df, cfg)

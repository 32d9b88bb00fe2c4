"""
End-to-end vectorization of a record set.

This module wires the pieces together:

- clean every configured free-text field with the shared normalizer
- for each vocabulary field, build the Vocabulary once from its cleaned
  corpus, then encode and pad that corpus into a fixed-length matrix
- encode the label field with the configured positive/negative symbols

Fitting and transforming are separate phases: ``fit_field_encoding`` is
the only place a Vocabulary gets built, and the ``FieldEncoding`` it
returns can only transform new values with that frozen Vocabulary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from textseq.data.datasets import (
    DEFAULT_DATA_CONFIG_PATH,
    build_label_encoder,
    get_label_field,
    get_text_fields,
    load_data_config,
    standardize_records,
)
from textseq.features.preprocessing import TextNormalizer, build_normalizer_from_config, clean
from textseq.features.sequences import texts_to_matrix
from textseq.features.vocabulary import Vocabulary, build_vocabulary
from textseq.utils.pipeline_utils import (
    DEFAULT_PIPELINE_CONFIG_PATH,
    get_logger,
    load_pipeline_config,
)


@dataclass(frozen=True)
class FieldEncoding:
    """
    Everything needed to turn raw values of one field into a padded matrix.
    """

    field_name: str
    vocabulary: Vocabulary
    max_length: int
    normalizer: TextNormalizer
    n_jobs: int = 1

    def transform(self, raw_values: Iterable[Any]) -> np.ndarray:
        cleaned = clean(list(raw_values), self.normalizer, n_jobs=self.n_jobs)
        return self.transform_cleaned(cleaned)

    def transform_cleaned(self, cleaned_values: Iterable[Any]) -> np.ndarray:
        return texts_to_matrix(
            cleaned_values, self.vocabulary, self.max_length, n_jobs=self.n_jobs
        )


@dataclass
class VectorizedRecords:
    """
    Output of ``vectorize_records``.

    Attributes
    ----------
    cleaned : Dict[str, List[str]]
        Cleaned text per free-text field.
    sequences : Dict[str, np.ndarray]
        Padded (n_records, max_length) matrix per vocabulary field.
    labels : np.ndarray
        Encoded labels, shape (n_records,).
    encodings : Dict[str, FieldEncoding]
        Frozen encodings, reusable on new records.
    """

    cleaned: Dict[str, List[str]] = field(default_factory=dict)
    sequences: Dict[str, np.ndarray] = field(default_factory=dict)
    labels: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))
    encodings: Dict[str, FieldEncoding] = field(default_factory=dict)


def fit_field_encoding(
    raw_values: Iterable[Any],
    field_name: str,
    normalizer: TextNormalizer,
    max_vocab_size: Optional[int],
    max_length: int,
    n_jobs: int = 1,
) -> Tuple[FieldEncoding, np.ndarray]:
    """
    Clean a field, build its Vocabulary, and encode/pad the same corpus.

    Parameters
    ----------
    raw_values : Iterable[Any]
        Raw values of the field across all records.
    field_name : str
        Name of the field (kept on the encoding for reference).
    normalizer : TextNormalizer
        Shared cleaning chain.
    max_vocab_size : Optional[int]
        Vocabulary cap.
    max_length : int
        Padded sequence length.
    n_jobs : int
        joblib workers for cleaning and encoding.

    Returns
    -------
    Tuple[FieldEncoding, np.ndarray]
        The frozen encoding and the (n_records, max_length) matrix.
    """
    cleaned = clean(list(raw_values), normalizer, n_jobs=n_jobs)
    vocabulary = build_vocabulary(cleaned, max_size=max_vocab_size)
    encoding = FieldEncoding(
        field_name=field_name,
        vocabulary=vocabulary,
        max_length=int(max_length),
        normalizer=normalizer,
        n_jobs=n_jobs,
    )
    return encoding, encoding.transform_cleaned(cleaned)


def _get_vectorize_params(preprocessing_cfg: Dict[str, Any]) -> Tuple[List[str], Optional[int], int, int]:
    """
    Returns
    -------
    Tuple[List[str], Optional[int], int, int]
        (vocabulary fields, max vocabulary size, max sequence length, n_jobs)
    """
    vocab_cfg = preprocessing_cfg.get("vocab", {}) or {}
    seq_cfg = preprocessing_cfg.get("sequence", {}) or {}

    fields = list(vocab_cfg.get("fields", []) or [])
    max_size = vocab_cfg.get("max_size", 10000)
    max_size = int(max_size) if max_size is not None else None
    max_length = int(seq_cfg.get("max_length", 100))
    n_jobs = int(preprocessing_cfg.get("n_jobs", 1))
    return fields, max_size, max_length, n_jobs


def vectorize_records(
    records: pd.DataFrame,
    data_config_path: str = DEFAULT_DATA_CONFIG_PATH,
    pipeline_config_path: str = DEFAULT_PIPELINE_CONFIG_PATH,
    data_cfg: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> VectorizedRecords:
    """
    Turn a record set into cleaned text, padded matrices and labels.

    Parameters
    ----------
    records : pd.DataFrame
        Record set, either with standard field names or with the source
        column names listed in the data config.
    data_config_path : str
        Path to config/data.yaml (ignored when ``data_cfg`` is given).
    pipeline_config_path : str
        Path to config/pipeline.yaml (only read when ``logger`` is None).
    data_cfg : Optional[Dict[str, Any]]
        Already-loaded data configuration.
    logger : Optional[logging.Logger]
        Logger to report progress on.

    Returns
    -------
    VectorizedRecords
        Cleaned fields, padded matrices, labels and frozen encodings.

    Raises
    ------
    UnrecognizedCategoryError
        If a label value is outside the configured two symbols.
    """
    if data_cfg is None:
        data_cfg = load_data_config(data_config_path)
    if logger is None:
        logger = get_logger(
            name="vectorize",
            config=load_pipeline_config(pipeline_config_path),
            log_file_suffix="vectorize",
        )

    df = standardize_records(records, data_cfg)
    preprocessing_cfg = data_cfg["preprocessing"]
    normalizer = build_normalizer_from_config(preprocessing_cfg)
    vocab_fields, max_size, max_length, n_jobs = _get_vectorize_params(preprocessing_cfg)
    text_fields = get_text_fields(data_cfg)

    unknown = [name for name in vocab_fields if name not in text_fields]
    if unknown:
        raise ValueError(
            f"Vocabulary field(s) {unknown} are not configured text fields {text_fields}."
        )

    logger.info("Vectorizing %d records; %r", len(df), normalizer)

    result = VectorizedRecords()

    for name in text_fields:
        result.cleaned[name] = clean(df[name].tolist(), normalizer, n_jobs=n_jobs)
        n_empty = sum(1 for value in result.cleaned[name] if not value)
        logger.info("Cleaned field '%s' (%d empty after cleaning).", name, n_empty)

    for name in vocab_fields:
        vocabulary = build_vocabulary(result.cleaned[name], max_size=max_size)
        encoding = FieldEncoding(
            field_name=name,
            vocabulary=vocabulary,
            max_length=max_length,
            normalizer=normalizer,
            n_jobs=n_jobs,
        )
        result.encodings[name] = encoding
        result.sequences[name] = encoding.transform_cleaned(result.cleaned[name])
        logger.info(
            "Field '%s': vocabulary size %d (cap %s), matrix shape %s.",
            name,
            vocabulary.size,
            max_size,
            result.sequences[name].shape,
        )

    label_encoder = build_label_encoder(data_cfg)
    result.labels = label_encoder.encode_many(df[get_label_field(data_cfg)].tolist())
    logger.info(
        "Encoded labels with %r: %d positive, %d negative.",
        label_encoder,
        int(result.labels.sum()),
        int(len(result.labels) - result.labels.sum()),
    )

    return result

"""
End-to-end tests for record vectorization.
"""

from __future__ import annotations

import logging

import numpy as np
import pytest

from textseq.errors import UnrecognizedCategoryError
from textseq.pipeline import FieldEncoding, fit_field_encoding, vectorize_records


LOGGER = logging.getLogger("test_pipeline")


def test_vectorize_records(raw_records, data_cfg):
    result = vectorize_records(raw_records, data_cfg=data_cfg, logger=LOGGER)

    assert result.cleaned["description"] == [
        "call back asap",
        "customer called back cancel order",
        "",
        "cancel order asap",
    ]
    assert result.cleaned["notes"] == ["left voicemail", "", "na", "refund issued"]

    vocab = result.encodings["description"].vocabulary
    assert vocab.to_dict() == {"back": 1, "asap": 2, "cancel": 3, "order": 4, "call": 5}

    matrix = result.sequences["description"]
    assert matrix.dtype == np.int64
    assert matrix.tolist() == [
        [0, 5, 1, 2],
        [0, 1, 3, 4],
        [0, 0, 0, 0],
        [0, 3, 4, 2],
    ]

    # Only the primary field gets a vocabulary.
    assert "notes" not in result.sequences
    assert result.labels.tolist() == [1, 0, 0, 1]


def test_encoding_reuses_the_frozen_vocabulary(raw_records, data_cfg):
    result = vectorize_records(raw_records, data_cfg=data_cfg, logger=LOGGER)
    encoding = result.encodings["description"]

    matrix = encoding.transform(["Order cancelled, call back", None])
    assert matrix.tolist() == [[0, 4, 5, 1], [0, 0, 0, 0]]
    assert encoding.vocabulary is result.encodings["description"].vocabulary


def test_unrecognized_label_aborts(raw_records, data_cfg):
    raw_records.loc[1, "Escalated"] = "Maybe"

    with pytest.raises(UnrecognizedCategoryError) as excinfo:
        vectorize_records(raw_records, data_cfg=data_cfg, logger=LOGGER)
    assert excinfo.value.position == 1


def test_vocabulary_field_must_be_a_text_field(raw_records, data_cfg):
    data_cfg["preprocessing"]["vocab"]["fields"] = ["label"]

    with pytest.raises(ValueError):
        vectorize_records(raw_records, data_cfg=data_cfg, logger=LOGGER)


def test_fit_field_encoding(normalizer):
    encoding, matrix = fit_field_encoding(
        ["a a b", "b c"],
        field_name="text",
        normalizer=normalizer,
        max_vocab_size=None,
        max_length=3,
    )

    assert isinstance(encoding, FieldEncoding)
    assert encoding.field_name == "text"
    # Single letters are removed by the normalizer.
    assert len(encoding.vocabulary) == 0
    assert matrix.shape == (2, 3)


def test_fit_field_encoding_ranks_tokens(normalizer):
    encoding, matrix = fit_field_encoding(
        ["alpha alpha beta", "beta gamma 3pm"],
        field_name="text",
        normalizer=normalizer,
        max_vocab_size=2,
        max_length=2,
    )

    assert encoding.vocabulary.to_dict() == {"alpha": 1, "beta": 2}
    assert matrix.tolist() == [[1, 1], [0, 2]]

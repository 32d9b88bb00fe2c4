"""
Tests for binary label encoding.
"""

from __future__ import annotations

import numpy as np
import pytest

from textseq.errors import UnrecognizedCategoryError
from textseq.features.labels import LabelEncoder, encode_label


def test_concrete_scenario():
    assert encode_label("Y", positive_symbol="Y", negative_symbol="N") == 1
    assert encode_label("N", positive_symbol="Y", negative_symbol="N") == 0

    with pytest.raises(UnrecognizedCategoryError):
        encode_label("Maybe", "Y", "N")


@pytest.mark.parametrize("value", ["y", " Y", "", None, float("nan"), 1])
def test_values_outside_the_domain_are_rejected(value):
    with pytest.raises(UnrecognizedCategoryError) as excinfo:
        encode_label(value, "Y", "N")

    assert excinfo.value.expected == ("Y", "N")
    assert excinfo.value.position is None


def test_error_is_a_value_error():
    with pytest.raises(ValueError):
        encode_label("Maybe", "Y", "N")


def test_identical_symbols_are_rejected():
    with pytest.raises(ValueError):
        encode_label("Y", "Y", "Y")
    with pytest.raises(ValueError):
        LabelEncoder(positive="Y", negative="Y")


def test_assignment_follows_configuration_not_data_order():
    encoder = LabelEncoder(positive="N", negative="Y")
    assert encoder.encode_many(["Y", "N"]).tolist() == [0, 1]
    assert encoder.mapping == {"Y": 0, "N": 1}


def test_encode_many_returns_int64_array():
    encoded = LabelEncoder(positive="spam", negative="ham").encode_many(["ham", "spam", "spam"])

    assert encoded.dtype == np.int64
    assert encoded.tolist() == [0, 1, 1]


def test_encode_many_reports_row_position():
    encoder = LabelEncoder(positive="Y", negative="N")

    with pytest.raises(UnrecognizedCategoryError) as excinfo:
        encoder.encode_many(["Y", "N", "?", "Y"])

    assert excinfo.value.position == 2
    assert excinfo.value.value == "?"
    assert "row 2" in str(excinfo.value)


def test_label_total_is_independent_of_row_order():
    encoder = LabelEncoder(positive="Y", negative="N")
    values = ["Y", "N", "N", "Y", "Y"]

    assert encoder.encode_many(values).sum() == encoder.encode_many(values[::-1]).sum() == 3

"""
Shared fixtures for the test suite.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import pytest

from textseq.features.preprocessing import TextNormalizer, build_normalizer


REPO_ROOT = Path(__file__).resolve().parents[1]

# Inputs that exercise every normalization step and their interactions.
TRICKY_TEXTS: List[str] = [
    "",
    "   ",
    "Call*Back.ASAP at 3pm EDT",
    "x a-t y",
    "Order #12345 shipped on 3/4 at 10:30am EST.",
    "It's a dog's life...",
    "***",
    "a.b.c.d",
    "Tabs\tand\nnewlines\r\nhere",
    "UNICODE “quotes” — dashes ½ ² ３",
    "at-at at.at AT",
    "e.g. i.e. etc.",
    "end.Next.Time*again",
    "pm-edt 4PM EDT",
]

_DATA_CFG: Dict[str, Any] = {
    "dataset": {
        "columns": {
            "description": "Description",
            "notes": "Notes",
            "label": "Escalated",
        },
        "text_fields": ["description", "notes"],
        "label_field": "label",
        "positive_label": "Y",
        "negative_label": "N",
    },
    "preprocessing": {
        "stopwords": {"source": "list", "extra": ["at", "the", "to"]},
        "domain_words": ["pm", "edt"],
        "n_jobs": 1,
        "vocab": {"fields": ["description"], "max_size": 5},
        "sequence": {"max_length": 4},
    },
}


@pytest.fixture
def data_cfg() -> Dict[str, Any]:
    """A small in-memory data configuration."""
    return copy.deepcopy(_DATA_CFG)


@pytest.fixture
def normalizer() -> TextNormalizer:
    """Normalizer with stopwords {"at"} and domain words {"pm", "edt"}."""
    return build_normalizer(stopwords=["at"], domain_words=["pm", "edt"])


@pytest.fixture
def raw_records() -> pd.DataFrame:
    """Records using the source column names of ``data_cfg``."""
    return pd.DataFrame(
        {
            "Description": [
                "Call*Back.ASAP at 3pm EDT",
                "Customer called back to cancel the order",
                None,
                "Cancel order 42 ASAP!!",
            ],
            "Notes": ["left voicemail", None, "n/a", "Refund issued."],
            "Escalated": ["Y", "N", "N", "Y"],
            "Priority": ["high", "low", "low", "high"],
        }
    )


def pytest_generate_tests(metafunc):
    # Tests asking for ``tricky_text`` run once per entry of TRICKY_TEXTS.
    if "tricky_text" in metafunc.fixturenames:
        metafunc.parametrize("tricky_text", TRICKY_TEXTS)


@pytest.fixture
def tricky_texts() -> List[str]:
    return list(TRICKY_TEXTS)


@pytest.fixture
def repo_root() -> Path:
    """Root of the repository (holds config/)."""
    return REPO_ROOT

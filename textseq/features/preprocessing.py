"""
Text normalization utilities for the free-text fields.

This module implements the cleaning chain applied to every free-text
value before vocabulary building and sequence encoding. The steps run in
a fixed order, and the order is part of the contract:

1. lowercasing
2. asterisk -> space
3. space after every period
4. digit removal
5. stopword removal (whole words only)
6. domain word removal (whole words only, e.g. "pm", "edt")
7. punctuation removal
8. orphaned single-letter removal
9. whitespace collapsing
10. trimming

Each step is a plain ``str -> str`` function so it can be tested on its
own. ``TextNormalizer`` bundles the configured chain, and ``clean`` maps
it over one field of the record set. Stopword lists come from the
configuration (config/data.yaml, "preprocessing" section) and can be
drawn from scikit-learn or NLTK.
"""

from __future__ import annotations

import re
import string
import unicodedata
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

import pandas as pd
from nltk.corpus import stopwords as nltk_stopwords
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS as SKLEARN_EN_STOPWORDS

from textseq.utils.pipeline_utils import map_ordered


NormalizationStep = Callable[[str], str]

_ASCII_PUNCTUATION = frozenset(string.punctuation)
_WHITESPACE_RUN = re.compile(r"\s+")
_STANDALONE_CHAR = re.compile(r"(?<!\S)\S(?!\S)")


def is_absent(value: Any) -> bool:
    """
    Return True for the "no value" markers a record set can carry
    (None, NaN, pandas.NA).
    """
    if value is None:
        return True
    if isinstance(value, str):
        return False
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


# ---------------------------------------------------------------------------
# Individual normalization steps
# ---------------------------------------------------------------------------


def lowercase(text: str) -> str:
    return text.lower()


def replace_asterisks(text: str) -> str:
    return text.replace("*", " ")


def space_after_periods(text: str) -> str:
    """
    Insert a space after every period so that "end.Next" does not become
    a single token once punctuation is removed.
    """
    return text.replace(".", ". ")


def remove_digits(text: str) -> str:
    return "".join(ch for ch in text if not ch.isdigit())


def _is_punctuation(ch: str) -> bool:
    return ch in _ASCII_PUNCTUATION or unicodedata.category(ch).startswith("P")


def remove_punctuation(text: str) -> str:
    """
    Delete punctuation characters without replacement.

    Covers ASCII punctuation (``string.punctuation``) and every Unicode
    character in a punctuation category.
    """
    return "".join(ch for ch in text if not _is_punctuation(ch))


def remove_single_letters(text: str) -> str:
    """
    Delete single alphabetic characters that stand alone between
    whitespace (or at either end of the string).

    These are mostly fragments left behind by digit and punctuation
    removal, e.g. the "s" in "customer's" -> "customer s".
    """
    return _STANDALONE_CHAR.sub(
        lambda m: "" if m.group(0).isalpha() else m.group(0), text
    )


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RUN.sub(" ", text)


def strip_whitespace(text: str) -> str:
    return text.strip()


class WordRemover:
    """
    Normalization step removing a fixed list of words.

    Matching is case-insensitive and anchored on word boundaries, so
    "at" is removed from "meet at noon" but not from "later".
    """

    def __init__(self, words: Iterable[str]) -> None:
        cleaned = {str(w).strip().lower() for w in words if w is not None}
        cleaned.discard("")
        self.words: Tuple[str, ...] = tuple(sorted(cleaned))

        self._pattern: Optional[re.Pattern] = None
        if self.words:
            # Longest first so overlapping alternatives match greedily.
            alternatives = sorted(self.words, key=len, reverse=True)
            self._pattern = re.compile(
                r"\b(?:" + "|".join(re.escape(w) for w in alternatives) + r")\b",
                flags=re.IGNORECASE,
            )

    def __call__(self, text: str) -> str:
        if self._pattern is None:
            return text
        return self._pattern.sub("", text)

    def __repr__(self) -> str:
        return f"WordRemover({len(self.words)} words)"


# ---------------------------------------------------------------------------
# Stopwords
# ---------------------------------------------------------------------------


def get_stopword_set(
    source: str = "sklearn",
    language: str = "english",
    extra: Optional[Iterable[str]] = None,
) -> Set[str]:
    """
    Build the stopword set used by the normalizer.

    Parameters
    ----------
    source : str
        Where the base list comes from:
        - "sklearn": scikit-learn's built-in English list
        - "nltk": ``nltk.corpus.stopwords`` for ``language`` (the corpus
          must have been fetched with ``nltk.download("stopwords")``)
        - "list" / "none": no base list, only ``extra``
    language : str
        Language name, e.g. "english".
    extra : Optional[Iterable[str]]
        Additional words appended to the base list.

    Returns
    -------
    Set[str]
        Lower-cased stopwords.

    Raises
    ------
    ValueError
        If the source is unknown, or sklearn is asked for a language
        other than English.
    LookupError
        If the NLTK stopwords corpus is not installed.
    """
    src = (source or "list").lower()
    lang = (language or "english").lower()

    if src == "sklearn":
        if lang != "english":
            raise ValueError(
                f"scikit-learn only ships English stopwords, got language={language!r}."
            )
        words: Set[str] = set(SKLEARN_EN_STOPWORDS)
    elif src == "nltk":
        words = set(nltk_stopwords.words(lang))
    elif src in ("list", "none"):
        words = set()
    else:
        raise ValueError(
            f"Unknown stopword source: {source!r}. Expected 'sklearn', 'nltk' or 'list'."
        )

    if extra:
        words.update(str(w) for w in extra)

    return {w.lower() for w in words}


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


class TextNormalizer:
    """
    The ordered cleaning chain for a free-text field.

    One instance is shared by every field processed the same way. The
    whole chain is re-applied until the text stops changing, because
    punctuation removal can join fragments into a removable word
    ("a-t" -> "at"); for ordinary text the second pass is a no-op.
    """

    def __init__(
        self,
        stopwords: Iterable[str] = (),
        domain_words: Iterable[str] = (),
    ) -> None:
        self.stopword_remover = WordRemover(stopwords)
        self.domain_word_remover = WordRemover(domain_words)
        self.steps: Tuple[NormalizationStep, ...] = (
            lowercase,
            replace_asterisks,
            space_after_periods,
            remove_digits,
            self.stopword_remover,
            self.domain_word_remover,
            remove_punctuation,
            remove_single_letters,
            collapse_whitespace,
            strip_whitespace,
        )

    def apply_once(self, text: str) -> str:
        for step in self.steps:
            text = step(text)
        return text

    def __call__(self, text: Any) -> str:
        if is_absent(text):
            return ""
        if not isinstance(text, str):
            text = str(text)

        previous = None
        while text != previous:
            previous = text
            text = self.apply_once(text)
        return text

    def __repr__(self) -> str:
        return (
            f"TextNormalizer(stopwords={len(self.stopword_remover.words)}, "
            f"domain_words={len(self.domain_word_remover.words)})"
        )


def build_normalizer(
    stopwords: Iterable[str] = (),
    domain_words: Iterable[str] = (),
) -> TextNormalizer:
    return TextNormalizer(stopwords=stopwords, domain_words=domain_words)


def build_normalizer_from_config(preprocessing_cfg: Dict[str, Any]) -> TextNormalizer:
    """
    Build the normalizer described by the "preprocessing" section of
    config/data.yaml.

    Parameters
    ----------
    preprocessing_cfg : Dict[str, Any]
        The "preprocessing" section, with optional "stopwords" and
        "domain_words" keys.

    Returns
    -------
    TextNormalizer
        Configured normalizer.
    """
    sw_cfg = preprocessing_cfg.get("stopwords", {}) or {}
    stopwords = get_stopword_set(
        source=sw_cfg.get("source", "sklearn"),
        language=sw_cfg.get("language", "english"),
        extra=sw_cfg.get("extra", []) or [],
    )
    domain_words = preprocessing_cfg.get("domain_words", []) or []
    return build_normalizer(stopwords=stopwords, domain_words=domain_words)


def normalize_text(text: Any, normalizer: Optional[TextNormalizer] = None) -> str:
    """
    Normalize one raw text value. Absent values give an empty string.
    """
    if normalizer is None:
        normalizer = build_normalizer()
    return normalizer(text)


# ---------------------------------------------------------------------------
# Tokenization
# ---------------------------------------------------------------------------


def tokenize_text(text: Any) -> List[str]:
    """
    Whitespace tokenizer for cleaned text.

    Parameters
    ----------
    text : Any
        Cleaned text; absent values are treated as empty.

    Returns
    -------
    List[str]
        Non-empty tokens in document order.
    """
    if is_absent(text) or not text:
        return []
    return str(text).split()


# ---------------------------------------------------------------------------
# Corpus cleaning
# ---------------------------------------------------------------------------


def clean(
    text_field_values: Union[pd.Series, Sequence[Any], Iterable[Any]],
    normalizer: Optional[TextNormalizer] = None,
    n_jobs: int = 1,
) -> Union[pd.Series, List[str]]:
    """
    Apply the normalizer to every value of one free-text field.

    ``output[i]`` is the cleaned form of ``input[i]``; records do not
    influence each other, so the work may be spread over ``n_jobs``
    workers without changing the result.

    Parameters
    ----------
    text_field_values : Union[pd.Series, Sequence[Any], Iterable[Any]]
        Raw values of one field across all records.
    normalizer : Optional[TextNormalizer]
        Cleaning chain; defaults to one without stopwords or domain words.
    n_jobs : int
        Number of joblib workers (1 = run inline).

    Returns
    -------
    Union[pd.Series, List[str]]
        A Series with the same index when given a Series, otherwise a list.
    """
    if normalizer is None:
        normalizer = build_normalizer()

    if isinstance(text_field_values, pd.Series):
        cleaned = map_ordered(normalizer, text_field_values.tolist(), n_jobs=n_jobs)
        return pd.Series(
            cleaned,
            index=text_field_values.index,
            name=text_field_values.name,
            dtype=object,
        )

    return map_ordered(normalizer, list(text_field_values), n_jobs=n_jobs)

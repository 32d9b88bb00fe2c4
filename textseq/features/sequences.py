"""
Text -> integer sequence conversion.

This module provides:
- ``encode``: cleaned text -> list of vocabulary indices (OOV tokens are
  dropped, not replaced by an unknown index)
- ``pad``: truncate from the end / left-pad with zeros to a fixed length
- corpus-level helpers returning a numpy matrix ready for a classifier
"""

from __future__ import annotations

import operator
from functools import partial
from typing import Any, Iterable, List, Sequence

import numpy as np

from textseq.features.preprocessing import tokenize_text
from textseq.features.vocabulary import PAD_INDEX, Vocabulary
from textseq.utils.pipeline_utils import map_ordered


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode(cleaned_value: Any, vocabulary: Vocabulary) -> List[int]:
    """
    Map a cleaned string to vocabulary indices in document order.

    Tokens missing from the vocabulary are skipped, so the sequence can
    be shorter than the token count. Empty, absent or fully
    out-of-vocabulary input gives an empty list.

    Parameters
    ----------
    cleaned_value : Any
        Cleaned text (output of the normalizer).
    vocabulary : Vocabulary
        Frozen vocabulary of the field.

    Returns
    -------
    List[int]
        Positive indices, one per recognized token.
    """
    lookup = vocabulary.token_to_index
    return [lookup[token] for token in tokenize_text(cleaned_value) if token in lookup]


def encode_corpus(
    cleaned_values: Iterable[Any],
    vocabulary: Vocabulary,
    n_jobs: int = 1,
) -> List[List[int]]:
    """
    Encode every value of a cleaned corpus, preserving order.
    """
    return map_ordered(
        partial(encode, vocabulary=vocabulary),
        list(cleaned_values),
        n_jobs=n_jobs,
    )


# ---------------------------------------------------------------------------
# Padding
# ---------------------------------------------------------------------------


def _check_target_length(target_length: Any) -> int:
    """
    Return ``target_length`` as an int, rejecting negative or non-integral
    values (2.9 is an error, not 2).
    """
    if isinstance(target_length, bool):
        raise ValueError(f"target_length must be an integer, got {target_length!r}.")
    try:
        length = operator.index(target_length)
    except TypeError:
        raise ValueError(
            f"target_length must be an integer, got {target_length!r}."
        ) from None
    if length < 0:
        raise ValueError(f"target_length must be >= 0, got {length}.")
    return length


def pad(sequence: Sequence[int], target_length: int) -> List[int]:
    """
    Normalize a sequence to exactly ``target_length`` items.

    Longer sequences keep their first ``target_length`` items; shorter
    ones are left-padded with ``PAD_INDEX``.

    Raises
    ------
    ValueError
        If ``target_length`` is negative or not an integer.
    """
    target_length = _check_target_length(target_length)

    ids = list(sequence)
    if len(ids) >= target_length:
        return ids[:target_length]
    return [PAD_INDEX] * (target_length - len(ids)) + ids


def pad_sequences(
    sequences: Iterable[Sequence[int]],
    target_length: int,
) -> np.ndarray:
    """
    Pad/truncate every sequence and stack them into a 2D array.

    Returns
    -------
    np.ndarray
        int64 array of shape (n_sequences, target_length).
    """
    target_length = _check_target_length(target_length)
    padded = [pad(seq, target_length) for seq in sequences]
    if not padded:
        return np.zeros((0, target_length), dtype=np.int64)
    return np.array(padded, dtype=np.int64)


def texts_to_matrix(
    cleaned_values: Iterable[Any],
    vocabulary: Vocabulary,
    target_length: int,
    n_jobs: int = 1,
) -> np.ndarray:
    """
    Encode and pad a cleaned corpus in one call.
    """
    sequences = encode_corpus(cleaned_values, vocabulary, n_jobs=n_jobs)
    return pad_sequences(sequences, target_length)

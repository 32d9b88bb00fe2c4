"""
Vocabulary construction for cleaned text fields.

A Vocabulary maps each retained token to a positive integer index:

- tokens are ranked by corpus frequency (most frequent -> index 1)
- ties keep the order in which tokens were first seen in the corpus
- only the top ``max_size`` tokens are kept; the rest are out of
  vocabulary and get dropped at encoding time
- index 0 is reserved for padding and never assigned to a token

The Vocabulary is immutable once built and is passed explicitly to the
encoder, so every sequence of a field comes from the same instance.
"""

from __future__ import annotations

import numbers
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from textseq.features.preprocessing import tokenize_text


PAD_INDEX = 0


@dataclass(frozen=True)
class Vocabulary:
    """
    Frozen token -> index mapping.

    Attributes
    ----------
    token_to_index : Mapping[str, int]
        Read-only mapping, iterated in index order.
    max_size : Optional[int]
        Cap the vocabulary was built with (None = uncapped).
    """

    token_to_index: Mapping[str, int] = field(default_factory=dict)
    max_size: Optional[int] = None

    def __post_init__(self) -> None:
        for idx in self.token_to_index.values():
            if isinstance(idx, bool) or not isinstance(idx, numbers.Integral):
                raise ValueError(f"Vocabulary indices must be integers, got {idx!r}.")
        converted = {token: int(idx) for token, idx in self.token_to_index.items()}
        indices = list(converted.values())
        if PAD_INDEX in indices:
            raise ValueError(f"Index {PAD_INDEX} is reserved for padding.")
        # Indices must be exactly 1..n: positive, unique and without gaps.
        if sorted(indices) != list(range(1, len(indices) + 1)):
            raise ValueError(
                f"Vocabulary indices must be the distinct integers 1..{len(indices)}, "
                f"got {sorted(indices)}."
            )
        if self.max_size is not None and len(indices) > self.max_size:
            raise ValueError(
                f"Vocabulary has {len(indices)} tokens, more than max_size={self.max_size}."
            )

        ordered = dict(sorted(converted.items(), key=lambda kv: kv[1]))
        object.__setattr__(self, "token_to_index", MappingProxyType(ordered))

    def __hash__(self) -> int:
        return hash((tuple(self.token_to_index.items()), self.max_size))

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild from a plain dict.
        return (self.__class__, (dict(self.token_to_index), self.max_size))

    def __len__(self) -> int:
        return len(self.token_to_index)

    def __contains__(self, token: object) -> bool:
        return token in self.token_to_index

    def __getitem__(self, token: str) -> int:
        return self.token_to_index[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self.token_to_index)

    def get(self, token: str, default: Optional[int] = None) -> Optional[int]:
        return self.token_to_index.get(token, default)

    @property
    def size(self) -> int:
        return len(self.token_to_index)

    @property
    def tokens(self) -> List[str]:
        """Tokens in index order (index 1 first)."""
        return list(self.token_to_index)

    def to_dict(self) -> Dict[str, int]:
        return dict(self.token_to_index)


def count_tokens(cleaned_values: Iterable[Any]) -> Counter:
    """
    Count token frequencies over a cleaned corpus.

    The returned Counter keeps first-seen order for its keys, which is
    what the tie-break in ``build_vocabulary`` relies on.
    """
    counts: Counter = Counter()
    for value in cleaned_values:
        counts.update(tokenize_text(value))
    return counts


def build_vocabulary(
    cleaned_values: Iterable[Any],
    max_size: Optional[int],
) -> Vocabulary:
    """
    Build a frequency-ranked, size-capped Vocabulary from a cleaned corpus.

    Parameters
    ----------
    cleaned_values : Iterable[Any]
        Cleaned strings (output of ``clean``); absent values count as empty.
    max_size : Optional[int]
        Maximum number of tokens to keep. None keeps every token.

    Returns
    -------
    Vocabulary
        Tokens indexed 1..min(max_size, distinct tokens). An empty corpus
        gives an empty Vocabulary.

    Raises
    ------
    ValueError
        If ``max_size`` is negative.
    """
    if max_size is not None:
        max_size = int(max_size)
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0 or None, got {max_size}.")

    counts = count_tokens(cleaned_values)

    # sorted() is stable: equal counts keep first-seen order.
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    if max_size is not None:
        ranked = ranked[:max_size]

    token_to_index = {token: idx for idx, (token, _) in enumerate(ranked, start=1)}
    return Vocabulary(token_to_index=token_to_index, max_size=max_size)

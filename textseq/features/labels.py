"""
Binary label encoding.

The target field carries one of two string symbols (e.g. "Y"/"N"). Which
symbol maps to 1 is always stated by the caller, never inferred from the
data, so batches seen in a different order cannot flip the labels.
Values outside the two symbols raise ``UnrecognizedCategoryError``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable

import numpy as np

from textseq.errors import UnrecognizedCategoryError


def _check_symbols(positive_symbol: str, negative_symbol: str) -> None:
    if positive_symbol == negative_symbol:
        raise ValueError(
            f"Positive and negative symbols must differ, got {positive_symbol!r} twice."
        )


def encode_label(value: Any, positive_symbol: str, negative_symbol: str) -> int:
    """
    Map a two-valued categorical value to 1 (positive) or 0 (negative).

    Parameters
    ----------
    value : Any
        Raw categorical value.
    positive_symbol : str
        Symbol encoded as 1.
    negative_symbol : str
        Symbol encoded as 0.

    Returns
    -------
    int
        1 or 0.

    Raises
    ------
    UnrecognizedCategoryError
        If ``value`` is neither symbol (absent values included).
    ValueError
        If both symbols are the same.
    """
    _check_symbols(positive_symbol, negative_symbol)

    if isinstance(value, str):
        if value == positive_symbol:
            return 1
        if value == negative_symbol:
            return 0
    raise UnrecognizedCategoryError(value, (positive_symbol, negative_symbol))


class LabelEncoder:
    """
    Fixed two-symbol label encoder.

    Example
    -------
    >>> encoder = LabelEncoder(positive="Y", negative="N")
    >>> encoder.encode("Y")
    1
    >>> encoder.encode_many(["N", "Y", "N"]).tolist()
    [0, 1, 0]
    """

    def __init__(self, positive: str, negative: str) -> None:
        _check_symbols(positive, negative)
        self.positive = positive
        self.negative = negative

    @property
    def mapping(self) -> Dict[str, int]:
        return {self.negative: 0, self.positive: 1}

    def encode(self, value: Any) -> int:
        return encode_label(value, self.positive, self.negative)

    def encode_many(self, values: Iterable[Any]) -> np.ndarray:
        """
        Encode a column of labels.

        The first unrecognized value aborts the batch; the raised error
        carries its row position.
        """
        encoded = []
        for position, value in enumerate(values):
            try:
                encoded.append(self.encode(value))
            except UnrecognizedCategoryError as exc:
                raise UnrecognizedCategoryError(
                    exc.value, exc.expected, position=position
                ) from None
        return np.array(encoded, dtype=np.int64)

    def __repr__(self) -> str:
        return f"LabelEncoder(positive={self.positive!r}, negative={self.negative!r})"

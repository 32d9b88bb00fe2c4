"""
Exceptions raised by the textseq pipeline.

Only label encoding can fail on data: normalization, vocabulary building,
encoding and padding are total over their inputs.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple


class UnrecognizedCategoryError(ValueError):
    """
    A categorical value fell outside its declared two-valued domain.

    Attributes
    ----------
    value : Any
        The offending value.
    expected : Tuple[str, str]
        The (positive, negative) symbols that were accepted.
    position : Optional[int]
        Row position of the value when raised from a batch encode.
    """

    def __init__(
        self,
        value: Any,
        expected: Tuple[str, str],
        position: Optional[int] = None,
    ) -> None:
        self.value = value
        self.expected = expected
        self.position = position

        where = f" at row {position}" if position is not None else ""
        super().__init__(
            f"Unrecognized category {value!r}{where}; "
            f"expected one of {list(expected)}."
        )

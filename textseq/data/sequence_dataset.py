"""
PyTorch Dataset over the vectorized records.

Wraps the padded sequence matrix of one text field together with the
encoded labels so the output can be fed straight into a DataLoader.
"""

from __future__ import annotations

from typing import Dict, Sequence, Union

import numpy as np
import torch
from torch.utils.data import Dataset


class SequenceDataset(Dataset):
    """
    Dataset of fixed-length token ID sequences and binary labels.

    Each item is a dictionary with:
    - "input_ids": LongTensor of shape (max_length,)
    - "label": LongTensor scalar with the class index (0 or 1)
    """

    def __init__(
        self,
        sequences: Union[np.ndarray, Sequence[Sequence[int]]],
        labels: Union[np.ndarray, Sequence[int]],
    ) -> None:
        """
        Parameters
        ----------
        sequences : Union[np.ndarray, Sequence[Sequence[int]]]
            Padded sequences, shape (N, L).
        labels : Union[np.ndarray, Sequence[int]]
            Encoded labels, shape (N,).
        """
        sequences_np = np.asarray(sequences, dtype=np.int64)
        labels_np = np.asarray(labels, dtype=np.int64)

        if sequences_np.ndim != 2:
            raise ValueError(
                f"Expected a 2D sequence matrix, got shape {sequences_np.shape}."
            )
        if len(sequences_np) != len(labels_np):
            raise ValueError(
                f"Number of sequences ({len(sequences_np)}) and labels "
                f"({len(labels_np)}) must be the same."
            )

        self.input_ids = torch.from_numpy(sequences_np)  # shape: (N, L)
        self.labels = torch.from_numpy(labels_np)  # shape: (N,)

    @property
    def max_length(self) -> int:
        return int(self.input_ids.size(1))

    def __len__(self) -> int:
        return self.input_ids.size(0)

    def __getitem__(self, idx: int) -> Dict[str, torch.Tensor]:
        return {
            "input_ids": self.input_ids[idx],
            "label": self.labels[idx],
        }

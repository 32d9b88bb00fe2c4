"""
Top-level package for the textseq record vectorization pipeline.

This package turns tabular records with free-text fields into numeric
input for a downstream classifier:

- text normalization and corpus cleaning
- frequency-ranked, size-capped vocabulary building
- encoding of cleaned text into index sequences, and fixed-length padding
- binary label encoding with an explicit positive/negative assignment
- record loading, configuration and a PyTorch dataset over the output
"""

from textseq.errors import UnrecognizedCategoryError
from textseq.features.labels import LabelEncoder, encode_label
from textseq.features.preprocessing import TextNormalizer, build_normalizer, clean, normalize_text
from textseq.features.sequences import encode, pad, pad_sequences
from textseq.features.vocabulary import PAD_INDEX, Vocabulary, build_vocabulary

__all__ = [
    "PAD_INDEX",
    "LabelEncoder",
    "TextNormalizer",
    "UnrecognizedCategoryError",
    "Vocabulary",
    "build_normalizer",
    "build_vocabulary",
    "clean",
    "encode",
    "encode_label",
    "normalize_text",
    "pad",
    "pad_sequences",
]

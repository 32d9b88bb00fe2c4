"""
Data loading and dataset utilities.

This subpackage provides:
- the data configuration loader and record loading from CSV
- the fixed label mapping
- a PyTorch Dataset over the vectorized output.
"""

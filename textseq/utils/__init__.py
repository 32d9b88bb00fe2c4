"""
Shared utility functions.

This subpackage includes:
- pipeline configuration loading
- path management
- order-preserving parallel mapping
- lightweight logging helpers used across the project.
"""

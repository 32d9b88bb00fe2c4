"""
Text preprocessing and feature extraction utilities.

This subpackage includes:
- the ordered text normalization chain and corpus cleaning
- vocabulary building over cleaned text
- sequence encoding and padding
- binary label encoding.
"""

"""Data models for plist values.

This module provides the value model shared by the reader and writer,
and the diagnostic records the reader reports.
"""

from .diagnostics import ReadResult, StructuralWarning
from .value import MAX_SAFE_INTEGER, BigInt, PlistValue, is_safe_integer

__all__ = [
    "MAX_SAFE_INTEGER",
    "BigInt",
    "PlistValue",
    "ReadResult",
    "StructuralWarning",
    "is_safe_integer",
]

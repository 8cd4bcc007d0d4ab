"""In-memory value model for property lists.

A plist value is one of a closed set of native Python types. The only
non-builtin member is BigInt, which marks integers whose magnitude is
beyond what a 64-bit double can represent exactly.
"""

from __future__ import annotations

from datetime import datetime
from typing import TypeAlias, Union

# Largest integer magnitude a double's 53-bit mantissa holds exactly.
MAX_SAFE_INTEGER = 2**53 - 1


class BigInt(int):
    """An integer read from beyond the exact-double range.

    Behaves as a plain int in every arithmetic and comparison; the
    subclass only records that the value needed arbitrary precision.
    """

    def __repr__(self) -> str:
        return f"BigInt({int.__repr__(self)})"

    # int has no __str__ of its own; without this str() would use __repr__
    def __str__(self) -> str:
        return int.__repr__(self)

    @classmethod
    def from_text(cls, text: str) -> int:
        """Parse decimal text into an int or BigInt.

        Args:
            text: Decimal integer text, optionally signed

        Returns:
            A plain int if the value is within MAX_SAFE_INTEGER,
            otherwise a BigInt with every digit preserved

        Raises:
            ValueError: If text is not a decimal integer
        """
        value = int(text, 10)
        if is_safe_integer(value):
            return value
        return cls(value)


def is_safe_integer(value: int) -> bool:
    """Check whether an integer fits the exact-double range."""
    return -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


PlistValue: TypeAlias = Union[
    dict[str, "PlistValue"],
    list["PlistValue"],
    str,
    int,
    float,
    bool,
    datetime,
    bytes,
    None,
]

"""Custom exception hierarchy for xmlplist.

All exceptions inherit from PlistError, so callers can catch every
library-specific failure with a single except clause.

Exception Hierarchy:
    PlistError (base)
    ├── FormatError
    │   ├── InvalidXmlError
    │   ├── MissingRootError
    │   ├── InvalidDataError
    │   ├── InvalidNumberError
    │   ├── InvalidDateError
    │   └── StructuralError
    ├── UnsupportedTypeError
    └── InvalidStringError

Structural problems that the reader can recover from (a dict entry
without a key, an unknown tag) are not exceptions; see
xmlplist.models.diagnostics.StructuralWarning.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.diagnostics import StructuralWarning


class PlistError(Exception):
    """Base exception for all xmlplist errors."""


# --- Format Errors ---


class FormatError(PlistError):
    """Error in plist document format or structure.

    Raised when reading a document that cannot be turned into a value.
    No partial result is ever returned alongside this error.
    """


class InvalidXmlError(FormatError):
    """The document is not well-formed XML, or was rejected as unsafe."""

    def __init__(self, message: str = "Malformed XML document") -> None:
        super().__init__(message)


class MissingRootError(FormatError):
    """The document has no <plist> element."""

    def __init__(self, message: str = "missing plist root") -> None:
        super().__init__(message)


class InvalidDataError(FormatError):
    """A <data> element does not hold valid base64."""

    def __init__(self, message: str = "Invalid base64 payload") -> None:
        super().__init__(message)


class InvalidNumberError(FormatError):
    """An <integer> or <real> element holds non-numeric text.

    Attributes:
        tag: Tag of the offending element
        text: The text that failed to parse
    """

    def __init__(self, tag: str, text: str) -> None:
        self.tag = tag
        self.text = text
        super().__init__(f"Invalid <{tag}> value: {text!r}")


class InvalidDateError(FormatError):
    """A <date> element holds text that is not an ISO-8601 timestamp."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid <date> value: {text!r}")


class StructuralError(FormatError):
    """Structural warnings were found while reading in strict mode.

    Attributes:
        warnings: Every warning collected before the read was aborted
    """

    def __init__(self, warnings: list[StructuralWarning]) -> None:
        self.warnings = list(warnings)
        summary = "; ".join(str(w) for w in self.warnings)
        super().__init__(f"Malformed plist structure: {summary}")


# --- Write Errors ---


class UnsupportedTypeError(PlistError, TypeError):
    """A value outside the plist value model was given to the writer.

    Also a TypeError, since passing such an object is a programming
    error rather than a data problem.
    """

    def __init__(self, value: object, context: str = "value") -> None:
        self.value = value
        super().__init__(
            f"Cannot serialize {context} of type {type(value).__name__} to plist"
        )


class InvalidStringError(PlistError, ValueError):
    """A string holds characters that an XML 1.0 document cannot carry.

    Control characters other than tab, newline and carriage return,
    lone surrogates, U+FFFE and U+FFFF cannot be written. Store such
    content as bytes instead.
    """

    def __init__(self, text: str, context: str = "string") -> None:
        self.text = text
        super().__init__(
            f"{context.capitalize()} {text!r} contains characters not allowed in XML; "
            "use bytes instead"
        )

"""Diagnostic records produced while reading a plist."""

from __future__ import annotations

from dataclasses import dataclass, field

from .value import PlistValue


@dataclass(frozen=True, slots=True)
class StructuralWarning:
    """A recoverable structural problem found by the reader.

    Attributes:
        message: Human-readable description
        tag: Tag of the offending element, if there was one
        path: Dict keys and array indices locating the problem: the
            offending element for unknown tags, the enclosing dict for
            malformed pairs (empty for the document root)
    """

    message: str
    tag: str | None = None
    path: tuple[str | int, ...] = ()

    @property
    def location(self) -> str:
        """Path rendered as a slash-separated string, e.g. ``/items/2``."""
        return "/" + "/".join(str(part) for part in self.path)

    def __str__(self) -> str:
        if self.tag is None:
            return f"{self.message} at {self.location}"
        return f"{self.message} <{self.tag}> at {self.location}"


@dataclass(slots=True)
class ReadResult:
    """Value read from a document, with the warnings raised on the way."""

    value: PlistValue
    warnings: list[StructuralWarning] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """True if the document was read without any warnings."""
        return not self.warnings

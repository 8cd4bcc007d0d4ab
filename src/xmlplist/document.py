"""High-level API for plist documents.

This module provides the main interface for working with XML plists:
- Reading documents from text, bytes, files or paths
- Writing values back out as documents
- The Plist class, pairing a value with the file it came from
"""

from __future__ import annotations

import io
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any

from .models import PlistValue, ReadResult, StructuralWarning
from .parsing import PlistReader, PlistWriter


@dataclass(frozen=True, slots=True)
class ReadSettings:
    """Settings for reading plist documents.

    Attributes:
        strict: Raise StructuralError on any structural warning instead
            of returning a best-effort value
        dict_type: Mapping class built for each <dict> element
    """

    strict: bool = False
    dict_type: Callable[[], MutableMapping[str, Any]] = dict

    def __post_init__(self) -> None:
        """Validate settings."""
        if not (
            isinstance(self.dict_type, type)
            and issubclass(self.dict_type, MutableMapping)
        ):
            raise ValueError(f"dict_type must be a mutable mapping class: {self.dict_type!r}")


@dataclass(frozen=True, slots=True)
class WriteSettings:
    """Settings for writing plist documents.

    Attributes:
        indent: Whitespace written per nesting level, or None for a
            compact single-line body
        sort_keys: Write dict entries sorted by key
    """

    indent: str | None = None
    sort_keys: bool = False

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.indent is not None and self.indent.strip():
            raise ValueError(f"indent must be whitespace only: {self.indent!r}")

    @classmethod
    def pretty(cls) -> WriteSettings:
        """Tab-indented output, the layout Apple tools produce."""
        return cls(indent="\t")


def read_with_diagnostics(
    data: str | bytes, settings: ReadSettings | None = None
) -> ReadResult:
    """Read a plist document, returning the value and any warnings.

    Args:
        data: Complete plist document
        settings: Read settings (defaults used if not given)

    Returns:
        ReadResult with the value and the structural warnings found

    Raises:
        FormatError: If the document cannot be read
    """
    settings = settings or ReadSettings()
    reader = PlistReader(data, dict_type=settings.dict_type)
    return reader.read(strict=settings.strict)


def read(data: str | bytes, settings: ReadSettings | None = None) -> PlistValue:
    """Read a plist document into a value.

    Structural warnings are logged; use read_with_diagnostics() to
    inspect them.

    Raises:
        FormatError: If the document cannot be read
    """
    return read_with_diagnostics(data, settings).value


def write(value: PlistValue, settings: WriteSettings | None = None) -> str:
    """Write a value as a plist document.

    Args:
        value: Value to serialize
        settings: Write settings (defaults used if not given)

    Returns:
        Complete document text

    Raises:
        UnsupportedTypeError: If the value holds an object outside the
            plist value model
        InvalidStringError: If a string holds characters XML cannot carry
    """
    settings = settings or WriteSettings()
    writer = PlistWriter(indent=settings.indent, sort_keys=settings.sort_keys)
    return writer.write(value)


def load(
    path_or_file: str | Path | IO[bytes] | IO[str],
    settings: ReadSettings | None = None,
) -> PlistValue:
    """Read a plist document from a path or an open file.

    Raises:
        FileNotFoundError: If a path is given and doesn't exist
        FormatError: If the document cannot be read
    """
    if isinstance(path_or_file, (str, Path)):
        return Plist.open(path_or_file, settings=settings).value
    return read(path_or_file.read(), settings)


def dump(
    value: PlistValue,
    path_or_file: str | Path | IO[bytes] | IO[str],
    settings: WriteSettings | None = None,
) -> None:
    """Write a value as a plist document to a path or an open file.

    Text-mode files receive str, any other file object UTF-8 bytes.
    """
    text = write(value, settings)
    if isinstance(path_or_file, (str, Path)):
        Path(path_or_file).write_bytes(text.encode("utf-8"))
    elif isinstance(path_or_file, io.TextIOBase):
        path_or_file.write(text)
    else:
        path_or_file.write(text.encode("utf-8"))  # type: ignore[arg-type]


class Plist:
    """A plist document: a value plus where it was read from.

    Example usage:
        # Open existing document
        doc = Plist.open("Info.plist")
        print(doc.value["CFBundleIdentifier"])

        # Modify and save back to the same path
        doc.value["CFBundleVersion"] = "42"
        doc.save()
    """

    def __init__(
        self,
        value: PlistValue = None,
        warnings: list[StructuralWarning] | None = None,
        write_settings: WriteSettings | None = None,
    ) -> None:
        """Initialize document.

        Usually you should use Plist.open() or Plist.from_string() to
        read an existing document.

        Args:
            value: Root value of the document
            warnings: Warnings collected when the document was read
            write_settings: Settings used by to_string() and save()
        """
        self.value = value
        self._warnings = list(warnings or [])
        self._write_settings = write_settings or WriteSettings()
        self._filepath: Path | None = None

    @property
    def warnings(self) -> list[StructuralWarning]:
        """Get warnings collected when the document was read."""
        return list(self._warnings)

    @property
    def filepath(self) -> Path | None:
        """Get the file path (if opened from or saved to a file)."""
        return self._filepath

    # --- Opening documents ---

    @classmethod
    def open(
        cls,
        filepath: str | Path,
        settings: ReadSettings | None = None,
        write_settings: WriteSettings | None = None,
    ) -> Plist:
        """Open an existing plist file.

        Args:
            filepath: Path to the .plist file
            settings: Read settings
            write_settings: Settings for writing the document back

        Returns:
            Plist instance

        Raises:
            FileNotFoundError: If file doesn't exist
            FormatError: If the file is not a readable plist
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Plist file not found: {filepath}")

        return cls.from_string(
            filepath.read_bytes(),
            settings=settings,
            write_settings=write_settings,
            filepath=filepath,
        )

    @classmethod
    def from_string(
        cls,
        data: str | bytes,
        settings: ReadSettings | None = None,
        write_settings: WriteSettings | None = None,
        filepath: Path | None = None,
    ) -> Plist:
        """Read a plist document from text or bytes.

        Args:
            data: Complete plist document
            settings: Read settings
            write_settings: Settings for writing the document back
            filepath: Original file path (for save)

        Returns:
            Plist instance
        """
        result = read_with_diagnostics(data, settings)
        doc = cls(
            value=result.value,
            warnings=result.warnings,
            write_settings=write_settings,
        )
        doc._filepath = filepath
        return doc

    # --- Saving documents ---

    def to_string(self) -> str:
        """Serialize the document to plist text."""
        return write(self.value, self._write_settings)

    def to_bytes(self) -> bytes:
        """Serialize the document to UTF-8 encoded plist bytes."""
        return self.to_string().encode("utf-8")

    def save(self, filepath: str | Path | None = None) -> None:
        """Save the document to a file.

        Args:
            filepath: Path to save to (uses original path if not specified)

        Raises:
            ValueError: If no filepath specified and document wasn't opened from file
        """
        if filepath:
            self._filepath = Path(filepath)
        elif self._filepath is None:
            raise ValueError("No filepath specified and document wasn't opened from file")

        self._filepath.write_bytes(self.to_bytes())

    def __repr__(self) -> str:
        return f"Plist(value={self.value!r}, filepath={self._filepath!r})"

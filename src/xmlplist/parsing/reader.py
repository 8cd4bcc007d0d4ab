"""Plist XML reader.

Turns a plist document into a plain Python value by recursive descent
over the parsed element tree. Each element is converted according to
its tag:

- dict / array: containers, converted recursively
- string, integer, real, true, false, date, data: scalar leaves
- anything else: kept as raw text, with a warning

Malformed dict structure and unknown tags are recoverable. They are
collected as StructuralWarning records on the reader and logged, while
conversion continues. Everything else that cannot be converted raises
a FormatError subclass and aborts the read.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, MutableMapping
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET

from xmlplist.exceptions import (
    InvalidNumberError,
    InvalidXmlError,
    MissingRootError,
    StructuralError,
)
from xmlplist.models import BigInt, PlistValue, ReadResult, StructuralWarning

from .codec import decode_data, decode_date

logger = logging.getLogger(__name__)

_Path = tuple[str | int, ...]

# Decimal integer, optionally signed; int() alone would also take "1_000"
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")

# ASCII decimal or exponent form, plus the inf/nan spellings repr() produces
_REAL_TEXT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _text_of(elem: Element) -> str:
    """Return all text inside an element, descendants included."""
    return "".join(elem.itertext())


class PlistReader:
    """Reader for XML plist documents.

    A reader converts one document. Create a new reader per document;
    warnings accumulate on the instance.
    """

    def __init__(
        self,
        data: str | bytes,
        dict_type: Callable[[], MutableMapping[str, PlistValue]] = dict,
    ) -> None:
        """Initialize reader with document text.

        Args:
            data: Complete plist document, as text or encoded bytes
            dict_type: Factory for the mappings built from <dict> elements
        """
        self._data = data
        self._dict_type = dict_type
        self._warnings: list[StructuralWarning] = []
        self._handlers: dict[str, Callable[[Element, _Path], PlistValue]] = {
            "dict": self._convert_dict,
            "array": self._convert_array,
            "string": self._convert_string,
            "integer": self._convert_integer,
            "real": self._convert_real,
            "true": lambda elem, path: True,
            "false": lambda elem, path: False,
            "date": lambda elem, path: decode_date(_text_of(elem)),
            "data": lambda elem, path: decode_data(_text_of(elem)),
        }

    @property
    def warnings(self) -> list[StructuralWarning]:
        """Warnings collected so far."""
        return list(self._warnings)

    def read(self, strict: bool = False) -> ReadResult:
        """Convert the document into a value.

        Args:
            strict: Raise instead of returning a result if any structural
                warning was collected

        Returns:
            ReadResult with the value and any structural warnings. The
            value is None if the <plist> element is empty.

        Raises:
            InvalidXmlError: If the document is not well-formed XML
            MissingRootError: If there is no <plist> element
            StructuralError: If strict is set and warnings were collected
            FormatError: If a leaf element cannot be converted
        """
        plist = self._find_plist(self._parse_document())

        root = next(iter(plist), None)
        value = None if root is None else self.convert_element(root)

        logger.debug("Read plist document (%d warnings)", len(self._warnings))
        if strict and self._warnings:
            raise StructuralError(self._warnings)
        return ReadResult(value=value, warnings=list(self._warnings))

    def _parse_document(self) -> Element:
        try:
            return DefusedET.fromstring(self._data)
        except DefusedET.ParseError as exc:
            raise InvalidXmlError(f"Error parsing XML: {exc}") from exc
        except DefusedXmlException as exc:
            raise InvalidXmlError(f"Rejected unsafe XML: {exc}") from exc
        except UnicodeError as exc:
            raise InvalidXmlError(f"Undecodable XML text: {exc}") from exc

    def _find_plist(self, root: Element) -> Element:
        if root.tag == "plist":
            return root
        plist = root.find(".//plist")
        if plist is None:
            raise MissingRootError()
        return plist

    def convert_element(self, elem: Element, path: _Path = ()) -> PlistValue:
        """Convert a single element, dispatching on its tag.

        Args:
            elem: Element to convert
            path: Location of the element's container, for diagnostics

        Returns:
            The converted value; raw text for unknown tags
        """
        handler = self._handlers.get(elem.tag)
        if handler is not None:
            return handler(elem, path)

        self._warn("unknown plist tag", elem.tag, path)
        return _text_of(elem)

    def _convert_dict(self, elem: Element, path: _Path) -> PlistValue:
        result = self._dict_type()
        children = list(elem)

        for i in range(0, len(children), 2):
            key_elem = children[i]
            if key_elem.tag != "key":
                self._warn(
                    "Missing key in dictionary or malformed structure",
                    key_elem.tag,
                    path,
                )
                continue

            key = _text_of(key_elem)
            if i + 1 < len(children):
                result[key] = self.convert_element(children[i + 1], (*path, key))
            else:
                result[key] = None

        return result

    def _convert_array(self, elem: Element, path: _Path) -> PlistValue:
        return [
            self.convert_element(child, (*path, index))
            for index, child in enumerate(elem)
        ]

    def _convert_string(self, elem: Element, path: _Path) -> PlistValue:
        return _text_of(elem)

    def _convert_integer(self, elem: Element, path: _Path) -> PlistValue:
        text = _text_of(elem).strip()
        if not _INTEGER_TEXT.fullmatch(text):
            raise InvalidNumberError("integer", text)
        return BigInt.from_text(text)

    def _convert_real(self, elem: Element, path: _Path) -> PlistValue:
        text = _text_of(elem).strip()
        if not _REAL_TEXT.fullmatch(text):
            raise InvalidNumberError("real", text)
        return float(text)

    def _warn(self, message: str, tag: str | None, path: _Path) -> None:
        warning = StructuralWarning(message=message, tag=tag, path=path)
        self._warnings.append(warning)
        logger.warning("%s", warning)


def read_plist(
    data: str | bytes,
    strict: bool = False,
    dict_type: Callable[[], MutableMapping[str, PlistValue]] = dict,
) -> ReadResult:
    """Convenience function to read a plist document.

    Args:
        data: Complete plist document
        strict: Raise StructuralError instead of returning warnings
        dict_type: Factory for the mappings built from <dict> elements

    Returns:
        ReadResult with the value and any structural warnings
    """
    reader = PlistReader(data, dict_type=dict_type)
    return reader.read(strict=strict)

"""Plist XML writer.

Builds an element tree from a plain Python value and serializes it as
a complete plist document, with XML declaration and Apple DOCTYPE.

None has no element of its own. Inside a container the slot is simply
left out: an array comes out shorter, and a dict key is written with no
value element after it (which the reader maps back to None).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from datetime import datetime
from xml.etree.ElementTree import Element, SubElement, tostring
from xml.etree.ElementTree import indent as indent_tree

from xmlplist.exceptions import InvalidStringError, UnsupportedTypeError
from xmlplist.models import BigInt, PlistValue

from .codec import encode_data, encode_date

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
PLIST_PUBLIC_ID = "-//Apple//DTD PLIST 1.0//EN"
PLIST_SYSTEM_ID = "http://www.apple.com/DTDs/PropertyList-1.0.dtd"
PLIST_DOCTYPE = f'<!DOCTYPE plist PUBLIC "{PLIST_PUBLIC_ID}" "{PLIST_SYSTEM_ID}">'
PLIST_VERSION = "1.0"

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _check_text(text: str, context: str = "string") -> str:
    if _INVALID_XML_CHARS.search(text):
        raise InvalidStringError(text, context)
    return text


def _text_element(tag: str, text: str) -> Element:
    elem = Element(tag)
    elem.text = text
    return elem


class PlistWriter:
    """Writer for XML plist documents."""

    def __init__(self, indent: str | None = None, sort_keys: bool = False) -> None:
        """Initialize writer.

        Args:
            indent: Indentation per nesting level, or None for a compact
                single-line body
            sort_keys: Write dict entries sorted by key instead of in
                insertion order
        """
        self._indent = indent
        self._sort_keys = sort_keys

    def build(self, value: PlistValue) -> Element:
        """Build the <plist> element tree for a value.

        Args:
            value: Value to convert

        Returns:
            <plist> element holding zero or one value element

        Raises:
            UnsupportedTypeError: If the value contains an object that is
                not part of the plist value model
            InvalidStringError: If a string or dict key holds characters
                that XML 1.0 cannot carry
        """
        plist = Element("plist", version=PLIST_VERSION)
        node = self.convert_value(value)
        if node is not None:
            plist.append(node)
        return plist

    def write(self, value: PlistValue) -> str:
        """Serialize a value to a complete plist document.

        Returns:
            Document text, starting with the XML declaration and DOCTYPE
        """
        plist = self.build(value)
        if self._indent is not None:
            indent_tree(plist, space=self._indent)
        # A literal CR would come back as LF after end-of-line normalization
        body = tostring(plist, encoding="unicode").replace("\r", "&#13;")
        return f"{XML_DECLARATION}\n{PLIST_DOCTYPE}\n{body}\n"

    def convert_value(self, value: object) -> Element | None:
        """Convert a value to its element.

        Returns:
            The element, or None if the value is None
        """
        match value:
            case None:
                return None
            case bool():
                return Element("true" if value else "false")
            case str():
                return _text_element("string", _check_text(value))
            case BigInt():
                return _text_element("integer", str(int(value)))
            case int():
                return _text_element("integer", str(value))
            case float():
                return _text_element("real", repr(value))
            case datetime():
                return _text_element("date", encode_date(value))
            case bytes() | bytearray() | memoryview():
                return _text_element("data", encode_data(value))
            case Mapping():
                return self._convert_dict(value)
            case Sequence():
                return self._convert_array(value)
            case _:
                raise UnsupportedTypeError(value)

    def _convert_dict(self, mapping: Mapping[object, object]) -> Element:
        elem = Element("dict")

        items = list(mapping.items())
        for key, _ in items:
            if not isinstance(key, str):
                raise UnsupportedTypeError(key, context="dict key")
            _check_text(key, context="dict key")
        if self._sort_keys:
            items.sort(key=lambda item: item[0])

        for key, item in items:
            SubElement(elem, "key").text = key
            child = self.convert_value(item)
            if child is None:
                logger.debug("Writing key %r with no value element", key)
            else:
                elem.append(child)

        return elem

    def _convert_array(self, items: Sequence[object]) -> Element:
        elem = Element("array")
        for index, item in enumerate(items):
            child = self.convert_value(item)
            if child is None:
                logger.debug("Dropping None at array index %d", index)
            else:
                elem.append(child)
        return elem


def write_plist(
    value: PlistValue,
    indent: str | None = None,
    sort_keys: bool = False,
) -> str:
    """Convenience function to write a plist document.

    Args:
        value: Value to serialize
        indent: Indentation per nesting level, or None for compact output
        sort_keys: Write dict entries sorted by key

    Returns:
        Complete plist document text
    """
    writer = PlistWriter(indent=indent, sort_keys=sort_keys)
    return writer.write(value)

"""Plist XML format reading and writing.

This module handles the conversion between documents and values:
- Element tree to value (PlistReader)
- Value to element tree and document text (PlistWriter)
- Base64 and ISO 8601 payload codecs

XML parsing uses defusedxml; trees are built with xml.etree.
"""

from .codec import (
    PLIST_TIME_FORMAT,
    decode_data,
    decode_date,
    encode_data,
    encode_date,
)
from .reader import PlistReader, read_plist
from .writer import (
    PLIST_DOCTYPE,
    PLIST_PUBLIC_ID,
    PLIST_SYSTEM_ID,
    XML_DECLARATION,
    PlistWriter,
    write_plist,
)

__all__ = [
    # Codecs
    "PLIST_TIME_FORMAT",
    "decode_data",
    "decode_date",
    "encode_data",
    "encode_date",
    # Reader
    "PlistReader",
    "read_plist",
    # Writer
    "PLIST_DOCTYPE",
    "PLIST_PUBLIC_ID",
    "PLIST_SYSTEM_ID",
    "XML_DECLARATION",
    "PlistWriter",
    "write_plist",
]

"""xmlplist - Read and write Apple XML property lists.

This library converts between XML plist documents and plain Python
values:
- dict, list, str, int, float, bool, datetime and bytes map to the
  matching plist tags
- Integers beyond the exact-double range come back as BigInt, with
  every digit preserved
- Untrusted input is parsed with defusedxml

Example:
    import xmlplist

    value = xmlplist.read(text)
    print(value["CFBundleIdentifier"])

    text = xmlplist.write({"name": "demo", "count": 3})

    # Files
    doc = xmlplist.Plist.open("Info.plist")
    doc.value["CFBundleVersion"] = "42"
    doc.save()
"""

__version__ = "0.1.0"

from .document import (
    Plist,
    ReadSettings,
    WriteSettings,
    dump,
    load,
    read,
    read_with_diagnostics,
    write,
)
from .exceptions import (
    FormatError,
    InvalidDataError,
    InvalidDateError,
    InvalidNumberError,
    InvalidStringError,
    InvalidXmlError,
    MissingRootError,
    PlistError,
    StructuralError,
    UnsupportedTypeError,
)
from .models import (
    MAX_SAFE_INTEGER,
    BigInt,
    PlistValue,
    ReadResult,
    StructuralWarning,
)

__all__ = [
    # Core API
    "Plist",
    "ReadSettings",
    "WriteSettings",
    "dump",
    "load",
    "read",
    "read_with_diagnostics",
    "write",
    # Value model
    "MAX_SAFE_INTEGER",
    "BigInt",
    "PlistValue",
    "ReadResult",
    "StructuralWarning",
    # Exceptions
    "PlistError",
    "FormatError",
    "InvalidXmlError",
    "MissingRootError",
    "InvalidDataError",
    "InvalidNumberError",
    "InvalidDateError",
    "StructuralError",
    "UnsupportedTypeError",
    "InvalidStringError",
]

"""Tests for the plist XML reader."""

import logging
from collections import OrderedDict
from datetime import UTC, datetime

import pytest

from xmlplist import (
    BigInt,
    FormatError,
    InvalidDataError,
    InvalidDateError,
    InvalidNumberError,
    InvalidXmlError,
    MissingRootError,
    StructuralError,
)
from xmlplist.parsing import PlistReader, read_plist


def plist(body: str) -> str:
    """Wrap a value element in a plist document."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" '
        '"http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
        f'<plist version="1.0">{body}</plist>'
    )


def read_value(body: str) -> object:
    return read_plist(plist(body)).value


class TestDocument:
    """Tests for locating the plist root."""

    def test_simple_dict(self) -> None:
        """Test reading a dict holding one integer."""
        result = read_plist("<plist><dict><key>a</key><integer>5</integer></dict></plist>")
        assert result.value == {"a": 5}
        assert type(result.value["a"]) is int
        assert result.is_clean

    def test_empty_plist_is_none(self) -> None:
        """Test that a plist with no child element reads as None."""
        assert read_plist("<plist/>").value is None
        assert read_plist('<plist version="1.0">\n  </plist>').value is None

    def test_first_child_is_root(self) -> None:
        """Test that only the first child element is read."""
        assert read_value("<string>first</string><string>second</string>") == "first"

    def test_bytes_input(self) -> None:
        """Test reading an encoded document."""
        data = plist("<string>café</string>").encode("utf-8")
        assert read_plist(data).value == "café"

    def test_nested_plist_element(self) -> None:
        """Test that a plist element below the document element is found."""
        assert read_plist("<wrapper><plist><true/></plist></wrapper>").value is True

    def test_missing_plist_root(self) -> None:
        """Test that a document without a plist element is rejected."""
        with pytest.raises(MissingRootError, match="missing plist root"):
            read_plist("<dict><key>a</key><string>b</string></dict>")

    def test_unterminated_document(self) -> None:
        """Test that malformed XML fails without a partial value."""
        with pytest.raises(FormatError):
            read_plist("<plist><dict>")

    def test_not_xml(self) -> None:
        """Test that non-XML text is rejected."""
        with pytest.raises(InvalidXmlError):
            read_plist("this is not xml")

    def test_unencodable_text(self) -> None:
        """Test that text with a lone surrogate is rejected as bad XML."""
        with pytest.raises(InvalidXmlError):
            read_plist("<plist><string>x\ud800</string></plist>")

    def test_entity_declarations_rejected(self) -> None:
        """Test that documents declaring entities are refused."""
        doc = (
            '<?xml version="1.0"?>\n'
            '<!DOCTYPE plist [<!ENTITY boom "boom">]>\n'
            "<plist><string>&boom;</string></plist>"
        )
        with pytest.raises(InvalidXmlError):
            read_plist(doc)


class TestScalars:
    """Tests for scalar leaf elements."""

    def test_string(self) -> None:
        """Test that string text is kept verbatim."""
        assert read_value("<string>  spaced &amp; escaped  </string>") == "  spaced & escaped  "

    def test_empty_string(self) -> None:
        """Test that an empty string element reads as empty text."""
        assert read_value("<string/>") == ""

    def test_booleans(self) -> None:
        """Test true and false elements."""
        assert read_value("<true/>") is True
        assert read_value("<false/>") is False

    def test_boolean_text_ignored(self) -> None:
        """Test that text inside boolean elements is ignored."""
        assert read_value("<false>yes</false>") is False

    def test_integer(self) -> None:
        """Test reading small integers."""
        assert read_value("<integer>42</integer>") == 42
        assert read_value("<integer>-17</integer>") == -17
        assert read_value("<integer> 7\n</integer>") == 7

    def test_integer_at_safe_limit(self) -> None:
        """Test that the exact-double limit is still a plain int."""
        value = read_value("<integer>-9007199254740991</integer>")
        assert value == -9007199254740991
        assert type(value) is int

    def test_integer_beyond_safe_limit(self) -> None:
        """Test that larger magnitudes come back as BigInt."""
        value = read_value("<integer>9223372036854775807</integer>")
        assert isinstance(value, BigInt)
        assert value == 9223372036854775807

    def test_negative_big_integer(self) -> None:
        """Test that sign and digits survive for big negative integers."""
        text = "-123456789012345678901234567890"
        value = read_value(f"<integer>{text}</integer>")
        assert isinstance(value, BigInt)
        assert str(value) == text

    @pytest.mark.parametrize("text", ["", "12abc", "1.5", "1_000", "0x10"])
    def test_invalid_integer(self, text: str) -> None:
        """Test that non-decimal integer text is rejected."""
        with pytest.raises(InvalidNumberError):
            read_value(f"<integer>{text}</integer>")

    def test_real(self) -> None:
        """Test reading reals."""
        assert read_value("<real>3.5</real>") == 3.5
        assert read_value("<real>-1e-3</real>") == -0.001
        assert read_value("<real>2</real>") == 2.0

    def test_invalid_real(self) -> None:
        """Test that non-numeric real text is rejected."""
        with pytest.raises(InvalidNumberError, match="real"):
            read_value("<real>1,5</real>")

    @pytest.mark.parametrize("text", ["\u0661.\u0665", "1_0.5", "0x1p3", "1.5.2", "e5"])
    def test_non_ascii_or_malformed_real(self, text: str) -> None:
        """Test that reals must be ASCII decimal or exponent text."""
        with pytest.raises(InvalidNumberError):
            read_value(f"<real>{text}</real>")

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            (".5", 0.5),
            ("5.", 5.0),
            ("+1E3", 1000.0),
            ("-inf", float("-inf")),
            ("Infinity", float("inf")),
        ],
    )
    def test_real_forms(self, text: str, expected: float) -> None:
        """Test the accepted spellings of reals."""
        assert read_value(f"<real>{text}</real>") == expected

    def test_real_nan(self) -> None:
        """Test that nan is accepted."""
        value = read_value("<real>nan</real>")
        assert value != value

    def test_date(self) -> None:
        """Test reading an ISO 8601 date."""
        assert read_value("<date>2025-01-15T10:30:45Z</date>") == datetime(
            2025, 1, 15, 10, 30, 45, tzinfo=UTC
        )

    def test_invalid_date(self) -> None:
        """Test that a malformed date is rejected."""
        with pytest.raises(InvalidDateError):
            read_value("<date>15/01/2025</date>")

    def test_data(self) -> None:
        """Test reading wrapped base64 data."""
        assert read_value("<data>\n\tAAEC\n\t/w==\n</data>") == bytes([0, 1, 2, 255])

    def test_empty_data(self) -> None:
        """Test that an empty data element reads as empty bytes."""
        assert read_value("<data></data>") == b""

    def test_invalid_data(self) -> None:
        """Test that invalid base64 aborts the read."""
        with pytest.raises(InvalidDataError):
            read_value("<dict><key>blob</key><data>not base64!</data></dict>")


class TestContainers:
    """Tests for dict and array elements."""

    def test_array(self) -> None:
        """Test that array children are read in order."""
        value = read_value("<array><integer>1</integer><string>two</string><true/></array>")
        assert value == [1, "two", True]

    def test_empty_containers(self) -> None:
        """Test empty dict and array elements."""
        assert read_value("<array/>") == []
        assert read_value("<dict/>") == {}

    def test_nested(self) -> None:
        """Test nested containers."""
        value = read_value(
            "<dict>"
            "<key>items</key><array><dict><key>id</key><integer>1</integer></dict></array>"
            "<key>meta</key><dict><key>ok</key><true/></dict>"
            "</dict>"
        )
        assert value == {"items": [{"id": 1}], "meta": {"ok": True}}

    def test_dict_preserves_order(self) -> None:
        """Test that dict entries keep document order."""
        value = read_value(
            "<dict><key>z</key><integer>1</integer><key>a</key><integer>2</integer></dict>"
        )
        assert list(value) == ["z", "a"]

    def test_duplicate_keys_last_wins(self) -> None:
        """Test that a repeated key keeps the later value."""
        value = read_value(
            "<dict><key>a</key><integer>1</integer><key>a</key><integer>2</integer></dict>"
        )
        assert value == {"a": 2}

    def test_dangling_key_is_none(self) -> None:
        """Test that a final key without a value maps to None."""
        result = read_plist(
            plist("<dict><key>a</key><string>x</string><key>b</key></dict>")
        )
        assert result.value == {"a": "x", "b": None}
        assert result.is_clean

    def test_whitespace_between_elements_ignored(self) -> None:
        """Test that indentation text does not affect pairing."""
        value = read_value("<dict>\n\t<key>a</key>\n\t<integer>1</integer>\n</dict>")
        assert value == {"a": 1}

    def test_dict_type(self) -> None:
        """Test that a custom mapping class is used at every level."""
        reader = PlistReader(
            plist("<dict><key>a</key><dict><key>b</key><true/></dict></dict>"),
            dict_type=OrderedDict,
        )
        value = reader.read().value
        assert isinstance(value, OrderedDict)
        assert isinstance(value["a"], OrderedDict)


class TestStructuralWarnings:
    """Tests for recoverable structural problems."""

    def test_missing_key_drops_pair(self) -> None:
        """Test that a pair without a key element is dropped."""
        result = read_plist(
            plist(
                "<dict><string>x</string><integer>1</integer>"
                "<key>a</key><true/></dict>"
            )
        )
        assert result.value == {"a": True}
        assert len(result.warnings) == 1
        assert result.warnings[0].tag == "string"
        assert result.warnings[0].path == ()

    def test_misaligned_pairs(self) -> None:
        """Test that pairing is strictly positional."""
        result = read_plist(
            plist(
                "<dict><key>a</key><string>x</string>"
                "<string>stray</string><key>b</key></dict>"
            )
        )
        assert result.value == {"a": "x"}
        assert len(result.warnings) == 1

    def test_unknown_tag_falls_back_to_text(self) -> None:
        """Test that unknown tags read as their text content."""
        result = read_plist(
            plist("<dict><key>items</key><array><uid>17</uid></array></dict>")
        )
        assert result.value == {"items": ["17"]}
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.message == "unknown plist tag"
        assert warning.tag == "uid"
        assert warning.path == ("items", 0)
        assert str(warning) == "unknown plist tag <uid> at /items/0"

    def test_key_outside_dict_is_unknown(self) -> None:
        """Test that a stray key element is treated as an unknown tag."""
        result = read_plist(plist("<array><key>k</key></array>"))
        assert result.value == ["k"]
        assert result.warnings[0].tag == "key"

    def test_warnings_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that each warning is also sent to the logger."""
        with caplog.at_level(logging.WARNING, logger="xmlplist.parsing.reader"):
            read_plist(plist("<array><foo/><bar/></array>"))
        messages = [r.getMessage() for r in caplog.records]
        assert messages == [
            "unknown plist tag <foo> at /0",
            "unknown plist tag <bar> at /1",
        ]

    def test_reader_exposes_warnings(self) -> None:
        """Test that warnings accumulate on the reader instance."""
        reader = PlistReader(plist("<foo>x</foo>"))
        assert reader.warnings == []
        reader.read()
        assert len(reader.warnings) == 1

    def test_strict_raises(self) -> None:
        """Test that strict reading turns warnings into an error."""
        with pytest.raises(StructuralError) as exc_info:
            read_plist(plist("<array><foo/></array>"), strict=True)
        assert len(exc_info.value.warnings) == 1
        assert isinstance(exc_info.value, FormatError)

    def test_strict_clean_document(self) -> None:
        """Test that strict reading accepts well-formed documents."""
        assert read_plist(plist("<array><true/></array>"), strict=True).value == [True]

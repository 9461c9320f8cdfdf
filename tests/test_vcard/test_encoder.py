"""Tests for the vCard encoder."""

import io

import pytest

from people_vcard.exceptions import VCardFormatError, VCardValueError, VCardWriteError
from people_vcard.vcard.encoder import (
    Encoder,
    format_line,
    format_line_multi_value,
    format_value,
)
from people_vcard.vcard.models import Card, Field


class FailingSink:
    """Accepts ``fail_after`` writes, then raises OSError."""

    def __init__(self, fail_after: int):
        self.fail_after = fail_after
        self.lines: list[bytes] = []

    def write(self, data: bytes) -> int:
        if len(self.lines) >= self.fail_after:
            raise OSError("disk full")
        self.lines.append(data)
        return len(data)


def _unescape(value: str) -> str:
    out = []
    chars = iter(value)
    for c in chars:
        if c == "\\":
            nxt = next(chars)
            out.append("\n" if nxt == "n" else nxt)
        else:
            out.append(c)
    return "".join(out)


def _encode(card: Card) -> list[str]:
    sink = io.BytesIO()
    Encoder(sink).encode(card)
    text = sink.getvalue().decode("utf-8")
    assert text.endswith("\r\n")
    return text.split("\r\n")[:-1]


def _versioned_card() -> Card:
    card = Card()
    card.add_value("VERSION", "3.0")
    return card


def test_format_value_escapes():
    assert format_value("a,b") == "a\\,b"
    assert format_value("line1\nline2") == "line1\\nline2"
    assert format_value("C:\\path") == "C:\\\\path"


def test_format_value_escapes_backslash_once():
    assert format_value("\\,") == "\\\\\\,"
    assert format_value("\\n") == "\\\\n"


def test_format_value_leaves_semicolons():
    assert format_value("Doe;John;;;") == "Doe;John;;;"


@pytest.mark.parametrize("value", [
    "",
    "plain",
    "a,b,c",
    "back\\slash",
    "multi\nline\n",
    "\\n,\\\n,,\\\\",
    "Müller, Jörg\\n",
])
def test_escape_is_lossless(value):
    assert _unescape(format_value(value)) == value


def test_format_line_plain():
    assert format_line("FN", Field(value="John Doe")) == "FN:John Doe"


def test_format_line_group_and_params():
    f = Field(value="a@example.com", group="item1")
    f.add_param("TYPE", "INTERNET")
    f.add_param("TYPE", "HOME")
    assert format_line("EMAIL", f) == "item1.EMAIL;TYPE=INTERNET;TYPE=HOME:a@example.com"


def test_format_line_escapes_param_values():
    f = Field(value="x")
    f.add_param("TYPE", "a,b")
    assert format_line("URL", f) == "URL;TYPE=a\\,b:x"


def test_format_line_multi_value_drops_params_and_groups():
    f1 = Field(value="Friends", group="g")
    f1.add_param("TYPE", "X")
    f2 = Field(value="Work, Inc")
    assert format_line_multi_value("CATEGORIES", [f1, f2]) == "CATEGORIES:Friends,Work\\, Inc"


def test_encode_minimal_card():
    assert _encode(_versioned_card()) == ["BEGIN:VCARD", "VERSION:3.0", "END:VCARD"]


def test_encode_orders_fields_lexicographically():
    card = Card()
    card.add_value("EMAIL", "a@example.com")
    card.add_value("VERSION", "3.0")
    card.add_value("ADR", ";;1 Main St;;;;")
    card.add_value("FN", "John Doe")
    lines = _encode(card)
    assert lines[:2] == ["BEGIN:VCARD", "VERSION:3.0"]
    assert [line.split(":")[0] for line in lines[2:-1]] == ["ADR", "EMAIL", "FN"]
    assert lines[-1] == "END:VCARD"


def test_encode_ordering_is_ordinal():
    card = _versioned_card()
    card.add_value("X-abc", "1")
    card.add_value("TEL", "2")
    card.add_value("NOTE", "3")
    names = [line.split(":")[0] for line in _encode(card)[2:-1]]
    assert names == ["NOTE", "TEL", "X-ABC"]


def test_encode_folds_categories():
    card = _versioned_card()
    card.add_value("CATEGORIES", "Friends")
    card.add_value("CATEGORIES", "Work")
    lines = _encode(card)
    assert lines.count("CATEGORIES:Friends,Work") == 1
    assert sum(1 for line in lines if line.startswith("CATEGORIES")) == 1


def test_encode_keeps_empty_category():
    card = _versioned_card()
    card.add_value("CATEGORIES", "Friends")
    card.add_value("CATEGORIES", "")
    assert "CATEGORIES:Friends," in _encode(card)


def test_encode_repeated_fields_in_stored_order():
    card = _versioned_card()
    card.add_value("EMAIL", "b@example.com")
    card.add_value("EMAIL", "a@example.com")
    assert _encode(card)[2:4] == ["EMAIL:b@example.com", "EMAIL:a@example.com"]


def test_encode_escapes_values():
    card = _versioned_card()
    card.add_value("NOTE", "Likes tea, coffee\nand C:\\temp")
    assert "NOTE:Likes tea\\, coffee\\nand C:\\\\temp" in _encode(card)


def test_encode_utf8():
    card = _versioned_card()
    card.add_value("FN", "Aaron Längert")
    sink = io.BytesIO()
    Encoder(sink).encode(card)
    assert "FN:Aaron Längert\r\n".encode("utf-8") in sink.getvalue()


def test_encode_missing_version_writes_begin_only():
    card = Card()
    card.add_value("FN", "John Doe")
    sink = io.BytesIO()
    with pytest.raises(VCardFormatError, match="VERSION field missing"):
        Encoder(sink).encode(card)
    assert sink.getvalue() == b"BEGIN:VCARD\r\n"


def test_encode_rejects_duplicate_version():
    card = _versioned_card()
    card.add_value("VERSION", "4.0")
    with pytest.raises(VCardFormatError):
        Encoder(io.BytesIO()).encode(card)


def test_encode_lowercase_version_key():
    card = Card()
    card.add_value("version", "3.0")
    assert _encode(card) == ["BEGIN:VCARD", "VERSION:3.0", "END:VCARD"]


def test_encode_stops_on_write_failure():
    card = _versioned_card()
    card.add_value("FN", "John Doe")
    card.add_value("NOTE", "hi")
    sink = FailingSink(fail_after=3)
    with pytest.raises(VCardWriteError, match="disk full"):
        Encoder(sink).encode(card)
    assert sink.lines == [b"BEGIN:VCARD\r\n", b"VERSION:3.0\r\n", b"FN:John Doe\r\n"]


def test_encode_write_failure_is_chained():
    sink = FailingSink(fail_after=0)
    with pytest.raises(VCardWriteError) as exc_info:
        Encoder(sink).encode(_versioned_card())
    assert isinstance(exc_info.value.__cause__, OSError)


def test_encode_closed_sink():
    sink = io.BytesIO()
    sink.close()
    with pytest.raises(VCardWriteError):
        Encoder(sink).encode(_versioned_card())


def test_encoder_writes_consecutive_cards():
    sink = io.BytesIO()
    encoder = Encoder(sink)
    encoder.encode(_versioned_card())
    encoder.encode(_versioned_card())
    assert sink.getvalue().count(b"BEGIN:VCARD\r\n") == 2
    assert sink.getvalue().count(b"END:VCARD\r\n") == 2


def test_encode_unencodable_value():
    card = _versioned_card()
    card.add_value("FN", "bad\ud800")
    card.add_value("NOTE", "after")
    sink = io.BytesIO()
    with pytest.raises(VCardValueError) as exc_info:
        Encoder(sink).encode(card)
    assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)
    assert sink.getvalue() == b"BEGIN:VCARD\r\nVERSION:3.0\r\n"

"""vCard 3.0 encoder: serializes cards to a binary sink, one block per call.

Lines end with CRLF. Long lines are not folded. Field values and parameter
values are escaped here, exactly once, and nowhere else.
"""

from __future__ import annotations

from typing import BinaryIO

from people_vcard.exceptions import VCardFormatError, VCardValueError, VCardWriteError
from people_vcard.vcard.models import CATEGORIES, VERSION, Card, Field

CRLF = "\r\n"
BEGIN_LINE = "BEGIN:VCARD"
END_LINE = "END:VCARD"

# Escapes
_VALUE_ESCAPES = str.maketrans({
    "\\": "\\\\",
    "\n": "\\n",
    ",": "\\,",
})


def format_value(value: str) -> str:
    """Escape a field or parameter value: ``\\`` → ``\\\\``, newline → ``\\n``, ``,`` → ``\\,``."""
    return value.translate(_VALUE_ESCAPES)


def format_param(name: str, value: str) -> str:
    return f"{name}={format_value(value)}"


def format_line(name: str, f: Field) -> str:
    """Render ``[group.]NAME[;PARAM=value...]:value`` without the line terminator."""
    line = f"{f.group}.{name}" if f.group else name
    for param_name, param_values in f.params.items():
        for param_value in param_values:
            line += ";" + format_param(param_name, param_value)
    return line + ":" + format_value(f.value)


def format_line_multi_value(name: str, fields: list[Field]) -> str:
    """Fold several fields into one line of comma-joined values.

    Params and groups of the folded fields are dropped.
    """
    return name + ":" + ",".join(format_value(f.value) for f in fields)


class Encoder:
    """Writes cards to a binary sink.

    Each ``encode`` call writes one complete ``BEGIN:VCARD`` … ``END:VCARD``
    block. Output is written line by line; if the sink fails midway the
    partial block stays on the sink.

    Args:
        sink: Anything with a ``write(bytes)`` method.
        encoding: Text encoding of the emitted lines.
    """

    def __init__(self, sink: BinaryIO, encoding: str = "utf-8"):
        self._sink = sink
        self._encoding = encoding

    def encode(self, card: Card) -> None:
        """Serialize ``card``.

        Raises:
            VCardFormatError: The card has no VERSION field, or more than one.
                BEGIN:VCARD has already been written at that point.
            VCardValueError: A line cannot be encoded with the sink encoding.
            VCardWriteError: The sink failed to accept a line.
        """
        self._write_line(BEGIN_LINE)

        versions = card.get_all(VERSION)
        if not versions:
            raise VCardFormatError("vcard: VERSION field missing")
        if len(versions) > 1:
            raise VCardFormatError(f"vcard: expected one VERSION field, got {len(versions)}")
        self._write_line(format_line(VERSION, versions[0]))

        for name in sorted(card.names()):
            if name == VERSION:
                continue
            fields = card.get_all(name)
            if name == CATEGORIES:
                self._write_line(format_line_multi_value(name, fields))
                continue
            for f in fields:
                self._write_line(format_line(name, f))

        self._write_line(END_LINE)

    def _write_line(self, line: str) -> None:
        try:
            data = (line + CRLF).encode(self._encoding)
        except UnicodeEncodeError as e:
            raise VCardValueError(f"Cannot encode vCard line as {self._encoding}: {e}") from e
        try:
            self._sink.write(data)
        except (OSError, ValueError) as e:
            raise VCardWriteError(f"Failed to write vCard line: {e}") from e

"""Data models for vCard cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

# Field names
VERSION = "VERSION"
FN = "FN"
N = "N"
EMAIL = "EMAIL"
TEL = "TEL"
BIRTHDAY = "BIRTHDAY"
ADR = "ADR"
ORG = "ORG"
TITLE = "TITLE"
URL = "URL"
PHOTO = "PHOTO"
NOTE = "NOTE"
CATEGORIES = "CATEGORIES"

# Parameter names
TYPE = "TYPE"


@dataclass
class Field:
    """One named unit of a card. ``value`` and ``params`` are stored unescaped."""

    value: str = ""
    params: dict[str, list[str]] = field(default_factory=dict)
    group: str = ""

    def add_param(self, name: str, value: str) -> None:
        self.params.setdefault(name.upper(), []).append(value)


@dataclass
class Name:
    """Structured name, serialized into the N field."""

    family_name: str = ""
    given_name: str = ""
    additional_name: str = ""
    honorific_prefix: str = ""
    honorific_suffix: str = ""

    def to_field(self) -> Field:
        return Field(value=";".join([
            self.family_name,
            self.given_name,
            self.additional_name,
            self.honorific_prefix,
            self.honorific_suffix,
        ]))


@dataclass
class Address:
    """Structured postal address, serialized into an ADR field.

    ``carrier`` holds the params and group of the resulting line; its value
    is replaced by the seven components joined with ``;``.
    """

    post_office_box: str = ""
    extended_address: str = ""
    street_address: str = ""
    locality: str = ""
    region: str = ""
    postal_code: str = ""
    country: str = ""
    carrier: Field | None = None

    def components(self) -> list[str]:
        return [
            self.post_office_box,
            self.extended_address,
            self.street_address,
            self.locality,
            self.region,
            self.postal_code,
            self.country,
        ]

    def to_field(self) -> Field:
        carrier = self.carrier or Field()
        return Field(
            value=";".join(self.components()),
            params={k: list(v) for k, v in carrier.params.items()},
            group=carrier.group,
        )


class Card:
    """A contact card: field names mapped to non-empty lists of fields.

    Field names are case-insensitive and stored upper-cased.
    """

    def __init__(self) -> None:
        self._fields: dict[str, list[Field]] = {}

    def add(self, name: str, f: Field) -> None:
        self._fields.setdefault(name.upper(), []).append(f)

    def add_value(self, name: str, value: str) -> None:
        self.add(name, Field(value=value))

    def add_name(self, name: Name) -> None:
        self.add(N, name.to_field())

    def add_address(self, address: Address) -> None:
        self.add(ADR, address.to_field())

    def get(self, name: str) -> Field | None:
        fields = self._fields.get(name.upper())
        return fields[0] if fields else None

    def get_all(self, name: str) -> list[Field]:
        return list(self._fields.get(name.upper(), []))

    def value(self, name: str) -> str:
        f = self.get(name)
        return f.value if f is not None else ""

    def values(self, name: str) -> list[str]:
        return [f.value for f in self.get_all(name)]

    def names(self) -> list[str]:
        return list(self._fields)

    def items(self) -> Iterator[tuple[str, list[Field]]]:
        for name, fields in self._fields.items():
            yield name, list(fields)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Card({self._fields!r})"

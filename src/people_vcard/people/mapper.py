"""Map Google People API person payloads onto vCard cards."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from people_vcard.exceptions import MappingError
from people_vcard.vcard import models
from people_vcard.vcard.models import Address, Card, Field, Name

logger = logging.getLogger(__name__)

VCARD_VERSION = "3.0"
INTERNET = "INTERNET"


def person_to_card(person: Mapping[str, Any], group_map: Mapping[str, str] | None) -> Card:
    """Build a vCard 3.0 card from a raw People API person dict.

    This is a pure mapping function with no network calls. ``group_map`` maps
    contact group resource names to display names and is used to resolve
    memberships into CATEGORIES. Unknown groups resolve to an empty category.

    Raises:
        MappingError: The person has no names, or ``group_map`` is None.
    """
    names = person.get("names") or []
    if not names:
        raise MappingError("person has no name")
    if group_map is None:
        raise MappingError("group_map is None")

    card = Card()
    card.add_value(models.VERSION, VCARD_VERSION)

    primary = names[0]
    card.add_name(Name(
        family_name=primary.get("familyName", ""),
        given_name=primary.get("givenName", ""),
        additional_name=primary.get("middleName", ""),
        honorific_prefix=primary.get("honorificPrefix", ""),
        honorific_suffix=primary.get("honorificSuffix", ""),
    ))
    card.add_value(models.FN, primary.get("displayName", ""))

    for membership in person.get("memberships") or []:
        group_name = (membership.get("contactGroupMembership") or {}).get(
            "contactGroupResourceName", ""
        )
        card.add_value(models.CATEGORIES, group_map.get(group_name, ""))

    for email in person.get("emailAddresses") or []:
        f = Field(value=email.get("value", ""))
        f.add_param(models.TYPE, INTERNET)
        f.add_param(models.TYPE, _upper(email.get("type", "")))
        card.add(models.EMAIL, f)

    for phone in person.get("phoneNumbers") or []:
        f = Field(value=phone.get("canonicalForm", ""))
        f.add_param(models.TYPE, _upper(phone.get("type", "")))
        card.add(models.TEL, f)

    for birthday in person.get("birthdays") or []:
        date = birthday.get("date")
        if date is None:
            logger.debug(f"Skipping birthday without a date on {person.get('resourceName', '?')}")
            continue
        card.add_value(models.BIRTHDAY, _format_date(date))

    for address in person.get("addresses") or []:
        card.add_address(_parse_address(address))

    organizations = person.get("organizations") or []
    for org in organizations:
        value = org.get("name", "")
        if org.get("department"):
            value += ";" + org["department"]
        card.add_value(models.ORG, value)
    # Only the first organization can supply TITLE.
    if organizations and organizations[0].get("title"):
        card.add_value(models.TITLE, organizations[0]["title"])

    for url in person.get("urls") or []:
        f = Field(value=url.get("value", ""))
        f.add_param(models.TYPE, _upper(url.get("type", "")))
        card.add(models.URL, f)

    for photo in person.get("photos") or []:
        card.add_value(models.PHOTO, photo.get("url", ""))

    for bio in person.get("biographies") or []:
        card.add_value(models.NOTE, bio.get("value", ""))

    return card


def _parse_address(address: Mapping[str, Any]) -> Address:
    carrier = Field()
    if address.get("type"):
        carrier.add_param(models.TYPE, _upper(address["type"]))
    return Address(
        post_office_box=address.get("poBox", ""),
        extended_address=address.get("extendedAddress", ""),
        street_address=address.get("streetAddress", ""),
        locality=address.get("city", ""),
        region=address.get("region", ""),
        postal_code=address.get("postalCode", ""),
        country=address.get("country", ""),
        carrier=carrier,
    )


def _format_date(date: Mapping[str, Any]) -> str:
    """YYYYMMDD, zero-padded. Missing parts count as 0 and nothing is range-checked."""
    return "%04d%02d%02d" % (
        int(date.get("year", 0)),
        int(date.get("month", 0)),
        int(date.get("day", 0)),
    )


def _upper(value: str) -> str:
    # Per-character mapping: characters whose upper case expands (e.g. "ß") are kept.
    return "".join(c if len(c.upper()) != 1 else c.upper() for c in value)

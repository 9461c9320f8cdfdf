"""People API fetching utilities: contact groups and paged connections.

Works on a raw Google API ``service`` object as returned by
``AuthManager.get_people_service``.
"""

from __future__ import annotations

import logging
from typing import Iterator

from googleapiclient.discovery import Resource

from people_vcard.exceptions import PeopleFetchError

logger = logging.getLogger(__name__)

PERSON_FIELDS = (
    "names,emailAddresses,phoneNumbers,birthdays,addresses,"
    "organizations,urls,photos,biographies,memberships"
)
CONTACT_SOURCES = ("READ_SOURCE_TYPE_CONTACT",)


def fetch_group_map(service: Resource, page_size: int = 1000) -> dict[str, str]:
    """Map contact group resource names (``contactGroups/...``) to display names."""
    group_map: dict[str, str] = {}
    page_token = None

    while True:
        kwargs: dict = {"pageSize": page_size}
        if page_token:
            kwargs["pageToken"] = page_token
        try:
            response = service.contactGroups().list(**kwargs).execute()
        except Exception as e:
            raise PeopleFetchError(f"Failed to list contact groups: {e}") from e

        for group in response.get("contactGroups", []):
            group_map[group["resourceName"]] = group.get("formattedName", "")

        page_token = response.get("nextPageToken")
        if not page_token:
            break

    logger.info(f"Found {len(group_map)} groups")
    return group_map


def fetch_connections(
    service: Resource,
    person_fields: str = PERSON_FIELDS,
    page_size: int = 500,
    sources: tuple[str, ...] = CONTACT_SOURCES,
) -> Iterator[dict]:
    """Yield raw person dicts for every connection of the authenticated user."""
    page_token = None
    pages = 0

    while True:
        kwargs: dict = {
            "resourceName": "people/me",
            "personFields": person_fields,
            "sources": list(sources),
            "pageSize": page_size,
        }
        if page_token:
            kwargs["pageToken"] = page_token
        try:
            response = service.people().connections().list(**kwargs).execute()
        except Exception as e:
            raise PeopleFetchError(f"Failed to list connections: {e}") from e

        pages += 1
        connections = response.get("connections", [])
        logger.debug(f"Fetched page {pages} with {len(connections)} connections")
        yield from connections

        page_token = response.get("nextPageToken")
        if not page_token:
            break


def get_person(
    service: Resource,
    resource_name: str,
    person_fields: str = PERSON_FIELDS,
) -> dict:
    """Fetch a single person, e.g. ``people/c4186868436847727844``."""
    try:
        return (
            service.people()
            .get(resourceName=resource_name, personFields=person_fields)
            .execute()
        )
    except Exception as e:
        raise PeopleFetchError(f"Failed to get person {resource_name}: {e}") from e

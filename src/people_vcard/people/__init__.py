"""Google People API source: fetching and mapping to cards.

The OAuth flow lives in ``people_vcard.people.auth.AuthManager``.
"""

from people_vcard.people.mapper import person_to_card
from people_vcard.people.fetcher import fetch_group_map, fetch_connections, get_person, PERSON_FIELDS

__all__ = [
    "person_to_card",
    "fetch_group_map",
    "fetch_connections",
    "get_person",
    "PERSON_FIELDS",
]

"""Unified exception hierarchy for people-vcard."""


class VCardExportError(Exception):
    """Base exception for all people-vcard errors."""


# Mapping
class MappingError(VCardExportError):
    """A source contact record cannot be turned into a card."""


# Encoding
class EncodingError(VCardExportError):
    """Base exception for card serialization."""


class VCardFormatError(EncodingError):
    """Card violates the encoder's structural precondition."""


class VCardWriteError(EncodingError):
    """The output sink reported a write failure."""


class VCardValueError(EncodingError):
    """A value cannot be represented in the output encoding."""


# People API
class PeopleError(VCardExportError):
    """Base exception for Google People API operations."""


class PeopleAuthError(PeopleError):
    """People API authentication or authorization failure."""


class PeopleFetchError(PeopleError):
    """Failed to fetch contacts or contact groups."""

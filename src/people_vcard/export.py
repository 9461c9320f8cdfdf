"""Export People API contacts into a vCard file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Mapping

from googleapiclient.discovery import Resource

from people_vcard.exceptions import MappingError, VCardValueError, VCardWriteError
from people_vcard.people.fetcher import fetch_connections, fetch_group_map
from people_vcard.people.mapper import person_to_card
from people_vcard.vcard.encoder import Encoder

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Per-record outcome counts of an export run."""

    exported: int = 0
    skipped: int = 0  # unmappable records
    failed: int = 0  # records that could not be written

    @property
    def total(self) -> int:
        return self.exported + self.skipped + self.failed


def export_contacts(
    people: Iterable[Mapping[str, Any]],
    group_map: Mapping[str, str],
    sink: BinaryIO,
) -> ExportResult:
    """Map and encode each person onto ``sink``.

    Unmappable records are skipped and failed writes are reported; neither
    stops the batch. A ``VCardFormatError`` propagates.
    """
    encoder = Encoder(sink)
    result = ExportResult()

    for person in people:
        resource_name = person.get("resourceName", "?")
        try:
            card = person_to_card(person, group_map)
        except MappingError as e:
            logger.warning(f"Skipping {resource_name}: {e}")
            result.skipped += 1
            continue

        try:
            encoder.encode(card)
        except (VCardWriteError, VCardValueError) as e:
            logger.warning(f"Failed to write {resource_name}: {e}")
            result.failed += 1
            continue

        result.exported += 1

    return result


def export_to_file(service: Resource, path: Path) -> ExportResult:
    """Fetch all contacts from ``service`` and write them to ``path``."""
    group_map = fetch_group_map(service)

    with open(path, "wb") as sink:
        result = export_contacts(fetch_connections(service), group_map, sink)

    logger.info(
        f"Exported {result.exported} people to {path} "
        f"({result.skipped} skipped, {result.failed} failed)"
    )
    return result

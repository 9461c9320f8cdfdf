"""Command-line entry point: ``python -m people_vcard``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from people_vcard.exceptions import VCardExportError

logger = logging.getLogger("people_vcard")


def _create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="people-vcard",
        description="Export Google contacts to a vCard 3.0 file.",
    )
    parser.add_argument(
        "--credentials",
        default="credentials.json",
        help="OAuth client secrets JSON (default: credentials.json)",
    )
    parser.add_argument(
        "--token",
        default="token.json",
        help="Where the OAuth token is cached (default: token.json)",
    )
    parser.add_argument(
        "-o", "--output",
        default="cards.vcf",
        help="Output vCard file (default: cards.vcf)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _create_argument_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from people_vcard.export import export_to_file
    from people_vcard.people.auth import AuthManager

    try:
        auth = AuthManager(Path(args.token), Path(args.credentials))
        result = export_to_file(auth.get_people_service(), Path(args.output))
    except (VCardExportError, OSError) as e:
        logger.error(str(e))
        return 1

    print(f"Found {result.exported} people in total")
    return 0


if __name__ == "__main__":
    sys.exit(main())

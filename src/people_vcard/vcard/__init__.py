"""vCard 3.0 card model and encoder."""

from people_vcard.vcard.models import Card, Field, Name, Address
from people_vcard.vcard.encoder import Encoder, format_value, format_line, format_line_multi_value

__all__ = [
    "Card",
    "Field",
    "Name",
    "Address",
    "Encoder",
    "format_value",
    "format_line",
    "format_line_multi_value",
]

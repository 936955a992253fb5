"""Dublin Core metadata read from a package (OPF) document."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from loreleaf.epub.xml_events import EventKind, XmlEvent, XmlSyntaxError, read_events, unescape

__all__ = ["BookMetadata"]

_FIELDS_BY_TAG = {
    "dc:title": "title",
    "dc:creator": "creator",
    "dc:identifier": "identifier",
    "dc:language": "language",
    "dc:publisher": "publisher",
    "dc:rights": "rights",
}


def _well_formed_events(content: str) -> Iterator[XmlEvent]:
    """Yield events up to the first syntax error."""
    try:
        yield from read_events(content, trim_text=True)
    except XmlSyntaxError:
        return


@dataclass
class BookMetadata:
    """Descriptive fields of a book; each is None when the document lacks it."""

    title: str | None = None
    creator: str | None = None
    identifier: str | None = None
    language: str | None = None
    publisher: str | None = None
    rights: str | None = None

    @classmethod
    def from_opf(cls, opf_content: str) -> BookMetadata:
        """Collect the ``dc:*`` fields; a later element overrides an earlier one."""
        metadata = cls()
        current_tag = ""
        for event in _well_formed_events(opf_content):
            if event.kind in (EventKind.START, EventKind.EMPTY):
                current_tag = event.name
            elif event.kind is EventKind.TEXT:
                field_name = _FIELDS_BY_TAG.get(current_tag)
                if field_name is not None:
                    setattr(metadata, field_name, unescape(event.text))
            elif event.kind is EventKind.END:
                current_tag = ""
        return metadata
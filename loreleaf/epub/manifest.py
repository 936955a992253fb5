"""The manifest of a package document: every resource the book contains."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from loreleaf.epub.xml_events import EventKind, XmlEvent, XmlSyntaxError, read_events

__all__ = ["ManifestItem", "BookManifest"]

_ITEM_TAG = "item"


def _well_formed_events(content: str) -> Iterator[XmlEvent]:
    """Yield events up to the first syntax error."""
    try:
        yield from read_events(content, trim_text=True)
    except XmlSyntaxError:
        return


@dataclass(frozen=True)
class ManifestItem:
    """One resource of the book; missing attributes are empty strings."""

    id: str
    href: str
    media_type: str


@dataclass
class BookManifest:
    """All manifest items, in document order."""

    items: list[ManifestItem] = field(default_factory=list)

    @classmethod
    def from_opf(cls, opf_content: str) -> BookManifest:
        """Read every ``item`` element of the package document."""
        items = [
            ManifestItem(
                id=event.attributes.get("id", ""),
                href=event.attributes.get("href", ""),
                media_type=event.attributes.get("media-type", ""),
            )
            for event in _well_formed_events(opf_content)
            if event.kind in (EventKind.START, EventKind.EMPTY) and event.name == _ITEM_TAG
        ]
        return cls(items)

    def search_for_item(self, query: str) -> ManifestItem | None:
        """Return the first item whose id or href contains ``query``."""
        return next(
            (item for item in self.items if query in item.id or query in item.href),
            None,
        )
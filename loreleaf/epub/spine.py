"""The spine of a package document: the default reading order."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from loreleaf.epub.manifest import BookManifest, ManifestItem
from loreleaf.epub.xml_events import EventKind, XmlEvent, XmlSyntaxError, read_events

__all__ = ["BookSpineItem", "BookSpine"]

_ITEMREF_TAG = "itemref"
_IDREF_ATTRIBUTE = "idref"


def _well_formed_events(content: str) -> Iterator[XmlEvent]:
    """Yield events up to the first syntax error."""
    try:
        yield from read_events(content, trim_text=True)
    except XmlSyntaxError:
        return


@dataclass(frozen=True)
class BookSpineItem:
    """A spine entry and the manifest item it refers to."""

    id: str
    value: ManifestItem


@dataclass
class BookSpine:
    """Spine entries in reading order."""

    items: list[BookSpineItem] = field(default_factory=list)

    @classmethod
    def from_opf_and_manifest(cls, opf_content: str, manifest: BookManifest) -> BookSpine:
        """Resolve each ``itemref`` against ``manifest``.

        Raises ValueError when an ``idref`` names no manifest item.
        """
        items: list[BookSpineItem] = []
        for event in _well_formed_events(opf_content):
            if event.kind not in (EventKind.START, EventKind.EMPTY) or event.name != _ITEMREF_TAG:
                continue
            item_id = event.attributes.get(_IDREF_ATTRIBUTE)
            if item_id is None:
                continue
            manifest_item = next((item for item in manifest.items if item.id == item_id), None)
            if manifest_item is None:
                raise ValueError(f"spine refers to unknown manifest item {item_id!r}")
            items.append(BookSpineItem(item_id, manifest_item))
        return cls(items)
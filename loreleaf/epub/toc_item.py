"""Entries of a book's table of contents."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

__all__ = ["TableOfContentsItem", "src_path_epub2", "href_path_epub3"]

_ANCHOR_SEPARATOR = "#"
_EPUB2_SRC_ATTRIBUTE = "src"
_EPUB3_HREF_ATTRIBUTE = "href"


@dataclass(eq=False)
class TableOfContentsItem:
    """A table of contents entry; two entries are equal when path and label match."""

    path: str
    label: str
    anchor: str | None = None
    content: str | None = None

    @classmethod
    def create(cls, path: str, label: str, content: str | None = None) -> TableOfContentsItem:
        """Build an entry, splitting an ``#anchor`` off the end of ``path``."""
        cleaned_path, _, anchor = path.partition(_ANCHOR_SEPARATOR)
        return cls(path=cleaned_path, label=label, anchor=anchor or None, content=content)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableOfContentsItem):
            return NotImplemented
        return self.path == other.path and self.label == other.label

    def __hash__(self) -> int:
        return hash((self.path, self.label))


def _path_from_attribute(attributes: Mapping[str, str], content_dir: str, key: str) -> str:
    return f"{content_dir}/{attributes.get(key, '')}"


def src_path_epub2(attributes: Mapping[str, str], content_dir: str) -> str:
    """Join ``content_dir`` with the ``src`` attribute of an NCX ``content`` element."""
    return _path_from_attribute(attributes, content_dir, _EPUB2_SRC_ATTRIBUTE)


def href_path_epub3(attributes: Mapping[str, str], content_dir: str) -> str:
    """Join ``content_dir`` with the ``href`` attribute of a navigation link."""
    return _path_from_attribute(attributes, content_dir, _EPUB3_HREF_ATTRIBUTE)
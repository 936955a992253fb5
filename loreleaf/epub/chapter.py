"""Chapters of a book and the element tree rebuilt from their XHTML."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol

from loreleaf.epub.chapter_node import ChapterNode
from loreleaf.epub.toc_item import TableOfContentsItem
from loreleaf.epub.xml_events import EventKind, XmlEvent, XmlSyntaxError, read_events, unescape

__all__ = ["Chapter", "recreate_structure"]

_ROOT_TAG = "root"
_BODY_TAG = "body"
_CLASS_ATTRIBUTE = "class"
_SOFT_HYPHEN = "\u00ad"


class _ContentSource(Protocol):
    def get_content_by_toc_item(self, toc_item: TableOfContentsItem) -> str: ...


def _well_formed_events(content: str) -> Iterator[XmlEvent]:
    """Yield events without trimming text, up to the first syntax error."""
    try:
        yield from read_events(content, trim_text=False)
    except XmlSyntaxError:
        return


def recreate_structure(chapter_content: str) -> ChapterNode:
    """Rebuild the element tree of ``chapter_content`` under a ``root`` node.

    Only elements with separate opening and closing tags become nodes; text,
    with entities resolved and soft hyphens removed, is appended to the node
    that encloses it. Reading stops at the first markup error and the node
    open at that point is returned. Raises XmlSyntaxError for text holding an
    unknown or malformed entity reference.
    """
    root = ChapterNode(_ROOT_TAG)
    current = root

    for event in _well_formed_events(chapter_content):
        if event.kind is EventKind.START:
            class_value = event.attributes.get(_CLASS_ATTRIBUTE)
            classes = class_value.split() if class_value is not None else []
            node = ChapterNode(event.name, classes)
            current.add_child(node)
            current = node
        elif event.kind is EventKind.TEXT:
            current.append_to_content(unescape(event.text).replace(_SOFT_HYPHEN, ""))
        elif event.kind is EventKind.END:
            parent = current.parent
            if parent is None:
                break
            current = parent
        elif event.kind is EventKind.EOF:
            break

    return current


@dataclass(eq=False)
class Chapter:
    """A chapter of a book; two chapters are equal when path and label match."""

    path: str
    label: str
    recreated_structure: ChapterNode
    raw_content: str = field(default="", repr=False)

    @classmethod
    def from_item(cls, item: TableOfContentsItem, ebook: _ContentSource) -> Chapter:
        """Read the document of ``item`` from ``ebook`` and build the chapter."""
        content = ebook.get_content_by_toc_item(item)
        return cls.from_item_with_content(item, content)

    @classmethod
    def from_item_with_content(cls, item: TableOfContentsItem, content: str) -> Chapter:
        """Build the chapter of ``item`` from already loaded ``content``."""
        return cls(
            path=item.path,
            label=item.label,
            recreated_structure=recreate_structure(content),
            raw_content=content,
        )

    def get_body(self) -> ChapterNode | None:
        """Return the ``body`` node among the root's children or grandchildren."""
        for child in self.recreated_structure.children:
            if child.tag == _BODY_TAG:
                return child
            for grandchild in child.children:
                if grandchild.tag == _BODY_TAG:
                    return grandchild
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chapter):
            return NotImplemented
        return self.path == other.path and self.label == other.label

    def __hash__(self) -> int:
        return hash((self.path, self.label))
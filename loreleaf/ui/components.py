"""Display components built from the element tree of a chapter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loreleaf.epub.chapter_node import ChapterNode

__all__ = [
    "TEXT_COLOR",
    "HEADING_FONT_SIZE",
    "PARAGRAPH_FONT_SIZE",
    "ComponentKind",
    "ChapterNodeComponent",
    "heading",
    "paragraph",
    "map_to_chapter_node_component",
    "create_chapter_content_nodes",
]

Color = tuple[float, float, float, float]

TEXT_COLOR: Color = (0.9, 0.9, 0.9, 1.0)
"""Default colour of text, as red, green, blue and alpha."""

HEADING_FONT_SIZE = 60.0
PARAGRAPH_FONT_SIZE = 20.0

_HEADING_TAGS = frozenset({"h1"})


class ComponentKind(Enum):
    """The kind of display component a chapter element becomes."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    LIST = "list"


@dataclass(frozen=True)
class ChapterNodeComponent:
    """A piece of chapter text with the style it is displayed in."""

    kind: ComponentKind
    content: str
    font_size: float
    color: Color = TEXT_COLOR


def heading(content: str) -> ChapterNodeComponent:
    """Return a heading component showing ``content``."""
    return ChapterNodeComponent(ComponentKind.HEADING, content, HEADING_FONT_SIZE)


def paragraph(content: str) -> ChapterNodeComponent:
    """Return a paragraph component showing ``content``."""
    return ChapterNodeComponent(ComponentKind.PARAGRAPH, content, PARAGRAPH_FONT_SIZE)


def map_to_chapter_node_component(chapter_node: ChapterNode) -> ChapterNodeComponent:
    """Turn one element into a component: ``h1`` is a heading, anything else a paragraph."""
    if chapter_node.tag in _HEADING_TAGS:
        return heading(chapter_node.content)
    return paragraph(chapter_node.content)


def create_chapter_content_nodes(chapter_node: ChapterNode) -> list[ChapterNodeComponent]:
    """Return one component for each direct child of ``chapter_node``, in order."""
    return [map_to_chapter_node_component(child) for child in chapter_node.children]
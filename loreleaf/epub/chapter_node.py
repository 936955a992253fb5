"""Tree nodes that mirror the element structure of a chapter document."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field

__all__ = ["ChapterNode"]


@dataclass(eq=False)
class ChapterNode:
    """An element of a chapter: its tag, CSS classes, own text and children.

    The parent link is weak, so a detached subtree does not keep its former
    ancestors alive.
    """

    tag: str
    classes: list[str] = field(default_factory=list)
    content: str = ""
    children: list[ChapterNode] = field(default_factory=list, init=False)
    _parent_ref: weakref.ReferenceType[ChapterNode] | None = field(
        default=None, init=False, repr=False
    )

    @property
    def parent(self) -> ChapterNode | None:
        """The parent node, or None for a root or when the parent is gone."""
        return self._parent_ref() if self._parent_ref is not None else None

    def add_child(self, child: ChapterNode) -> None:
        """Append ``child`` and make this node its parent."""
        child._parent_ref = weakref.ref(self)
        self.children.append(child)

    def append_to_content(self, content: str) -> None:
        """Add text to the end of this node's own content."""
        self.content += content
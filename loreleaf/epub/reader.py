"""Chapter-by-chapter reading of a book along its table of contents."""

from __future__ import annotations

from collections.abc import Callable

from loreleaf.epub.book import EBook
from loreleaf.epub.chapter import Chapter
from loreleaf.epub.toc_item import TableOfContentsItem

__all__ = ["EBookReader"]


class EBookReader:
    """Keeps the chapter being read and moves between neighbouring chapters."""

    def __init__(self, ebook: EBook) -> None:
        """Start reading ``ebook`` at the first table of contents entry.

        Raises ValueError when the table of contents is empty.
        """
        items = ebook.table_of_contents.items
        if not items:
            raise ValueError("the book has an empty table of contents")
        self.book = ebook
        self._current = Chapter.from_item(items[0], ebook)

    def current_chapter(self) -> Chapter:
        """Return the chapter being read."""
        return self._current

    def move_to_next_chapter(self) -> None:
        """Move to the following chapter; stay put at the last one."""
        self._move(self.book.table_of_contents.next_relative)

    def move_to_previous_chapter(self) -> None:
        """Move to the preceding chapter; stay put at the first one."""
        self._move(self.book.table_of_contents.previous_relative)

    def _move(self, neighbour: Callable[[str], TableOfContentsItem | None]) -> None:
        item = neighbour(self._current.path)
        if item is not None:
            self._current = Chapter.from_item(item, self.book)
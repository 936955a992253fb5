"""The user's library: books found on disk and the books shown to the user."""

from __future__ import annotations

import logging
import os
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

from loreleaf.epub.book import EBook, EpubError
from loreleaf.states import NavigationState

__all__ = [
    "Book",
    "BookDifference",
    "UserLibrary",
    "RefreshTimer",
    "check_differences",
    "get_all_books_from_path",
    "detect_books_in_library",
    "compare_books_in_user_library",
    "select_book",
]

_logger = logging.getLogger(__name__)

UNKNOWN = "UNKNOWN"
BOOK_FORMATS = ("epub",)
REFRESH_INTERVAL_SECONDS = 5.0


@dataclass(eq=False)
class Book:
    """A book of the library; two books are equal when name and author match."""

    name: str
    author: str
    path: str

    @classmethod
    def from_ebook(cls, ebook: EBook) -> Book:
        """Describe ``ebook``, using ``UNKNOWN`` for a missing title or creator."""
        metadata = ebook.metadata
        return cls(
            name=metadata.title if metadata.title is not None else UNKNOWN,
            author=metadata.creator if metadata.creator is not None else UNKNOWN,
            path=ebook.path,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.name == other.name and self.author == other.author

    def __hash__(self) -> int:
        return hash((self.name, self.author))


@dataclass
class BookDifference:
    """Books that should appear on screen and books that should disappear."""

    to_add: list[Book] = field(default_factory=list)
    to_remove: list[Book] = field(default_factory=list)


@dataclass
class UserLibrary:
    """Detected, displayed and pending books, and the book chosen for reading."""

    detected: list[Book] = field(default_factory=list)
    displayed: list[Book] = field(default_factory=list)
    to_add: list[Book] = field(default_factory=list)
    to_remove: list[Book] = field(default_factory=list)
    _selected: Book | None = field(default=None, repr=False)

    def set_detected(self, books: list[Book]) -> None:
        self.detected = list(books)

    def set_displayed(self, books: list[Book]) -> None:
        self.displayed = list(books)

    def clear_displayed(self) -> None:
        self.displayed.clear()

    def set_to_add(self, books: list[Book]) -> None:
        self.to_add = list(books)

    def all_added(self) -> None:
        """Move every pending book to the displayed ones."""
        self.displayed.extend(self.to_add)
        self.to_add.clear()

    def set_to_remove(self, books: list[Book]) -> None:
        self.to_remove = list(books)

    def set_selected_for_reading(self, book: Book) -> None:
        self._selected = book

    def selected_for_reading(self) -> Book | None:
        """Return the book chosen for reading, if any."""
        return self._selected


@dataclass
class RefreshTimer:
    """A repeating timer that reports when an interval has just elapsed."""

    duration: float = REFRESH_INTERVAL_SECONDS
    elapsed: float = 0.0

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError("timer duration must be positive")

    def tick(self, delta: float) -> bool:
        """Advance by ``delta`` seconds; return whether the interval just elapsed."""
        if delta < 0:
            raise ValueError("delta must not be negative")
        self.elapsed += delta
        if self.elapsed < self.duration:
            return False
        self.elapsed %= self.duration
        return True


def check_differences(library: UserLibrary) -> BookDifference:
    """Compare detected books with displayed ones."""
    to_add = [book for book in library.detected if book not in library.displayed]
    to_remove = [book for book in library.displayed if book not in library.detected]
    return BookDifference(to_add, to_remove)


def get_all_books_from_path(path: str | os.PathLike[str]) -> list[Path]:
    """Return the entries of directory ``path`` whose names end with a book format.

    An unreadable directory is logged and yields no books.
    """
    try:
        with os.scandir(path) as entries:
            found = [
                Path(entry.path)
                for entry in entries
                if entry.path.endswith(BOOK_FORMATS)
            ]
    except OSError as error:
        _logger.error("cannot list books in %s: %s", path, error)
        return []
    return sorted(found)


def _default_documents_dir() -> Path | None:
    documents = Path.home() / "Documents"
    return documents if documents.is_dir() else None


def _read_book(path: Path) -> Book | None:
    try:
        with EBook.read_epub(path) as ebook:
            return Book.from_ebook(ebook)
    except (OSError, EpubError, ValueError, zipfile.BadZipFile) as error:
        _logger.debug("skipping %s: %s", path, error)
        return None


def detect_books_in_library(
    library: UserLibrary,
    timer: RefreshTimer,
    delta: float,
    documents_dir: str | os.PathLike[str] | None = None,
) -> bool:
    """Rescan the documents directory when the timer fires or nothing is displayed.

    Books that cannot be read are skipped. Returns whether a scan ran.
    """
    should_run = timer.tick(delta) or not library.displayed
    if not should_run:
        return False

    directory = Path(documents_dir) if documents_dir is not None else _default_documents_dir()
    if directory is None:
        return False

    books = [book for path in get_all_books_from_path(directory) if (book := _read_book(path))]
    library.set_detected(books)
    return True


def compare_books_in_user_library(library: UserLibrary) -> None:
    """Store which books must be added to and removed from the screen."""
    difference = check_differences(library)
    library.set_to_add(difference.to_add)
    library.set_to_remove(difference.to_remove)


def select_book(library: UserLibrary, book: Book) -> NavigationState:
    """Choose ``book`` for reading and return the state to navigate to."""
    library.set_selected_for_reading(book)
    return NavigationState.READER
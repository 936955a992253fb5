# loreleaf

Tools for reading EPUB books from Python: open an `.epub` archive, inspect its
metadata, manifest, spine and table of contents, walk through chapters, and
keep track of the books found in a documents folder. It has no dependencies
beyond the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Opening a book

```python
from loreleaf.epub.book import EBook

with EBook.read_epub("moby-dick.epub") as book:
    print(book.metadata.title, "by", book.metadata.creator)
    for item in book.table_of_contents.items:
        print(item.path, item.label)
```

`EBook.read_epub` finds the package (OPF) document through
`META-INF/container.xml` (see `parse_container`), then reads the metadata
(`BookMetadata`), the manifest (`BookManifest`, searchable with
`search_for_item`), the spine (`BookSpine`) and the table of contents.
The table of contents is read as EPUB 2 NCX when its file name contains
`.ncx` (`TableOfContents.from_ncx`) and as an EPUB 3 navigation document
otherwise (`TableOfContents.from_nav`). Entries are `TableOfContentsItem`
objects whose `path` is joined to the package's directory and whose `#anchor`
is split off into `anchor`.

A file that cannot be opened raises `OSError`; a file that is not a readable
EPUB raises `EpubError` from `loreleaf.epub.book`. `EBook.get_content_by_toc_item`
returns the text of an entry's document and raises `EpubError` when the book
is closed or the document is missing. Close a book with `close()` or use it
as a context manager.

## Reading chapter by chapter

```python
from loreleaf.epub.book import EBook
from loreleaf.epub.reader import EBookReader

with EBook.read_epub("moby-dick.epub") as book:
    reader = EBookReader(book)
    print(reader.current_chapter().label)
    reader.move_to_next_chapter()
    reader.move_to_previous_chapter()
```

The reader starts at the first table of contents entry (a book with an empty
table of contents raises `ValueError`). Moving past the first or last entry
leaves the current chapter unchanged.

Each `Chapter` rebuilds the element tree of its XHTML as `ChapterNode`
objects (`loreleaf.epub.chapter.recreate_structure`), each with a `tag`, its
CSS `classes`, its own text `content`, `children` and a `parent`. Entities are
resolved and soft hyphens removed from text. `Chapter.get_body()` returns the
`body` node when it is a child or grandchild of the root, and `None`
otherwise. Two chapters are equal when their path and label match.

The XML is read with a small event parser in `loreleaf.epub.xml_events`
(`read_events`, `unescape`), which raises `XmlSyntaxError` on malformed markup.

## Library

`loreleaf.library` keeps a `UserLibrary` of detected, displayed and pending
`Book`s (two books are equal when name and author match):

- `get_all_books_from_path(path)` lists the `.epub` files in a directory.
- `detect_books_in_library(library, timer, delta, documents_dir=None)` rescans
  the directory when the `RefreshTimer` (5 seconds by default) fires or nothing
  is displayed; without a directory it uses `~/Documents` if it exists.
  Unreadable books are skipped.
- `check_differences(library)` and `compare_books_in_user_library(library)`
  work out which books must be added or removed.
- `select_book(library, book)` marks a book for reading and returns
  `NavigationState.READER`.

## Interface models

`loreleaf.states` holds `NavigationState` and `LoreLeafState`.
`loreleaf.ui.components` turns chapter nodes into heading (`h1`) and paragraph
components with `create_chapter_content_nodes`, and `loreleaf.ui.buttons`
models button hover and click flags, border colours and the navigation menu
buttons (`navigation_button_interaction`).

## What it does not do

There is no window, screen or command-line program: the package reads books
and models interface state and components, but renders nothing. Only EPUB
files are recognised, and the library is not stored anywhere between runs.
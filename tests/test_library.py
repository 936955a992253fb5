import zipfile
from pathlib import Path

import pytest

from loreleaf.library import (
    Book,
    RefreshTimer,
    UserLibrary,
    check_differences,
    compare_books_in_user_library,
    detect_books_in_library,
    get_all_books_from_path,
    select_book,
)
from loreleaf.states import NavigationState

CONTAINER = """<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OPS/package.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

OPF = """<?xml version="1.0"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Sample Title</dc:title>
    {creator}
  </metadata>
  <manifest>
    <item id="toc" href="toc.xhtml" media-type="application/xhtml+xml"/>
    <item id="chapter" href="chapter.xhtml" media-type="application/xhtml+xml"/>
  </manifest>
  <spine>
    <itemref idref="chapter"/>
  </spine>
</package>
"""

NAV = """<html xmlns:epub="http://www.idpf.org/2007/ops"><body>
<nav epub:type="toc" id="toc"><ol><li><a href="chapter.xhtml">Chapter</a></li></ol></nav>
</body></html>
"""


def write_epub(path: Path, creator: str | None = "Sample Author") -> None:
    creator_xml = f"<dc:creator>{creator}</dc:creator>" if creator is not None else ""
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("META-INF/container.xml", CONTAINER)
        archive.writestr("OPS/package.opf", OPF.format(creator=creator_xml))
        archive.writestr("OPS/toc.xhtml", NAV)
        archive.writestr("OPS/chapter.xhtml", "<html><body><p>Text</p></body></html>")


def book(name, author, path=""):
    return Book(name=name, author=author, path=path)


def test_get_all_books_from_path_finds_epub_files(tmp_path):
    (tmp_path / "first.epub").write_bytes(b"")
    (tmp_path / "second.epub").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("x")

    books = get_all_books_from_path(tmp_path)

    assert len(books) == 2
    assert [p.name for p in books] == ["first.epub", "second.epub"]


def test_get_all_books_from_missing_directory_is_empty(tmp_path):
    assert get_all_books_from_path(tmp_path / "missing") == []


def test_should_return_empty():
    difference = check_differences(UserLibrary())

    assert len(difference.to_add) == 0
    assert len(difference.to_remove) == 0


def test_should_return_1_book_to_add_in_library():
    library = UserLibrary()
    library.set_detected([book("Name 1", "Author 1"), book("Name 2", "Author 2")])
    library.set_displayed([book("Name 1", "Author 1")])

    difference = check_differences(library)

    assert len(difference.to_add) == 1
    assert len(difference.to_remove) == 0


def test_should_return_1_book_to_remove_from_library():
    library = UserLibrary()
    library.set_detected([book("Name 1", "Author 1")])
    library.set_displayed([book("Name 1", "Author 1"), book("Name 2", "Author 2")])

    difference = check_differences(library)

    assert len(difference.to_add) == 0
    assert len(difference.to_remove) == 1


def test_should_return_1_book_to_add_and_1_book_to_remove_from_library():
    library = UserLibrary()
    library.set_detected([book("Name 2", "Author 2")])
    library.set_displayed([book("Name 3", "Author 3")])

    difference = check_differences(library)

    assert len(difference.to_add) == 1
    assert len(difference.to_remove) == 1


def test_should_set_selected_for_reading():
    library = UserLibrary()
    clicked = book("Name", "Author", "./123")

    library.set_selected_for_reading(clicked)

    assert library.selected_for_reading() == clicked


def test_clear_displayed_should_clear_displayed_collection():
    library = UserLibrary()
    library.set_displayed([book("Name 1", "Author 1", "./111"), book("Name 2", "Author 2", "./222")])
    assert len(library.displayed) == 2

    library.clear_displayed()

    assert len(library.displayed) == 0


def test_book_equality_ignores_path():
    assert book("Name", "Author", "a") == book("Name", "Author", "b")
    assert not book("Name", "Author") == book("Name", "Other")


def test_compare_and_all_added_move_books_to_displayed():
    library = UserLibrary()
    library.set_detected([book("A", "X"), book("B", "Y")])
    library.set_displayed([book("C", "Z")])

    compare_books_in_user_library(library)

    assert library.to_add == [book("A", "X"), book("B", "Y")]
    assert library.to_remove == [book("C", "Z")]

    library.all_added()

    assert library.displayed == [book("C", "Z"), book("A", "X"), book("B", "Y")]
    assert library.to_add == []


def test_select_book_navigates_to_reader():
    library = UserLibrary()
    chosen = book("Name", "Author", "./book.epub")

    state = select_book(library, chosen)

    assert state is NavigationState.READER
    assert library.selected_for_reading().path == "./book.epub"


def test_refresh_timer_fires_each_interval():
    timer = RefreshTimer()

    assert [timer.tick(2.0), timer.tick(2.0), timer.tick(1.0), timer.tick(1.0)] == [
        False,
        False,
        True,
        False,
    ]
    assert timer.elapsed == pytest.approx(1.0)


def test_refresh_timer_keeps_remainder_after_long_tick():
    timer = RefreshTimer()

    assert timer.tick(12.0) is True
    assert timer.elapsed == pytest.approx(2.0)


def test_refresh_timer_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        RefreshTimer(duration=0.0)


def test_detect_books_reads_epubs_and_skips_broken_ones(tmp_path):
    write_epub(tmp_path / "good.epub")
    (tmp_path / "broken.epub").write_bytes(b"not a zip archive")
    library = UserLibrary()

    ran = detect_books_in_library(library, RefreshTimer(), 0.1, tmp_path)

    assert ran is True
    assert library.detected == [book("Sample Title", "Sample Author")]
    assert library.detected[0].path == str(tmp_path / "good.epub")


def test_detect_books_uses_unknown_for_missing_creator(tmp_path):
    write_epub(tmp_path / "anon.epub", creator=None)
    library = UserLibrary()

    detect_books_in_library(library, RefreshTimer(), 0.0, tmp_path)

    assert [(b.name, b.author) for b in library.detected] == [("Sample Title", "UNKNOWN")]


def test_detect_books_waits_for_timer_when_books_are_displayed(tmp_path):
    write_epub(tmp_path / "good.epub")
    library = UserLibrary()
    library.set_displayed([book("Shown", "Author")])

    ran = detect_books_in_library(library, RefreshTimer(), 1.0, tmp_path)

    assert ran is False
    assert library.detected == []

    ran = detect_books_in_library(library, RefreshTimer(), 5.0, tmp_path)

    assert ran is True
    assert library.detected == [book("Sample Title", "Sample Author")]
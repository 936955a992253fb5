"""The table of contents of a book, read from an NCX or an XHTML navigation document."""

from __future__ import annotations

import logging
import posixpath
import zipfile
from collections.abc import Iterator
from dataclasses import dataclass, field
from os import PathLike

from loreleaf.epub.manifest import BookManifest
from loreleaf.epub.toc_item import TableOfContentsItem, href_path_epub3, src_path_epub2
from loreleaf.epub.xml_events import EventKind, XmlEvent, XmlSyntaxError, read_events, unescape

__all__ = [
    "TableOfContents",
    "read_archive_text",
    "read_table_of_contents_from_manifest",
]

_logger = logging.getLogger(__name__)

_NCX_EXTENSION = ".ncx"
_NCX_NAVIGATION_TAG = "navMap"
_NCX_CONTENT_TAG = "content"
_NAV_TYPE_ATTRIBUTE = "epub:type"
_NAV_TOC_TYPE = "toc"
_NAV_LINK_TAG = "a"
_MANIFEST_TOC_QUERY = "toc"
_MISSING_CONTENT = "NONE"


def _well_formed_events(content: str) -> Iterator[XmlEvent]:
    """Yield events up to the first syntax error."""
    try:
        yield from read_events(content, trim_text=True)
    except XmlSyntaxError:
        return


def read_archive_text(archive: zipfile.ZipFile, path: str) -> str:
    """Return the UTF-8 text of the archive member ``path``.

    Raises KeyError when there is no such member and UnicodeDecodeError when
    the member is not valid UTF-8.
    """
    return archive.read(path).decode("utf-8")


def read_table_of_contents_from_manifest(
    archive: zipfile.ZipFile,
    manifest: BookManifest,
    content_dir: str | PathLike[str],
) -> tuple[str, str]:
    """Find the table of contents in ``manifest`` and read it from ``archive``.

    Returns the archive path of the document and its text; the text is
    ``"NONE"`` when the document cannot be read. Raises ValueError when the
    manifest has no table of contents entry.
    """
    toc_entry = manifest.search_for_item(_MANIFEST_TOC_QUERY)
    if toc_entry is None:
        raise ValueError("manifest has no table of contents entry")

    toc_href = posixpath.join(str(content_dir), toc_entry.href)
    try:
        toc_content = read_archive_text(archive, toc_href)
    except (KeyError, UnicodeDecodeError) as error:
        _logger.warning("cannot read table of contents %r: %s", toc_href, error)
        toc_content = _MISSING_CONTENT
    return toc_href, toc_content


@dataclass
class TableOfContents:
    """Table of contents entries in document order."""

    items: list[TableOfContentsItem] = field(default_factory=list)

    @classmethod
    def from_content(cls, href: str, content: str, content_dir: str) -> TableOfContents:
        """Parse ``content`` as NCX when ``href`` names an NCX file, else as a nav document."""
        if _NCX_EXTENSION in href:
            return cls.from_ncx(content, content_dir)
        return cls.from_nav(content, content_dir)

    @classmethod
    def from_ncx(cls, toc_content: str, content_dir: str) -> TableOfContents:
        """Read the entries of an EPUB 2 NCX document."""
        items: list[TableOfContentsItem] = []
        href = ""
        label = ""
        reading_started = False
        inside_navigation = False

        for event in _well_formed_events(toc_content):
            if event.kind in (EventKind.START, EventKind.EMPTY):
                if not inside_navigation:
                    inside_navigation = event.name == _NCX_NAVIGATION_TAG
                if event.name == _NCX_CONTENT_TAG:
                    href = src_path_epub2(event.attributes, content_dir)
                    reading_started = True
            elif event.kind is EventKind.TEXT:
                label = unescape(event.text)
            elif event.kind is EventKind.END:
                if not reading_started:
                    continue
                if not inside_navigation:
                    break
                items.append(TableOfContentsItem.create(href, label, None))
                href = ""
                label = ""
                reading_started = False
        return cls(items)

    @classmethod
    def from_nav(cls, toc_content: str, content_dir: str) -> TableOfContents:
        """Read the entries of an EPUB 3 XHTML navigation document."""
        items: list[TableOfContentsItem] = []
        href = ""
        label = ""
        reading_started = False
        inside_navigation = False

        for event in _well_formed_events(toc_content):
            if event.kind in (EventKind.START, EventKind.EMPTY):
                nav_type = event.attributes.get(_NAV_TYPE_ATTRIBUTE)
                if nav_type is not None:
                    inside_navigation = nav_type == _NAV_TOC_TYPE
                if event.name == _NAV_LINK_TAG:
                    href = href_path_epub3(event.attributes, content_dir)
                    reading_started = True
            elif event.kind is EventKind.TEXT:
                label = unescape(event.text)
            elif event.kind is EventKind.END:
                if not reading_started:
                    continue
                if not inside_navigation:
                    break
                items.append(TableOfContentsItem.create(href, label, None))
                href = ""
                label = ""
                reading_started = False
        return cls(items)

    def search_for_item(self, href: str) -> TableOfContentsItem | None:
        """Return the first entry whose path is ``href``, or None."""
        return next((item for item in self.items if item.path == href), None)

    def _position_of(self, href: str) -> tuple[int, TableOfContentsItem]:
        current = self.search_for_item(href)
        if current is None:
            raise ValueError(f"no table of contents entry with path {href!r}")
        index = next(index for index, item in enumerate(self.items) if item == current)
        return index, current

    def previous_relative(self, href: str) -> TableOfContentsItem | None:
        """Return the entry before the one at ``href``, or None at the start.

        Raises ValueError when no entry has the path ``href``.
        """
        index, current = self._position_of(href)
        if self.items[0] == current:
            return None
        return self.items[index - 1]

    def next_relative(self, href: str) -> TableOfContentsItem | None:
        """Return the entry after the one at ``href``, or None at the end.

        Raises ValueError when no entry has the path ``href``.
        """
        index, current = self._position_of(href)
        if self.items[-1] == current:
            return None
        return self.items[index + 1]
"""Opening EPUB archives and reading their package, manifest, spine and contents."""

from __future__ import annotations

import logging
import os
import posixpath
import zipfile
from dataclasses import dataclass, field
from typing import Any

from loreleaf.epub.manifest import BookManifest
from loreleaf.epub.metadata import BookMetadata
from loreleaf.epub.spine import BookSpine
from loreleaf.epub.table_of_contents import (
    TableOfContents,
    read_archive_text,
    read_table_of_contents_from_manifest,
)
from loreleaf.epub.toc_item import TableOfContentsItem
from loreleaf.epub.xml_events import EventKind, XmlSyntaxError, read_events

__all__ = ["EpubError", "EBook", "parse_container", "META_INF_CONTAINER_PATH"]

_logger = logging.getLogger(__name__)

META_INF_CONTAINER_PATH = "META-INF/container.xml"
"""Archive path of the container document that names the package document."""

_ROOTFILE_TAG = "rootfile"
_FULL_PATH_ATTRIBUTE = "full-path"
_MISSING_CONTENT = "NONE"


class EpubError(Exception):
    """Raised when a file is not a readable EPUB or a resource cannot be read."""


def parse_container(archive: zipfile.ZipFile) -> str:
    """Return the archive path of the package (OPF) document.

    The ``full-path`` of the last ``rootfile`` element wins. Raises
    :class:`EpubError` when the container document is missing or malformed,
    or names no package document.
    """
    try:
        contents = read_archive_text(archive, META_INF_CONTAINER_PATH)
    except KeyError:
        raise EpubError(f"archive has no {META_INF_CONTAINER_PATH}") from None
    except UnicodeDecodeError as error:
        raise EpubError(f"{META_INF_CONTAINER_PATH} is not valid UTF-8") from error

    opf_path = ""
    try:
        for event in read_events(contents, trim_text=True):
            if event.kind in (EventKind.START, EventKind.EMPTY) and event.name == _ROOTFILE_TAG:
                full_path = event.attributes.get(_FULL_PATH_ATTRIBUTE)
                if full_path is not None:
                    opf_path = full_path
    except XmlSyntaxError as error:
        raise EpubError(f"malformed {META_INF_CONTAINER_PATH}: {error}") from error

    if not opf_path:
        raise EpubError("OPF file not found")
    return opf_path


@dataclass(eq=False)
class EBook:
    """An opened EPUB book. Close it, or use it as a context manager."""

    metadata: BookMetadata
    path: str
    manifest: BookManifest
    spine: BookSpine
    table_of_contents: TableOfContents
    content_dir: str
    _archive: zipfile.ZipFile = field(repr=False)

    @classmethod
    def read_epub(cls, epub_path: str | os.PathLike[str]) -> EBook:
        """Open the EPUB at ``epub_path`` and read its package document.

        Raises OSError when the file cannot be opened and :class:`EpubError`
        when it is not a readable EPUB.
        """
        path = os.fspath(epub_path)
        try:
            archive = zipfile.ZipFile(path)
        except zipfile.BadZipFile as error:
            raise EpubError(f"{path} is not a ZIP archive") from error
        try:
            return cls._from_archive(archive, path)
        except BaseException:
            archive.close()
            raise

    @classmethod
    def _from_archive(cls, archive: zipfile.ZipFile, path: str) -> EBook:
        opf_path = parse_container(archive)
        try:
            opf_content = read_archive_text(archive, opf_path)
        except (KeyError, UnicodeDecodeError) as error:
            _logger.warning("cannot read package document %r: %s", opf_path, error)
            opf_content = _MISSING_CONTENT

        content_dir = posixpath.dirname(opf_path)
        manifest = BookManifest.from_opf(opf_content)
        metadata = BookMetadata.from_opf(opf_content)
        try:
            spine = BookSpine.from_opf_and_manifest(opf_content, manifest)
            toc_href, toc_content = read_table_of_contents_from_manifest(
                archive, manifest, content_dir
            )
        except ValueError as error:
            raise EpubError(f"{path}: {error}") from error

        table_of_contents = TableOfContents.from_content(toc_href, toc_content, content_dir)
        return cls(
            metadata=metadata,
            path=path,
            manifest=manifest,
            spine=spine,
            table_of_contents=table_of_contents,
            content_dir=content_dir,
            _archive=archive,
        )

    @property
    def closed(self) -> bool:
        """Whether the underlying archive has been closed."""
        return self._archive.fp is None

    def get_content_by_toc_item(self, toc_item: TableOfContentsItem) -> str:
        """Return the text of the document that ``toc_item`` points to.

        Raises :class:`EpubError` when the book is closed or the document
        cannot be read.
        """
        if self.closed:
            raise EpubError(f"{self.path} has been closed")
        try:
            return read_archive_text(self._archive, toc_item.path)
        except KeyError:
            raise EpubError(f"{self.path} has no member {toc_item.path!r}") from None
        except UnicodeDecodeError as error:
            raise EpubError(f"{toc_item.path!r} is not valid UTF-8") from error

    def close(self) -> None:
        """Close the underlying archive."""
        self._archive.close()

    def __enter__(self) -> EBook:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
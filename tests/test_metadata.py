from loreleaf.epub.metadata import BookMetadata

OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="pub-id">code.google.com.epub-samples.moby-dick-basic</dc:identifier>
    <dc:title>Moby-Dick</dc:title>
    <dc:language>en-US</dc:language>
    <dc:creator id="creator">Herman Melville</dc:creator>
    <dc:publisher>Harper &amp; Brothers, Publishers</dc:publisher>
    <dc:rights>This work is shared with the public using the Attribution-ShareAlike 3.0 Unported (CC BY-SA 3.0) license.</dc:rights>
    <meta property="dcterms:modified">2012-01-18T12:47:00Z</meta>
  </metadata>
  <manifest>
    <item id="toc" href="toc.xhtml" media-type="application/xhtml+xml"/>
  </manifest>
</package>
"""


def test_parse_opf_should_return_correct_metadata():
    metadata = BookMetadata.from_opf(OPF)

    assert metadata.creator == "Herman Melville"
    assert metadata.title == "Moby-Dick"
    assert metadata.language == "en-US"
    assert metadata.identifier == "code.google.com.epub-samples.moby-dick-basic"
    assert metadata.publisher == "Harper & Brothers, Publishers"
    assert metadata.rights == (
        "This work is shared with the public using the Attribution-ShareAlike 3.0 "
        "Unported (CC BY-SA 3.0) license."
    )


def test_missing_fields_are_none():
    metadata = BookMetadata.from_opf("<metadata><dc:title>Only</dc:title></metadata>")
    assert metadata.title == "Only"
    assert metadata == BookMetadata(title="Only")


def test_text_outside_known_tags_is_ignored():
    metadata = BookMetadata.from_opf("<metadata><title>Plain</title><dc:x>y</dc:x></metadata>")
    assert metadata == BookMetadata()


def test_later_element_overrides_earlier():
    content = "<m><dc:title>First</dc:title><dc:title>Second</dc:title></m>"
    assert BookMetadata.from_opf(content).title == "Second"


def test_text_after_closing_tag_is_not_assigned():
    content = "<m><dc:title>Kept</dc:title>stray</m>"
    assert BookMetadata.from_opf(content).title == "Kept"


def test_parsing_stops_at_syntax_error_keeping_earlier_fields():
    content = "<m><dc:title>Kept</dc:title></x><dc:creator>Lost</dc:creator></m>"
    metadata = BookMetadata.from_opf(content)
    assert metadata.title == "Kept"
    assert metadata.creator is None
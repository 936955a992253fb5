from loreleaf.epub.manifest import BookManifest, ManifestItem

OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0">
  <metadata/>
  <manifest>
    <item id="font.stix.regular" href="fonts/STIXGeneral.otf" media-type="application/vnd.ms-opentype"/>
    <item id="font.stix.italic" href="fonts/STIXGeneralItalic.otf" media-type="application/vnd.ms-opentype"/>
    <item id="font.stix.bold" href="fonts/STIXGeneralBol.otf" media-type="application/vnd.ms-opentype"/>
    <item id="font.stix.bold.italic" href="fonts/STIXGeneralBolIta.otf" media-type="application/vnd.ms-opentype"/>
    <item id="toc" properties="nav" href="toc.xhtml" media-type="application/xhtml+xml"/>
    <item id="cover" href="cover.xhtml" media-type="application/xhtml+xml"/>
    <item id="xchapter_136" href="chapter_136.xhtml" media-type="application/xhtml+xml"/>
    <item id="brief-toc" href="toc-short.xhtml" media-type="application/xhtml+xml"/>
  </manifest>
  <spine>
    <itemref idref="cover"/>
  </spine>
</package>
"""


def test_from_opf_reads_items_in_order():
    manifest = BookManifest.from_opf(OPF)

    assert len(manifest.items) == 8
    assert manifest.items[0].id == "font.stix.regular"
    assert manifest.items[0].href == "fonts/STIXGeneral.otf"
    assert manifest.items[0].media_type == "application/vnd.ms-opentype"
    assert manifest.items[1].id == "font.stix.italic"
    assert manifest.items[2].id == "font.stix.bold"
    assert manifest.items[3].id == "font.stix.bold.italic"
    assert manifest.items[4].id == "toc"
    assert manifest.items[6].id == "xchapter_136"
    assert manifest.items[7].id == "brief-toc"


def test_search_for_item_should_return_matching_item_when_queried():
    manifest = BookManifest.from_opf(OPF)

    toc_from_manifest = manifest.search_for_item("toc")

    assert toc_from_manifest == ManifestItem("toc", "toc.xhtml", "application/xhtml+xml")


def test_search_matches_part_of_href():
    manifest = BookManifest.from_opf(OPF)
    found = manifest.search_for_item("chapter_136")
    assert found.id == "xchapter_136"


def test_search_returns_none_without_match():
    manifest = BookManifest.from_opf(OPF)
    assert manifest.search_for_item("no-such-resource") is None


def test_missing_attributes_are_empty_strings():
    manifest = BookManifest.from_opf('<manifest><item id="x"></item></manifest>')
    assert manifest.items == [ManifestItem("x", "", "")]


def test_itemref_elements_are_not_manifest_items():
    manifest = BookManifest.from_opf(OPF)
    assert all(item.id != "" for item in manifest.items)
    assert [item.id for item in manifest.items].count("cover") == 1


def test_empty_document_gives_empty_manifest():
    assert BookManifest.from_opf("").items == []
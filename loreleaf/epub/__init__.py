"""Reading EPUB archives: metadata, manifest, spine, table of contents and chapters."""
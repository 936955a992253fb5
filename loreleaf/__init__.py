"""EPUB reading toolkit with chapter navigation, a book library and interface models."""

__version__ = "0.1.0"
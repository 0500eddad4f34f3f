"""Convert EPUB e-books into single-file HTML and PDF documents."""

__version__ = "0.1.0"

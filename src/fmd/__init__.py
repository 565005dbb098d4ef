"""fmd - find Markdown files by metadata."""

__version__ = "0.1.0"

"""Output of the gallery document."""

from .writer import DEFAULT_OUTPUT_PATH, GalleryWriter, OutputError, build_document

__all__ = ["DEFAULT_OUTPUT_PATH", "GalleryWriter", "OutputError", "build_document"]

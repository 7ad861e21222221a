"""Writing the gallery document for Cloudinary Gallery."""

import json
import logging
import os
import shutil
import tempfile
from datetime import datetime, timezone
from typing import Optional, Sequence

from cloudinary_gallery.models import Album, GalleryDocument, GalleryError, NormalizedItem

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = "images.json"


class OutputError(GalleryError):
    """Output error exception."""


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def build_document(
    cloud_name: str,
    all_items: Sequence[NormalizedItem],
    albums: Sequence[Album],
    generated_at: Optional[datetime] = None,
) -> GalleryDocument:
    """Assemble the document for one run.

    Args:
        cloud_name: Cloudinary account the assets belong to
        all_items: Every item, foldered and unfiled, for the carousel
        albums: Albums in display order
        generated_at: Timestamp of the run, defaults to now (UTC)

    Returns:
        A fresh GalleryDocument
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)
    elif generated_at.tzinfo is None:
        generated_at = generated_at.replace(tzinfo=timezone.utc)

    return GalleryDocument(
        cloud_name=cloud_name,
        last_updated=generated_at.astimezone(timezone.utc),
        all_items=tuple(all_items),
        albums=tuple(albums),
    )


class GalleryWriter:
    """Writes the gallery document to disk."""

    def __init__(self, output_path: str = DEFAULT_OUTPUT_PATH, dry_run: bool = False):
        """Initialize the writer.

        Args:
            output_path: Path of the JSON file to produce
            dry_run: If True, report what would be written without touching the file
        """
        self.output_path = output_path
        self.dry_run = dry_run

    def serialize(self, document: GalleryDocument) -> str:
        """Render the document as the JSON text the site loads."""
        return json.dumps(document.to_dict(), indent=2, ensure_ascii=False)

    def write(self, document: GalleryDocument) -> None:
        """Replace the output file with the document.

        The text goes to a temporary file next to the target and is renamed
        into place, so a failed write leaves any previous file untouched.

        Raises:
            OutputError: If the file cannot be written
        """
        content = self.serialize(document)

        if self.dry_run:
            logger.info(
                "[DRY RUN] Would write %d bytes to %s", len(content.encode("utf-8")), self.output_path
            )
            return

        directory = os.path.dirname(os.path.abspath(self.output_path))
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=directory, suffix=".tmp", delete=False
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(content)
            # The temporary file is created 0600; the site must stay readable by others
            if os.path.exists(self.output_path):
                shutil.copymode(self.output_path, tmp_path)
            else:
                os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, self.output_path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise OutputError(f"Failed to write {self.output_path}: {e}") from e

        logger.info("Wrote %s", self.output_path)

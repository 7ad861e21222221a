"""Main module for Cloudinary Gallery."""

import argparse
import logging
import sys
from typing import Dict, List, Mapping, Optional, Tuple

from tabulate import tabulate

from cloudinary_gallery.models import (
    ConfigurationError,
    GalleryDocument,
    GalleryError,
    NormalizedItem,
)
from cloudinary_gallery.output.writer import DEFAULT_OUTPUT_PATH, GalleryWriter, build_document
from cloudinary_gallery.utils.album_utils import (
    DEFAULT_COVER_OVERRIDES,
    assemble_albums,
    load_cover_overrides,
)
from cloudinary_gallery.utils.api_client import CloudinaryClient, folder_expression
from cloudinary_gallery.utils.auth import (
    REMEDIATION_MESSAGE,
    CloudinaryConfig,
    is_credential_error,
    load_config,
)
from cloudinary_gallery.utils.media_utils import classify_asset

logger = logging.getLogger(__name__)


class CloudinaryGallery:
    """Fetches Cloudinary folders and turns them into the site's gallery document."""

    def __init__(
        self,
        config: CloudinaryConfig,
        output_path: str = DEFAULT_OUTPUT_PATH,
        dry_run: bool = False,
        cover_overrides: Optional[Mapping[str, int]] = None,
        client: Optional[CloudinaryClient] = None,
    ):
        """Initialize the gallery."""
        self.config = config
        self.client = client
        self.cover_overrides = (
            DEFAULT_COVER_OVERRIDES if cover_overrides is None else cover_overrides
        )
        self.writer = GalleryWriter(output_path, dry_run=dry_run)

    def authenticate(self) -> None:
        """Create the API client from the configured credentials."""
        self.client = CloudinaryClient(self.config)

    def fetch_folder(self, folder: Optional[str]) -> List[NormalizedItem]:
        """Fetch every asset in a folder, newest first.

        Args:
            folder: Folder name, or None for assets outside any folder

        Returns:
            Normalized items in the order the API returned them
        """
        if self.client is None:
            self.authenticate()

        expression = folder_expression(folder)
        items: List[NormalizedItem] = []
        cursor = None
        page = 0

        while True:
            resources, cursor = self.client.search_page(expression, cursor)
            page += 1
            items.extend(classify_asset(resource) for resource in resources)
            logger.debug("Page %d of %s: %d assets", page, expression, len(resources))
            if not cursor:
                break

        return items

    def fetch_all(self) -> Tuple[Dict[str, List[NormalizedItem]], List[NormalizedItem]]:
        """Fetch every folder, then the assets outside any folder.

        Returns:
            Items per folder in listing order, and the unfiled items
        """
        if self.client is None:
            self.authenticate()

        logger.info("Fetching folders and images from Cloudinary...")
        folders = self.client.list_folders()
        logger.info("Found %d folders", len(folders))

        items_by_folder: Dict[str, List[NormalizedItem]] = {}
        for folder in folders:
            logger.info("Fetching images from folder: %s...", folder)
            items = self.fetch_folder(folder)
            items_by_folder[folder] = items
            if items:
                logger.info("  - Found %d images in %s", len(items), folder)

        logger.info("Checking for root-level images...")
        unfiled = self.fetch_folder(None)

        return items_by_folder, unfiled

    def build(self) -> Tuple[GalleryDocument, int]:
        """Fetch everything and assemble the document.

        Returns:
            The document and the number of unfiled items in it
        """
        items_by_folder, unfiled = self.fetch_all()

        all_items = [item for items in items_by_folder.values() for item in items]
        all_items.extend(unfiled)

        albums = assemble_albums(items_by_folder, self.cover_overrides)
        document = build_document(self.config.cloud_name, all_items, albums)
        return document, len(unfiled)

    def print_summary(self, document: GalleryDocument, unfiled_count: int) -> None:
        """Print totals and a table of albums."""
        print(f"\nTotal images found: {document.total_images}")
        print(f"Images in folders: {document.total_images - unfiled_count}")
        print(f"Images at root: {unfiled_count}")
        print(f"Found {len(document.albums)} albums")

        if document.albums:
            rows = [[album.title, album.folder, len(album.items)] for album in document.albums]
            print(tabulate(rows, headers=["Album", "Folder", "Photos"], tablefmt="psql"))

        if unfiled_count:
            print(f"\nNote: {unfiled_count} images found at root level (not in folders)")

    def run(self) -> GalleryDocument:
        """Fetch, assemble and write the gallery document."""
        document, unfiled_count = self.build()
        self.writer.write(document)
        self.print_summary(document, unfiled_count)
        return document


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Cloudinary Gallery: build the site's images.json from Cloudinary folders"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Path of the generated JSON file (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument(
        "--covers",
        type=str,
        help="JSON file mapping folder names to cover image indices",
    )
    parser.add_argument("--dry-run", action="store_true", help="Fetch without writing the file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Cloudinary Gallery CLI."""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s"
    )

    try:
        config = load_config()
        cover_overrides = load_cover_overrides(args.covers) if args.covers else None
        gallery = CloudinaryGallery(
            config,
            output_path=args.output,
            dry_run=args.dry_run,
            cover_overrides=cover_overrides,
        )
        gallery.authenticate()
        gallery.run()
    except GalleryError as e:
        logger.error("Error fetching images: %s", e)
        if isinstance(e, ConfigurationError) and is_credential_error(e):
            print(f"\n{REMEDIATION_MESSAGE}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Album assembly for Cloudinary Gallery."""

import json
import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence

from cloudinary_gallery.models import Album, ConfigurationError, NormalizedItem

logger = logging.getLogger(__name__)

# Preferred cover index per folder (0 = newest item). Folders not listed use 0.
DEFAULT_COVER_OVERRIDES: Dict[str, int] = {
    "2020, SOL November": 1,
    "2021, SOL April": 5,
    "2021, SOL November": 2,
    "2022, SOL April": 2,
    "2022, SOL November": 0,
    "2023, SOL April": 1,
    "2023, SOL October": 4,
    "2024, SOL April": 6,
    "2024, SOL October": 1,
    "2025, SOL April": 11,
    "2025, SOL November": 35,
}

_WORD_SEPARATORS = re.compile(r"[-_]")


def format_folder_name(folder: str) -> str:
    """Convert a folder name to an album title.

    "2024-sol_april" becomes "2024 Sol April".
    """
    words = _WORD_SEPARATORS.split(folder)
    return " ".join(word[:1].upper() + word[1:] for word in words)


def select_cover(
    items: Sequence[NormalizedItem], folder: str, cover_overrides: Mapping[str, int]
) -> NormalizedItem:
    """Pick the album cover, falling back to the first item.

    An override is honored only when present and within range for the folder.
    """
    index = 0
    if folder in cover_overrides:
        override = cover_overrides[folder]
        if 0 <= override < len(items):
            index = override
        else:
            logger.warning(
                "Cover index %d is out of range for %s (%d items), using the first item",
                override,
                folder,
                len(items),
            )
    return items[index]


def assemble_albums(
    items_by_folder: Mapping[str, Sequence[NormalizedItem]],
    cover_overrides: Optional[Mapping[str, int]] = None,
) -> List[Album]:
    """Build one album per non-empty folder, newest title first.

    Titles are compared as plain strings; the order is chronological only
    because folder names start with the year.
    """
    if cover_overrides is None:
        cover_overrides = DEFAULT_COVER_OVERRIDES

    albums = []
    for folder, items in items_by_folder.items():
        if not items:
            continue
        albums.append(
            Album(
                title=format_folder_name(folder),
                folder=folder,
                cover_item=select_cover(items, folder, cover_overrides),
                items=tuple(items),
            )
        )

    albums.sort(key=lambda album: album.title, reverse=True)
    return albums


def load_cover_overrides(path: str) -> Dict[str, int]:
    """Load cover overrides from a JSON object of folder name to index.

    Raises:
        ConfigurationError: If the file cannot be read or has the wrong shape
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot read cover overrides from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Cover overrides in {path} must be a JSON object")

    overrides = {}
    for folder, index in data.items():
        if isinstance(index, bool) or not isinstance(index, int):
            raise ConfigurationError(
                f"Cover index for {folder!r} in {path} must be an integer, got {index!r}"
            )
        overrides[folder] = index
    return overrides

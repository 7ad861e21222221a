"""Models for Cloudinary Gallery."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class NormalizedItem:
    """A single asset ready for the website."""
    url: str
    original_url: str
    is_video: bool = False
    is_live_photo: bool = False

    def __post_init__(self):
        if self.is_live_photo and not self.is_video:
            raise ValueError("A live photo must also be a video")

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON shape consumed by the site."""
        data: Dict[str, Any] = {
            "url": self.url,
            "originalUrl": self.original_url,
            "isVideo": self.is_video,
        }
        if self.is_live_photo:
            data["isHEICLivePhoto"] = True
        return data


@dataclass(frozen=True)
class Album:
    """Represents a folder of assets shown as an album."""
    title: str
    folder: str
    cover_item: NormalizedItem
    items: Tuple[NormalizedItem, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "folder": self.folder,
            "coverImage": self.cover_item.to_dict(),
            "images": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class GalleryDocument:
    """The images.json document written at the end of a run."""
    cloud_name: str
    last_updated: datetime
    all_items: Tuple[NormalizedItem, ...] = field(default_factory=tuple)
    albums: Tuple[Album, ...] = field(default_factory=tuple)

    @property
    def total_images(self) -> int:
        return len(self.all_items)

    def to_dict(self) -> Dict[str, Any]:
        """Return the document with the key order the site expects."""
        timestamp = self.last_updated.isoformat(timespec="milliseconds")
        return {
            "cloudName": self.cloud_name,
            "lastUpdated": timestamp.replace("+00:00", "Z"),
            "totalImages": self.total_images,
            "carouselImages": [item.to_dict() for item in self.all_items],
            "albums": [album.to_dict() for album in self.albums],
        }


class GalleryError(Exception):
    """Base exception for gallery operations."""


class ConfigurationError(GalleryError):
    """Raised when credentials or local settings are missing or invalid."""


class RemoteApiError(GalleryError):
    """Raised when Cloudinary API calls fail."""

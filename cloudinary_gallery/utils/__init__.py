"""Utility functions for Cloudinary Gallery."""

from .album_utils import assemble_albums, format_folder_name, select_cover
from .auth import CloudinaryConfig, load_config
from .media_utils import classify_asset, insert_transformation

__all__ = [
    "CloudinaryConfig",
    "load_config",
    "classify_asset",
    "insert_transformation",
    "assemble_albums",
    "format_folder_name",
    "select_cover",
]

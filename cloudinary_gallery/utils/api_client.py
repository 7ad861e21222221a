"""Thin wrapper around the Cloudinary Admin and Search APIs."""

from typing import Any, Dict, List, Optional, Tuple

import cloudinary.api
from cloudinary.search import Search

from cloudinary_gallery.models import ConfigurationError, GalleryError, RemoteApiError
from cloudinary_gallery.utils.auth import CloudinaryConfig, is_credential_error


PAGE_SIZE = 500
SORT_FIELD = "created_at"
SORT_DIRECTION = "desc"


def folder_expression(folder: Optional[str]) -> str:
    """Build the search expression for a folder, or for unfiled assets when None."""
    escaped = (folder or "").replace("\\", "\\\\").replace('"', '\\"')
    return f'asset_folder="{escaped}"'


def _api_error(action: str, error: Exception) -> GalleryError:
    if is_credential_error(error):
        return ConfigurationError(str(error))
    return RemoteApiError(f"Error {action}: {error}")


class CloudinaryClient:
    """Issues listing and search calls with explicit credentials."""

    def __init__(self, config: CloudinaryConfig, page_size: int = PAGE_SIZE):
        self.config = config
        self.page_size = page_size

    def list_folders(self) -> List[str]:
        """Return the names of the account's root folders."""
        try:
            result = cloudinary.api.root_folders(**self.config.as_options())
        except Exception as e:
            raise _api_error("listing folders", e) from e

        return [folder["name"] for folder in result.get("folders", []) if folder.get("name")]

    def search_page(
        self, expression: str, cursor: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """Fetch one page of search results.

        Args:
            expression: Search expression, e.g. asset_folder="trips"
            cursor: Continuation cursor from the previous page

        Returns:
            The page's resources and the next cursor, or None on the last page
        """
        search = (
            Search()
            .expression(expression)
            .sort_by(SORT_FIELD, SORT_DIRECTION)
            .max_results(self.page_size)
        )
        if cursor:
            search = search.next_cursor(cursor)

        try:
            result = search.execute(**self.config.as_options())
        except Exception as e:
            raise _api_error(f"searching {expression}", e) from e

        resources = result.get("resources") or []
        return list(resources), result.get("next_cursor") or None

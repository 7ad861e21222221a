"""Asset classification and delivery URL helpers for Cloudinary Gallery."""

from typing import Any, Dict

from cloudinary_gallery.models import NormalizedItem

IMAGE_DELIVERY_SEGMENT = "/image/upload/"
VIDEO_DELIVERY_SEGMENT = "/video/upload/"

# f_auto = automatic format (serves JPG/WebP/AVIF instead of HEIC)
# q_auto = automatic quality optimization
BROWSER_FORMAT_TRANSFORMATION = "f_auto,q_auto"
# so_0 = first frame as a still poster
VIDEO_POSTER_TRANSFORMATION = "so_0,f_jpg,q_auto"

HEIC_FORMATS = {"heic", "heif"}


def insert_transformation(url: str, segment: str, transformation: str) -> str:
    """Splice a transformation into a delivery URL right after its segment.

    Args:
        url: Cloudinary delivery URL
        segment: Delivery path segment, e.g. /image/upload/
        transformation: Transformation directive, e.g. f_auto,q_auto

    Returns:
        The transformed URL, or the URL unchanged if the segment is absent
    """
    if segment not in url:
        return url
    return url.replace(segment, f"{segment}{transformation}/", 1)


def convert_to_browser_format(url: str) -> str:
    """Make an image URL deliverable to browsers that cannot decode HEIC."""
    return insert_transformation(url, IMAGE_DELIVERY_SEGMENT, BROWSER_FORMAT_TRANSFORMATION)


def video_poster_url(url: str) -> str:
    """Turn a video URL into a still JPG of its first frame."""
    return insert_transformation(url, VIDEO_DELIVERY_SEGMENT, VIDEO_POSTER_TRANSFORMATION)


def _text(raw: Dict[str, Any], key: str) -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else ""


def classify_asset(raw: Dict[str, Any]) -> NormalizedItem:
    """Classify a raw search result and build its normalized item.

    Never raises: missing or malformed fields fall through to the
    pass-through case.

    Args:
        raw: Resource record as returned by the search API

    Returns:
        NormalizedItem for the asset
    """
    secure_url = _text(raw, "secure_url")
    resource_type = _text(raw, "resource_type").lower()
    file_format = _text(raw, "format").lower()

    if resource_type == "video" and file_format == "heic":
        # iOS Live Photos arrive as HEIC "videos" and are already playable
        return NormalizedItem(
            url=secure_url, original_url=secure_url, is_video=True, is_live_photo=True
        )

    if resource_type == "video":
        return NormalizedItem(
            url=video_poster_url(secure_url), original_url=secure_url, is_video=True
        )

    if file_format in HEIC_FORMATS or IMAGE_DELIVERY_SEGMENT in secure_url:
        return NormalizedItem(url=convert_to_browser_format(secure_url), original_url=secure_url)

    return NormalizedItem(url=secure_url, original_url=secure_url)

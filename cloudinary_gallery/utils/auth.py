"""Credential handling for the Cloudinary API."""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from cloudinary_gallery.models import ConfigurationError

DEFAULT_CLOUD_NAME = "ddnebrkpu"

CLOUD_NAME_VAR = "CLOUDINARY_CLOUD_NAME"
API_KEY_VAR = "CLOUDINARY_API_KEY"
API_SECRET_VAR = "CLOUDINARY_API_SECRET"

# Fragments the SDK puts in its messages when a credential is missing or rejected.
CREDENTIAL_ERROR_MARKERS = ("api_key", "api_secret", "api key", "api secret")

REMEDIATION_MESSAGE = f"""Please set your Cloudinary credentials:
   export {API_KEY_VAR}="your-key"
   export {API_SECRET_VAR}="your-secret"
Optionally set {CLOUD_NAME_VAR} to use another account (default: {DEFAULT_CLOUD_NAME})."""


@dataclass(frozen=True)
class CloudinaryConfig:
    """Account credentials passed explicitly to every API call."""
    cloud_name: str
    api_key: str
    api_secret: str

    def as_options(self) -> Dict[str, Any]:
        """Return the keyword options accepted by the SDK's API calls."""
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }


def load_config(environ: Optional[Mapping[str, str]] = None) -> CloudinaryConfig:
    """Build the account configuration from environment variables.

    Args:
        environ: Mapping to read from, defaults to os.environ

    Returns:
        Configuration with all three credentials set

    Raises:
        ConfigurationError: If the API key or secret is missing
    """
    if environ is None:
        environ = os.environ

    cloud_name = environ.get(CLOUD_NAME_VAR) or DEFAULT_CLOUD_NAME
    api_key = environ.get(API_KEY_VAR, "").strip()
    api_secret = environ.get(API_SECRET_VAR, "").strip()

    missing = [
        name for name, value in ((API_KEY_VAR, api_key), (API_SECRET_VAR, api_secret))
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Must supply api_key and api_secret (missing: {', '.join(missing)})"
        )

    return CloudinaryConfig(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret)


def is_credential_error(error: BaseException) -> bool:
    """Check whether an error message points at a credential problem."""
    message = str(error).lower()
    return any(marker in message for marker in CREDENTIAL_ERROR_MARKERS)

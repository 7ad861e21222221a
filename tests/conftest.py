"""Test configuration for pytest."""

import sys
from pathlib import Path

import pytest

from cloudinary_gallery.utils.auth import CloudinaryConfig
from fakes import FakeCloudinaryClient, make_asset

# Add the project root directory to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def asset_factory():
    """Provide the raw asset builder to tests."""
    return make_asset


@pytest.fixture
def fake_client_factory():
    """Provide the fake client class to tests."""
    return FakeCloudinaryClient


@pytest.fixture
def config() -> CloudinaryConfig:
    """Create test credentials."""
    return CloudinaryConfig(cloud_name="demo", api_key="test_key", api_secret="test_secret")

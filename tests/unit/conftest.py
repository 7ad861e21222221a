"""Configuration for unit tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Capture the package's debug logging in every test."""
    caplog.set_level(logging.DEBUG, logger="cloudinary_gallery")
    yield

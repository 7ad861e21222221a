"""Build a static site's image gallery document from Cloudinary folders."""

__version__ = "0.1.0"

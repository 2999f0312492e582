"""WSGI middleware for gzip response compression and request decompression."""

__version__ = "0.1.0"
__all__ = ["handler", "options"]
"""WSGI middleware that gzip-compresses responses."""

from __future__ import annotations

import zlib
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum

from .options import DecompressError, Option, Options, with_excluded_paths


class CompressionLevel(IntEnum):
    """Compression levels accepted by the middleware."""

    NO_COMPRESSION = 0
    BEST_SPEED = 1
    BEST_COMPRESSION = 9
    DEFAULT_COMPRESSION = -1


def _extension(path: str) -> str:
    """Return the extension of the last path element, dot included."""
    name = path.rpartition("/")[2]
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _request_path(environ: dict) -> str:
    return environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")


@dataclass
class _Response:
    status: str | None = None
    headers: list[tuple[str, str]] | None = None


class GzipMiddleware:
    """Compress the responses of a WSGI application with gzip.

    Responses are buffered whole so that the compressed Content-Length can
    be sent. Extra positional arguments are option setters.
    """

    def __init__(self, app, level: int = CompressionLevel.DEFAULT_COMPRESSION, *args: Option) -> None:
        level = int(level)
        if not -1 <= level <= 9:
            raise ValueError(f"invalid compression level: {level}")
        self.app = app
        self.level = level
        self.options = Options()
        for setter in args:
            setter(self.options)

    def __call__(self, environ: dict, start_response) -> Iterable[bytes]:
        decompress = self.options.decompress_fn
        if decompress is not None and environ.get("HTTP_CONTENT_ENCODING") == "gzip":
            try:
                decompress(environ)
            except DecompressError:
                start_response("400 Bad Request", [("Content-Length", "0")])
                return []

        if not self.should_compress(environ):
            return self.app(environ, start_response)
        return self._compressed(environ, start_response)

    def should_compress(self, environ: dict) -> bool:
        """Tell whether the response to this request is to be compressed."""
        if (
            "gzip" not in environ.get("HTTP_ACCEPT_ENCODING", "")
            or "Upgrade" in environ.get("HTTP_CONNECTION", "")
            or "text/event-stream" in environ.get("CONTENT_TYPE", "")
        ):
            return False
        path = _request_path(environ)
        options = self.options
        if _extension(path) in options.excluded_extensions:
            return False
        if path in options.excluded_paths:
            return False
        if path in options.excluded_path_regexes:
            return False
        return True

    def _compressed(self, environ: dict, start_response) -> list[bytes]:
        compressor = zlib.compressobj(self.level, zlib.DEFLATED, 31)
        chunks: list[bytes] = []
        response = _Response()

        def write(data: bytes) -> None:
            chunks.append(compressor.compress(data))

        def capture(status, headers, exc_info=None):
            # Nothing has been sent yet, so a late error may replace the headers.
            response.status = status
            response.headers = list(headers)
            return write

        result = self.app(environ, capture)
        try:
            for data in result:
                chunks.append(compressor.compress(data))
        finally:
            close = getattr(result, "close", None)
            if close is not None:
                close()

        if response.status is None or response.headers is None:
            raise RuntimeError("application did not call start_response")

        chunks.append(compressor.flush())
        body = b"".join(chunks)

        app_headers = [(name, value) for name, value in response.headers if name.lower() != "content-length"]
        app_names = {name.lower() for name, _ in app_headers}
        headers = [
            (name, value)
            for name, value in (("Content-Encoding", "gzip"), ("Vary", "Accept-Encoding"))
            if name.lower() not in app_names
        ]
        headers.extend(app_headers)
        headers.append(("Content-Length", str(len(body))))
        start_response(response.status, headers)
        return [body]


def gzip_handler(app, level: int = CompressionLevel.DEFAULT_COMPRESSION, *args: Option) -> GzipMiddleware:
    """Wrap ``app`` in gzip middleware that also leaves ``/api/`` paths alone."""
    return GzipMiddleware(app, level, with_excluded_paths(["/api/"]), *args)
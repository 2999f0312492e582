"""Settings that decide which requests the gzip middleware leaves alone."""

from __future__ import annotations

import gzip
import io
import re
import zlib
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

DEFAULT_EXCLUDED_EXTENSIONS = (".png", ".gif", ".jpeg", ".jpg")


class DecompressError(ValueError):
    """Raised when a request body marked as gzip cannot be decompressed."""


class ExcludedExtensions:
    """File extensions, such as ``.png``, that are never compressed."""

    def __init__(self, extensions: Iterable[str]) -> None:
        self._extensions = frozenset(extensions)

    def __contains__(self, target: object) -> bool:
        return target in self._extensions


class ExcludedPaths:
    """Path prefixes; a request path starting with any of them is excluded."""

    def __init__(self, paths: Iterable[str]) -> None:
        self._paths = tuple(paths)

    def __contains__(self, request_uri: object) -> bool:
        return isinstance(request_uri, str) and request_uri.startswith(self._paths)


class ExcludedPathRegexes:
    """Patterns; a request path in which any of them is found is excluded."""

    def __init__(self, patterns: Iterable[str]) -> None:
        self._patterns = [re.compile(pattern) for pattern in patterns]

    def __contains__(self, request_uri: object) -> bool:
        return isinstance(request_uri, str) and any(
            pattern.search(request_uri) for pattern in self._patterns
        )


DecompressFn = Callable[[dict], None]


@dataclass
class Options:
    """Configuration of a gzip middleware instance."""

    excluded_extensions: ExcludedExtensions = field(
        default_factory=lambda: ExcludedExtensions(DEFAULT_EXCLUDED_EXTENSIONS)
    )
    excluded_paths: ExcludedPaths = field(default_factory=lambda: ExcludedPaths(()))
    excluded_path_regexes: ExcludedPathRegexes = field(
        default_factory=lambda: ExcludedPathRegexes(())
    )
    decompress_fn: DecompressFn | None = None


Option = Callable[[Options], None]


def _setter(name: str, value: object) -> Option:
    def apply(options: Options) -> None:
        setattr(options, name, value)

    return apply


def with_excluded_extensions(extensions: Iterable[str]) -> Option:
    """Replace the excluded extensions."""
    return _setter("excluded_extensions", ExcludedExtensions(extensions))


def with_excluded_paths(paths: Iterable[str]) -> Option:
    """Replace the excluded path prefixes."""
    return _setter("excluded_paths", ExcludedPaths(paths))


def with_excluded_path_regexes(patterns: Iterable[str]) -> Option:
    """Replace the excluded path patterns."""
    return _setter("excluded_path_regexes", ExcludedPathRegexes(patterns))


def with_decompress_fn(decompress_fn: DecompressFn | None) -> Option:
    """Set the function that decompresses gzip-encoded request bodies."""
    return _setter("decompress_fn", decompress_fn)


def default_decompress_handle(environ: dict) -> None:
    """Replace a gzip request body in ``environ`` with its decompressed form.

    Removes the request's Content-Encoding and Content-Length. An empty body
    is left untouched; a body that is not valid gzip raises DecompressError.
    """
    stream = environ.get("wsgi.input")
    if stream is None:
        return
    try:
        size = int(environ.get("CONTENT_LENGTH") or -1)
    except ValueError:
        size = -1
    raw = stream.read() if size < 0 else stream.read(size)
    if not raw:
        return
    try:
        data = gzip.decompress(raw)
    except (OSError, EOFError, zlib.error) as exc:
        raise DecompressError(str(exc)) from exc
    environ.pop("HTTP_CONTENT_ENCODING", None)
    environ.pop("CONTENT_LENGTH", None)
    environ["wsgi.input"] = io.BytesIO(data)
# gzipware

WSGI middleware that compresses responses with gzip when the client asks for
it, and can optionally decompress gzip-encoded request bodies before they
reach the wrapped application. It depends on the standard library only.

## Usage

Wrap any WSGI application with `gzipware.handler.GzipMiddleware`, or use the
`gzip_handler` shortcut:

```python
from gzipware.handler import CompressionLevel, GzipMiddleware, gzip_handler


def app(environ, start_response):
    start_response("200 OK", [("Content-Type", "text/plain")])
    return [b"pong"]


application = GzipMiddleware(app, CompressionLevel.DEFAULT_COMPRESSION)
# or
application = gzip_handler(app, CompressionLevel.BEST_SPEED)
```

`CompressionLevel` has the members `NO_COMPRESSION` (0), `BEST_SPEED` (1),
`BEST_COMPRESSION` (9) and `DEFAULT_COMPRESSION` (-1). Any integer from -1
to 9 is accepted as the level; anything else raises `ValueError`.

`gzip_handler(app, level, *options)` is `GzipMiddleware` with
`with_excluded_paths(["/api/"])` applied first, so paths under `/api/` are
left uncompressed unless a later option replaces the excluded paths.

### When responses are compressed

`GzipMiddleware.should_compress(environ)` decides. A response is compressed
only when the request's `Accept-Encoding` header contains `gzip`. The request
is passed through untouched when:

- its `Connection` header contains `Upgrade`;
- its `Content-Type` contains `text/event-stream`;
- the extension of the last path element is excluded (by default `.png`,
  `.gif`, `.jpeg` and `.jpg`);
- the path starts with an excluded prefix;
- an excluded regular expression is found anywhere in the path.

The path checked is `SCRIPT_NAME` followed by `PATH_INFO`.

A compressed response has its `Content-Length` replaced by the length of the
compressed body, and gains `Content-Encoding: gzip` and
`Vary: Accept-Encoding` unless the application set those headers itself.

### Options

Options are passed as extra positional arguments after the level:

```python
from gzipware.options import (
    default_decompress_handle,
    with_decompress_fn,
    with_excluded_extensions,
    with_excluded_path_regexes,
    with_excluded_paths,
)

application = GzipMiddleware(
    app,
    CompressionLevel.BEST_COMPRESSION,
    with_excluded_extensions([".html"]),
    with_excluded_paths(["/static/"]),
    with_excluded_path_regexes([r"\.mp4$"]),
    with_decompress_fn(default_decompress_handle),
)
```

Each `with_*` function replaces the corresponding setting of the
`gzipware.options.Options` dataclass. The sets themselves are
`ExcludedExtensions`, `ExcludedPaths` and `ExcludedPathRegexes`, all of which
support the `in` operator.

### Decompressing request bodies

With a decompress function installed, it is called with the WSGI environ for
every request whose `Content-Encoding` is `gzip`. `default_decompress_handle`
replaces `wsgi.input` with the decompressed body and removes the request's
`Content-Encoding` and `Content-Length`. An empty body is left as it is. A
body that is not valid gzip raises `DecompressError`, which the middleware
answers with `400 Bad Request`. A custom decompress function may raise
`DecompressError` to the same effect.

## Limitations

- Compressed responses are buffered whole before being sent, so that the
  compressed `Content-Length` can be set; streamed responses lose their
  streaming when they are compressed.
- The package is WSGI middleware only: it has no server and no command of
  its own, and does not work with ASGI applications.

## Tests

The `test` extra installs pytest for running the test suite in `tests/`.
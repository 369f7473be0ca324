"""kvsplit — delimiter-based key/value extraction and tokenizing.

Two pure functions over ``str`` or ``bytes``:

    from kvsplit import extract, tokenize

    extract("tag=networking&order=newest", "=", "&")
    # {'order': 'newest', 'tag': 'networking'}

    extract(b"Host: a\\r\\nHost: b\\r\\n\\r\\nbody", b": ", b"\\r\\n", b"\\r\\n\\r\\n",
            output=str, container="multi")
    # MultiDict([('Host', 'a'), ('Host', 'b')])

    tokenize("/a/b/c/", "/")
    # ['a', 'b', 'c']

Ready-made dialects::

    from kvsplit import HTTP_HEADERS
    HTTP_HEADERS.extract(raw_request)
"""

__version__ = "1.0.0"
__all__ = [
    "COOKIE",
    "CodecTranscoder",
    "ContainerKind",
    "DelimiterError",
    "Dialect",
    "HTTP_HEADERS",
    "KVSplitError",
    "MultiDict",
    "MultiValueMapping",
    "QUERY_STRING",
    "Transcoder",
    "TranscodingFailure",
    "UnsupportedType",
    "extract",
    "tokenize",
    "transcode",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "COOKIE": "kvsplit.config",
    "CodecTranscoder": "kvsplit.transcoding",
    "ContainerKind": "kvsplit.containers",
    "DelimiterError": "kvsplit.errors",
    "Dialect": "kvsplit.config",
    "HTTP_HEADERS": "kvsplit.config",
    "KVSplitError": "kvsplit.errors",
    "MultiDict": "kvsplit.containers",
    "MultiValueMapping": "kvsplit._internal.multimap",
    "QUERY_STRING": "kvsplit.config",
    "Transcoder": "kvsplit.transcoding",
    "TranscodingFailure": "kvsplit.errors",
    "UnsupportedType": "kvsplit.errors",
    "extract": "kvsplit.extraction",
    "tokenize": "kvsplit.tokens",
    "transcode": "kvsplit.transcoding",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import kvsplit`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)

"""Delimiter-based key/value extraction.

Scans a buffer for repeated ``key<KD>value<VD>`` frames, optionally
bounded by the *last* occurrence of a terminal delimiter::

    >>> extract("tag=networking&order=newest", "=", "&")
    {'order': 'newest', 'tag': 'networking'}

    >>> raw = "Host: Hi\\r\\nAccept: X\\r\\n\\r\\nbody: ignored"
    >>> extract(raw, ": ", "\\r\\n", "\\r\\n\\r\\n", container="multi")
    MultiDict([('Host', 'Hi'), ('Accept', 'X')])

Stopping rules (all silent, whatever was accumulated is returned):

- no key delimiter left inside the scan region
- an empty key (key delimiter directly at the cursor)
- no value delimiter after a key; the value then runs to the end of the
  buffer and that entry is the last one

Keys and values are converted to ``output`` (``str`` or ``bytes``) when it
differs from the buffer type. A value that fails to convert becomes
empty; an entry whose key fails to convert is dropped, since the result
never holds an empty key.
"""

import logging
from collections.abc import Mapping
from typing import Any, Literal, overload

from kvsplit._internal.types import Text, check_output_type, text_type_of
from kvsplit.containers import ContainerKind, MultiDict, policy_for
from kvsplit.errors import DelimiterError
from kvsplit.transcoding import Transcoder, transcode

logger = logging.getLogger("kvsplit.extraction")

type _Unique = Literal[ContainerKind.ORDERED, ContainerKind.HASH, "ordered", "hash"]
type _Multi = Literal[ContainerKind.MULTI, "multi"]


@overload
def extract[T: (str, bytes)](
    buffer: T,
    key_delimiter: T,
    value_delimiter: T,
    terminal_delimiter: T | None = None,
    *,
    output: None = None,
    container: _Unique = ...,
    transcoder: Transcoder | None = None,
) -> dict[T, T]: ...
@overload
def extract[T: (str, bytes)](
    buffer: T,
    key_delimiter: T,
    value_delimiter: T,
    terminal_delimiter: T | None = None,
    *,
    output: None = None,
    container: _Multi,
    transcoder: Transcoder | None = None,
) -> MultiDict[T]: ...
@overload
def extract[T: (str, bytes), O: (str, bytes)](
    buffer: T,
    key_delimiter: T,
    value_delimiter: T,
    terminal_delimiter: T | None = None,
    *,
    output: type[O],
    container: _Unique = ...,
    transcoder: Transcoder | None = None,
) -> dict[O, O]: ...
@overload
def extract[T: (str, bytes), O: (str, bytes)](
    buffer: T,
    key_delimiter: T,
    value_delimiter: T,
    terminal_delimiter: T | None = None,
    *,
    output: type[O],
    container: _Multi,
    transcoder: Transcoder | None = None,
) -> MultiDict[O]: ...


def extract(
    buffer: Text,
    key_delimiter: Text,
    value_delimiter: Text,
    terminal_delimiter: Text | None = None,
    *,
    output: type[Text] | None = None,
    container: ContainerKind | str = ContainerKind.ORDERED,
    transcoder: Transcoder | None = None,
) -> Mapping[Any, Any]:
    """Extract key/value pairs from *buffer*.

    Args:
        buffer: Text to scan, ``str`` or ``bytes``. Never mutated.
        key_delimiter: Separates a key from its value, e.g. ``": "``.
        value_delimiter: Ends a value and the frame, e.g. ``"\\r\\n"``.
        terminal_delimiter: Optional end-of-section marker. Only its last
            occurrence counts; nothing from there on is scanned for keys.
        output: ``str`` or ``bytes`` for the result; defaults to the type
            of *buffer*.
        container: ``ORDERED`` (sorted, last write wins), ``HASH`` (last
            write wins) or ``MULTI`` (every pair kept, as a ``MultiDict``).
        transcoder: Used when *output* differs from the buffer type.
            Defaults to UTF-8.

    Raises:
        UnsupportedType: a text type or container kind outside the
            supported set, or delimiters not matching the buffer type.
        DelimiterError: an empty key or value delimiter.
    """
    text_type = text_type_of(buffer, key_delimiter, value_delimiter, terminal_delimiter)
    target = text_type if output is None else check_output_type(output)
    policy = policy_for(container)
    if not key_delimiter or not value_delimiter:
        msg = "key and value delimiters must be non-empty"
        raise DelimiterError(msg)

    boundary = len(buffer)
    if terminal_delimiter:
        terminal_start = buffer.rfind(terminal_delimiter)  # type: ignore[arg-type]
        if terminal_start != -1:
            boundary = terminal_start

    key_skip = len(key_delimiter)
    value_skip = len(value_delimiter)
    cursor = 0

    while cursor < boundary:
        key_end = buffer.find(key_delimiter, cursor, boundary)  # type: ignore[arg-type]
        if key_end == -1:
            break
        if key_end == cursor:
            logger.debug("Empty key at offset %d, stopping", cursor)
            break

        value_start = key_end + key_skip
        value_end = buffer.find(value_delimiter, value_start)  # type: ignore[arg-type]
        key = buffer[cursor:key_end]
        value = buffer[value_start:] if value_end == -1 else buffer[value_start:value_end]

        out_key = transcode(key, target, transcoder)
        if out_key:
            policy.insert(out_key, transcode(value, target, transcoder))
        else:
            logger.debug("Dropping entry at offset %d: key did not convert to %s", cursor, target.__name__)

        if value_end == -1:
            break
        cursor = value_end + value_skip

    return policy.result()

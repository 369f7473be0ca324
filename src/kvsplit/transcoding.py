"""Conversion between narrow (``bytes``) and wide (``str``) text.

One injectable capability: a ``Transcoder`` turns text of one supported
type into the other, or raises ``TranscodingFailure``. A plain
``UnicodeDecodeError``/``UnicodeEncodeError`` from ``convert()`` counts
as a failure too. ``transcode()`` wraps it with the extraction contract:
a failed conversion becomes an empty value of the target type and never
aborts the caller.

Custom transcoders only need a ``convert(text, target)`` method::

    class Latin1:
        def convert(self, text, target):
            if isinstance(text, target):
                return text
            return text.decode("latin-1") if target is str else text.encode("latin-1")
"""

import codecs
import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from kvsplit._internal.types import Text
from kvsplit.errors import TranscodingFailure, UnsupportedType

logger = logging.getLogger("kvsplit.transcoding")


@runtime_checkable
class Transcoder(Protocol):
    """Converts a codepoint sequence between ``str`` and ``bytes``."""

    def convert(self, text: Text, target: type[Text]) -> Text: ...


@dataclass(frozen=True, slots=True)
class CodecTranscoder:
    """Transcoder backed by a Python codec.

    ``errors="strict"`` (the default) makes undecodable or unencodable
    input fail, which ``transcode()`` turns into an empty value. Any
    other codec error handler (``"replace"``, ``"ignore"``, ...) makes
    conversion lossy instead.
    """

    encoding: str = "utf-8"
    errors: str = "strict"

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            msg = f"unknown text encoding {self.encoding!r}"
            raise UnsupportedType(msg) from exc

    def convert(self, text: Text, target: type[Text]) -> Text:
        if isinstance(text, target):
            return text
        try:
            if isinstance(text, bytes):
                return text.decode(self.encoding, self.errors)
            return text.encode(self.encoding, self.errors)
        except (UnicodeDecodeError, UnicodeEncodeError) as exc:
            raise TranscodingFailure(text, target, exc.reason) from exc


DEFAULT_TRANSCODER = CodecTranscoder()


def transcode(text: Text, target: type[Text], transcoder: Transcoder | None = None) -> Text:
    """Convert *text* to *target*, or return an empty *target* on failure."""
    if isinstance(text, target):
        return text
    converter = DEFAULT_TRANSCODER if transcoder is None else transcoder
    try:
        return converter.convert(text, target)
    except TranscodingFailure as exc:
        failure = exc
    except (UnicodeDecodeError, UnicodeEncodeError) as exc:
        failure = TranscodingFailure(text, target, exc.reason)
    logger.debug("Substituting empty %s: %s", target.__name__, failure)
    return target()

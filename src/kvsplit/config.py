"""Extraction dialects.

A Dialect is a frozen dataclass bundling the three delimiters and the
container kind for one text format. Immutable after creation, no
string-key dict lookups::

    from kvsplit import HTTP_HEADERS

    headers = HTTP_HEADERS.extract(b"Host: example.com\\r\\n\\r\\n")
    headers[b"Host"]  # b"example.com"

Delimiters are declared as ``str`` and encoded to latin-1 when the buffer
is ``bytes``.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kvsplit._internal.types import Text, text_type_of
from kvsplit.containers import ContainerKind
from kvsplit.errors import DelimiterError, UnsupportedType
from kvsplit.extraction import extract
from kvsplit.transcoding import Transcoder


@dataclass(frozen=True, slots=True)
class Dialect:
    """Delimiters and container kind for one key/value text format.

    Override what you need::

        semicolons = Dialect("=", ";", container=ContainerKind.HASH)
    """

    key_delimiter: str
    value_delimiter: str
    terminal_delimiter: str = ""
    container: ContainerKind = ContainerKind.ORDERED

    def __post_init__(self) -> None:
        if not self.key_delimiter or not self.value_delimiter:
            msg = "Dialect key and value delimiters must be non-empty"
            raise DelimiterError(msg)
        for delimiter in (self.key_delimiter, self.value_delimiter, self.terminal_delimiter):
            if not isinstance(delimiter, str):
                msg = f"Dialect delimiters are declared as str, not {type(delimiter).__name__}"
                raise UnsupportedType(msg)
            try:
                delimiter.encode("latin-1")
            except UnicodeEncodeError as exc:
                msg = f"Dialect delimiter {delimiter!r} must be latin-1 encodable"
                raise DelimiterError(msg) from exc
        object.__setattr__(self, "container", ContainerKind.coerce(self.container))

    def delimiters_for(self, text_type: type[Text]) -> tuple[Text, Text, Text]:
        """Return (key, value, terminal) delimiters as *text_type*."""
        delimiters = (self.key_delimiter, self.value_delimiter, self.terminal_delimiter)
        if text_type is bytes:
            return tuple(d.encode("latin-1") for d in delimiters)  # type: ignore[return-value]
        return delimiters

    def extract(
        self,
        buffer: Text,
        *,
        output: type[Text] | None = None,
        transcoder: Transcoder | None = None,
    ) -> Mapping[Any, Any]:
        """Run ``extract()`` over *buffer* with this dialect's settings."""
        key, value, terminal = self.delimiters_for(text_type_of(buffer))
        return extract(
            buffer,
            key,
            value,
            terminal or None,
            output=output,
            container=self.container,
            transcoder=transcoder,
        )

    def replace(self, **changes: Any) -> "Dialect":
        """Return a copy with *changes* applied."""
        return dataclasses.replace(self, **changes)


# Header block up to the blank line; repeated headers (Set-Cookie) are kept
HTTP_HEADERS = Dialect(": ", "\r\n", "\r\n\r\n", ContainerKind.MULTI)

# Raw ``a=1&b=2`` pairs, no percent-decoding
QUERY_STRING = Dialect("=", "&", "", ContainerKind.MULTI)

# ``Cookie:`` header value
COOKIE = Dialect("=", "; ", "", ContainerKind.HASH)

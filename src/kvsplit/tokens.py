"""Split text on any of a set of delimiter characters.

Unlike ``extract()``, whose delimiters are literal substrings, every
character of *delimiters* delimits on its own, and runs of them collapse::

    >>> tokenize("/a//b/c/", "/")
    ['a', 'b', 'c']
    >>> tokenize("Host: Hi", ": ")
    ['Host', 'Hi']
"""

from kvsplit._internal.types import text_type_of
from kvsplit.errors import UnsupportedType


def tokenize[T: (str, bytes)](buffer: T, delimiters: T) -> list[T]:
    """Return the maximal runs of non-delimiter characters in *buffer*.

    Empty input gives ``[]``; no token is ever empty. For ``bytes``
    input, *delimiters* is a set of byte values.

    Raises:
        UnsupportedType: *buffer* is not ``str``/``bytes`` or *delimiters*
            is a different text type.
    """
    if delimiters is None:
        msg = "delimiters must be str or bytes, not None"
        raise UnsupportedType(msg)
    text_type_of(buffer, delimiters)
    stops = set(delimiters)
    tokens: list[T] = []
    length = len(buffer)
    pos = 0

    while pos < length:
        # Skip the delimiter run
        while pos < length and buffer[pos] in stops:
            pos += 1
        if pos == length:
            break
        start = pos
        while pos < length and buffer[pos] not in stops:
            pos += 1
        tokens.append(buffer[start:pos])

    return tokens

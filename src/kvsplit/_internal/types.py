"""Shared type aliases and the closed-set text type check."""

from typing import TypeAlias

from kvsplit.errors import UnsupportedType

# Narrow (bytes) or wide (str) text; nothing else is accepted
Text: TypeAlias = str | bytes

TEXT_TYPES: tuple[type[str], type[bytes]] = (str, bytes)


def text_type_of(buffer: object, *delimiters: object) -> type[Text]:
    """Return ``str`` or ``bytes`` for *buffer*, checking *delimiters* match.

    ``None`` delimiters are skipped (an absent optional delimiter).

    Raises:
        UnsupportedType: *buffer* is not ``str``/``bytes``, or a delimiter
            is of a different text type than *buffer*.
    """
    if isinstance(buffer, str):
        text_type: type[Text] = str
    elif isinstance(buffer, bytes):
        text_type = bytes
    else:
        msg = f"buffer must be str or bytes, not {type(buffer).__name__}"
        raise UnsupportedType(msg)

    for delimiter in delimiters:
        if delimiter is not None and not isinstance(delimiter, text_type):
            msg = (
                f"delimiter {delimiter!r} must be {text_type.__name__} "
                f"to match the buffer, not {type(delimiter).__name__}"
            )
            raise UnsupportedType(msg)
    return text_type


def check_output_type(output: object) -> type[Text]:
    """Validate a requested output text type."""
    if output in TEXT_TYPES:
        return output  # type: ignore[return-value]
    msg = f"output must be str or bytes, not {output!r}"
    raise UnsupportedType(msg)

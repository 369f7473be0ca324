"""kvsplit exception hierarchy.

Shared by extraction, tokenizing, and transcoding so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class KVSplitError(Exception):
    """Base for all kvsplit-specific errors."""


class UnsupportedType(KVSplitError, TypeError):  # noqa: N818 — mirrors the closed-set name
    """Raised when a text type or container kind is outside the supported set.

    Checked once at the API boundary, before any scanning happens.
    """


class DelimiterError(KVSplitError, ValueError):
    """Raised when a required delimiter is empty."""


@dataclass(frozen=True, slots=True)
class TranscodingFailure(KVSplitError):
    """A single key or value could not be converted to the target type.

    Raised by ``Transcoder.convert()``. ``transcode()`` catches it and
    substitutes an empty value, so it never escapes ``extract()``.
    """

    text: str | bytes
    target: type
    reason: str = ""

    def __str__(self) -> str:
        detail = f"cannot convert {self.text!r} to {self.target.__name__}"
        if self.reason:
            return f"{detail}: {self.reason}"
        return detail

"""Tests for kvsplit.extraction — delimiter-based key/value extraction."""

import logging

import pytest

from kvsplit.containers import ContainerKind, MultiDict
from kvsplit.errors import DelimiterError, UnsupportedType
from kvsplit.extraction import extract

HEADERS = "Host: Duplicate\r\nHost: Hi\r\nAccept: Something\r\nContent-Length: 8\r\n\r\nmy: body"
HEADERS_NO_DUP = "Host: Hi\r\nAccept: Something\r\nContent-Length: 8\r\n\r\nmy: body"
QUERY = "tag=networking&order=newest&final=section"


def _as(text_type: type, s: str) -> str | bytes:
    return s if text_type is str else s.encode("utf-8")


class TestScenarios:
    def test_query_string(self) -> None:
        kv = extract(QUERY, "=", "&")
        assert kv == {"tag": "networking", "order": "newest", "final": "section"}

    def test_terminal_delimiter_truncates(self) -> None:
        raw = "Host: Hi\r\nAccept: X\r\n\r\nbody: ignored"
        kv = extract(raw, ": ", "\r\n", "\r\n\r\n")
        assert kv == {"Host": "Hi", "Accept": "X"}

    def test_without_terminal_scans_trailing_segment(self) -> None:
        raw = "Host: Hi\r\nAccept: X\r\n\r\nbody: ignored"
        kv = extract(raw, ": ", "\r\n")
        assert len(kv) == 3
        assert kv["\r\nbody"] == "ignored"

    def test_headers_without_duplicates(self) -> None:
        kv = extract(HEADERS_NO_DUP, ": ", "\r\n", "\r\n\r\n")
        assert kv == {"Host": "Hi", "Accept": "Something", "Content-Length": "8"}

    def test_key_delimiter_at_start_yields_nothing(self) -> None:
        assert extract(": value\r\nHost: Hi", ": ", "\r\n") == {}

    def test_empty_key_midway_stops_silently(self) -> None:
        kv = extract("a=1&=2&b=3", "=", "&")
        assert kv == {"a": "1"}

    def test_empty_buffer(self) -> None:
        assert extract("", "=", "&") == {}
        assert extract(b"", b"=", b"&", container="multi") == MultiDict()

    def test_no_key_delimiter(self) -> None:
        assert extract("just text", "=", "&") == {}

    def test_missing_value_delimiter_runs_to_end(self) -> None:
        assert extract("a=1&b=2", "=", ";") == {"a": "1&b=2"}

    def test_trailing_value_delimiter(self) -> None:
        assert extract("a=1&b=2&", "=", "&") == {"a": "1", "b": "2"}

    def test_trailing_fragment_without_key_delimiter_dropped(self) -> None:
        assert extract("a=1&b=2&dangling", "=", "&") == {"a": "1", "b": "2"}

    def test_empty_values_kept(self) -> None:
        assert extract("a=&b=", "=", "&") == {"a": "", "b": ""}

    def test_value_may_contain_key_delimiter(self) -> None:
        assert extract("expr=a=b&x=1", "=", "&") == {"expr": "a=b", "x": "1"}

    def test_terminal_uses_last_occurrence(self) -> None:
        raw = "a=1\nb=2\n\nc=3\n\nbody=x"
        kv = extract(raw, "=", "\n", "\n\n")
        assert kv == {"a": "1", "b": "2", "\nc": "3"}

    def test_absent_terminal_scans_everything(self) -> None:
        assert extract(QUERY, "=", "&", "\r\n\r\n") == extract(QUERY, "=", "&")

    def test_empty_terminal_same_as_none(self) -> None:
        assert extract(HEADERS, ": ", "\r\n", "") == extract(HEADERS, ": ", "\r\n")

    def test_key_delimiter_past_terminal_not_used(self) -> None:
        # The only key delimiter sits in the excluded trailing section
        assert extract("header\r\n\r\nk=v", "=", "\r\n", "\r\n\r\n") == {}

    def test_unterminated_value_runs_past_terminal(self) -> None:
        # Only key search is bounded by the terminal; a value without a
        # value delimiter extends to the end of the buffer
        assert extract("a=1##tail", "=", "&", "##") == {"a": "1##tail"}

    def test_multichar_delimiters(self) -> None:
        kv = extract("k1::v1||k2::v2", "::", "||")
        assert kv == {"k1": "v1", "k2": "v2"}

    def test_deterministic(self) -> None:
        first = extract(HEADERS, ": ", "\r\n", container="multi")
        second = extract(HEADERS, ": ", "\r\n", container="multi")
        assert first == second
        assert first.items() == second.items()


class TestContainers:
    @pytest.mark.parametrize("container", [ContainerKind.ORDERED, ContainerKind.HASH, "ordered", "hash"])
    def test_unique_last_write_wins(self, container: ContainerKind | str) -> None:
        kv = extract(HEADERS, ": ", "\r\n", "\r\n\r\n", container=container)
        assert len(kv) == 3
        assert kv["Host"] == "Hi"

    def test_ordered_sorted_by_key(self) -> None:
        kv = extract(QUERY, "=", "&", container=ContainerKind.ORDERED)
        assert list(kv) == ["final", "order", "tag"]

    def test_ordered_is_default(self) -> None:
        kv = extract(QUERY, "=", "&")
        assert list(kv) == sorted(kv)

    def test_hash_returns_dict(self) -> None:
        kv = extract(QUERY, "=", "&", container=ContainerKind.HASH)
        assert type(kv) is dict
        assert len(kv) == 3

    def test_multi_keeps_duplicates(self) -> None:
        kv = extract(HEADERS, ": ", "\r\n", "\r\n\r\n", container=ContainerKind.MULTI)
        assert isinstance(kv, MultiDict)
        assert len(kv) == 4
        assert kv.get_list("Host") == ["Duplicate", "Hi"]
        assert kv["Accept"] == "Something"

    def test_multi_keeps_input_order(self) -> None:
        kv = extract(HEADERS, ": ", "\r\n", "\r\n\r\n", container="multi")
        assert kv.keys() == ["Host", "Host", "Accept", "Content-Length"]

    def test_multi_without_terminal(self) -> None:
        kv = extract(HEADERS, ": ", "\r\n", container="multi")
        assert len(kv) == 5
        assert kv.items()[-1] == ("\r\nmy", "body")

    def test_unknown_container_rejected(self) -> None:
        with pytest.raises(UnsupportedType, match="container kind"):
            extract(QUERY, "=", "&", container="list")


class TestEncodings:
    @pytest.mark.parametrize("source", [str, bytes])
    @pytest.mark.parametrize("output", [str, bytes])
    @pytest.mark.parametrize(
        ("container", "expected"),
        [(ContainerKind.ORDERED, 3), (ContainerKind.HASH, 3), (ContainerKind.MULTI, 4)],
    )
    def test_entry_counts_match_across_types(
        self, source: type, output: type, container: ContainerKind, expected: int
    ) -> None:
        kv = extract(
            _as(source, HEADERS),
            _as(source, ": "),
            _as(source, "\r\n"),
            _as(source, "\r\n\r\n"),
            output=output,
            container=container,
        )
        assert len(kv) == expected
        for key in kv:
            assert type(key) is output

    def test_bytes_in_bytes_out(self) -> None:
        kv = extract(b"a=1&b=2", b"=", b"&")
        assert kv == {b"a": b"1", b"b": b"2"}

    def test_bytes_to_str(self) -> None:
        kv = extract("name=Zoë".encode(), b"=", b"&", output=str)
        assert kv == {"name": "Zoë"}

    def test_str_to_bytes(self) -> None:
        kv = extract("name=Zoë", "=", "&", output=bytes)
        assert kv == {b"name": "Zoë".encode()}

    def test_same_output_type_is_noop(self) -> None:
        kv = extract("a=1", "=", "&", output=str)
        assert kv == {"a": "1"}

    def test_undecodable_value_becomes_empty(self) -> None:
        kv = extract(b"a=\xff\xfe&b=2", b"=", b"&", output=str)
        assert kv == {"a": "", "b": "2"}

    def test_undecodable_key_entry_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="kvsplit"):
            kv = extract(b"\xff=1&b=2", b"=", b"&", output=str)
        assert kv == {"b": "2"}
        assert "" not in kv
        assert any("Dropping entry" in r.message for r in caplog.records)

    def test_custom_transcoder(self) -> None:
        class Upper:
            def convert(self, text: str | bytes, target: type) -> str | bytes:
                return text.decode("ascii").upper() if target is str else text.encode("ascii")

        kv = extract(b"a=x", b"=", b"&", output=str, transcoder=Upper())
        assert kv == {"A": "X"}

    def test_custom_transcoder_codec_error_gives_empty_value(self) -> None:
        class Latin1:
            def convert(self, text: str | bytes, target: type) -> str | bytes:
                return text.decode("latin-1") if target is str else text.encode("latin-1")

        kv = extract("a=€&b=2", "=", "&", output=bytes, transcoder=Latin1())
        assert kv == {b"a": b"", b"b": b"2"}

    def test_custom_transcoder_codec_error_on_key_drops_entry(self) -> None:
        class Ascii:
            def convert(self, text: str | bytes, target: type) -> str | bytes:
                return text.decode("ascii") if target is str else text.encode("ascii")

        kv = extract(b"\xe9=1&b=2", b"=", b"&", output=str, transcoder=Ascii())
        assert kv == {"b": "2"}


class TestValidation:
    def test_buffer_type_rejected(self) -> None:
        with pytest.raises(UnsupportedType, match="buffer must be str or bytes"):
            extract(bytearray(b"a=1"), b"=", b"&")  # type: ignore[call-overload]

    def test_mixed_delimiter_type_rejected(self) -> None:
        with pytest.raises(UnsupportedType, match="must be str"):
            extract("a=1", b"=", "&")  # type: ignore[call-overload]

    def test_mixed_terminal_type_rejected(self) -> None:
        with pytest.raises(UnsupportedType):
            extract(b"a=1", b"=", b"&", "\r\n")  # type: ignore[call-overload]

    def test_output_type_rejected(self) -> None:
        with pytest.raises(UnsupportedType, match="output"):
            extract("a=1", "=", "&", output=int)  # type: ignore[call-overload]

    def test_unsupported_type_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            extract(42, "=", "&")  # type: ignore[call-overload]

    @pytest.mark.parametrize(("key", "value"), [("", "&"), ("=", ""), ("", "")])
    def test_empty_delimiters_rejected(self, key: str, value: str) -> None:
        with pytest.raises(DelimiterError):
            extract("a=1", key, value)

    def test_type_checked_before_scanning(self) -> None:
        # An empty buffer still gets its types validated
        with pytest.raises(UnsupportedType):
            extract("", b"=", b"&")  # type: ignore[call-overload]


class TestLogging:
    def test_empty_key_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="kvsplit.extraction"):
            extract("=x", "=", "&")
        assert any("Empty key" in r.message for r in caplog.records)

    def test_silent_at_default_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            extract("=x", "=", "&")
        assert caplog.records == []

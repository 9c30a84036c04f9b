"""Tests for line and byte extractors."""

import io

import pytest

from tailx.extent import count_extent
from tailx.extract import extract_bytes, extract_lines, stream_bytes, stream_lines
from tailx.offset import parse_offset
from tailx.resolve import resolve_start_index

TEN_LINES = b''.join(f'Line {i}\n'.encode() for i in range(1, 11))


class NonSeekable(io.RawIOBase):
    """Forward-only byte stream that fails on seek."""

    def __init__(self, data: bytes):
        super().__init__()
        self._buffer = io.BytesIO(data)

    def readable(self):
        return True

    def readinto(self, b):
        chunk = self._buffer.read(len(b))
        b[: len(chunk)] = chunk
        return len(chunk)

    def seekable(self):
        return False

    def seek(self, *args):
        raise io.UnsupportedOperation('seek')


class TrackingBytesIO(io.BytesIO):
    """BytesIO that records seek calls."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self.seeks = []

    def seek(self, *args):
        self.seeks.append(args)
        return super().seek(*args)


def two_pass_lines(data: bytes, token: str) -> bytes:
    source = io.BytesIO(data)
    start = resolve_start_index(parse_offset(token), count_extent(source).total_lines)
    source.seek(0)
    return b''.join(extract_lines(source, start))


def two_pass_bytes(data: bytes, token: str) -> bytes:
    source = io.BytesIO(data)
    start = resolve_start_index(parse_offset(token), count_extent(source).total_bytes)
    return b''.join(extract_bytes(source, start))


class TestExtractLines:
    """Test extract_lines."""

    def test_none_emits_nothing(self):
        assert list(extract_lines(io.BytesIO(TEN_LINES), None)) == []

    def test_start_zero_emits_everything(self):
        assert b''.join(extract_lines(io.BytesIO(TEN_LINES), 0)) == TEN_LINES

    def test_start_in_middle(self):
        lines = list(extract_lines(io.BytesIO(TEN_LINES), 7))
        assert lines == [b'Line 8\n', b'Line 9\n', b'Line 10\n']

    def test_start_past_end(self):
        assert list(extract_lines(io.BytesIO(TEN_LINES), 10)) == []

    def test_preserves_bytes_verbatim(self):
        data = b'a\r\n\xff\xfe bad utf8\nlast without newline'
        assert list(extract_lines(io.BytesIO(data), 1)) == [b'\xff\xfe bad utf8\n', b'last without newline']

    def test_yields_one_line_at_a_time(self):
        lines = extract_lines(io.BytesIO(TEN_LINES), 0)
        assert next(lines) == b'Line 1\n'


class TestExtractBytes:
    """Test extract_bytes."""

    def test_none_emits_nothing_and_never_seeks(self):
        source = TrackingBytesIO(b'abc')
        assert list(extract_bytes(source, None)) == []
        assert source.seeks == []

    def test_seeks_directly(self):
        source = TrackingBytesIO(b'abcdef')
        assert b''.join(extract_bytes(source, 2)) == b'cdef'
        assert source.seeks == [(2,)]

    def test_seek_ignores_current_position(self):
        source = io.BytesIO(b'abcdef')
        source.read()
        assert b''.join(extract_bytes(source, 0)) == b'abcdef'

    def test_small_chunks(self):
        chunks = list(extract_bytes(io.BytesIO(b'abcdefg'), 1, chunk_size=2))
        assert chunks == [b'bc', b'de', b'fg']

    def test_splits_multibyte_characters(self):
        data = 'Ünïcödé'.encode('utf-8')
        assert b''.join(extract_bytes(io.BytesIO(data), 1)) == data[1:]


class TestStreamLines:
    """Single pass line extraction matches the two-pass path."""

    @pytest.mark.parametrize('token', ['+0', '0', '1', '3', '10', '20', '-3', '+1', '+3', '+10', '+11', '+20'])
    def test_matches_two_pass(self, token):
        expected = two_pass_lines(TEN_LINES, token)
        assert b''.join(stream_lines(NonSeekable(TEN_LINES), parse_offset(token))) == expected

    @pytest.mark.parametrize('token', ['+0', '0', '3', '+1'])
    def test_empty_source(self, token):
        assert list(stream_lines(NonSeekable(b''), parse_offset(token))) == []

    def test_last_line_without_newline(self):
        data = b'a\nb\nc'
        assert b''.join(stream_lines(NonSeekable(data), parse_offset('2'))) == b'b\nc'

    def test_huge_negative_offset(self):
        assert b''.join(stream_lines(NonSeekable(TEN_LINES), parse_offset(str(-(2**63))))) == TEN_LINES


class TestStreamBytes:
    """Single pass byte extraction matches the two-pass path."""

    @pytest.mark.parametrize('token', ['+0', '0', '1', '5', '200', '+1', '+5', '+71', '+72', '+200'])
    def test_matches_two_pass(self, token):
        expected = two_pass_bytes(TEN_LINES, token)
        actual = b''.join(stream_bytes(NonSeekable(TEN_LINES), parse_offset(token), chunk_size=7))
        assert actual == expected

    def test_empty_source(self):
        assert list(stream_bytes(NonSeekable(b''), parse_offset('+0'))) == []
        assert list(stream_bytes(NonSeekable(b''), parse_offset('4'))) == []

    def test_keeps_only_trailing_bytes(self):
        result = b''.join(stream_bytes(NonSeekable(b'0123456789'), parse_offset('3'), chunk_size=4))
        assert result == b'789'

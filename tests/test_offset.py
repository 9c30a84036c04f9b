"""Tests for offset token parsing."""

import pytest

from tailx.errors import ConfigurationError
from tailx.offset import INT64_MAX, INT64_MIN, Signed, ZeroFromStart, parse_offset


class TestParseOffset:
    """Test parse_offset token rules."""

    def test_bare_number_counts_from_end(self):
        """All unsigned integers are interpreted as negative numbers."""
        assert parse_offset('3') == Signed(-3, '3')

    def test_plus_counts_from_start(self):
        assert parse_offset('+3') == Signed(3, '+3')

    def test_explicit_minus_kept(self):
        assert parse_offset('-3') == Signed(-3, '-3')

    def test_zero_is_signed_zero(self):
        offset = parse_offset('0')
        assert isinstance(offset, Signed)
        assert offset.value == 0

    def test_plus_zero_is_sentinel(self):
        """+0 is special and never conflated with 0."""
        offset = parse_offset('+0')
        assert offset == ZeroFromStart()
        assert not isinstance(offset, Signed)

    def test_minus_zero_is_signed_zero(self):
        assert parse_offset('-0').value == 0

    def test_token_is_kept(self):
        assert parse_offset('+7').token == '+7'
        assert parse_offset('+0').token == '+0'

    def test_from_start_property(self):
        assert parse_offset('+2').from_start
        assert not parse_offset('2').from_start

    def test_int64_max_unsigned(self):
        assert parse_offset(str(INT64_MAX)).value == INT64_MIN + 1

    def test_int64_min_plus_one(self):
        assert parse_offset(str(INT64_MIN + 1)).value == INT64_MIN + 1

    def test_int64_max_with_plus(self):
        assert parse_offset(f'+{INT64_MAX}').value == INT64_MAX

    def test_int64_min(self):
        assert parse_offset(str(INT64_MIN)).value == INT64_MIN

    def test_int64_max_minus_one(self):
        assert parse_offset(f'+{INT64_MAX - 1}').value == INT64_MAX - 1

    @pytest.mark.parametrize('token', [str(INT64_MAX + 1), f'+{INT64_MAX + 1}', str(INT64_MIN - 1)])
    def test_out_of_range_rejected(self, token):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_offset(token)
        assert exc_info.value.token == token

    @pytest.mark.parametrize('token', ['3.14', 'foo', '', '+', '-', '+-3', '--3', ' 3', '3 ', '1_000', '٣', '0x10'])
    def test_malformed_rejected(self, token):
        """Non-integer tokens fail and carry the original token."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_offset(token)
        assert exc_info.value.token == token
        assert token in str(exc_info.value)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_offset('foo')

    def test_offsets_are_immutable(self):
        offset = parse_offset('5')
        with pytest.raises(AttributeError):
            offset.value = 1

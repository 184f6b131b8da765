"""Unit tests for memory sizes and durations."""

from datetime import timedelta

import pytest

from acick.domain.models import Bytes, format_duration, parse_duration


class TestBytes:
    @pytest.mark.parametrize(
        "text, value",
        [
            ("1024 MB", 1024 * 1000**2),
            ("256MB", 256 * 1000**2),
            ("256 MiB", 256 * 1024**2),
            ("1 GB", 1000**3),
            ("2 kib", 2048),
            ("512", 512),
            ("512 B", 512),
        ],
    )
    def test_parse(self, text, value):
        assert Bytes.parse(text) == Bytes(value)

    @pytest.mark.parametrize("text", ["", "MB", "12 parsecs", "-1 MB", "1.2.3 MB"])
    def test_parse_rejects_garbage(self, text):
        with pytest.raises(ValueError):
            Bytes.parse(text)

    def test_render_in_megabytes(self):
        assert str(Bytes(1024 * 1000**2)) == "1024 MB"
        assert str(Bytes(256 * 1024**2)) == "268.44 MB"

    @pytest.mark.parametrize("mb", [1, 64, 256, 1024])
    def test_render_then_parse_is_identity(self, mb):
        value = Bytes(mb * 1000**2)
        assert Bytes.parse(str(value)) == value

    def test_exact_string_keeps_odd_sizes(self):
        value = Bytes(256 * 1024**2)
        assert Bytes.parse(value.to_exact_str()) == value

    def test_negative_is_rejected(self):
        with pytest.raises(ValueError):
            Bytes(-1)


class TestDuration:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2 sec", timedelta(seconds=2)),
            ("2sec", timedelta(seconds=2)),
            ("5 seconds", timedelta(seconds=5)),
            ("1s 500ms", timedelta(seconds=1.5)),
            ("1.5 sec", timedelta(seconds=1.5)),
            ("3m", timedelta(minutes=3)),
            ("1h 2min", timedelta(hours=1, minutes=2)),
            ("250 us", timedelta(microseconds=250)),
        ],
    )
    def test_parse(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "sec", "2 fortnights", "two sec"])
    def test_parse_rejects_garbage(self, text):
        with pytest.raises(ValueError):
            parse_duration(text)

    @pytest.mark.parametrize(
        "duration, text",
        [
            (timedelta(seconds=2), "2s"),
            (timedelta(seconds=2.5), "2s 500ms"),
            (timedelta(0), "0s"),
            (timedelta(minutes=1, microseconds=3), "1m 3us"),
        ],
    )
    def test_format(self, duration, text):
        assert format_duration(duration) == text
        assert parse_duration(text) == duration

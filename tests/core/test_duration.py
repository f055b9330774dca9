# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for duration parsing and formatting."""

from datetime import timedelta

import pytest

from mqboot.core.duration import format_duration, parse_duration


class TestParseDuration:
    def test_timedelta_passthrough(self):
        value = timedelta(seconds=5)
        assert parse_duration(value) is value

    def test_int_is_milliseconds(self):
        assert parse_duration(1500) == timedelta(milliseconds=1500)

    def test_negative_int(self):
        assert parse_duration(-1) == timedelta(milliseconds=-1)

    def test_digit_string_is_milliseconds(self):
        assert parse_duration("250") == timedelta(milliseconds=250)
        assert parse_duration("-1") == timedelta(milliseconds=-1)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("30s", timedelta(seconds=30)),
            ("-1ms", timedelta(milliseconds=-1)),
            ("5m", timedelta(minutes=5)),
            ("2H", timedelta(hours=2)),
            ("1d", timedelta(days=1)),
            ("250us", timedelta(microseconds=250)),
            (" 10s ", timedelta(seconds=10)),
        ],
    )
    def test_simple_form(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("PT30S", timedelta(seconds=30)),
            ("pt0.5s", timedelta(milliseconds=500)),
            ("PT-0.001S", timedelta(milliseconds=-1)),
            ("-PT1M", timedelta(minutes=-1)),
            ("P1DT2H", timedelta(days=1, hours=2)),
            ("PT1H30M", timedelta(hours=1, minutes=30)),
        ],
    )
    def test_iso_form(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("value", ["", "PT", "P", "P1DT", "PT1.S", "abc", "10 seconds", "5y", True, 1.5, None])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)


class TestFormatDuration:
    def test_whole_seconds(self):
        assert format_duration(timedelta(seconds=30)) == "30s"

    def test_negative_millisecond(self):
        assert format_duration(timedelta(milliseconds=-1)) == "-1ms"

    def test_fractional_seconds_use_millis(self):
        assert format_duration(timedelta(milliseconds=1500)) == "1500ms"

    def test_zero(self):
        assert format_duration(timedelta(0)) == "0ms"

    def test_sub_millisecond(self):
        assert format_duration(timedelta(microseconds=250)) == "250us"

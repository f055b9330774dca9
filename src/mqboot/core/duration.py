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
"""Duration values for configuration properties.

Accepted forms:
    - ``timedelta`` instances (returned unchanged)
    - integers and digit-only strings, read as milliseconds (``500``, ``"-1"``)
    - simple unit-suffixed text: ``30s``, ``-1ms``, ``5m``, ``2h``, ``1d``, ``250us``
    - ISO-8601 text: ``PT30S``, ``PT0.5S``, ``-PT1M``, ``P1DT2H``, ``PT-0.001S``
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

_SIMPLE_RE = re.compile(r"^([+-]?\d+)([a-z]{0,2})$", re.IGNORECASE)

_ISO_RE = re.compile(
    r"^([+-]?)P"
    r"(?:([+-]?\d+)D)?"
    r"(?:T(?=[+-]?\d)"
    r"(?:([+-]?\d+)H)?"
    r"(?:([+-]?\d+)M)?"
    r"(?:([+-]?\d+)(?:[.,](\d{1,9}))?S)?"
    r")?$",
    re.IGNORECASE,
)

_UNITS: dict[str, timedelta] = {
    "us": timedelta(microseconds=1),
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}


def parse_duration(value: Any) -> timedelta:
    """Convert a configuration value to a ``timedelta``.

    Raises:
        ValueError: If the value is not one of the accepted forms.
    """
    if isinstance(value, timedelta):
        return value
    # bool is an int subclass; True must not silently become 1ms
    if isinstance(value, bool):
        raise ValueError(f"'{value}' is not a valid duration")
    if isinstance(value, int):
        return timedelta(milliseconds=value)
    if not isinstance(value, str):
        raise ValueError(f"'{value!r}' is not a valid duration")

    text = value.strip()
    if not text:
        raise ValueError("Empty text is not a valid duration")

    simple = _SIMPLE_RE.match(text)
    if simple:
        amount, unit = int(simple.group(1)), (simple.group(2) or "ms").lower()
        if unit == "ns":
            return timedelta(microseconds=amount / 1000)
        if unit not in _UNITS:
            raise ValueError(f"'{value}' uses unknown duration unit '{unit}'")
        return amount * _UNITS[unit]

    iso = _ISO_RE.match(text)
    if iso and any(iso.group(i) for i in range(2, 6)):
        sign, days, hours, minutes, seconds, fraction = iso.groups()
        whole_seconds = int(seconds or 0)
        micros = int((fraction or "").ljust(6, "0")[:6] or 0)
        if whole_seconds < 0 or (seconds or "").startswith("-"):
            micros = -micros
        result = timedelta(
            days=int(days or 0),
            hours=int(hours or 0),
            minutes=int(minutes or 0),
            seconds=whole_seconds,
            microseconds=micros,
        )
        return -result if sign == "-" else result

    raise ValueError(f"'{value}' is not a valid duration")


def format_duration(value: timedelta) -> str:
    """Render a duration in the simple form: ``30s`` for whole seconds, ``Nms`` otherwise."""
    millis = value // timedelta(milliseconds=1)
    if value % timedelta(milliseconds=1):
        micros = value // timedelta(microseconds=1)
        return f"{micros}us"
    if millis % 1000 == 0 and millis != 0:
        return f"{millis // 1000}s"
    return f"{millis}ms"


Duration = Annotated[
    timedelta,
    BeforeValidator(parse_duration),
    PlainSerializer(format_duration, return_type=str, when_used="json"),
]
"""Pydantic field type for durations bound from configuration."""

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
"""Process-wide system properties read by MQ client libraries.

Some client settings are not passed to connection factories explicitly but
are looked up by name when a connection is established. This module is the
single place those values live for the lifetime of the process.
"""

from __future__ import annotations

USE_IBM_CIPHER_MAPPINGS = "com.ibm.mq.cfg.useIBMCipherMappings"

_properties: dict[str, str] = {}


def set_property(key: str, value: str) -> str | None:
    """Set a system property, returning the previous value (if any)."""
    previous = _properties.get(key)
    _properties[key] = value
    return previous


def get_property(key: str, default: str | None = None) -> str | None:
    return _properties.get(key, default)


def clear_property(key: str) -> str | None:
    """Remove a system property, returning the value it had."""
    return _properties.pop(key, None)


def snapshot() -> dict[str, str]:
    """Return a copy of all system properties currently set."""
    return dict(_properties)

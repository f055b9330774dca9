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
"""Load-time checks for MQ connection properties."""

from __future__ import annotations

from mqboot.config.properties.mq import MQConfigurationProperties
from mqboot.kernel.exceptions import ConflictingPropertiesException, InvalidPropertyException


def find_conflicts(props: MQConfigurationProperties) -> list[tuple[str, str]]:
    """Return every pair of mutually-exclusive properties that are both set.

    The default channel never conflicts with a CCDT URL; only a channel that
    was provided explicitly (from a source or by assignment) does.
    """
    conflicts: list[tuple[str, str]] = []
    if props.tls_cipher_suite is not None and props.tls_cipher_spec is not None:
        conflicts.append(("ibm.mq.tls-cipher-suite", "ibm.mq.tls-cipher-spec"))
    if props.ccdt_url is not None and props.channel is not None and "channel" in props.model_fields_set:
        conflicts.append(("ibm.mq.channel", "ibm.mq.ccdt-url"))
    return conflicts


def check_properties(props: MQConfigurationProperties) -> None:
    """Fail fast on property combinations the MQ client would reject later.

    Raises:
        ConflictingPropertiesException: Mutually-exclusive properties are both set.
        InvalidPropertyException: A pool limit is below 1.
    """
    conflicts = find_conflicts(props)
    if conflicts:
        described = "; ".join(f"'{a}' and '{b}'" for a, b in conflicts)
        raise ConflictingPropertiesException(
            f"Only one of each pair may be set: {described}",
            code="MQCFG_CONFLICT",
            context={"conflicts": conflicts},
        )

    for name in ("max_connections", "max_sessions_per_connection"):
        value = getattr(props.pool, name)
        if value < 1:
            key = f"ibm.mq.pool.{name.replace('_', '-')}"
            raise InvalidPropertyException(
                f"'{key}' must be at least 1, got {value}",
                code="MQCFG_RANGE",
                context={"property": key, "value": value},
            )

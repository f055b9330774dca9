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
"""Bind, check and publish MQ connection properties in one step."""

from __future__ import annotations

import structlog

from mqboot.config.properties.mq import MQConfigurationProperties
from mqboot.config.validation import check_properties
from mqboot.core.config import Config

logger = structlog.get_logger("mqboot.config.loader")


def load_mq_properties(config: Config) -> MQConfigurationProperties:
    """Bind ``ibm.mq.*`` from *config*, check it, and publish system properties.

    Raises:
        ConfigurationException: Binding failed, or the bound values conflict.
    """
    props = config.bind(MQConfigurationProperties)
    check_properties(props)
    props.apply_system_properties()

    logger.info(
        "mq_properties_bound",
        queue_manager=props.queue_manager,
        channel=props.channel,
        connection_name=props.connection_name,
        ccdt_url=props.ccdt_url,
        user=props.user,
        tls=props.uses_tls,
        pool_enabled=props.pool.enabled,
    )
    return props

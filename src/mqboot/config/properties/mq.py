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
"""IBM MQ connection configuration properties (ibm.mq.*).

These are the most commonly-used settings of an MQ connection factory, for
both bindings and client connections. TLS keystores and certificates are
configured independently; only the cipher selection, the peer name pattern
and the cipher-name mapping convention live here.

The defaults match the developer configuration of the MQ container image:

- queue_manager = QM1
- connection_name = localhost(1414)
- channel = DEV.ADMIN.SVRCONN
- user = admin
- password = passw0rd
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from mqboot.core import system
from mqboot.core.config import config_properties
from mqboot.core.duration import Duration, format_duration

MASK = "******"


class PoolProperties(BaseModel):
    """Desired shape of the connection pool built around the connection factory.

    The pool itself is created by a pooling library; these values are only
    handed to it.
    """

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True, extra="ignore")

    enabled: bool = False
    """Create a pooled connection factory instead of a plain one."""

    block_when_full: bool = Field(
        default=True,
        validation_alias=AliasChoices("block_when_full", "block_if_full"),
    )
    """Block when a connection is requested and the pool is full; False fails fast."""

    block_when_full_timeout: Duration = Field(
        default=timedelta(milliseconds=-1),
        validation_alias=AliasChoices("block_when_full_timeout", "block_if_full_timeout"),
    )
    """How long to block before failing while the pool is still full; negative blocks forever."""

    idle_timeout: Duration = timedelta(seconds=30)
    """Connection idle timeout."""

    max_connections: int = 1
    """Maximum number of pooled connections."""

    max_sessions_per_connection: int = 500
    """Maximum number of pooled sessions per connection."""

    expiration_check_interval: Duration = Field(
        default=timedelta(milliseconds=-1),
        validation_alias=AliasChoices("expiration_check_interval", "time_between_expiration_check"),
    )
    """Sleep between idle-connection eviction runs; negative disables eviction."""

    use_anonymous_producers: bool = True
    """Share one anonymous producer; False creates a producer every time one is needed."""

    @property
    def blocks_indefinitely(self) -> bool:
        return self.block_when_full and self.block_when_full_timeout < timedelta(0)

    @property
    def expiration_check_enabled(self) -> bool:
        return self.expiration_check_interval >= timedelta(0)


@config_properties(prefix="ibm.mq")
class MQConfigurationProperties(BaseModel):
    """Connection settings for one IBM MQ queue manager (ibm.mq.*).

    Set either ``tls_cipher_suite`` or ``tls_cipher_spec``, not both, and
    either ``channel`` or ``ccdt_url``, not both. The model itself does not
    enforce either rule; :func:`mqboot.config.validation.check_properties`
    does, when configuration is loaded.

    Assigning ``use_ibm_cipher_mappings`` on an instance also publishes the
    value as the ``com.ibm.mq.cfg.useIBMCipherMappings`` system property, which
    MQ client libraries read when a connection is opened. Construction and
    binding do not; :meth:`apply_system_properties` publishes a bound value.
    """

    model_config = ConfigDict(
        validate_assignment=True, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )

    queue_manager: str = "QM1"
    channel: str | None = "DEV.ADMIN.SVRCONN"
    connection_name: str | None = Field(
        default="localhost(1414)",
        validation_alias=AliasChoices("connection_name", "conn_name"),
    )
    client_id: str | None = None
    user: str | None = "admin"
    password: str | None = Field(default="passw0rd", repr=False)

    use_mqcsp_authentication: bool = Field(
        default=True,
        validation_alias=AliasChoices("use_mqcsp_authentication", "user_authentication_mqcsp"),
    )
    """Send credentials in an MQCSP structure. Only older queue manager levels need this turned off."""

    tls_cipher_suite: str | None = Field(
        default=None,
        validation_alias=AliasChoices("tls_cipher_suite", "ssl_cipher_suite"),
    )
    """For example ``SSL_ECDHE_RSA_WITH_AES_256_GCM_SHA384``."""

    tls_cipher_spec: str | None = Field(
        default=None,
        validation_alias=AliasChoices("tls_cipher_spec", "ssl_cipher_spec"),
    )
    """For example ``ECDHE_RSA_AES_256_GCM_SHA384``."""

    tls_peer_name_pattern: str | None = Field(
        default=None,
        validation_alias=AliasChoices("tls_peer_name_pattern", "ssl_peer_name"),
    )
    """Distinguished-name skeleton the queue manager certificate must match."""

    use_ibm_cipher_mappings: bool = True
    """True for the IBM JRE cipher-suite name mappings, False for the Oracle ones."""

    ccdt_url: str | None = None
    """Location of the client channel definition table, e.g. ``file:///home/admdata/ccdt1.tab``."""

    pool: PoolProperties = Field(default_factory=PoolProperties, frozen=True)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name == "use_ibm_cipher_mappings":
            self.apply_system_properties()

    @property
    def uses_ccdt(self) -> bool:
        return self.ccdt_url is not None

    @property
    def uses_tls(self) -> bool:
        return self.tls_cipher_suite is not None or self.tls_cipher_spec is not None

    def apply_system_properties(self) -> None:
        """Publish the current cipher-mapping flag to the system properties."""
        system.set_property(system.USE_IBM_CIPHER_MAPPINGS, str(self.use_ibm_cipher_mappings).lower())

    def to_flat_dict(self, mask_secrets: bool = True) -> dict[str, Any]:
        """Flatten into ``ibm.mq.*`` keys with kebab-case names.

        Durations are rendered in the simple form (``30s``, ``-1ms``). When
        *mask_secrets* is true a set password is replaced by ``******``.
        """
        flat: dict[str, Any] = {}
        for name in type(self).model_fields:
            if name == "pool":
                continue
            value = getattr(self, name)
            if name == "password" and mask_secrets and value is not None:
                value = MASK
            flat[f"ibm.mq.{name.replace('_', '-')}"] = value
        for name in PoolProperties.model_fields:
            value = getattr(self.pool, name)
            if isinstance(value, timedelta):
                value = format_duration(value)
            flat[f"ibm.mq.pool.{name.replace('_', '-')}"] = value
        return flat

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
"""Tests for the configuration loader."""

from pathlib import Path

import pytest
from pydantic import BaseModel, Field

from mqboot.core.config import Config, config_properties, env_key, to_snake_case
from mqboot.kernel.exceptions import ConfigurationException


@config_properties(prefix="myapp.broker")
class BrokerProperties(BaseModel):
    class Limits(BaseModel):
        max_depth: int = 5000

    host_name: str = "localhost"
    port: int = Field(default=1414, ge=1, le=65535)
    secure: bool = False
    limits: Limits = Field(default_factory=Limits)


class Undecorated(BaseModel):
    value: str = "nope"


class TestKeyNormalisation:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("queue-manager", "queue_manager"),
            ("queueManager", "queue_manager"),
            ("queue_manager", "queue_manager"),
            ("connName", "conn_name"),
            ("useIBMCipherMappings", "use_ibm_cipher_mappings"),
            ("userAuthenticationMQCSP", "user_authentication_mqcsp"),
            ("timeBetweenExpirationCheck", "time_between_expiration_check"),
        ],
    )
    def test_to_snake_case(self, key, expected):
        assert to_snake_case(key) == expected

    def test_env_key(self):
        assert env_key("ibm.mq.queue-manager") == "IBM_MQ_QUEUE_MANAGER"
        assert env_key("ibm.mq.pool.max_connections") == "IBM_MQ_POOL_MAX_CONNECTIONS"


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"ibm": {"mq": {"queue-manager": "QM2"}}})
        assert config.get("ibm.mq.queue-manager") == "QM2"

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("IBM_MQ_CHANNEL", "ENV.SVRCONN")
        config = Config({"ibm": {"mq": {"channel": "FILE.SVRCONN"}}})
        assert config.get("ibm.mq.channel") == "ENV.SVRCONN"

    def test_get_section(self):
        config = Config({"ibm": {"mq": {"pool": {"enabled": True}}}})
        assert config.get_section("ibm.mq.pool") == {"enabled": True}
        assert config.get_section("ibm.mq.missing") == {}


class TestConfigSources:
    def test_load_yaml_file(self, tmp_path: Path):
        (tmp_path / "mqboot.yaml").write_text("ibm:\n  mq:\n    queue-manager: QMY\n")
        config = Config.from_sources(tmp_path)
        assert config.get("ibm.mq.queue-manager") == "QMY"

    def test_load_toml_file(self, tmp_path: Path):
        (tmp_path / "mqboot.toml").write_text('[ibm.mq]\nqueue-manager = "QMT"\n')
        config = Config.from_sources(tmp_path)
        assert config.get("ibm.mq.queue-manager") == "QMT"

    def test_root_file_overrides_config_dir(self, tmp_path: Path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "mqboot.yaml").write_text("ibm:\n  mq:\n    channel: A\n    user: app\n")
        (tmp_path / "mqboot.yaml").write_text("ibm:\n  mq:\n    channel: B\n")
        config = Config.from_sources(tmp_path)
        assert config.get("ibm.mq.channel") == "B"
        assert config.get("ibm.mq.user") == "app"

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "mqboot.yaml").write_text("ibm:\n  mq:\n    queue-manager: QM1\n    channel: DEV\n")
        (tmp_path / "mqboot-prod.yaml").write_text("ibm:\n  mq:\n    queue-manager: PRODQM\n")
        config = Config.from_sources(tmp_path, active_profiles=["prod"])
        assert config.get("ibm.mq.queue-manager") == "PRODQM"
        assert config.get("ibm.mq.channel") == "DEV"
        assert any("profile: prod" in s for s in config.loaded_sources)

    def test_library_defaults_loaded(self, tmp_path: Path):
        config = Config.from_sources(tmp_path)
        assert config.get("mqboot.logging.level.root") == "INFO"
        assert config.loaded_sources[0].startswith("mqboot-defaults.yaml")

    def test_library_defaults_skipped(self, tmp_path: Path):
        config = Config.from_sources(tmp_path, load_defaults=False)
        assert config.get("mqboot.logging.level.root") is None
        assert config.loaded_sources == []

    def test_library_defaults_do_not_set_mq_keys(self):
        defaults = Config._load_library_defaults()
        assert "ibm" not in defaults

    def test_malformed_yaml_raises_source_error(self, tmp_path: Path):
        path = tmp_path / "mqboot.yaml"
        path.write_text("ibm:\n  mq:\n    queue-manager: [\n")
        with pytest.raises(ConfigurationException, match="Cannot parse config file") as exc_info:
            Config.from_sources(tmp_path, load_defaults=False)
        assert exc_info.value.code == "MQCFG_SOURCE"
        assert exc_info.value.context == {"path": str(path)}

    def test_malformed_toml_raises_source_error(self, tmp_path: Path):
        (tmp_path / "mqboot.toml").write_text("[ibm.mq\nqueue-manager = 'QM'\n")
        with pytest.raises(ConfigurationException) as exc_info:
            Config.from_sources(tmp_path, load_defaults=False)
        assert exc_info.value.code == "MQCFG_SOURCE"

    def test_non_mapping_file_rejected(self, tmp_path: Path):
        (tmp_path / "mqboot.yaml").write_text("- queue-manager\n- channel\n")
        with pytest.raises(ConfigurationException, match="mapping at the top level"):
            Config.from_sources(tmp_path, load_defaults=False)


class TestBind:
    def test_defaults_when_section_missing(self):
        props = Config({}).bind(BrokerProperties)
        assert props.host_name == "localhost"
        assert props.port == 1414
        assert props.limits.max_depth == 5000

    def test_relaxed_keys(self):
        config = Config({"myapp": {"broker": {"host-name": "mq1", "limits": {"maxDepth": 10}}}})
        props = config.bind(BrokerProperties)
        assert props.host_name == "mq1"
        assert props.limits.max_depth == 10

    def test_string_coercion(self):
        config = Config({"myapp": {"broker": {"port": "1415", "secure": "true"}}})
        props = config.bind(BrokerProperties)
        assert props.port == 1415
        assert props.secure is True

    def test_env_overrides_file_value(self, monkeypatch):
        monkeypatch.setenv("MYAPP_BROKER_HOST_NAME", "from-env")
        config = Config({"myapp": {"broker": {"host-name": "from-file"}}})
        assert config.bind(BrokerProperties).host_name == "from-env"

    def test_squashed_env_name(self, monkeypatch):
        monkeypatch.setenv("MYAPP_BROKER_HOSTNAME", "squashed")
        assert Config({}).bind(BrokerProperties).host_name == "squashed"

    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("MYAPP_BROKER_LIMITS_MAX_DEPTH", "42")
        assert Config({}).bind(BrokerProperties).limits.max_depth == 42

    def test_placeholders_resolved_in_bound_values(self, monkeypatch):
        monkeypatch.setenv("MQ_HOST", "mq.example.com")
        config = Config({"myapp": {"broker": {"host-name": "${MQ_HOST}"}}})
        assert config.bind(BrokerProperties).host_name == "mq.example.com"

    def test_validation_failure(self):
        config = Config({"myapp": {"broker": {"port": 70000}}})
        with pytest.raises(ConfigurationException, match="Configuration validation failed") as exc_info:
            config.bind(BrokerProperties)
        assert exc_info.value.code == "MQCFG_VALIDATION"
        assert exc_info.value.context["prefix"] == "myapp.broker"

    def test_validation_failure_is_value_error(self):
        config = Config({"myapp": {"broker": {"port": "not-a-port"}}})
        with pytest.raises(ValueError):
            config.bind(BrokerProperties)

    def test_undecorated_class_rejected(self):
        with pytest.raises(ConfigurationException, match="not decorated"):
            Config({}).bind(Undecorated)

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
"""StructlogAdapter — structlog setup for mqboot with credential redaction."""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterable, MutableMapping
from typing import Any

import structlog

from mqboot.config.properties.mq import MASK
from mqboot.core.config import Config

_DEFAULT_SECRET_PATTERN = r"password|passwd|secret|token|credential|passphrase"


class SecretRedactor:
    """structlog processor that masks credential values in event dicts.

    A key is redacted when it matches the built-in credential pattern
    (``password``, ``mq_password``, ``client_secret``...) or is listed in
    *extra_keys*. Nested dicts are walked; ``None`` values are left alone so
    that "not provided" stays visible.
    """

    def __init__(self, extra_keys: Iterable[str] = ()) -> None:
        self._extra = {k.lower().replace("-", "_") for k in extra_keys}
        self._pattern = re.compile(_DEFAULT_SECRET_PATTERN, re.IGNORECASE)

    def is_secret(self, key: str) -> bool:
        normalized = key.lower().replace("-", "_").replace(".", "_")
        return normalized in self._extra or bool(self._pattern.search(normalized))

    def _redact(self, data: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        for key, value in data.items():
            if isinstance(value, MutableMapping):
                data[key] = self._redact(dict(value))
            elif value is not None and self.is_secret(str(key)):
                data[key] = MASK
        return data

    def __call__(self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        return self._redact(event_dict)


def configure_bootstrap_logging(level: int = logging.WARNING) -> None:
    """Route structlog to stderr before any configuration has been read.

    Used by the CLI so that nothing logged while config files are loaded can
    land on stdout next to command output.
    """
    structlog.configure(
        processors=[
            SecretRedactor(),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


class StructlogAdapter:
    """Logging adapter backed by structlog and stdlib logging on stderr.

    Reads ``mqboot.logging.level.root``, per-module levels under
    ``mqboot.logging.level.<module>``, ``mqboot.logging.format``
    (``console`` or ``json``) and ``mqboot.logging.redact-keys``, a list of
    extra event keys to mask on top of the credential-like ones.
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}
        self._redactor = SecretRedactor()

    def configure(self, config: Config) -> None:
        level_section = dict(config.get_section("mqboot.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("mqboot.logging.format", "console")).lower()

        extra = config.get("mqboot.logging.redact-keys") or []
        if isinstance(extra, str):
            extra = [k.strip() for k in extra.split(",") if k.strip()]
        self._redactor = SecretRedactor(extra)

        self._setup_structlog()
        for module, level in self._module_levels.items():
            self.set_level(module, level)

    @property
    def redactor(self) -> SecretRedactor:
        return self._redactor

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def _setup_structlog(self) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            self._redactor,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]
        if self._format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stderr,
            level=getattr(logging, self._root_level, logging.INFO),
            force=True,
        )

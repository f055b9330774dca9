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
"""Exception hierarchy for mqboot."""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class MQBootException(Exception):
    """Base exception for all mqboot errors.

    Carries an optional error code and context dict for structured error data.
    Catch MQBootException to handle every library error, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "MQCFG_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(MQBootException, ValueError):
    """Configuration could not be loaded or bound."""


class InvalidPropertyException(ConfigurationException):
    """A single property holds a value outside its accepted range."""


class ConflictingPropertiesException(ConfigurationException):
    """Two or more properties were set that must not be combined."""

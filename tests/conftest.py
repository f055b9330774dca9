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
"""Shared fixtures: keep process-wide state from leaking between tests."""

import pytest

from mqboot.core import system


@pytest.fixture(autouse=True)
def _isolate_system_properties():
    saved = system.snapshot()
    for key in saved:
        system.clear_property(key)
    yield
    for key in system.snapshot():
        system.clear_property(key)
    for key, value in saved.items():
        system.set_property(key, value)


@pytest.fixture(autouse=True)
def _clear_mq_env(monkeypatch):
    import os

    for key in list(os.environ):
        if key.startswith(("IBM_MQ_", "MQBOOT_")):
            monkeypatch.delenv(key, raising=False)

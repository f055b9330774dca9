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
"""MQ connection configuration: properties, load-time checks and loading."""

from mqboot.config.loader import load_mq_properties
from mqboot.config.properties import MQConfigurationProperties, PoolProperties
from mqboot.config.validation import check_properties, find_conflicts

__all__ = [
    "MQConfigurationProperties",
    "PoolProperties",
    "check_properties",
    "find_conflicts",
    "load_mq_properties",
]

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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

MQBOOT_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "mqboot": "bold blue",
    "dim": "dim",
})

console = Console(theme=MQBOOT_THEME)


def print_banner() -> None:
    """Print the mqboot banner line."""
    from mqboot import __version__

    console.print(f"[mqboot]mqboot[/mqboot] [dim]:: IBM MQ connection configuration :: (v{__version__})[/dim]")
    console.print("  [dim]Copyright 2026 Firefly Software Solutions Inc. | Apache 2.0 License[/dim]\n")

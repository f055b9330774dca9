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
"""mqboot CLI — inspect and check MQ connection configuration."""

from __future__ import annotations

import click

from mqboot.cli.console import print_banner
from mqboot.logging import configure_bootstrap_logging


class MQBootCLI(click.Group):
    """Custom Click group that shows the mqboot banner on help."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        print_banner()
        super().format_help(ctx, formatter)


@click.group(cls=MQBootCLI)
@click.version_option(package_name="mqboot")
def cli() -> None:
    """mqboot — IBM MQ connection configuration CLI."""
    configure_bootstrap_logging()


from mqboot.cli.config_cmd import config_group  # noqa: E402

cli.add_command(config_group, name="config")

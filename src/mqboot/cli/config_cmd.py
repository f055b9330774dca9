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
"""'mqboot config' — Show and validate the effective ibm.mq.* configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import structlog
import yaml  # type: ignore[import-untyped]
from rich.markup import escape
from rich.table import Table

from mqboot.cli.console import console
from mqboot.config.loader import load_mq_properties
from mqboot.config.properties.mq import MQConfigurationProperties
from mqboot.core.config import Config
from mqboot.kernel.exceptions import ConfigurationException
from mqboot.logging.structlog_adapter import StructlogAdapter

logger = structlog.get_logger("mqboot.cli.config")


def _load(base_dir: Path, profiles: tuple[str, ...], load_defaults: bool) -> MQConfigurationProperties:
    active = [p.strip() for entry in profiles for p in entry.split(",") if p.strip()]
    config = Config.from_sources(base_dir, active_profiles=active, load_defaults=load_defaults)
    StructlogAdapter().configure(config)
    logger.debug("config_sources_loaded", sources=config.loaded_sources)
    return load_mq_properties(config)


def _load_or_exit(base_dir: Path, profiles: tuple[str, ...], load_defaults: bool) -> MQConfigurationProperties:
    try:
        return _load(base_dir, profiles, load_defaults)
    except ConfigurationException as exc:
        console.print(f"[error]Invalid configuration:[/error] {escape(str(exc))}")
        raise SystemExit(1) from None


def _display(value: Any) -> str:
    if value is None:
        return "[dim]<unset>[/dim]"
    if isinstance(value, bool):
        return str(value).lower()
    return escape(str(value))


_source_options = [
    click.option(
        "--dir",
        "base_dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=Path("."),
        show_default=True,
        help="Directory holding mqboot.yaml / mqboot.toml.",
    ),
    click.option(
        "--profile",
        "profiles",
        multiple=True,
        envvar="MQBOOT_PROFILES_ACTIVE",
        help="Active profile (repeatable or comma separated).",
    ),
    click.option("--no-defaults", is_flag=True, help="Skip the packaged library defaults."),
]


def _with_source_options(func: Any) -> Any:
    for option in reversed(_source_options):
        func = option(func)
    return func


@click.group()
def config_group() -> None:
    """Inspect the ibm.mq.* connection configuration."""


@config_group.command("show")
@_with_source_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "yaml"]),
    default="table",
    show_default=True,
    help="Output format.",
)
def show_command(base_dir: Path, profiles: tuple[str, ...], no_defaults: bool, output_format: str) -> None:
    """Print the effective configuration with secrets masked."""
    props = _load_or_exit(base_dir, profiles, not no_defaults)
    flat = props.to_flat_dict(mask_secrets=True)

    if output_format == "yaml":
        click.echo(yaml.safe_dump(flat, sort_keys=False), nl=False)
        return

    table = Table(title="IBM MQ connection", border_style="dim")
    table.add_column("Property", style="info")
    table.add_column("Value")
    for key, value in flat.items():
        table.add_row(key, _display(value))
    console.print(table)


@config_group.command("validate")
@_with_source_options
def validate_command(base_dir: Path, profiles: tuple[str, ...], no_defaults: bool) -> None:
    """Check the configuration binds and has no conflicting settings."""
    props = _load_or_exit(base_dir, profiles, not no_defaults)
    target = props.ccdt_url if props.uses_ccdt else f"{props.connection_name} via {props.channel}"
    console.print(f"  [success]✓[/success] Queue manager {escape(props.queue_manager)} ({escape(str(target))})")

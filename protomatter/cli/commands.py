# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI commands: configuration management and blueprint inspection."""

import importlib
import logging
from pathlib import Path
from textwrap import dedent

import click
from rich.table import Table

from protomatter.substrate import iter_chain, own_keys
from protomatter.types import BLUEPRINT_OPERATIONS, MIX_IN, Blueprint, is_method, private_methods_of, statics_of

from .context import ApplicationContext
from .exceptions import ConfigFileError, TargetError
from .utils import console, success, warning

logger = logging.getLogger(__name__)


def _generate_config_template() -> str:
    return dedent("""\
        # Protomatter Configuration
        # Environment variables (PROTOMATTER_*) override values in this file

        # Default for create(allow_mixins=...)
        allow_mixins: true

        # Property-bag keys reserved for private methods and statics
        private_key: private
        statics_key: statics

        # Console verbosity: quiet | normal | verbose | debug
        log_level: normal
    """)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def config():
    """\b
    Configuration is read from, in priority order:
      CLI flags, PROTOMATTER_* environment variables,
      ./protomatter.yaml (searched upward from CWD), defaults
    """
    pass


@config.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.pass_obj
def show(ctx: ApplicationContext) -> None:
    """Display the effective configuration."""
    from protomatter.settings import find_project_config

    try:
        settings = ctx.get_effective_config()
    except Exception as e:
        raise ConfigFileError(f"Failed to load configuration: {e}") from e

    table = Table(title="Protomatter Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Description", style="dim")
    for name, field in type(settings).model_fields.items():
        table.add_row(name, repr(getattr(settings, name)), field.description or "")
    console.print(table)

    project_file = ctx.config_file or find_project_config()
    if project_file is None:
        warning("No protomatter.yaml found", ["Using environment variables and defaults"])
    else:
        console.print(f"[dim]Project file: {project_file}[/dim]")


@config.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--force", "-f", is_flag=True, help="Overwrite existing file")
@click.option("--output", "-o", type=click.Path(path_type=Path),
              default=Path("protomatter.yaml"), show_default=True)
def init(force: bool, output: Path) -> None:
    """Create a protomatter.yaml template."""
    if output.exists() and not force:
        raise ConfigFileError(
            f"Configuration file already exists: {output}",
            details=["Use --force to overwrite"],
        )

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(_generate_config_template())
    except OSError as e:
        raise ConfigFileError(f"Failed to create configuration: {e}") from e
    success(f"Created configuration file: {output}")


def _load_target(target: str) -> Blueprint:
    module_name, _, attr_path = target.partition(":")
    if not module_name or not attr_path:
        raise TargetError(f"Target must look like 'package.module:Name', got {target!r}")

    try:
        obj = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as e:
        raise TargetError(f"Cannot load {target}: {e}") from e

    if not isinstance(obj, Blueprint):
        raise TargetError(f"{target} is a {type(obj).__name__}, not a blueprint")
    return obj


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("target")
def inspect(target: str) -> None:
    """Show the delegation chain of blueprint TARGET (package.module:Name)."""
    blueprint = _load_target(target)
    skipped = BLUEPRINT_OPERATIONS | {MIX_IN}

    table = Table(title=f"Blueprint chain of {target}")
    table.add_column("Level", justify="right")
    table.add_column("Public methods", style="green")
    table.add_column("Data", style="cyan")
    table.add_column("Private", style="magenta")
    table.add_column("Statics", style="yellow")

    for depth, level in enumerate(iter_chain(blueprint)):
        statics = statics_of(level)
        members = [name for name in own_keys(level) if name not in skipped and name not in statics]
        methods = [name for name in members if is_method(level.__dict__[name])]
        data = [name for name in members if not is_method(level.__dict__[name])]
        table.add_row(
            str(depth),
            ", ".join(methods),
            ", ".join(data),
            ", ".join(private_methods_of(level)),
            ", ".join(sorted(statics)),
        )
    logger.debug("Inspected %s", target)
    console.print(table)

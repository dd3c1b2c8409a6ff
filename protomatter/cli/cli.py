# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import logging
import sys
from pathlib import Path

import click

from .constants import CLI_NAME, LOG_LEVELS, PACKAGE_NAME, ExitCode
from .context import ApplicationContext
from .utils import console

logger = logging.getLogger(__name__)


def _version_callback(ctx, param, value):
    if not value:
        return
    import importlib.metadata
    version = importlib.metadata.version(PACKAGE_NAME)
    console.print(f"[bold]{CLI_NAME}[/bold], version {version}")
    ctx.exit()


def create_cli() -> click.Group:
    from .commands import config, inspect

    @click.group(name=CLI_NAME, context_settings={"help_option_names": ["-h", "--help"]})
    @click.option("-c", "--config", "config_file", type=click.Path(exists=True, path_type=Path),
                  help="Override configuration file")
    @click.option("-l", "--log-level", type=click.Choice(LOG_LEVELS), default=None,
                  metavar="LEVEL", help="Set log verbosity (quiet|normal|verbose|debug)")
    @click.option("--version", is_flag=True, expose_value=False, is_eager=True,
                  callback=_version_callback, help="Show the version and exit.")
    @click.pass_context
    def cli(ctx: click.Context, config_file: Path | None, log_level: str | None) -> None:
        """Protomatter - private state and inheritance for delegation-based objects."""
        ctx.obj = ApplicationContext.from_cli_args(config_file=config_file, log_level=log_level)

    cli.add_command(config)
    cli.add_command(inspect)
    return cli


def main() -> None:
    """Run CLI with consistent error handling."""
    from protomatter.exceptions import ProtomatterError

    from .exceptions import CLIError

    try:
        cli = create_cli()
        cli(standalone_mode=False)
    except click.exceptions.Exit as e:
        sys.exit(e.exit_code)
    except click.ClickException as e:
        e.show()
        sys.exit(ExitCode.USAGE)
    except (KeyboardInterrupt, click.exceptions.Abort):
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(ExitCode.INTERRUPTED)
    except CLIError as e:
        console.print(e.format_for_console())
        sys.exit(e.exit_code)
    except ProtomatterError as e:
        console.print(e.format_for_console())
        sys.exit(ExitCode.DATAERR)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        logging.exception(f"Unexpected error in {CLI_NAME} CLI")
        sys.exit(ExitCode.SOFTWARE)


if __name__ == "__main__":
    main()

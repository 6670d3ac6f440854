"""
Shared helper functions for CLI commands
"""

import sys
from typing import Optional, Type

import click

from routepack.config import Config
from routepack.logging import setup_logging


def banner(title: str, color: str = 'cyan') -> None:
    click.secho("\n" + "=" * 50, fg=color, bold=True)
    click.secho(title, fg=color, bold=True)
    click.secho("=" * 50 + "\n", fg=color, bold=True)


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    click.secho(f"\n[ERROR] {message}", fg='red', bold=True, err=True)
    sys.exit(1)


def load_config(env_file: Optional[str], runtime: Optional[str], quiet: bool = False) -> Type[Config]:
    """
    Build a Config subclass for one CLI invocation.

    A fresh subclass keeps environment values from leaking between runs.
    """
    class CLIConfig(Config):
        pass

    CLIConfig.VERBOSE_LOGGING = False
    CLIConfig.load_from_env(env_file)
    if runtime:
        CLIConfig.RUNTIME = runtime

    # Machine-readable output must not be interleaved with log lines
    setup_logging("WARNING" if quiet else CLIConfig.LOG_LEVEL)
    CLIConfig.validate()
    return CLIConfig


def runtime_option(func):
    return click.option(
        '--runtime',
        default=None,
        type=click.Choice(Config.Internal.VALID_RUNTIMES),
        help='Default runtime for routes without one'
    )(func)


def env_file_option(func):
    return click.option(
        '--env-file',
        default=None,
        type=click.Path(dir_okay=False),
        help='Path to .env file (default: .env)'
    )(func)

"""
routepack CLI - Init Command

Writes a .env file holding the adapter defaults.
"""

from pathlib import Path

import click
import questionary
from questionary import Style

from routepack._template_loader import render
from routepack.config import Config
from .helpers import banner, fail

AUTO_RUNTIME = 'auto (detect from Node.js)'

custom_style = Style([
    ('qmark', 'fg:#673ab7 bold'),
    ('question', 'bold'),
    ('answer', 'fg:#2196f3 bold'),
    ('pointer', 'fg:#673ab7 bold'),
    ('highlighted', 'fg:#2196f3 bold'),
    ('selected', 'fg:#4caf50 bold'),
    ('instruction', ''),
    ('text', ''),
])


def _validate_memory(text: str):
    if not text or text.isdigit():
        return True
    return "Memory must be a whole number of megabytes"


def _settings(runtime, external, regions, memory, max_duration):
    """Non-empty settings as (KEY, value) pairs in a stable order."""
    values = [
        ('RUNTIME', runtime),
        ('EXTERNAL', external),
        ('REGIONS', regions),
        ('MEMORY', memory),
        ('MAX_DURATION', max_duration),
    ]
    return [(key, str(value).strip()) for key, value in values if value not in (None, '')]


@click.command()
@click.option('--runtime', default=None,
              type=click.Choice(Config.Internal.VALID_RUNTIMES),
              help='Default runtime')
@click.option('--external', default=None, help='Comma-separated modules to leave out of bundles')
@click.option('--regions', default=None, help='Comma-separated deployment regions')
@click.option('--memory', default=None, type=int, help='Function memory in MB')
@click.option('--max-duration', default=None, type=int, help='Maximum execution time in seconds')
@click.option('--env-file', default='.env', type=click.Path(dir_okay=False),
              help='File to write (default: .env)')
@click.option('--yes', '-y', is_flag=True, default=False,
              help='Skip prompts and use the given options')
@click.option('--force', is_flag=True, default=False, help='Overwrite an existing file')
def init(runtime, external, regions, memory, max_duration, env_file, yes, force):
    """
    Create a .env file with adapter defaults.

    Examples:
        routepack init
        routepack init --runtime edge --external sharp --yes
    """
    banner("routepack init")

    target = Path(env_file)
    if target.exists() and not force:
        if yes or not questionary.confirm(
            f"{target} already exists. Overwrite?", default=False, style=custom_style
        ).ask():
            fail(f"{target} already exists (use --force to overwrite)")
            return

    if not yes:
        if runtime is None:
            choice = questionary.select(
                "Default runtime:",
                choices=[AUTO_RUNTIME] + Config.Internal.VALID_RUNTIMES,
                style=custom_style
            ).ask()
            if choice is None:
                fail("Runtime selection is required!")
                return
            runtime = None if choice == AUTO_RUNTIME else choice

        if external is None:
            external = questionary.text(
                "Modules to leave out of bundles (comma-separated):", style=custom_style
            ).ask()

        if memory is None:
            memory = questionary.text(
                "Function memory in MB (empty for platform default):",
                validate=_validate_memory,
                style=custom_style
            ).ask()

    settings = _settings(runtime, external, regions, memory, max_duration)
    target.write_text(render('env.j2', settings=settings), encoding='utf-8')

    click.secho(f"[OK] Wrote {target}", fg='green', bold=True)
    for key, value in settings:
        click.secho(f"  ROUTEPACK_{key}: ", fg='blue', nl=False)
        click.secho(value, fg='green')

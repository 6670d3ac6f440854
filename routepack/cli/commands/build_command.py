"""
routepack CLI - Build Command

Runs the adapter against a framework build manifest.
"""

import click

from routepack.adapters import OpenRuntimesAdapter
from routepack.builder import ManifestBuilder
from routepack.errors import RoutePackError
from .helpers import banner, env_file_option, fail, load_config, runtime_option


@click.command()
@click.argument('manifest', type=click.Path(exists=True, dir_okay=False))
@click.option('--out', default=None, type=click.Path(file_okay=False),
              help='Deployment directory (default: .open-runtimes)')
@runtime_option
@env_file_option
def build(manifest, out, runtime, env_file):
    """
    Build an Open Runtimes deployment from a build manifest.

    Bundles one function per config group, copies static assets and
    writes config.json.

    Examples:
        routepack build build/manifest.json
        routepack build build/manifest.json --runtime edge --out dist
    """
    banner("routepack build")

    try:
        config = load_config(env_file, runtime)
        builder = ManifestBuilder.from_file(manifest)
        adapter = OpenRuntimesAdapter(config=config, output_dir=out)
        result = adapter.adapt_sync(builder)
    except (RoutePackError, ValueError) as e:
        fail(str(e))
        return

    click.secho(f"[OK] Built {result.grouping.count} function(s)", fg='green', bold=True)
    for group in result.groups:
        click.secho(f"  {group.name}: ", fg='blue', nl=False)
        click.secho(f"{len(group.routes)} route(s)", fg='green')
    click.secho(f"\nOutput: {adapter.output_dir}", fg='cyan')

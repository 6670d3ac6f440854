"""
routepack CLI - Routes Command

Compiles a build manifest and shows the resulting groups and routing
table without bundling anything.
"""

import json

import click

from routepack.adapters import OpenRuntimesAdapter
from routepack.builder import ManifestBuilder
from routepack.errors import RoutePackError
from .helpers import banner, env_file_option, fail, load_config, runtime_option


@click.command()
@click.argument('manifest', type=click.Path(exists=True, dir_okay=False))
@runtime_option
@env_file_option
@click.option('--json', 'as_json', is_flag=True, default=False,
              help='Print the routing document as JSON')
def routes(manifest, runtime, env_file, as_json):
    """
    Show how routes are grouped into functions.

    Examples:
        routepack routes build/manifest.json
        routepack routes build/manifest.json --json
    """
    try:
        config = load_config(env_file, runtime, quiet=as_json)
        builder = ManifestBuilder.from_file(manifest)
        result = OpenRuntimesAdapter(config=config).compile(builder)
    except (RoutePackError, ValueError) as e:
        fail(str(e))
        return

    if as_json:
        click.echo(json.dumps(result.document.to_dict(), indent=2))
        return

    banner("Functions")
    for group in result.groups:
        click.secho(f"{group.name}", fg='green', bold=True, nl=False)
        click.secho(f"  [{group.fingerprint}]", fg='blue')
        for route in group.routes:
            click.secho(f"  - {route.id}  ", nl=False)
            click.secho(route.pattern, fg='yellow')

    banner("Routing table")
    for position, rule in enumerate(result.document.routes, start=1):
        click.echo(f"{position:>3}. {json.dumps(rule)}")

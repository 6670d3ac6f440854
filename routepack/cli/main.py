"""
routepack CLI Commands

Build Open Runtimes deployments from framework build manifests.
"""

import click

from routepack.cli.commands.build_command import build
from routepack.cli.commands.init_command import init
from routepack.cli.commands.routes_command import routes


def _version_callback(ctx, param, value):
    """Display version and exit."""
    if value:
        from routepack import __version__
        click.echo(f'routepack v{__version__}')
        ctx.exit()


@click.group()
@click.option('--version', '-V', is_flag=True, callback=_version_callback, expose_value=False, is_eager=True, help='Show version and exit')
def cli():
    """
    routepack - Route grouping and deployment-config compiler
    """


cli.add_command(build)
cli.add_command(routes)
cli.add_command(init)


if __name__ == '__main__':
    cli()

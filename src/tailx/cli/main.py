"""Main CLI entry point with command groups"""

import click

from tailx.__version__ import __version__
from tailx.cli.extent import extent_command
from tailx.cli.serve import serve_command
from tailx.cli.tail import tail_command
from tailx.utils import setup_logging


class DefaultCommandGroup(click.Group):
    """Custom Click Group that allows a default command"""

    def parse_args(self, ctx, args):
        # During shell completion, don't redirect to default command
        if ctx.resilient_parsing:
            return super().parse_args(ctx, args)

        if not args or args[0] in ('--help', '-h', '--version'):
            return super().parse_args(ctx, args)

        if args and args[0] in self.commands:
            return super().parse_args(ctx, args)

        # Otherwise, treat as tail command (default)
        return super().parse_args(ctx, ['tail'] + args)


@click.group(cls=DefaultCommandGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name='tailx')
@click.pass_context
def cli(ctx):
    """
    tailx - print the last part of files.

    \b
    Commands:
      tailx <file>...          Print the last 10 lines (default command)
      tailx extent <file>...   Count lines and bytes
      tailx serve              Start web API server

    \b
    Examples:
      tailx /var/log/app.log
      tailx -n +20 /var/log/app.log
      tailx -c 512 a.log b.log
      tailx serve --port 8000
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


cli.add_command(tail_command, name='tail')
cli.add_command(extent_command, name='extent')
cli.add_command(serve_command, name='serve')


def main():
    """Entry point for the CLI"""
    setup_logging()
    cli()


if __name__ == '__main__':
    main()

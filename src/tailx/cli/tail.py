"""CLI tail command"""

import logging
import sys

import click

from tailx.errors import ConfigurationError, TailError
from tailx.models import TailResponse, Unit
from tailx.offset import parse_offset
from tailx.tail import collect_reports, tail_paths
from tailx.utils import fs_bytes, get_bool_env

DEFAULT_LINES = '10'


class OffsetParamType(click.ParamType):
    """Click parameter type for offset tokens (``K``, ``-K``, ``+K``, ``+0``)."""

    name = 'offset'

    def convert(self, value, param, ctx):
        if not isinstance(value, str):
            value = str(value)
        try:
            parse_offset(value)
        except ConfigurationError as e:
            self.fail(f"invalid value '{e.token}'", param, ctx)
        # Keep the raw token; it is parsed again once the unit is settled
        return value


OFFSET = OffsetParamType()


@click.command('tail')
@click.argument('files', nargs=-1, required=True, metavar='FILE...')
@click.option(
    '--lines',
    '-n',
    type=OFFSET,
    default=None,
    help='Output the last K lines, instead of the last 10; or use -n +K to output starting with the Kth',
)
@click.option(
    '--bytes',
    '-c',
    'bytes_',
    type=OFFSET,
    default=None,
    help='Output the last K bytes; or use -c +K to output bytes starting with the Kth of each file',
)
@click.option('--quiet', '-q', is_flag=True, help='Never print headers giving file names')
@click.option('--json', 'output_json', is_flag=True, help='Output results as JSON')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def tail_command(files, lines, bytes_, quiet, output_json, no_color, debug):
    """
    Print the last part of each FILE.

    With more than one FILE, precede each with a header giving the file name.
    A FILE of - reads standard input.

    \b
    Offsets:
        K     the last K lines/bytes
        -K    the same as K
        +K    start at the Kth line/byte (counting from 1)
        +0    everything, starting at the first line/byte
        0     nothing

    \b
    Examples:
        tailx app.log                   # Last 10 lines
        tailx -n 3 app.log              # Last 3 lines
        tailx -n +5 app.log             # From line 5 onward
        tailx -c 100 app.log            # Last 100 bytes
        tailx -q a.log b.log            # No headers
        tailx app.log --json            # Machine readable output
    """
    if debug:
        logging.getLogger('tailx').setLevel(logging.DEBUG)

    if lines is not None and bytes_ is not None:
        raise click.UsageError("'--lines' cannot be used with '--bytes'")

    if bytes_ is not None:
        unit = Unit.BYTES
        token = bytes_
    else:
        unit = Unit.LINES
        token = lines if lines is not None else DEFAULT_LINES

    offset = parse_offset(token)
    paths = list(files)

    if output_json:
        response = TailResponse(unit=unit, offset=token, sources=collect_reports(paths, offset, unit))
        for report in response.sources:
            if report.error is not None:
                click.echo(f'tailx: {report.path}: {report.error}', err=True)
        click.echo(response.model_dump_json(indent=2))
        return

    stdout = click.get_binary_stream('stdout')
    colorize = not no_color and not get_bool_env('TAILX_NO_COLOR') and sys.stdout.isatty()

    def report_error(error: TailError) -> None:
        stdout.flush()
        click.echo(fs_bytes(f'tailx: {error}'), err=True)

    tail_paths(
        paths,
        offset,
        unit=unit,
        quiet=quiet,
        write=stdout.write,
        report_error=report_error,
        colorize=colorize,
    )
    stdout.flush()

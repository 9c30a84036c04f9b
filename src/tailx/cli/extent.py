"""CLI extent command"""

import click

from tailx.extent import count_file_extent
from tailx.models import ExtentResponse


@click.command('extent')
@click.argument('files', nargs=-1, required=True, metavar='FILE...')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON lines')
def extent_command(files, output_json):
    """
    Count lines and bytes of each FILE.

    A final line without a trailing newline still counts as a line.

    \b
    Examples:
        tailx extent app.log
        tailx extent a.log b.log --json
    """
    failed = False
    for path in files:
        try:
            extent = count_file_extent(path)
        except OSError as e:
            click.echo(f'tailx: {path}: {e.strerror or e}', err=True)
            failed = True
            continue

        if output_json:
            click.echo(ExtentResponse(path=path, extent=extent).model_dump_json())
        else:
            click.echo(f'{extent.total_lines:>8} {extent.total_bytes:>8} {path}')

    if failed:
        raise SystemExit(1)

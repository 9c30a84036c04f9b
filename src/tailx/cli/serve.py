"""CLI serve command for the HTTP API"""

import os

import click


@click.command('serve')
@click.option('--host', default='127.0.0.1', show_default=True, help='Host to bind to')
@click.option('--port', default=8000, show_default=True, type=int, help='Port to bind to')
@click.option(
    '--search-root',
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help='Only allow tailing files below this directory (default: current directory)',
)
def serve_command(host, port, search_root):
    """
    Start the tailx web API server.

    \b
    Examples:
        tailx serve
        tailx serve --port 9000 --search-root /var/log
    """
    import uvicorn

    if search_root:
        os.environ['TAILX_SEARCH_ROOT'] = os.path.abspath(search_root)

    click.echo(f'Starting tailx API on http://{host}:{port}', err=True)
    uvicorn.run('tailx.web:app', host=host, port=port)

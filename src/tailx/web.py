import logging
import os
import platform
from contextlib import asynccontextmanager
from time import time

import anyio
import psutil
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from tailx import prometheus as prom
from tailx.__version__ import __version__
from tailx.errors import ConfigurationError
from tailx.extent import count_file_extent
from tailx.models import ExtentResponse, HealthResponse, TailResponse, Unit
from tailx.offset import parse_offset
from tailx.path_security import get_search_root, set_search_root, validate_path_within_root
from tailx.tail import collect_reports
from tailx.utils import ENV_PREFIX, get_read_chunk_size, setup_logging

log_level_name = setup_logging(default_level='INFO')

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: initialize search root from environment variable
    # This is set by the serve CLI command, or defaults to cwd
    search_root = set_search_root(os.getenv('TAILX_SEARCH_ROOT'))
    app.state.search_root = search_root
    logger.info(f"Search root: {search_root}")

    yield

    logger.info("Shutting down tailx")


app = FastAPI(
    title='tailx',
    version=__version__,
    description="""
    Print the last part of files over HTTP.

    ## Endpoints

    * `/v1/tail` - Output of one or more files from a line or byte offset onward
    * `/v1/extent` - Line and byte totals of a file
    * `/metrics` - Prometheus metrics
    * `/` - Service health

    ## Offsets

    * `K` or `-K` - the last K lines/bytes
    * `+K` - start at the K-th line/byte (counting from 1)
    * `+0` - everything from the first line/byte
    * `0` - nothing
    """,
    license_info={"name": "MIT"},
    lifespan=lifespan,
)


def get_os_info() -> dict:
    return {
        'system': platform.system(),
        'release': platform.release(),
        'version': platform.version(),
        'machine': platform.machine(),
    }


def get_system_resources() -> dict:
    mem = psutil.virtual_memory()
    return {
        'cpu_cores': psutil.cpu_count(logical=True),
        'cpu_cores_physical': psutil.cpu_count(logical=False),
        'ram_total_gb': round(mem.total / (1024**3), 2),
        'ram_available_gb': round(mem.available / (1024**3), 2),
        'ram_percent_used': mem.percent,
    }


def get_constants() -> dict:
    search_root = get_search_root()
    return {
        'LOG_LEVEL': log_level_name,
        'READ_CHUNK_SIZE': get_read_chunk_size(),
        'SEARCH_ROOT': str(search_root) if search_root else None,
    }


def get_app_env_variables() -> dict:
    app_env_prefixes = [ENV_PREFIX, 'UVICORN_']
    return {key: value for key, value in os.environ.items() if any(key.startswith(p) for p in app_env_prefixes)}


@app.get('/', tags=['General'], response_model=HealthResponse)
async def health():
    """
    Health check and system introspection endpoint.

    Returns:
    - Service status
    - Application version
    - Operating system information
    - System resources
    - Application-related environment variables
    """
    prom.record_http_response('GET', '/', 200)
    return HealthResponse(
        status='ok',
        app_version=__version__,
        python_version=platform.python_version(),
        os_info=get_os_info(),
        system_resources=get_system_resources(),
        constants=get_constants(),
        environment=get_app_env_variables(),
    )


@app.get('/metrics', tags=['Monitoring'])
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def _validate_paths(paths: list[str], endpoint: str) -> list[str]:
    validated = []
    for path in paths:
        try:
            validated.append(str(validate_path_within_root(path)))
        except PermissionError as e:
            prom.record_http_response('GET', endpoint, 403)
            raise HTTPException(status_code=403, detail=str(e))
    return validated


@app.get(
    '/v1/tail',
    tags=['Tail'],
    summary="Get file content from a line or byte offset onward",
    response_model=TailResponse,
    responses={
        200: {"description": "Sources processed; per-source failures are reported in each entry"},
        400: {"description": "Malformed offset or both units requested"},
        403: {"description": "Path outside search root"},
    },
)
async def tail(
    path: list[str] = Query(..., description="File path(s) to read, in output order", examples=["/var/log/app.log"]),
    lines: str = Query(None, description="Line offset token (default: 10)", examples=["10", "-3", "+5", "+0"]),
    bytes_: str = Query(None, alias="bytes", description="Byte offset token", examples=["100", "+1"]),
) -> TailResponse:
    """
    Return everything from the resolved start position of each file.

    - **path**: One or more files; repeat the parameter for several files
    - **lines**: Line offset token - mutually exclusive with bytes
    - **bytes**: Byte offset token - mutually exclusive with lines

    A file that cannot be opened does not fail the request; its entry carries an error.

    Examples:
    ```
    GET /v1/tail?path=app.log
    GET /v1/tail?path=app.log&lines=+20
    GET /v1/tail?path=a.log&path=b.log&bytes=64
    ```
    """
    if lines is not None and bytes_ is not None:
        prom.record_http_response('GET', '/v1/tail', 400)
        raise HTTPException(status_code=400, detail="Cannot use both 'lines' and 'bytes'. Provide only one.")

    unit = Unit.BYTES if bytes_ is not None else Unit.LINES
    token = bytes_ if bytes_ is not None else lines if lines is not None else '10'

    try:
        offset = parse_offset(token)
    except ConfigurationError as e:
        prom.record_http_response('GET', '/v1/tail', 400)
        raise HTTPException(status_code=400, detail=f"Invalid {unit.value} offset: {e.token}")

    paths = _validate_paths(path, '/v1/tail')

    time_before = time()
    reports = await anyio.to_thread.run_sync(collect_reports, paths, offset, unit)
    prom.record_duration('/v1/tail', time() - time_before)

    for report in reports:
        prom.record_source(unit.value, report.error is not None, len(report.content.encode('utf-8')))

    prom.record_http_response('GET', '/v1/tail', 200)
    return TailResponse(unit=unit, offset=token, sources=reports)


@app.get(
    '/v1/extent',
    tags=['Tail'],
    summary="Count lines and bytes of a file",
    response_model=ExtentResponse,
    responses={
        403: {"description": "Path outside search root"},
        404: {"description": "File not found or unreadable"},
    },
)
async def extent(
    path: str = Query(..., description="File path to count", examples=["/var/log/app.log"]),
) -> ExtentResponse:
    """Return total line and byte counts for one file."""
    validated = _validate_paths([path], '/v1/extent')[0]

    try:
        result = await anyio.to_thread.run_sync(count_file_extent, validated)
    except OSError as e:
        prom.record_http_response('GET', '/v1/extent', 404)
        raise HTTPException(status_code=404, detail=f"{path}: {e.strerror or e}")

    prom.record_http_response('GET', '/v1/extent', 200)
    return ExtentResponse(path=path, extent=result)

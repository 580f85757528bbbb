"""
Prometheus metrics.

- FastAPI: request count, latency (Instrumentator)
- Stability: exceptions_total, db_errors_total, proxy_requests_total
- Domain: album/photo operations, uploads, reorders
"""
import logging
import socket

from prometheus_client import REGISTRY, Counter, Gauge, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from app.config import get_settings

logger = logging.getLogger(__name__)

# --- Stability ---
exceptions_total = Counter(
    "photo_albums_exceptions_total",
    "Total number of unhandled exceptions",
    registry=REGISTRY,
)

db_errors_total = Counter(
    "photo_albums_db_errors_total",
    "Total number of database session errors",
    registry=REGISTRY,
)

proxy_requests_total = Counter(
    "photo_albums_proxy_requests_total",
    "Total number of remote image proxy requests",
    ["result"],  # result: success | failure
    registry=REGISTRY,
)

# --- Album Metrics ---
album_operations_total = Counter(
    "photo_albums_album_operations_total",
    "Total number of album operations",
    # operation: create | update | delete | clear | delete_all | cover | move | download
    ["operation", "result"],
    registry=REGISTRY,
)

reorder_operations_total = Counter(
    "photo_albums_reorder_operations_total",
    "Total number of reorder requests",
    ["entity", "result"],  # entity: album | photo
    registry=REGISTRY,
)

# --- Photo Metrics ---
photo_operations_total = Counter(
    "photo_albums_photo_operations_total",
    "Total number of photo operations",
    ["operation", "result"],  # operation: upload | delete
    registry=REGISTRY,
)

photo_upload_file_size_bytes = Histogram(
    "photo_albums_photo_upload_file_size_bytes",
    "Uploaded photo size in bytes",
    buckets=(
        64 * 1024,
        256 * 1024,
        1024 * 1024,
        4 * 1024 * 1024,
        16 * 1024 * 1024,
        64 * 1024 * 1024,
    ),
    registry=REGISTRY,
)


def _node_identity() -> str:
    """Hostname used as the node label."""
    try:
        return socket.gethostname()
    except OSError:
        return "unknown"


def setup_prometheus(app) -> None:
    """
    Register Prometheus instrumentation and expose /metrics.
    """
    settings = get_settings()

    app_info = Gauge(
        "photo_albums_app_info",
        "Application and node identity (labels only, value is 1)",
        ["node", "app", "version", "environment"],
        registry=REGISTRY,
    )
    app_info.labels(
        node=_node_identity(),
        app=settings.app_name,
        version=settings.app_version,
        environment=settings.environment.value,
    ).set(1)

    Instrumentator(should_group_status_codes=False).instrument(app).expose(
        app, endpoint="/metrics"
    )

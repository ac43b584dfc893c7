"""Prometheus metrics definitions for s3presign.

All metrics use the ``s3presign_`` prefix. They are created by
``init_metrics()``; while metrics are disabled the module-level references
stay ``None`` and nothing is registered in the global registry.
"""

from __future__ import annotations

from prometheus_client import REGISTRY, Counter, write_to_textfile

# Flag indicating whether metrics have been initialised via init_metrics().
_initialized: bool = False

# ---------------------------------------------------------------------------
# Signatures produced  (labels: kind)
# ---------------------------------------------------------------------------
signatures_total: Counter | None = None

# ---------------------------------------------------------------------------
# Signed requests executed by the client  (labels: method, status)
# ---------------------------------------------------------------------------
requests_total: Counter | None = None


def init_metrics() -> None:
    """Create and register all Prometheus metrics.

    Safe to call more than once; only the first call registers collectors.
    """
    global _initialized
    global signatures_total, requests_total

    if _initialized:
        return

    signatures_total = Counter(
        "s3presign_signatures_total",
        "Total SigV4 signatures computed by signing mode",
        ["kind"],
    )

    requests_total = Counter(
        "s3presign_requests_total",
        "Total signed HEAD/DELETE requests executed by method and outcome",
        ["method", "status"],
    )

    _initialized = True


def record_signature(kind: str) -> None:
    """Count one signature of the given kind, if metrics are enabled."""
    if signatures_total is not None:
        signatures_total.labels(kind=kind).inc()


def record_request(method: str, status: int | str) -> None:
    """Count one executed request, if metrics are enabled."""
    if requests_total is not None:
        requests_total.labels(method=method, status=str(status)).inc()


def write_textfile(path: str) -> None:
    """Write the default registry in Prometheus text format.

    The file is replaced atomically, so a node_exporter textfile collector
    never sees a partial write.
    """
    write_to_textfile(path, REGISTRY)

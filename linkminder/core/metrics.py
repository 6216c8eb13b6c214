"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

REGISTRY = CollectorRegistry()

LINKS_SAVED = Counter(
    "lnkm_links_saved_total",
    "Links saved through the capture pipeline",
    labelnames=("trigger",),
    registry=REGISTRY,
)

CLASSIFICATIONS = Counter(
    "lnkm_classifications_total",
    "Classifier outcomes",
    labelnames=("category", "origin"),
    registry=REGISTRY,
)

CLUSTER_DECISIONS = Counter(
    "lnkm_cluster_decisions_total",
    "Topic clusterer decisions",
    labelnames=("decision",),
    registry=REGISTRY,
)

LINK_COUNT = Gauge(
    "lnkm_links",
    "Number of links in the collection",
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "LINKS_SAVED",
    "CLASSIFICATIONS",
    "CLUSTER_DECISIONS",
    "LINK_COUNT",
    "metrics_response",
]

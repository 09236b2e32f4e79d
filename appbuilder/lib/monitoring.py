# appbuilder/lib/monitoring.py
from fastapi import FastAPI
from prometheus_client.registry import CollectorRegistry as Registry
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator
from appbuilder.core.logging import log

# Create a separate registry
registry = Registry()

extractions_total = Counter(
    'appbuilder_extractions_total',
    'Finished requirement extractions by spec source (live/mock)',
    ['source'],
    registry=registry
)

jobs_failed_total = Counter(
    'appbuilder_jobs_failed_total',
    'Requirement jobs that ended in the failed status',
    registry=registry
)


def record_extraction(source: str):
    """Count a completed extraction."""
    extractions_total.labels(source=source).inc()


def record_job_failure():
    jobs_failed_total.inc()


def register_monitoring(app: FastAPI):
    """
    Registers Prometheus monitoring on the FastAPI app and exposes /metrics.
    """
    instrumentator = Instrumentator(
        excluded_handlers=["/metrics"],  # Don't monitor the metrics endpoint itself
        registry=registry
    ).instrument(app)

    instrumentator.expose(app, include_in_schema=False, should_gzip=True)

    log("STARTUP", "Prometheus instrumentation registered at /metrics.")

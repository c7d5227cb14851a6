"""
Prometheus metrics for the dispatch wizard.
"""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

from dispatch_wizard.config.logging import get_logger

logger = get_logger(__name__)

registry = CollectorRegistry()
prometheus_multiproc_dir = os.getenv("PROMETHEUS_MULTIPROC_DIR")

if prometheus_multiproc_dir and os.path.isdir(prometheus_multiproc_dir):
    try:
        multiprocess.MultiProcessCollector(registry)
    except ValueError as e:
        logger.warning("Failed to initialize multiprocess collector", error=str(e))
        registry = CollectorRegistry()


WIZARD_SUBMISSIONS = Counter(
    "wizard_submissions_total",
    "Wizard submissions by mode and outcome",
    ["mode", "outcome"],
    registry=registry,
)

JOBS_CREATED = Counter(
    "wizard_jobs_created_total",
    "Jobs created by wizard submissions",
    ["job_type"],
    registry=registry,
)

COMMIT_STEP_FAILURES = Counter(
    "wizard_commit_step_failures_total",
    "Commit steps that failed, leaving earlier steps committed",
    ["step"],
    registry=registry,
)

COMMIT_DURATION = Histogram(
    "wizard_commit_duration_seconds",
    "Time spent executing a wizard commit",
    ["mode"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
    registry=registry,
)

AVAILABILITY_CHECKS = Counter(
    "availability_checks_total",
    "Individual availability checks by kind and outcome",
    ["check", "outcome"],
    registry=registry,
)

AVAILABILITY_SUPERSEDED = Counter(
    "availability_results_superseded_total",
    "Availability results discarded because a newer check was issued",
    registry=registry,
)

QUOTE_DELIVERIES = Counter(
    "quote_deliveries_total",
    "Quote delivery attempts by method and resulting status",
    ["method", "status"],
    registry=registry,
)


def record_submission(mode: str, outcome: str):
    """Record a wizard submission outcome."""
    WIZARD_SUBMISSIONS.labels(mode=mode, outcome=outcome).inc()


def record_job_creation(job_type: str):
    """Record job creation metric."""
    JOBS_CREATED.labels(job_type=job_type).inc()


def record_commit_step_failure(step: str):
    COMMIT_STEP_FAILURES.labels(step=step).inc()


def observe_commit_duration(mode: str, seconds: float):
    COMMIT_DURATION.labels(mode=mode).observe(seconds)


def record_availability_check(check: str, outcome: str):
    """Record one item/driver/vehicle check (available, conflict, unverified)."""
    AVAILABILITY_CHECKS.labels(check=check, outcome=outcome).inc()


def record_superseded_availability():
    AVAILABILITY_SUPERSEDED.inc()


def record_quote_delivery(method: str, status: str):
    QUOTE_DELIVERIES.labels(method=method, status=status).inc()


def get_metrics():
    """Get all metrics in Prometheus format."""
    return generate_latest(registry)


def get_metrics_content_type():
    """Get the content type for metrics."""
    return CONTENT_TYPE_LATEST

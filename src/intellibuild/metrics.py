"""
Prometheus metrics for the IntelliBuild CI runner.

This module defines the metrics collected throughout the application to monitor
webhook reception, pipeline outcomes, per-stage timings and failures, detected
project kinds and the availability of the external tools.
"""

from prometheus_client import Counter, Histogram, Gauge, Info
import time


# Webhook reception metrics
webhooks_received_total = Counter(
    'intellibuild_webhooks_received_total',
    'Total number of webhooks received',
    ['status']  # HTTP status returned to the caller
)

# Pipeline metrics
pipeline_runs_total = Counter(
    'intellibuild_pipeline_runs_total',
    'Total number of pipeline runs',
    ['result', 'failed_stage']  # result = success|failure, failed_stage = clone|build|...|none
)

pipeline_duration_seconds = Histogram(
    'intellibuild_pipeline_duration_seconds',
    'Time spent running a complete pipeline',
)

stage_duration_seconds = Histogram(
    'intellibuild_stage_duration_seconds',
    'Time spent in each pipeline stage',
    ['stage']
)

stage_errors_total = Counter(
    'intellibuild_stage_errors_total',
    'Total number of pipeline stage failures',
    ['stage', 'error_type']
)

projects_detected_total = Counter(
    'intellibuild_projects_detected_total',
    'Total number of builds per detected project kind',
    ['kind']  # kind = go|make|python|node
)

# Health check metrics
health_check_status = Gauge(
    'intellibuild_health_check_status',
    'Tool availability (1 = found on PATH, 0 = missing)',
    ['tool']
)

# Application info
app_info = Info(
    'intellibuild_app',
    'IntelliBuild CI application information'
)


class MetricsContext:
    """Context manager for timing operations and handling errors with metrics."""

    def __init__(self, histogram, error_counter, labels=None, error_labels=None):
        self.histogram = histogram
        self.error_counter = error_counter
        self.labels = labels or []
        self.error_labels = error_labels or []
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            duration = time.time() - self.start_time
            if self.labels:
                self.histogram.labels(*self.labels).observe(duration)
            else:
                self.histogram.observe(duration)

        if exc_type is not None and self.error_counter is not None:
            error_type = exc_type.__name__
            self.error_counter.labels(*self.error_labels, error_type).inc()

        return False  # Don't suppress exceptions


def track_stage(stage: str):
    """Context manager for tracking a single pipeline stage."""
    return MetricsContext(
        stage_duration_seconds,
        stage_errors_total,
        labels=[stage],
        error_labels=[stage]
    )


def track_pipeline():
    """Context manager for timing a complete pipeline run."""
    return MetricsContext(pipeline_duration_seconds, None)

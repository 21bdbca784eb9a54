"""
Prometheus metrics module for the consultation service.

Service timings come from the @measure_operation decorator on BaseService;
the domain counters below are bumped by the acceptance and rejection
services themselves.
"""

from typing import Optional, cast

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "consultation_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "consultation_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "consultation_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

consultation_requests_accepted_total = Counter(
    "consultation_requests_accepted_total",
    "Consultation requests turned into consultations",
    registry=REGISTRY,
)

consultation_requests_rejected_total = Counter(
    "consultation_requests_rejected_total",
    "Consultation requests rejected by the consultant",
    registry=REGISTRY,
)

consultation_request_refusals_total = Counter(
    "consultation_request_refusals_total",
    "Acceptance or rejection attempts refused with a business error",
    ["code"],
    registry=REGISTRY,
)

notification_failures_total = Counter(
    "consultation_notification_failures_total",
    "Notification emails that could not be sent",
    ["recipient"],
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Manages Prometheus metrics collection and exposure."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'ConsultationRequestAcceptanceService')
            operation: Operation/method name (e.g., 'accept_consultation_request')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()

        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def inc_consultation_request_accepted() -> None:
        consultation_requests_accepted_total.inc()

    @staticmethod
    def inc_consultation_request_rejected() -> None:
        consultation_requests_rejected_total.inc()

    @staticmethod
    def inc_consultation_request_refusal(code: str) -> None:
        """Count a refusal by its error code."""
        consultation_request_refusals_total.labels(code=code).inc()

    @staticmethod
    def inc_notification_failure(recipient: str) -> None:
        """Count a failed notification by recipient role (user|consultant)."""
        notification_failures_total.labels(recipient=recipient).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """
        Generate Prometheus metrics in exposition format.

        Returns:
            Metrics data in Prometheus text format
        """
        return cast(bytes, generate_latest(REGISTRY))

    @staticmethod
    def get_content_type() -> str:
        """Get the content type for Prometheus metrics."""
        return cast(str, CONTENT_TYPE_LATEST)


# Singleton instance
prometheus_metrics = PrometheusMetrics()

"""OpenTelemetry instruments for upstream provider calls."""

from opentelemetry import metrics

meter = metrics.get_meter("fare_route")

upstream_errors = meter.create_counter(
    name="upstream_errors_total",
    description="Failed calls to upstream providers by component and error kind",
    unit="1",
)

upstream_latency = meter.create_histogram(
    name="upstream_latency_ms",
    description="Latency of successful upstream provider calls",
    unit="ms",
)


def record_upstream_error(component: str, kind: str) -> None:
    upstream_errors.add(1, {"component": component, "kind": kind})


def record_upstream_latency(component: str, latency_ms: float) -> None:
    upstream_latency.record(latency_ms, {"component": component})


__all__ = ["meter", "record_upstream_error", "record_upstream_latency"]

"""
Fare Route Service - Entry Point

Loads settings, configures logging and telemetry, then serves the FastAPI
app with uvicorn.
"""

import logging
import os
import sys

import uvicorn
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from api.app import create_app
from app_logging import setup_logging
from core.exceptions import ConfigurationError
from settings import get_settings

logger = logging.getLogger(__name__)


def init_otel_sdk(otlp_endpoint: str, environment: str) -> None:
    """Initialize OpenTelemetry SDK for metrics and traces.

    Must be called before the instruments in ``metrics`` record anything
    worth exporting; until then the API's no-op providers are used.
    """
    resource = Resource.create(
        {
            "service.name": "fare-route",
            "service.version": "1.0.0",
            "deployment.environment": environment,
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    )
    trace.set_tracer_provider(trace_provider)
    logger.info("OpenTelemetry tracing initialized (endpoint=%s)", otlp_endpoint)

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=otlp_endpoint, insecure=True),
        export_interval_millis=15_000,
    )
    meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])
    metrics.set_meter_provider(meter_provider)
    logger.info("OpenTelemetry metrics initialized")


def main() -> None:
    settings = get_settings()
    setup_logging(
        level=settings.app.log_level,
        json_output=settings.app.log_format == "json",
        environment=settings.app.environment,
    )

    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otlp_endpoint:
        init_otel_sdk(otlp_endpoint, settings.app.environment)

    try:
        app = create_app(settings)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.message}")
        sys.exit(1)

    if otlp_endpoint:
        FastAPIInstrumentor.instrument_app(app)
        HTTPXClientInstrumentor().instrument()

    logger.info(f"Starting fare route API on {settings.server.host}:{settings.server.port}")
    uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_config=None)


if __name__ == "__main__":
    main()

"""
Unit tests for the shared logging, metrics and health models.
"""

import logging

import pytest
import structlog
from prometheus_client import CollectorRegistry

from shared.logging import configure_logging
from shared.logging.structured_logger import APP_NAME, make_app_context
from shared.metrics import HttpMetrics, get_metrics_handler
from shared.models import HealthStatus, ReadinessReport, ServiceInfo


class TestAppContextProcessor:
    """Test the log entry tagging processor."""

    def test_tags_entry(self):
        processor = make_app_context("test", "Music Catalog API")

        event = processor(None, "info", {"event": "style_created"})

        assert event == {
            "event": "style_created",
            "app": APP_NAME,
            "environment": "test",
            "service": "Music Catalog API",
        }

    def test_service_optional(self):
        event = make_app_context("production")(None, "info", {"event": "x"})

        assert "service" not in event


class TestConfigureLogging:
    """Test repeated logging configuration."""

    @pytest.fixture(autouse=True)
    def restore_root_level(self):
        root = logging.getLogger()
        level = root.level
        yield
        root.setLevel(level)

    def test_later_call_replaces_level(self):
        configure_logging(log_level="ERROR", json_logs=False, environment="test")
        assert logging.getLogger().level == logging.ERROR

        configure_logging(log_level="DEBUG", json_logs=False, environment="test")
        assert logging.getLogger().level == logging.DEBUG

    def test_later_call_replaces_processors(self):
        configure_logging(log_level="WARNING", json_logs=True, environment="staging")
        configure_logging(log_level="WARNING", json_logs=False, environment="test", service_name="svc")

        config = structlog.get_config()
        tagger = config["processors"][-2]

        assert config["cache_logger_on_first_use"] is False
        assert isinstance(config["processors"][-1], structlog.dev.ConsoleRenderer)
        assert tagger(None, "info", {"event": "x"})["environment"] == "test"
        assert tagger(None, "info", {"event": "x"})["service"] == "svc"


class TestHttpMetrics:
    """Test metric registration."""

    def test_independent_registries(self):
        """Two metric sets never collide."""
        first = HttpMetrics(CollectorRegistry())
        second = HttpMetrics(CollectorRegistry())

        first.store_errors.labels(endpoint="/api/v1/styles").inc()

        assert b"catalog_store_errors_total" in get_metrics_handler(first.registry)()
        assert b'endpoint="/api/v1/styles"' not in get_metrics_handler(second.registry)()


class TestHealthModels:
    """Test health and readiness models."""

    def test_service_info_serializes_status(self):
        info = ServiceInfo(
            service_name="Music Catalog API",
            version="1.0.0",
            environment="test",
            status=HealthStatus.HEALTHY,
        )

        assert info.model_dump()["status"] == "healthy"

    def test_ready_when_all_healthy(self):
        report = ReadinessReport.from_checks("svc", "1.0.0", {"database": HealthStatus.HEALTHY})

        assert report.ready is True
        assert report.model_dump()["checks"] == {"database": "healthy"}

    def test_not_ready_when_any_unhealthy(self):
        report = ReadinessReport.from_checks(
            "svc",
            "1.0.0",
            {"database": HealthStatus.HEALTHY, "cache": HealthStatus.UNHEALTHY},
        )

        assert report.ready is False

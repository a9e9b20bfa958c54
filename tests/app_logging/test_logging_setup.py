import json
import logging
import sys

import pytest

from app_logging import (
    ContextFilter,
    DefaultCorrelationFilter,
    DevFormatter,
    JSONFormatter,
    SecretFilter,
    setup_logging,
)
from core.correlation import CorrelationFilter


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str, args=None, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord("fare.test", logging.INFO, __file__, 10, msg, args, exc_info)


@pytest.mark.unit
class TestSetupLogging:
    def test_installs_single_stdout_handler(self, restore_root_logger):
        setup_logging(level="DEBUG")
        root = restore_root_logger

        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stdout
        assert root.level == logging.DEBUG

    def test_handler_carries_all_filters(self, restore_root_logger):
        setup_logging()
        filter_types = {type(f) for f in restore_root_logger.handlers[0].filters}

        assert filter_types == {
            SecretFilter,
            CorrelationFilter,
            DefaultCorrelationFilter,
            ContextFilter,
        }

    def test_json_output_selects_json_formatter(self, restore_root_logger):
        setup_logging(json_output=True, environment="production")
        formatter = restore_root_logger.handlers[0].formatter

        assert isinstance(formatter, JSONFormatter)
        assert formatter.environment == "production"

    def test_text_output_selects_dev_formatter(self, restore_root_logger):
        setup_logging(json_output=False)
        assert isinstance(restore_root_logger.handlers[0].formatter, DevFormatter)

    def test_http_client_loggers_are_quieted(self, restore_root_logger):
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING


@pytest.mark.unit
class TestSecretFilter:
    def test_masks_bearer_token(self):
        record = _record("Calling OneMap with Bearer eyJhbGciOi.abc-123_x")
        SecretFilter().filter(record)
        assert record.msg == "Calling OneMap with Bearer [REDACTED]"

    def test_masks_query_credentials(self):
        record = _record("GET /route?token=secret123&start=1.3,103.8")
        SecretFilter().filter(record)
        assert "secret123" not in record.msg
        assert "token=[REDACTED]" in record.msg
        assert "start=1.3,103.8" in record.msg

    def test_masks_account_key_case_insensitively(self):
        record = _record("AccountKey=abcDEF")
        SecretFilter().filter(record)
        assert record.msg == "AccountKey=[REDACTED]"

    def test_plain_messages_pass_through(self):
        record = _record("Aggregated 3 itinerary(ies)")
        assert SecretFilter().filter(record) is True
        assert record.msg == "Aggregated 3 itinerary(ies)"


@pytest.mark.unit
class TestFormatters:
    def test_json_formatter_includes_context_fields(self):
        record = _record("Resolved %s", ("origin",))
        record.correlation_id = "req-9"
        record.route_type = "pt"

        payload = json.loads(JSONFormatter("staging").format(record))

        assert payload["message"] == "Resolved origin"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "fare.test"
        assert payload["env"] == "staging"
        assert payload["correlation_id"] == "req-9"
        assert payload["route_type"] == "pt"
        assert "endpoint" not in payload

    def test_json_formatter_includes_exception(self):
        try:
            raise RuntimeError("kaput")
        except RuntimeError:
            record = _record("failed", exc_info=sys.exc_info())

        payload = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: kaput" in payload["exception"]

    def test_dev_formatter_shows_correlation_id(self):
        record = _record("hello")
        DefaultCorrelationFilter().filter(record)

        line = DevFormatter().format(record)
        assert "[-]" in line
        assert "fare.test: hello" in line

"""Log filters for token masking and correlation ID injection."""

import logging
import re


class SecretFilter(logging.Filter):
    """Masks bearer tokens and API keys that end up in log messages."""

    BEARER_PATTERN = re.compile(r"Bearer\s+[A-Za-z0-9._~+/=-]+")
    KEY_PATTERN = re.compile(r"(?i)(token|accountkey|api_key)=([^&\s]+)")

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            msg = record.msg
            if "Bearer" in msg:
                msg = self.BEARER_PATTERN.sub("Bearer [REDACTED]", msg)
            if "=" in msg:
                msg = self.KEY_PATTERN.sub(r"\1=[REDACTED]", msg)
            record.msg = msg
        return True


class DefaultCorrelationFilter(logging.Filter):
    """Adds default correlation_id if not present.

    Note: request handlers run under core.correlation.with_correlation,
    and CorrelationFilter fills in the real ID there.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True

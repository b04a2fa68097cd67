"""Root logger setup: plain or JSON output, with credentials and e-mail addresses masked."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Iterable

REDACTED = "[redacted]"

_CREDENTIAL_PATTERNS = (
    re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/=]+", re.IGNORECASE),
    re.compile(r"(api_token=)[^&\s]+", re.IGNORECASE),
    re.compile(r"(X-API-Key[=:]\s*)[^&\s]+", re.IGNORECASE),
)
_EMAIL_PATTERN = re.compile(r"([A-Za-z0-9._%+\-])[A-Za-z0-9._%+\-]*(@[A-Za-z0-9.\-]+\.[A-Za-z]{2,})")

# Attributes copied from ``extra={...}`` into JSON output.
CONTEXT_FIELDS = ("request_id", "caller_id", "team_id")


class SensitiveDataFilter(logging.Filter):
    """Redact credentials from records and shorten e-mail addresses to ``a***@host``."""

    def __init__(self, secrets: Iterable[str], mask_emails: bool = True):
        super().__init__()
        self.secrets = sorted({secret.strip() for secret in secrets if secret and secret.strip()})
        self.mask_emails = mask_emails

    def scrub(self, text: str) -> str:
        for pattern in _CREDENTIAL_PATTERNS:
            text = pattern.sub(r"\1" + REDACTED, text)
        for secret in self.secrets:
            text = text.replace(secret, REDACTED)
        if self.mask_emails:
            text = _EMAIL_PATTERN.sub(r"\1***\2", text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - standard interface
        rendered = record.getMessage()
        scrubbed = self.scrub(rendered)
        if scrubbed != rendered:
            record.msg, record.args = scrubbed, ()

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if isinstance(value, str):
                setattr(record, name, self.scrub(value))
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line, carrying request context when present."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            {name: getattr(record, name) for name in CONTEXT_FIELDS if getattr(record, name, None) is not None}
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def _build_formatter(fmt: str) -> logging.Formatter:
    if (fmt or "plain").lower() == "json":
        return JsonFormatter()
    return logging.Formatter(
        "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def configure_logging(level_name: str, fmt: str, secrets: Iterable[str], mask_emails: bool = True) -> None:
    """Install a single root handler and route uvicorn's loggers through it."""

    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO

    scrubber = SensitiveDataFilter(secrets, mask_emails=mask_emails)
    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(fmt))
    handler.addFilter(scrubber)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    logging.captureWarnings(True)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        server_logger = logging.getLogger(name)
        server_logger.handlers = []
        server_logger.propagate = True
        server_logger.setLevel(level)


__all__ = ["REDACTED", "CONTEXT_FIELDS", "SensitiveDataFilter", "JsonFormatter", "configure_logging"]

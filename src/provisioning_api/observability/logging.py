"""
provisioning_api.observability.logging

Structured logging configuration for the provisioning service.

Responsibilities:
- Configure `structlog` to render one JSON object per line through stdlib logging.
- Scrub credential-looking fields before they reach a log sink.
- Provide a small wrapper for obtaining bound loggers.

Group mutations (`group_created`, `group_deleted`) and refused deletes of the
admin group are logged by the gateway with the acting subject, so these lines
double as an audit trail for directory changes.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Field names that may carry a bearer token or a password.
_REDACTED_KEYS = frozenset({"password", "token", "access_token", "authorization"})


def configure_logging(*, service_name: str, level: str) -> None:
    """
    Route structlog through the root logger so uvicorn and SQLAlchemy lines land
    on the same stdout stream as gateway events.
    """

    # Called from the app factory; a second app in the same process (tests) keeps
    # the first handler because basicConfig is a no-op once one is installed.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    # Redaction runs after contextvars are merged so bound request fields are
    # scrubbed too, and before rendering.
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            _redact_credentials,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    # `PROV_SERVICE_NAME` tells apart several gateway deployments sharing one sink.
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def _redact_credentials(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in _REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request-scoped metadata (request id, acting user) is bound via contextvars in
# `observability.middleware` and `auth.deps`.

"""
provisioning_api.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation so every log line carries the request id.
"""

# Package marker.

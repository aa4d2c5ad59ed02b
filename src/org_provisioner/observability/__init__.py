"""
org_provisioner.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request-scoped logging context middleware.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Modules obtain loggers via `observability.logging.get_logger(__name__)`.

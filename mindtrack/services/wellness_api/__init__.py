"""Wellness API: Flask adapter exposing every platform operation.

Identity is read from the X-Principal-Id header. Error codes 400/401/404
are returned as HTTP status codes.

Usage:
    from mindtrack.services.wellness_api import create_app
    app = create_app()
"""

from .http_handler import create_app, to_json_value, PRINCIPAL_HEADER

__all__ = ["create_app", "to_json_value", "PRINCIPAL_HEADER"]

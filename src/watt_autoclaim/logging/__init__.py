"""Logging subpackage."""

from watt_autoclaim.logging.config import configure_logging, render_audit_line

__all__ = ["configure_logging", "render_audit_line"]

"""HTTP server for health checks."""

from marquee.server.app import create_app

__all__ = ["create_app"]

"""Server routes."""

from marquee.server.routes import health

__all__ = ["health"]

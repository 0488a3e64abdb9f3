"""Newsletter domain API package."""

from newsletter.api.routes import router

__all__ = ["router"]

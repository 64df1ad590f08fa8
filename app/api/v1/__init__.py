"""
API v1 package.

The router composition lives in `app.api.v1.router`; `api_router` is what
the application mounts under the v1 prefix.
"""

from .router import router as api_router

__all__ = ["api_router"]

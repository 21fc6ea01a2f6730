"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from seriesfeed.api import app

    uvicorn seriesfeed.api:app
"""

from seriesfeed.api.app import app, create_app

__all__ = ["app", "create_app"]

from __future__ import annotations

# ASGI entrypoint: `uvicorn main:app` from this directory.
from plusgrid.main import app

__all__ = ["app"]

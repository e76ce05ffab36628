"""
App assembly entry point.

Re-exports the FastAPI `app` from `playhub.api.main` so servers can be pointed
at `app:app`.
"""

from playhub.api.main import app  # noqa: F401

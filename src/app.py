"""Marketplace FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# Domain initialization happens at module level so uvicorn workers share it.
# PROTEAN_ENV selects the Protean config overlay.
from marketplace.api.app import create_app
from marketplace.config import get_settings
from marketplace.domain import marketplace
from marketplace.utils.logging import configure_logging

settings = get_settings()
configure_logging(settings)
marketplace.init()

app = create_app(settings)

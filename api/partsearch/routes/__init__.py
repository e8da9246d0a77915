"""API routes for Parts Search API."""

from .records import records_router, get_record_store

__all__ = ["records_router", "get_record_store"]

"""Data models for Parts Search API."""

from .records import (
    Record,
    RecordListResponse,
    RecordRow
)

__all__ = [
    "Record",
    "RecordListResponse",
    "RecordRow"
]

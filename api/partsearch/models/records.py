"""Pydantic models for part records."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict


class Record(BaseModel):
    """A catalog record as seen by the pagination engine."""

    id: UUID = Field(description="Record UUID, stable and unique")
    sort_key: str = Field(description="Part number the result set is ordered by")
    description: Optional[str] = Field(default=None, description="Free-form part description")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "sort_key": "ABC123",
                "description": "Hex bolt M6x20",
                "created_at": "2024-01-01T12:00:00Z"
            }
        }
    )


class RecordListResponse(BaseModel):
    """Response model for searching records."""

    records: list[Record] = Field(description="Page of matching records")
    next_cursor: Optional[str] = Field(default=None, description="Opaque cursor for the next page")
    has_more: bool = Field(description="Whether more records are available")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "records": [
                    {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "sort_key": "ABC123",
                        "description": "Hex bolt M6x20",
                        "created_at": "2024-01-01T12:00:00Z"
                    },
                    {
                        "id": "660e8400-e29b-41d4-a716-446655440001",
                        "sort_key": "ABC1234",
                        "description": "Hex bolt M6x25",
                        "created_at": "2024-01-01T11:30:00Z"
                    }
                ],
                "next_cursor": "eyJzb3J0X2tleSI6IkFCQzEyMzQiLCJpZCI6IjY2MGU4NDAwLWUyOWItNDFkNC1hNzE2LTQ0NjY1NTQ0MDAwMSJ9",
                "has_more": True
            }
        }
    )


# Database row model (for internal use)
class RecordRow(BaseModel):
    """Model representing a ranked row returned by the record store query."""

    id: UUID
    sort_key: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    match_rank: int = 0

    model_config = ConfigDict(from_attributes=True)

    def to_record(self) -> Record:
        """Convert to public Record model."""
        return Record(
            id=self.id,
            sort_key=self.sort_key,
            description=self.description,
            created_at=self.created_at
        )

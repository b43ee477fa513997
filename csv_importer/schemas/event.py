"""
Event schema definitions for the CSV Importer API.

`EventResponse` is the wire form of a stored event; `TodoCSV` is one decoded
row of an uploaded file and is never stored.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from csv_importer.models.event import EventStatus


class EventBase(BaseModel):
    """Fields shared by every event representation."""
    name: str = Field(..., description="Free-text event name, may be empty")
    status: EventStatus = Field(EventStatus.DRAFT, description="Lifecycle status")


class EventResponse(EventBase):
    """An event as returned by the API."""
    id: str = Field(..., description="Time-ordered unique identifier (UUIDv7)")
    create_date: datetime
    update_date: datetime
    delete_date: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "01928f6e-3c4a-7b2e-9f10-6a5d2c8e4b71",
                "name": "Test Event",
                "status": "draft",
                "create_date": "2024-10-15T09:30:00Z",
                "update_date": "2024-10-15T09:30:00Z",
            }
        },
    )


class TodoCSV(BaseModel):
    """One `todo_name,note` row of an uploaded CSV file."""
    todo_name: str = ""
    note: str = ""

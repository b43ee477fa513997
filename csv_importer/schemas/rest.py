"""
Response envelopes.

Every endpoint answers with ``{"message": ..., "data": ...}`` where ``data`` is
left out when there is nothing to return. Each body shape is its own model so
handlers can only produce one of these variants.
"""

from typing import List

from pydantic import BaseModel

from csv_importer.schemas.event import EventResponse


class MessageResponse(BaseModel):
    """Envelope carrying only a message: errors and the health check."""
    message: str


class EventEnvelope(MessageResponse):
    """Envelope carrying a single event."""
    data: EventResponse


class EventListEnvelope(MessageResponse):
    """Envelope carrying a list of events."""
    data: List[EventResponse]

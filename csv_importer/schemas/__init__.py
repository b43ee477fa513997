"""
Schema definitions for the CSV Importer API.
"""

from .event import EventBase, EventResponse, TodoCSV
from .rest import MessageResponse, EventEnvelope, EventListEnvelope

__all__ = [
    # Event schemas
    'EventBase', 'EventResponse', 'TodoCSV',
    # Envelopes
    'MessageResponse', 'EventEnvelope', 'EventListEnvelope',
]

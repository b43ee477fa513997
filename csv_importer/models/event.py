from enum import Enum

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from csv_importer.database import Base


class EventStatus(str, Enum):
    """Lifecycle states of an event."""
    DRAFT = "draft"
    START = "start"
    END = "end"


class Event(Base):
    __tablename__ = "events"

    id = Column(String(100), primary_key=True)  # UUIDv7, time-ordered
    name = Column(String(100), nullable=False)
    status = Column(
        # stored as plain varchar values, no database enum type
        SAEnum(
            EventStatus,
            native_enum=False,
            length=10,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=EventStatus.DRAFT,
    )
    create_date = Column(DateTime(timezone=True), nullable=False)
    update_date = Column(DateTime(timezone=True), nullable=False)
    delete_date = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    todo_events = relationship("TodoEvent", back_populates="event")

    def __repr__(self):
        return f"<Event {self.id}: {self.name}>"


class TodoEvent(Base):
    """A todo entry owned by an event. No request path writes these yet."""
    __tablename__ = "todo_events"

    id = Column(String(100), primary_key=True)
    event_id = Column(String(100), ForeignKey("events.id"), nullable=False, index=True)
    create_date = Column(DateTime(timezone=True), nullable=False)
    update_date = Column(DateTime(timezone=True), nullable=False)
    delete_date = Column(DateTime(timezone=True), nullable=True)

    # Relationship
    event = relationship("Event", back_populates="todo_events")

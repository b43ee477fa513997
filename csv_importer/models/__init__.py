from .event import Event, EventStatus, TodoEvent

__all__ = ["Event", "EventStatus", "TodoEvent"]

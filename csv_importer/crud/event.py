from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from csv_importer.models.event import Event
from csv_importer.logging_config import get_logger

logger = get_logger("crud.event")


async def list_events(db: AsyncSession) -> List[Event]:
    """
    Get every stored event.

    No filtering or ordering is applied; rows come back in whatever order the
    database scans them.

    Args:
        db: Database session

    Returns:
        List of events
    """
    result = await db.execute(select(Event))
    return list(result.scalars().all())


async def create_event(db: AsyncSession, event: Event) -> Event:
    """
    Insert a new event.

    Args:
        db: Database session
        event: Fully populated event, including its identifier

    Returns:
        The inserted event

    Raises:
        Exception: Whatever the driver raises if the insert fails. The
            session is rolled back before the error propagates.
    """
    db.add(event)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(f"Created new event: {event.id} - {event.name}")
    return event

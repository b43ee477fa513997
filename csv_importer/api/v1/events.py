from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from uuid6 import uuid7

from csv_importer.api.responses import envelope_response, error_response
from csv_importer.crud.event import create_event, list_events
from csv_importer.database import get_db
from csv_importer.logging_config import get_logger
from csv_importer.models.event import Event, EventStatus
from csv_importer.schemas.event import EventResponse
from csv_importer.schemas.rest import EventEnvelope, EventListEnvelope, MessageResponse
from csv_importer.services.csv_decoder import CSVDecodeError, decode_todos

router = APIRouter()
logger = get_logger("api.events")

MISSING_FILE_MESSAGE = "http: no such file"


def new_event_id() -> str:
    """Generate a time-ordered unique event identifier."""
    return str(uuid7())


@router.get(
    "/events",
    response_model=EventListEnvelope,
    responses={500: {"model": MessageResponse, "description": "Database error"}},
)
async def read_events(db: AsyncSession = Depends(get_db)):
    """
    Retrieve every event.
    """
    try:
        events = await list_events(db)
    except Exception as e:
        logger.error(f"Error retrieving events: {str(e)}")
        return error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    return envelope_response(
        EventListEnvelope(
            message="success",
            data=[EventResponse.model_validate(event) for event in events],
        )
    )


@router.post(
    "/event",
    response_model=EventEnvelope,
    responses={
        400: {"model": MessageResponse, "description": "Missing or unreadable CSV file"},
        500: {"model": MessageResponse, "description": "Malformed CSV or database error"},
    },
)
async def create_event_from_csv(
    name: str = Form(""),
    csvfile: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a draft event from an uploaded `todo_name,note` CSV file.

    The file is decoded before anything is written, so a malformed upload
    leaves no event behind. Decoded todo rows are only logged.
    """
    if csvfile is None:
        return error_response(MISSING_FILE_MESSAGE, status.HTTP_400_BAD_REQUEST)

    try:
        content = await csvfile.read()
    except Exception as e:
        logger.error(f"Error reading uploaded file {csvfile.filename}: {str(e)}")
        return error_response(str(e), status.HTTP_400_BAD_REQUEST)
    finally:
        await csvfile.close()

    try:
        todos = await run_in_threadpool(decode_todos, content)
    except CSVDecodeError as e:
        return error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.debug(
        f"Decoded {len(todos)} todo rows from {csvfile.filename}",
        extra={"todos": [todo.model_dump() for todo in todos]},
    )

    try:
        event_id = new_event_id()
    except Exception as e:
        logger.error(f"Error generating event id: {str(e)}")
        return error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    now = datetime.now(timezone.utc)
    event = Event(
        id=event_id,
        name=name,
        status=EventStatus.DRAFT,
        create_date=now,
        update_date=now,
        delete_date=None,
    )

    try:
        event = await create_event(db, event)
    except Exception as e:
        logger.error(f"Error creating event {event_id}: {str(e)}")
        return error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    return envelope_response(
        EventEnvelope(message="success", data=EventResponse.model_validate(event))
    )

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncEngine

from csv_importer.api.responses import envelope_response, error_response
from csv_importer.database import get_engine, ping
from csv_importer.logging_config import get_logger
from csv_importer.schemas.rest import MessageResponse

router = APIRouter()
logger = get_logger("api.health")


@router.get(
    "/healthz",
    response_model=MessageResponse,
    responses={500: {"model": MessageResponse, "description": "Database unreachable"}},
)
async def health_check(engine: AsyncEngine = Depends(get_engine)):
    """
    Ping the database and report whether the service can reach it.
    """
    try:
        await ping(engine)
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    return envelope_response(MessageResponse(message="healthy"))

"""
Envelope response helpers.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from csv_importer.schemas.rest import MessageResponse


def envelope_response(body: MessageResponse, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Serialize an envelope, leaving out fields that are None."""
    return JSONResponse(
        content=body.model_dump(mode="json", exclude_none=True),
        status_code=status_code,
    )


def error_response(message: str, status_code: int) -> JSONResponse:
    """Create an envelope carrying only an error message."""
    return envelope_response(MessageResponse(message=message), status_code=status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (404, 405, unparsable bodies) as envelopes."""
    response = error_response(str(exc.detail), exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request fields as a client error envelope."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}")
    return error_response("; ".join(messages), status.HTTP_400_BAD_REQUEST)

"""API error type and handlers

Use case errors reach clients as ``{"error": {"code", "message", ...}}``.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from libs.result import Error


class ClientError(Exception):
    """Raised by routes to turn a failed Result into an HTTP error response"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.error.to_dict()})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    # Drop the "body" / "query" / "path" prefix from the location
    location = [str(part) for part in first.get("loc", ())[1:]]

    error = Error(
        code="VALIDATION_ERROR",
        message=first.get("msg", "Invalid request"),
        details={
            "field": ".".join(location),
            "errors": [
                {"field": ".".join(str(part) for part in item.get("loc", ())[1:]), "message": item.get("msg")}
                for item in errors
            ],
        },
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error.to_dict()})

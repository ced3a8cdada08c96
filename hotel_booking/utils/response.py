from typing import Any, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """Domain failure reported to the client as ``success=false``."""

    status_code = 400

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.data = data


class NotFoundError(ApiError):
    status_code = 404


class UnauthorizedError(ApiError):
    status_code = 401


def create_response(
    message: str,
    success: bool = True,
    data: Optional[Any] = None,
    status_code: int = 200,
) -> JSONResponse:
    """
    Build the ``{message, success, data}`` envelope shared by every endpoint.

    Pydantic models are serialized by alias (camelCase), dates as ISO strings
    and decimals as numbers.
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "message": message,
            "success": success,
            "data": jsonable_encoder(data),
        },
    )


def error_response(error: ApiError) -> JSONResponse:
    return create_response(
        error.message, success=False, data=error.data, status_code=error.status_code
    )

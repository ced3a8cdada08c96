import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from hotel_booking import config
from hotel_booking.db import init_database
from hotel_booking.routers import auth, bookings, hotels, reviews, rooms, users
from hotel_booking.utils.response import ApiError, create_response, error_response
from hotel_booking.utils.scheduler import shutdown_scheduler, start_scheduler

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    "lifespan for initing database and the cleanup scheduler"
    init_database()
    if config.SCHEDULER_ENABLED:
        start_scheduler()
    yield
    shutdown_scheduler()


app = FastAPI(
    lifespan=lifespan,
    title="Hotel booker",
    description="Hotel booking backend based on FastAPI.",
    version="0.1.0",
)


@app.exception_handler(ApiError)
async def api_error_handler(_: Request, exc: ApiError):
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body") or "body"
        errors.setdefault(field, error["msg"])
        logger.debug(f"Validation error - Field: {field}, Message: {error['msg']}")
    return create_response(
        "Validation failed",
        success=False,
        data=errors,
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_: Request, exc: StarletteHTTPException):
    response = create_response(str(exc.detail), success=False, status_code=exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.method} {request.url.path}")
    return create_response(
        "An unexpected error occurred",
        success=False,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


app.include_router(auth.router)
app.include_router(bookings.router)
app.include_router(hotels.router)
app.include_router(reviews.router)
app.include_router(rooms.router)
app.include_router(users.router)

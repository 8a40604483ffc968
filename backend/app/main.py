"""
FastAPI entrypoint for the user management backend.
"""
import logging
from http import HTTPStatus
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import settings
from app.core.exceptions import ServiceError
from app.core.utils import format_error
from app.api.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="REST API for creating, listing, updating and deleting users",
    version="1.0.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Map business-rule failures to their status code."""
    return JSONResponse(
        format_error(exc.message, error=HTTPStatus(exc.status_code).phrase),
        status_code=exc.status_code
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 with one entry per violated field."""
    errors = []
    for error in exc.errors():
        # loc is ("body" | "query" | "path", field, ...)
        field = ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0])
        errors.append({"field": field, "message": error["msg"]})
    return JSONResponse(
        format_error("Validation failed", error="Bad Request", details=errors),
        status_code=status.HTTP_400_BAD_REQUEST
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Store failures are not retried; log and answer 500."""
    logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        format_error("Internal server error", error="Internal Server Error"),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


# Include API routes
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": f"{settings.APP_NAME} is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}

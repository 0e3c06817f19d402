"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, HTTPException, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
import logging

from realtyflow.config import settings
from realtyflow.database import check_database_connection, create_tables, close_db_connection
from realtyflow.routers import (
    auth_router,
    users_router,
    properties_router,
    offers_router,
    wishlist_router,
    reviews_router,
    payments_router,
)
from realtyflow.utils.exceptions import APIException
from realtyflow.services.error_handler import ErrorHandlerService
from realtyflow.middleware import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await check_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")
    elif settings.is_development:
        await create_tables()

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Backend for a real-estate marketplace connecting users, agents and administrators.

    ## Features

    * **Listings**: Agents publish properties; admins verify or reject them
    * **Offers**: Buyers make offers on verified listings; agents accept or reject them
    * **Payments**: Card payments through the gateway complete accepted offers
    * **Wishlists and Reviews**: Per-user bookmarks and property reviews

    ## Authentication

    Exchange an identity for a token at `/api/jwt`, then include it in the
    Authorization header as `Bearer <token>`. Roles are looked up on every request.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Token issuance"},
        {"name": "Users", "description": "Registration and admin account management"},
        {"name": "Properties", "description": "Listings and verification"},
        {"name": "Offers", "description": "Offer negotiation and payment completion"},
        {"name": "Wishlist", "description": "Per-user property bookmarks"},
        {"name": "Reviews", "description": "Property reviews"},
        {"name": "Payments", "description": "Payment gateway bridge"},
        {"name": "Health", "description": "Liveness and database connectivity"},
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(
    RequestLoggingMiddleware,
    enable_request_logging=not settings.is_testing,
)

app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)
app.include_router(properties_router, prefix=settings.api_prefix)
app.include_router(offers_router, prefix=settings.api_prefix)
app.include_router(wishlist_router, prefix=settings.api_prefix)
app.include_router(reviews_router, prefix=settings.api_prefix)
app.include_router(payments_router, prefix=settings.api_prefix)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Unexpected failures never expose internal details."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    return {
        "message": "Realty Flow Server is running",
        "version": settings.app_version,
        "environment": settings.environment,
        "api_prefix": settings.api_prefix,
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    Used by container health checks and load balancers.
    """
    db_healthy = await check_database_connection()
    if not db_healthy:
        raise HTTPException(status_code=503, detail="Database connection failed")

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "database": "connected",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "realtyflow.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

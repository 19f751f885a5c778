import logging
from typing import Optional

from fastapi import FastAPI, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from .api.v1.api import api_router
from .config import settings
from .core.exceptions import BlogError, ValidationError
from .database import get_db
from .services import Services, build_services

logger = logging.getLogger(__name__)


def _error_body(message: str, code: str, **extra) -> dict:
    return {"status": "error", "message": message, "code": code, **extra}


async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    extra = {"errors": exc.errors} if isinstance(exc, ValidationError) and exc.errors else {}
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, exc.code, **extra),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Validation error", ValidationError.code, errors=errors),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error", "INTERNAL_ERROR"),
    )


def create_app(services: Optional[Services] = None) -> FastAPI:
    """Build the application and the process-wide service objects."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
    )
    app.state.services = services or build_services()

    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)

    # Root endpoint
    @app.get("/")
    def read_root():
        """Hello World endpoint"""
        return {
            "message": "Welcome to the Blog API",
            "version": settings.API_VERSION,
            "status": "running"
        }

    # Health check endpoint
    @app.get("/health")
    def health_check(db: Session = Depends(get_db)):
        """API and database health check"""
        try:
            db.execute(text("SELECT 1"))
            return {"status": "healthy", "database": "ok"}
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "database": str(e)},
            )

    return app


# Create FastAPI app
app = create_app()

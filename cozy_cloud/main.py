"""
FastAPI Application Entry Point.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import router
from .config import settings
from .services.backend import BackendClient
from .services.errors import BackendError, CozyError, NotFoundError, ValidationFailed


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationFailed: 400,
    NotFoundError: 404,
    BackendError: 502,
}


def _alert(status_code: int, message: str, detail=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message if detail is None else detail,
            "alert": {"type": "error", "message": message},
        },
    )


def create_app(backend: Optional[BackendClient] = None) -> FastAPI:
    """Build the app. The backend client lives for the lifetime of the app."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = backend or BackendClient.from_settings()
        app.state.backend = client
        logger.info(f"Backend client ready for {client.base_url}")
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="Cozy Cloud",
        description="Trips, budgets, documents, events, suppliers and a cozy journal",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CozyError)
    async def cozy_error_handler(request: Request, exc: CozyError):
        status_code = ERROR_STATUS.get(type(exc), 400)
        return _alert(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        fields = sorted({str(e["loc"][-1]) for e in errors if e.get("loc")})
        message = "Please check: " + ", ".join(fields) if fields else "Please check the form."
        return _alert(422, message, detail=jsonable_errors(errors))

    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def jsonable_errors(errors: list) -> list:
    """Validation errors without the raw exception objects pydantic attaches."""
    return [{k: v for k, v in e.items() if k in ("type", "loc", "msg")} for e in errors]


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cozy_cloud.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

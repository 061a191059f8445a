"""
Clip Search Gateway — FastAPI app factory.

Use: uvicorn server.app:app
Or:  from server import app
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_config
from .errors import GatewayError
from .routes import register_routes
from .state import get_state

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def register_error_handlers(app: FastAPI) -> None:
    """Render every failure as {"error": <message>}; details stay in the log."""

    @app.exception_handler(GatewayError)
    async def _gateway_error(request: Request, exc: GatewayError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError):
        logger.info("%s %s -> invalid request: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request"})


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, error handlers and startup."""
    config = get_config()
    _configure_logging(config.log_level)
    app = FastAPI(
        title="Clip Search Gateway API",
        description="Prompt-based clip search with signed access URLs and player analytics ingestion",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    register_error_handlers(app)

    @app.on_event("startup")
    def _startup_logging():
        state = get_state()
        ok, errors = state.config.validate()
        logger.info("Clip Search Gateway API starting...")
        logger.info("Inference endpoint: %s", state.config.inference_url)
        logger.info("Storage endpoint: %s", state.config.storage_endpoint)
        for err in errors:
            logger.warning("[startup] config: %s", err)
        if ok:
            logger.info("[startup] Configuration valid")

    return app


app = create_app()

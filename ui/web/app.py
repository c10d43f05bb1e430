"""
FastAPI Application - Main web application setup
===============================================

This module creates and configures the FastAPI application
with all necessary routes, middleware, and templates.
"""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from core.config import Config, load_config
from core.exceptions import InvalidMessageError, UIError
from core.logging import setup_logging, get_logger
from services.chat_service import ChatService

logger = get_logger("web.app")

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"


def create_app(
    config: Optional[Config] = None,
    service: Optional[ChatService] = None,
    debug: bool = False
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration
        service: Chat service (built from config if omitted)
        debug: Enable debug mode

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = load_config()

    debug = debug or config.debug or config.ui.web_debug

    setup_logging(
        log_dir=config.log_dir,
        log_level="DEBUG" if debug else config.logging.level,
        json_format=config.logging.json_format,
        console_output=config.logging.console_output
    )

    if service is None:
        service = ChatService(config=config)

    app = FastAPI(
        title=config.app_name,
        description="Rule-based multi-tool chat agent",
        version=config.version,
        debug=debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if not TEMPLATES_DIR.is_dir():
        raise UIError("Web templates not found", {"path": str(TEMPLATES_DIR)})

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app.state.config = config
    app.state.chat_service = service
    app.state.templates = templates

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    from .routes import router as main_router
    app.include_router(main_router, prefix="")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected malformed request to {request.url.path}")
        return JSONResponse(status_code=400, content={"error": "Invalid message format"})

    @app.exception_handler(InvalidMessageError)
    async def invalid_message_handler(request: Request, exc: InvalidMessageError):
        logger.warning(f"Rejected invalid message: {exc}")
        return JSONResponse(status_code=400, content={"error": "Invalid message format"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc) if debug else "An error occurred"}
        )

    logger.info("Web application created")

    return app


def run_app(
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    config: Optional[Config] = None
) -> None:
    """
    Run the web application server.

    Args:
        host: Host address to bind
        port: Port to listen on
        debug: Enable debug mode
        config: Application configuration
    """
    if config is None:
        config = load_config()

    app = create_app(config=config, debug=debug)

    logger.info(f"Starting web server on {host}:{port}")

    import uvicorn
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="debug" if debug else "info"
    )

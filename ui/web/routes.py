"""
Web Routes - API endpoints and page routes
=========================================

This module defines all web routes for the chat interface.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from core.exceptions import InvalidMessageError
from core.logging import get_logger, set_log_context, clear_log_context

logger = get_logger("web.routes")

router = APIRouter()


# === Page Routes ===

@router.get("/", response_class=HTMLResponse)
async def chat_page(request: Request):
    """Render the chat page."""
    templates = request.app.state.templates
    config = request.app.state.config
    service = request.app.state.chat_service

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "config": config,
            "tools": service.describe_tools(),
        }
    )


# === API Routes ===

class ChatRequest(BaseModel):
    """Chat request model: the transcript so far, oldest first."""
    messages: List[Dict[str, Any]] = Field(default_factory=list)


@router.post("/api/chat")
async def chat(request: Request, chat_request: ChatRequest):
    """Answer the last user message of the transcript."""
    service = request.app.state.chat_service

    set_log_context(request_id=uuid.uuid4().hex[:8])
    try:
        result = service.respond(chat_request.messages)
        return result.to_dict()

    except InvalidMessageError as e:
        logger.warning(f"Invalid chat request: {e}")
        return JSONResponse(status_code=400, content={"error": "Invalid message format"})

    except Exception as e:
        logger.error(f"Error processing chat: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    finally:
        clear_log_context()


@router.get("/api/tools")
async def get_tools(request: Request):
    """List the agent's capabilities."""
    service = request.app.state.chat_service
    return {"tools": service.describe_tools()}


@router.get("/api/rules")
async def get_rules(request: Request):
    """Show the tool selection and response rule tables in evaluation order."""
    service = request.app.state.chat_service
    return service.describe_rules()


@router.get("/api/status")
async def get_status(request: Request):
    """Get system status."""
    config = request.app.state.config
    service = request.app.state.chat_service

    return {
        "app": config.app_name,
        "version": config.version,
        "tools": len(service.describe_tools()),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

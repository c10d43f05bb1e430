"""
Web UI Module - FastAPI-based web interface
===========================================

This module provides the browser chat interface and JSON API:
- Chat page with tool annotations and markdown replies
- Chat endpoint
- Tool and rule listings
- Status endpoint
"""

from .app import create_app, run_app
from .routes import router

__all__ = [
    "create_app",
    "run_app",
    "router",
]

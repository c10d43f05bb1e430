"""
Built-in Tools - Placeholder implementations of each capability
===============================================================

Every tool takes the raw user query and returns a descriptive
string. None of them performs I/O; production versions would call
real search, sandbox, and vector-store backends.
"""

import json
from typing import Any

from .calculator import calculator  # noqa: F401


def web_search(query: str) -> str:
    return (
        f'Search results for "{query}": Found relevant information about {query}. '
        "This would connect to a real search API in production."
    )


def code_executor(code: str) -> str:
    return "Code analysis complete. In production, this would execute in a sandboxed environment."


def knowledge_base(query: str) -> str:
    return (
        f"Knowledge retrieved about: {query}. "
        "This would query a vector database in production."
    )


def image_analyzer(image_url: str) -> str:
    return "Image analysis complete. This would use computer vision APIs in production."


def data_processor(data: Any) -> str:
    """Report the size in bytes of ``data`` serialized as JSON."""
    serialized = json.dumps(data, ensure_ascii=False, separators=(",", ":"), default=str)
    size = len(serialized.encode("utf-8"))
    return f"Data processed successfully. Analyzed {size} bytes of data."

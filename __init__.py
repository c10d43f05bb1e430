"""
Elite AI Agent - Rule-based multi-tool chat agent
=================================================

A demonstration chat agent that picks tools for each message with
regex rules, runs stub tool implementations, and composes a markdown
reply from a prioritized list of response templates.

Front ends:
1. Web chat page and JSON API (FastAPI)
2. Terminal chat screen (Textual)

License: MIT
Version: 1.0.0
"""

__version__ = "1.0.0"
__license__ = "MIT"

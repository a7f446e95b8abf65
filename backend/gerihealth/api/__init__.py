"""
HTTP API for the medication assistant.
"""

from .app import create_app

__all__ = ["create_app"]

"""
API package for Image Catalog.

Provides the Flask routes used by the browser-automation collaborator.
"""

from __future__ import annotations

from .routes import api

__all__ = ['api']

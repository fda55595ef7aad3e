"""
FastAPI integration module.

Serves application manifests over HTTP.
"""

from .integration import create_manifest_router

__all__ = [
    "create_manifest_router",
]

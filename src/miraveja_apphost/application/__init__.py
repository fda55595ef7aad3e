"""
Application layer - Graph construction and manifest publishing.

This layer contains the application graph, the fluent resource builder and
the manifest writer. It depends only on the Domain layer.
"""

from .builder import ResourceBuilder
from .credentials import CredentialGenerator
from .graph import ApplicationGraph
from .manifest_writer import ManifestPublishingContext, ManifestWriter
from .settings import AppHostSettings, get_settings

__all__ = [
    "ApplicationGraph",
    "ResourceBuilder",
    "ManifestWriter",
    "ManifestPublishingContext",
    "CredentialGenerator",
    "AppHostSettings",
    "get_settings",
]

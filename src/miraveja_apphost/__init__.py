"""
miraveja-apphost: Declarative application topology graph with deterministic manifest publishing.

Public API exports for the miraveja-apphost package.
"""

# Application exports
from miraveja_apphost.application.graph import ApplicationGraph
from miraveja_apphost.application.builder import ResourceBuilder
from miraveja_apphost.application.manifest_writer import ManifestPublishingContext, ManifestWriter
from miraveja_apphost.application.settings import AppHostSettings

# Domain exports
from miraveja_apphost.domain.enums import ProtocolType, RelationRole, ResourceKind
from miraveja_apphost.domain.exceptions import (
    AppHostException,
    DanglingRelationError,
    DuplicateResourceNameError,
    GraphSealedError,
    MissingConfigurationError,
    ResourceNotFoundError,
    UnpublishableResourceError,
)
from miraveja_apphost.domain.models import ManifestDocument

__version__ = "0.1.0"

__all__ = [
    # Graph
    "ApplicationGraph",
    "ResourceBuilder",
    "ManifestWriter",
    "ManifestPublishingContext",
    "ManifestDocument",
    "AppHostSettings",
    # Enums
    "ResourceKind",
    "ProtocolType",
    "RelationRole",
    # Exceptions
    "AppHostException",
    "DuplicateResourceNameError",
    "ResourceNotFoundError",
    "MissingConfigurationError",
    "UnpublishableResourceError",
    "DanglingRelationError",
    "GraphSealedError",
]

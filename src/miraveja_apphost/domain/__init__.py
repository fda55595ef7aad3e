"""
Domain layer - Resource model, annotations and manifest document.

This layer contains the resource variants, their annotations and the
interfaces the application layer implements. It has no dependencies on
other layers.
"""

from .annotations import (
    AllocatedEndpointAnnotation,
    ContainerImageAnnotation,
    EnvironmentAnnotation,
    ManifestPublishingCallbackAnnotation,
    RelationAnnotation,
    ResourceAnnotation,
    ServiceBindingAnnotation,
)
from .enums import ProtocolType, RelationRole, ResourceKind
from .exceptions import (
    AppHostException,
    DanglingRelationError,
    DuplicateResourceNameError,
    GraphSealedError,
    MissingConfigurationError,
    ResourceNotFoundError,
    UnpublishableResourceError,
)
from .interfaces import IApplicationGraph, ICredentialGenerator, IManifestWriter, IResourceLookup
from .models import (
    ComponentResource,
    ConnectionResource,
    ContainerResource,
    DatabaseResource,
    ManifestDocument,
    ProjectResource,
    Resource,
    SidecarResource,
)

__all__ = [
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
    # Annotations
    "ResourceAnnotation",
    "ServiceBindingAnnotation",
    "AllocatedEndpointAnnotation",
    "ContainerImageAnnotation",
    "EnvironmentAnnotation",
    "RelationAnnotation",
    "ManifestPublishingCallbackAnnotation",
    # Interfaces
    "IResourceLookup",
    "IApplicationGraph",
    "ICredentialGenerator",
    "IManifestWriter",
    # Models
    "Resource",
    "ContainerResource",
    "ConnectionResource",
    "DatabaseResource",
    "ProjectResource",
    "ComponentResource",
    "SidecarResource",
    "ManifestDocument",
]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Optional

from miraveja_apphost.domain.models import ManifestDocument, Resource

if TYPE_CHECKING:
    from miraveja_apphost.application.builder import ResourceBuilder


class IResourceLookup(ABC):
    """Abstract name-based, read-only view of an application graph."""

    @abstractmethod
    def get_resource(self, name: str) -> Resource:
        """Return the resource registered under a name.

        Args:
            name: The resource name.

        Raises:
            ResourceNotFoundError: If no resource has that name.
        """

    @abstractmethod
    def has_resource(self, name: str) -> bool:
        """Return whether a resource is registered under a name."""

    @abstractmethod
    def get_configured_connection_string(self, name: str) -> Optional[str]:
        """Return the externally configured connection string for a name, if any."""

    @property
    @abstractmethod
    def default_host(self) -> str:
        """Host used when synthesizing connection strings without an allocated endpoint."""


class IApplicationGraph(IResourceLookup):
    """Abstract interface for the set of resources of one application definition."""

    @abstractmethod
    def add_resource(self, resource: Resource) -> "ResourceBuilder":
        """Register a resource and return a builder wrapping it.

        Args:
            resource: The resource to register.

        Raises:
            DuplicateResourceNameError: If the name is already registered.
            GraphSealedError: If publishing has already begun.
        """

    @abstractmethod
    def all_resources(self) -> Iterable[Resource]:
        """Return all resources in registration order."""

    @abstractmethod
    def seal(self) -> None:
        """Reject any further registration or mutation."""

    @property
    @abstractmethod
    def is_sealed(self) -> bool:
        """Whether the graph has been sealed for publishing."""


class ICredentialGenerator(ABC):
    """Abstract source of generated credentials."""

    @abstractmethod
    def generate(self) -> str:
        """Return a new credential."""


class IManifestWriter(ABC):
    """Abstract interface for rendering an application graph into a manifest."""

    @abstractmethod
    def publish(self, graph: IApplicationGraph) -> ManifestDocument:
        """Render every resource of the graph into one manifest document.

        Args:
            graph: The application graph to publish.

        Raises:
            UnpublishableResourceError: If a resource cannot be rendered.
            DanglingRelationError: If a relation targets an unknown resource.
        """

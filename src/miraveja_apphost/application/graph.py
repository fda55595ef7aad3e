from typing import Dict, Optional, ValuesView

import structlog

from miraveja_apphost.application.builder import ResourceBuilder
from miraveja_apphost.application.credentials import CredentialGenerator
from miraveja_apphost.application.settings import AppHostSettings, get_settings
from miraveja_apphost.domain import (
    DuplicateResourceNameError,
    GraphSealedError,
    IApplicationGraph,
    ICredentialGenerator,
    Resource,
    ResourceNotFoundError,
)

logger = structlog.get_logger()


class ApplicationGraph(IApplicationGraph):
    """The set of resources registered for one application definition.

    Resources are kept in registration order, keyed by name. Resources are
    only ever added; once publishing begins the graph is sealed and rejects
    every further registration or builder mutation.

    Attributes:
        _resources: Registered resources keyed by name, in registration order.
        _settings: Settings for host names and configured connection strings.
        _credentials: Generator for credentials not supplied by the caller.
        _sealed: Whether publishing has begun.
    """

    def __init__(
        self,
        settings: Optional[AppHostSettings] = None,
        credential_generator: Optional[ICredentialGenerator] = None,
    ) -> None:
        """Initialize an empty application graph.

        Args:
            settings: Optional settings. Defaults to the cached environment settings.
            credential_generator: Optional generator. Defaults to one seeded with
                ``settings.credential_seed``.
        """
        self._resources: Dict[str, Resource] = {}
        self._settings = settings if settings is not None else get_settings()
        self._credentials: ICredentialGenerator = (
            credential_generator
            if credential_generator is not None
            else CredentialGenerator(self._settings.credential_seed)
        )
        self._sealed = False

    @property
    def settings(self) -> AppHostSettings:
        return self._settings

    @property
    def credentials(self) -> ICredentialGenerator:
        return self._credentials

    @property
    def default_host(self) -> str:
        return self._settings.default_host

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def add_resource(self, resource: Resource) -> ResourceBuilder:
        """Register a resource and return a builder wrapping it.

        Args:
            resource: The resource to register.

        Returns:
            Builder wrapping the newly registered resource.

        Raises:
            GraphSealedError: If publishing has already begun.
            DuplicateResourceNameError: If the name is already registered.

        Example:
            >>> graph = ApplicationGraph()
            >>> builder = graph.add_resource(ProjectResource(name="api", path="api/app.py"))
            >>> builder.resource.name
            'api'
        """
        self.ensure_mutable()
        if resource.name in self._resources:
            raise DuplicateResourceNameError(resource.name)

        self._resources[resource.name] = resource
        logger.debug("resource_registered", resource=resource.name, resource_type=type(resource).__name__)
        return ResourceBuilder(self, resource.name)

    def get_resource(self, name: str) -> Resource:
        try:
            return self._resources[name]
        except KeyError:
            raise ResourceNotFoundError(name) from None

    def has_resource(self, name: str) -> bool:
        return name in self._resources

    def get_configured_connection_string(self, name: str) -> Optional[str]:
        return self._settings.connection_strings.get(name)

    def all_resources(self) -> ValuesView[Resource]:
        """Return a live, re-iterable view of the resources in registration order."""
        return self._resources.values()

    def seal(self) -> None:
        if not self._sealed:
            logger.debug("graph_sealed", resources=len(self._resources))
        self._sealed = True

    def ensure_mutable(self) -> None:
        """Raise if the graph no longer accepts mutations.

        Raises:
            GraphSealedError: If the graph has been sealed for publishing.
        """
        if self._sealed:
            raise GraphSealedError("The application graph is sealed; resources cannot change after publishing")

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __len__(self) -> int:
        return len(self._resources)

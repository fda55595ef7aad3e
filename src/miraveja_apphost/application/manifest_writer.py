"""Application layer - Manifest emission."""

from typing import Any, Dict, List, Optional

import structlog

from miraveja_apphost.domain import (
    AppHostException,
    DanglingRelationError,
    IApplicationGraph,
    IManifestWriter,
    IResourceLookup,
    ManifestDocument,
    MissingConfigurationError,
    RelationRole,
    Resource,
    UnpublishableResourceError,
)

logger = structlog.get_logger()

TYPE_FIELD = "type"


class ManifestPublishingContext:
    """Write context handed to a resource's manifest publishing callback.

    Accumulates one manifest record. The ``type`` field must be written
    first and exactly once; every other field follows it in write order.

    Attributes:
        resource: The resource being published.
        lookup: Name-based view of the graph being published.
        record: The manifest record accumulated so far.
    """

    def __init__(self, resource: Resource, lookup: IResourceLookup) -> None:
        self.resource = resource
        self.lookup = lookup
        self.record: Dict[str, Any] = {}

    def write_type(self, value: str) -> None:
        """Write the schema variant identifier of the record.

        Raises:
            UnpublishableResourceError: If any field was already written.
        """
        if self.record:
            raise UnpublishableResourceError(
                self.resource.name, f"'{TYPE_FIELD}' must be the first field and written once"
            )
        self.record[TYPE_FIELD] = value

    def write(self, key: str, value: Any) -> None:
        """Write a field after the ``type`` field.

        Raises:
            UnpublishableResourceError: If ``type`` was not written yet.
        """
        if key == TYPE_FIELD:
            self.write_type(value)
            return
        if TYPE_FIELD not in self.record:
            raise UnpublishableResourceError(
                self.resource.name, f"'{TYPE_FIELD}' must be written before '{key}'"
            )
        self.record[key] = value

    def write_object(self, key: str) -> Dict[str, Any]:
        """Write an empty nested object and return it for the caller to fill."""
        nested: Dict[str, Any] = {}
        self.write(key, nested)
        return nested

    def resolve_relations(self, role: RelationRole) -> List[str]:
        """Return the names of the resources related to this one under a role.

        Raises:
            DanglingRelationError: If a target is not registered in the graph.
        """
        targets = []
        for relation in self.resource.relations(role):
            if not self.lookup.has_resource(relation.target):
                raise DanglingRelationError(self.resource.name, relation.target, str(relation.role))
            targets.append(self.lookup.get_resource(relation.target).name)
        return targets

    def resolve_relation(self, role: RelationRole) -> Optional[str]:
        """Return the name of the most recent related resource under a role, if any."""
        targets = self.resolve_relations(role)
        return targets[-1] if targets else None

    def connection_string_of(self, resource: Optional[Resource] = None) -> str:
        """Compute the connection string of a resource (this one by default)."""
        return (resource or self.resource).compute_connection_string(self.lookup)

    def write_environment_variables(self) -> None:
        """Evaluate every environment value factory once and write the ``env`` field."""
        factories = self.resource.environment()
        if factories:
            self.write("env", {name: factory() for name, factory in factories.items()})

    def write_service_bindings(self) -> None:
        """Write the ``bindings`` field for every declared service binding."""
        bindings = self.resource.service_bindings()
        if not bindings:
            return
        written = self.write_object("bindings")
        for name, binding in bindings.items():
            entry: Dict[str, Any] = {
                "scheme": binding.uri_scheme,
                "protocol": str(binding.protocol),
                "transport": binding.transport,
            }
            if binding.container_port is not None:
                entry["containerPort"] = binding.container_port
            written[name] = entry

    def write_container_image(self) -> None:
        """Write the ``image`` field.

        Raises:
            MissingConfigurationError: If the resource has no container image.
        """
        image = self.resource.container_image
        if image is None:
            raise MissingConfigurationError(self.resource.name, "container image")
        self.write("image", image.reference)


class ManifestWriter(IManifestWriter):
    """Walks an application graph and assembles its manifest.

    Resources are rendered in registration order by their publishing callback.
    Publishing seals the graph. The document is only returned once every
    record was rendered; any failure aborts the whole publish.
    While a resource renders its name is bound to the structlog context
    as ``resource``, so logs emitted by publishing callbacks carry it.
    """

    def publish(self, graph: IApplicationGraph) -> ManifestDocument:
        """Render every resource of the graph into one manifest document.

        Args:
            graph: The application graph to publish.

        Returns:
            The complete manifest document.

        Raises:
            UnpublishableResourceError: If a resource has no callback, or its
                callback did not write a ``type`` field.
            DanglingRelationError: If a relation targets an unknown resource.
            MissingConfigurationError: If a callback queries absent configuration.

        Example:
            >>> document = ManifestWriter().publish(graph)
            >>> list(document.resources)
            ['mysql', 'catalog']
        """
        graph.seal()

        records: Dict[str, Dict[str, Any]] = {}
        for resource in graph.all_resources():
            with structlog.contextvars.bound_contextvars(resource=resource.name):
                try:
                    records[resource.name] = self._render(resource, graph)
                except AppHostException as e:
                    logger.warning("manifest_publish_failed", error=str(e))
                    raise
                logger.debug("resource_rendered", type=records[resource.name][TYPE_FIELD])

        logger.info("manifest_published", resources=len(records))
        return ManifestDocument(resources=records)

    def _render(self, resource: Resource, lookup: IResourceLookup) -> Dict[str, Any]:
        for relation in resource.relations():
            if not lookup.has_resource(relation.target):
                raise DanglingRelationError(resource.name, relation.target, str(relation.role))

        callback = resource.publishing_callback
        if callback is None:
            raise UnpublishableResourceError(resource.name)

        context = ManifestPublishingContext(resource, lookup)
        callback(context)

        if TYPE_FIELD not in context.record:
            raise UnpublishableResourceError(resource.name, f"callback did not write a '{TYPE_FIELD}' field")
        return context.record

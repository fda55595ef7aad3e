from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, TypeVar, Union, cast

from miraveja_apphost.domain import (
    ContainerImageAnnotation,
    EnvironmentAnnotation,
    ManifestPublishingCallbackAnnotation,
    ProtocolType,
    RelationAnnotation,
    RelationRole,
    Resource,
    ResourceAnnotation,
    ServiceBindingAnnotation,
)

if TYPE_CHECKING:
    from miraveja_apphost.application.graph import ApplicationGraph

R = TypeVar("R", bound=Resource)

CONNECTION_STRING_ENV_PREFIX = "ConnectionStrings__"


class ResourceBuilder(Generic[R]):
    """Fluent handle over one registered resource of an application graph.

    The builder holds the resource's name and a shared reference to the graph.
    Every chained call resolves the resource by name, mutates it, and returns
    the same builder.

    Attributes:
        _graph: The application graph the resource is registered in.
        _resource_name: Name of the wrapped resource.

    Example:
        >>> builder = graph.add_resource(ContainerResource(name="cache"))
        >>> builder.with_container_image("redis", "7").with_environment("MODE", "standalone")
    """

    def __init__(self, graph: "ApplicationGraph", resource_name: str) -> None:
        """Initialize the builder.

        Args:
            graph: Graph the resource is registered in.
            resource_name: Name of a registered resource.

        Raises:
            ResourceNotFoundError: If the name is not registered in the graph.
        """
        graph.get_resource(resource_name)
        self._graph = graph
        self._resource_name = resource_name

    @property
    def graph(self) -> "ApplicationGraph":
        return self._graph

    @property
    def resource(self) -> R:
        return cast(R, self._graph.get_resource(self._resource_name))

    def with_annotation(self, annotation: ResourceAnnotation) -> "ResourceBuilder[R]":
        """Attach an annotation to the wrapped resource.

        Raises:
            GraphSealedError: If the graph has been published.
        """
        self._graph.ensure_mutable()
        self.resource.add_annotation(annotation)
        return self

    def with_environment(self, name: str, value: Union[str, Callable[[], str]]) -> "ResourceBuilder[R]":
        """Attach an environment variable evaluated when the manifest is published.

        Args:
            name: Variable key. A later call with the same key wins.
            value: Literal value, or a zero-argument callable producing it.
        """
        value_factory = value if callable(value) else (lambda: value)
        return self.with_annotation(EnvironmentAnnotation(name=name, value_factory=value_factory))

    def with_manifest_publishing_callback(self, callback: Callable[[Any], None]) -> "ResourceBuilder[R]":
        """Set the callback rendering this resource into its manifest record.

        Replaces any previously registered callback.
        """
        return self.with_annotation(ManifestPublishingCallbackAnnotation(callback=callback))

    def with_service_binding(
        self,
        protocol: ProtocolType = ProtocolType.TCP,
        uri_scheme: Optional[str] = None,
        transport: Optional[str] = None,
        name: Optional[str] = None,
        port: Optional[int] = None,
        container_port: Optional[int] = None,
    ) -> "ResourceBuilder[R]":
        """Expose a network binding on the wrapped resource."""
        return self.with_annotation(
            ServiceBindingAnnotation(
                protocol=protocol,
                uri_scheme=uri_scheme,
                transport=transport,
                name=name,
                port=port,
                container_port=container_port,
            )
        )

    def with_container_image(
        self, image: str, tag: str = "latest", registry: Optional[str] = None
    ) -> "ResourceBuilder[R]":
        """Set the container image. Replaces any previously set image."""
        return self.with_annotation(ContainerImageAnnotation(image=image, tag=tag, registry=registry))

    def with_relation(self, target: str, role: RelationRole) -> "ResourceBuilder[R]":
        """Relate the wrapped resource to another resource by name.

        The target does not need to exist yet; it is resolved when the manifest
        is published.
        """
        return self.with_annotation(RelationAnnotation(target=target, role=role))

    def with_reference(self, target: Union[str, "ResourceBuilder[Any]"]) -> "ResourceBuilder[R]":
        """Inject another resource's connection string into this resource's environment.

        Adds a ``reference`` relation and a ``ConnectionStrings__<name>``
        variable computed from the target at publish time.

        Args:
            target: Name of the referenced resource, or its builder.
        """
        target_name = target if isinstance(target, str) else target.resource.name
        graph = self._graph

        def connection_string() -> str:
            return graph.get_resource(target_name).compute_connection_string(graph)

        self.with_relation(target_name, RelationRole.REFERENCE)
        return self.with_environment(f"{CONNECTION_STRING_ENV_PREFIX}{target_name}", connection_string)

    def __repr__(self) -> str:
        return f"ResourceBuilder(resource={self._resource_name!r})"

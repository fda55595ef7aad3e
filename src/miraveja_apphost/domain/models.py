import json
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from miraveja_apphost.domain.annotations import (
    AllocatedEndpointAnnotation,
    ContainerImageAnnotation,
    EnvironmentAnnotation,
    ManifestPublishingCallbackAnnotation,
    RelationAnnotation,
    ResourceAnnotation,
    ServiceBindingAnnotation,
)
from miraveja_apphost.domain.enums import RelationRole, ResourceKind
from miraveja_apphost.domain.exceptions import MissingConfigurationError

if TYPE_CHECKING:
    from miraveja_apphost.domain.interfaces import IResourceLookup

A = TypeVar("A", bound=ResourceAnnotation)


class Resource(BaseModel):
    """A named node in the application topology graph.

    The name is assigned at creation and cannot change. Annotations are kept
    in insertion order; ``add_annotation`` is the only way to mutate a resource.

    Attributes:
        name: Unique name of the resource within its graph.
        annotations: Ordered metadata attached to the resource.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: ClassVar[ResourceKind]

    name: str = Field(..., min_length=1, frozen=True, description="Unique resource name.")
    annotations: List[ResourceAnnotation] = Field(
        default_factory=list,
        description="Ordered annotations attached to the resource.",
    )

    def add_annotation(self, annotation: ResourceAnnotation) -> None:
        """Attach an annotation to the resource.

        Single-instance annotation types replace the existing annotation of the
        same type in place; every other annotation is appended.

        Args:
            annotation: The annotation to attach.
        """
        if annotation.single_instance:
            for index, existing in enumerate(self.annotations):
                if type(existing) is type(annotation):
                    self.annotations[index] = annotation
                    return
        self.annotations.append(annotation)

    def annotations_of_type(self, annotation_type: Type[A]) -> List[A]:
        """Return the annotations of a given type, in insertion order."""
        return [annotation for annotation in self.annotations if isinstance(annotation, annotation_type)]

    def find_annotation(self, annotation_type: Type[A]) -> Optional[A]:
        """Return the most recently added annotation of a given type, if any."""
        matches = self.annotations_of_type(annotation_type)
        return matches[-1] if matches else None

    @property
    def publishing_callback(self) -> Optional[Callable[[Any], None]]:
        annotation = self.find_annotation(ManifestPublishingCallbackAnnotation)
        return annotation.callback if annotation else None

    @property
    def container_image(self) -> Optional[ContainerImageAnnotation]:
        return self.find_annotation(ContainerImageAnnotation)

    def relations(self, role: Optional[RelationRole] = None) -> List[RelationAnnotation]:
        """Return relation annotations, optionally filtered by role."""
        return [
            relation
            for relation in self.annotations_of_type(RelationAnnotation)
            if role is None or relation.role == role
        ]

    def environment(self) -> Dict[str, Callable[[], str]]:
        """Return the environment value factories keyed by variable name.

        Later annotations for the same key win; the key keeps the position of
        its first declaration.
        """
        factories: Dict[str, Callable[[], str]] = {}
        for annotation in self.annotations_of_type(EnvironmentAnnotation):
            factories[annotation.name] = annotation.value_factory
        return factories

    def service_bindings(self) -> Dict[str, ServiceBindingAnnotation]:
        """Return service bindings keyed by binding name (last write wins)."""
        bindings: Dict[str, ServiceBindingAnnotation] = {}
        for annotation in self.annotations_of_type(ServiceBindingAnnotation):
            bindings[annotation.name] = annotation
        return bindings

    def compute_connection_string(self, lookup: "IResourceLookup") -> str:
        """Compute the connection string other resources use to reach this one.

        Args:
            lookup: Name-based view of the graph the resource belongs to.

        Raises:
            MissingConfigurationError: If the resource has no connection string.
        """
        raise MissingConfigurationError(self.name, "connection string")


class ContainerResource(Resource):
    """A container run from an image.

    Connection strings use the first allocated endpoint when one exists.
    Otherwise the host is the configured default host and the port comes from
    the first binding with an external port, else the first container port.

    Attributes:
        password: Credential stored for the container's root/admin user.
        connection_string_template: Format string with ``{host}``, ``{port}``
            and ``{password}`` placeholders.
    """

    kind: ClassVar[ResourceKind] = ResourceKind.CONTAINER

    password: Optional[str] = Field(default=None, description="Stored credential.")
    connection_string_template: Optional[str] = Field(
        default=None,
        description="Template used to synthesize the connection string.",
    )

    def compute_connection_string(self, lookup: "IResourceLookup") -> str:
        if self.connection_string_template is None:
            raise MissingConfigurationError(self.name, "connection string template")

        endpoints = self.annotations_of_type(AllocatedEndpointAnnotation)
        if endpoints:
            host, port = endpoints[0].address, endpoints[0].port
        else:
            host, port = lookup.default_host, self._binding_port()

        return self.connection_string_template.format(host=host, port=port, password=self.password or "")

    def _binding_port(self) -> int:
        bindings = list(self.service_bindings().values())
        external = [binding for binding in bindings if binding.port is not None]
        for binding in external or bindings:
            if binding.target_port is not None:
                return binding.target_port
        raise MissingConfigurationError(self.name, "service binding with a port")


class ConnectionResource(Resource):
    """An externally provisioned resource reached through a connection string.

    Attributes:
        connection_string: Optional literal connection string. When absent the
            value is read from configuration under the resource name.
    """

    kind: ClassVar[ResourceKind] = ResourceKind.CONNECTION

    connection_string: Optional[str] = Field(default=None, description="Literal connection string.")

    def compute_connection_string(self, lookup: "IResourceLookup") -> str:
        if self.connection_string is not None:
            return self.connection_string
        configured = lookup.get_configured_connection_string(self.name)
        if configured is None:
            raise MissingConfigurationError(self.name, "connection string")
        return configured


class DatabaseResource(Resource):
    """A database hosted by a parent server resource."""

    kind: ClassVar[ResourceKind] = ResourceKind.DATABASE

    @property
    def parent_name(self) -> Optional[str]:
        parents = self.relations(RelationRole.PARENT)
        return parents[-1].target if parents else None

    def compute_connection_string(self, lookup: "IResourceLookup") -> str:
        if self.parent_name is None:
            raise MissingConfigurationError(self.name, "parent resource")
        parent = lookup.get_resource(self.parent_name)
        return f"{parent.compute_connection_string(lookup).rstrip(';')};Database={self.name}"


class ProjectResource(Resource):
    """An application project built from source.

    Attributes:
        path: Path of the project, relative to the manifest.
    """

    kind: ClassVar[ResourceKind] = ResourceKind.PROJECT

    path: str = Field(..., min_length=1, description="Project path.")


class ComponentResource(Resource):
    """An opaque platform add-on, such as a state store or pub/sub broker.

    Attributes:
        component_type: Platform-specific component type, e.g. ``state``.
    """

    kind: ClassVar[ResourceKind] = ResourceKind.COMPONENT

    component_type: str = Field(..., min_length=1, description="Component type.")


class SidecarResource(Resource):
    """A runtime attached to an application that references components by name.

    Attributes:
        app_id: Identifier of the application inside the sidecar runtime.
            Defaults to the resource name.
    """

    kind: ClassVar[ResourceKind] = ResourceKind.SIDECAR

    app_id: Optional[str] = Field(default=None, description="Application id of the sidecar.")

    @property
    def effective_app_id(self) -> str:
        return self.app_id or self.name

    @property
    def application_name(self) -> Optional[str]:
        applications = self.relations(RelationRole.APPLICATION)
        return applications[-1].target if applications else None

    @property
    def component_names(self) -> List[str]:
        return [relation.target for relation in self.relations(RelationRole.COMPONENT)]


class ManifestDocument(BaseModel):
    """The serialized description of an application graph.

    Attributes:
        resources: Manifest records keyed by resource name, in registration order.
    """

    model_config = ConfigDict(frozen=True)

    resources: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Manifest records keyed by resource name.",
    )

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize the manifest, preserving resource and field order."""
        return json.dumps({"resources": self.resources}, indent=indent)

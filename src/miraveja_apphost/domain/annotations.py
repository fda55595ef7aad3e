from typing import Any, Callable, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from miraveja_apphost.domain.enums import ProtocolType, RelationRole


class ResourceAnnotation(BaseModel):
    """Base class for typed metadata attached to a resource.

    Annotations are immutable value objects. Subclasses flagged as
    ``single_instance`` replace any earlier annotation of the same type when
    added to a resource instead of being appended next to it.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    single_instance: ClassVar[bool] = False


class ServiceBindingAnnotation(ResourceAnnotation):
    """A network binding exposed by a resource.

    Attributes:
        protocol: Transport-level protocol (tcp/udp).
        uri_scheme: Scheme used to reach the binding. Defaults to the protocol.
        transport: Application transport. Defaults to the scheme.
        name: Binding name in the manifest. Defaults to the scheme.
        port: Optional external (host) port.
        container_port: Optional internal port inside the container.
    """

    protocol: ProtocolType = Field(..., description="Network protocol of the binding.")
    uri_scheme: str = Field(..., description="URI scheme used to reach the binding.")
    transport: str = Field(..., description="Application transport of the binding.")
    name: str = Field(..., description="Name of the binding within its resource.")
    port: Optional[int] = Field(default=None, ge=0, le=65535, description="External port.")
    container_port: Optional[int] = Field(default=None, ge=0, le=65535, description="Internal port.")

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        protocol = ProtocolType(data.get("protocol", ProtocolType.TCP))
        data["protocol"] = protocol
        data["uri_scheme"] = data.get("uri_scheme") or protocol.value
        data["transport"] = data.get("transport") or data["uri_scheme"]
        data["name"] = data.get("name") or data["uri_scheme"]
        return data

    @property
    def target_port(self) -> Optional[int]:
        """Port clients should use: the external port when set, else the container port."""
        return self.port if self.port is not None else self.container_port


class AllocatedEndpointAnnotation(ResourceAnnotation):
    """An endpoint assigned to a binding by an external orchestrator.

    Attributes:
        name: Name of the binding the endpoint was allocated for.
        address: Host name or IP address.
        port: Allocated port.
    """

    name: str = Field(..., description="Name of the allocated binding.")
    address: str = Field(..., description="Allocated address.")
    port: int = Field(..., ge=0, le=65535, description="Allocated port.")


class ContainerImageAnnotation(ResourceAnnotation):
    """Container image reference of a resource. At most one per resource.

    Attributes:
        image: Image name, e.g. ``mysql``.
        tag: Image tag.
        registry: Optional registry host.
    """

    single_instance: ClassVar[bool] = True

    image: str = Field(..., min_length=1, description="Container image name.")
    tag: str = Field(default="latest", min_length=1, description="Container image tag.")
    registry: Optional[str] = Field(default=None, description="Optional container registry.")

    @property
    def reference(self) -> str:
        """Full image reference, e.g. ``docker.io/mysql:latest``."""
        image = f"{self.registry}/{self.image}" if self.registry else self.image
        return f"{image}:{self.tag}"


class EnvironmentAnnotation(ResourceAnnotation):
    """Environment variable whose value is computed lazily at publish time.

    Attributes:
        name: Environment variable key.
        value_factory: Zero-argument callable returning the value.
    """

    name: str = Field(..., min_length=1, description="Environment variable key.")
    value_factory: Callable[[], str] = Field(..., description="Deferred value producer.")


class RelationAnnotation(ResourceAnnotation):
    """By-name reference from one resource to another.

    Attributes:
        target: Name of the referenced resource.
        role: What the referenced resource is to the annotated one.
    """

    target: str = Field(..., min_length=1, description="Name of the referenced resource.")
    role: RelationRole = Field(..., description="Role of the referenced resource.")


class ManifestPublishingCallbackAnnotation(ResourceAnnotation):
    """Callback rendering a resource into its manifest record.

    The callback receives a ``ManifestPublishingContext``. At most one per resource.
    """

    single_instance: ClassVar[bool] = True

    callback: Callable[[Any], None] = Field(..., description="Manifest record writer.")

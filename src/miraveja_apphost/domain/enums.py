from enum import Enum


class ResourceKind(str, Enum):
    """Closed set of resource variants known to the application graph.

    Attributes:
        CONTAINER: A container image run by the orchestrator.
        CONNECTION: An externally provisioned resource reached by connection string.
        DATABASE: A database hosted by a parent server resource.
        PROJECT: An application project built from source.
        COMPONENT: An opaque platform add-on (e.g. a Dapr component).
        SIDECAR: A runtime attached to a project that references other resources.
    """

    CONTAINER = "container"
    CONNECTION = "connection"
    DATABASE = "database"
    PROJECT = "project"
    COMPONENT = "component"
    SIDECAR = "sidecar"

    def __str__(self) -> str:
        return self.value


class ProtocolType(str, Enum):
    """Network protocol of a service binding."""

    TCP = "tcp"
    UDP = "udp"

    def __str__(self) -> str:
        return self.value


class RelationRole(str, Enum):
    """Role tag carried by a by-name relation between two resources.

    Attributes:
        PARENT: The target hosts this resource (database -> server).
        COMPONENT: The target is attached to this resource (sidecar -> component).
        APPLICATION: The target is the application this resource runs beside.
        REFERENCE: This resource consumes the target's connection string.
    """

    PARENT = "parent"
    COMPONENT = "component"
    APPLICATION = "application"
    REFERENCE = "reference"

    def __str__(self) -> str:
        return self.value

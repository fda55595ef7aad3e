from typing import Optional


class AppHostException(Exception):
    """Base exception for application graph and manifest errors."""


class DuplicateResourceNameError(AppHostException):
    """Raised when a resource is registered under a name already in the graph.

    Attributes:
        name: The colliding resource name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A resource named '{name}' is already registered in the application graph")


class ResourceNotFoundError(AppHostException):
    """Raised when a resource is looked up by a name that was never registered.

    Attributes:
        name: The requested resource name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No resource named '{name}' is registered in the application graph")


class MissingConfigurationError(AppHostException):
    """Raised when a resource is queried for data it was never given.

    This occurs when:
    - A connection resource has neither a literal nor a configured connection string.
    - A container resource has no connection string template or no usable endpoint.
    - A resource kind without a connection string is asked for one.

    Attributes:
        resource_name: Name of the resource being queried.
        setting: The missing piece of configuration.
    """

    def __init__(self, resource_name: str, setting: str) -> None:
        self.resource_name = resource_name
        self.setting = setting
        super().__init__(f"Resource '{resource_name}' has no {setting} configured")


class UnpublishableResourceError(AppHostException):
    """Raised when a resource cannot be rendered into a manifest record.

    Attributes:
        resource_name: Name of the offending resource.
        reason: Optional reason for the failure.
    """

    def __init__(self, resource_name: str, reason: Optional[str] = None) -> None:
        self.resource_name = resource_name
        self.reason = reason or "no manifest publishing callback registered"
        super().__init__(f"Cannot publish resource '{resource_name}': {self.reason}")


class DanglingRelationError(AppHostException):
    """Raised when a relation targets a name absent from the graph at publish time.

    Attributes:
        resource_name: Name of the resource carrying the relation.
        target: The unresolved target name.
        role: Role of the relation.
    """

    def __init__(self, resource_name: str, target: str, role: str) -> None:
        self.resource_name = resource_name
        self.target = target
        self.role = role
        super().__init__(f"Resource '{resource_name}' has a {role} relation to unknown resource '{target}'")


class GraphSealedError(AppHostException):
    """Raised for mutations attempted after publishing has begun.

    This occurs when:
    - Registering a new resource on a published graph.
    - Adding an annotation through a builder of a published graph.
    """

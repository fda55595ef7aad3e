"""Dapr components and sidecars."""

from typing import Iterable, Optional

from miraveja_apphost.application import ApplicationGraph, ManifestPublishingContext, ResourceBuilder
from miraveja_apphost.domain import (
    ComponentResource,
    ProjectResource,
    RelationRole,
    SidecarResource,
    UnpublishableResourceError,
)


def add_dapr_component(
    graph: ApplicationGraph, name: str, component_type: str
) -> ResourceBuilder[ComponentResource]:
    """Add a Dapr component (state store, pub/sub, ...) to the application graph.

    Args:
        graph: The application graph.
        name: The name of the component resource.
        component_type: Dapr component type, e.g. ``state`` or ``pubsub``.
    """
    builder: ResourceBuilder[ComponentResource] = graph.add_resource(
        ComponentResource(name=name, component_type=component_type)
    )
    return builder.with_manifest_publishing_callback(write_dapr_component_to_manifest)


def add_dapr_sidecar(
    graph: ApplicationGraph,
    name: str,
    application: str,
    components: Iterable[str] = (),
    app_id: Optional[str] = None,
) -> ResourceBuilder[SidecarResource]:
    """Add a Dapr sidecar attached to an application.

    The application and components are referenced by name; they may be
    registered before or after the sidecar, but must exist when publishing.

    Args:
        graph: The application graph.
        name: The name of the sidecar resource.
        application: Name of the application the sidecar runs beside.
        components: Names of the components attached to the sidecar, in order.
        app_id: Dapr application id. Defaults to the sidecar name.
    """
    builder: ResourceBuilder[SidecarResource] = graph.add_resource(SidecarResource(name=name, app_id=app_id))
    builder.with_relation(application, RelationRole.APPLICATION)
    for component in components:
        builder.with_relation(component, RelationRole.COMPONENT)
    return builder.with_manifest_publishing_callback(write_dapr_sidecar_to_manifest)


def with_dapr_sidecar(
    project: ResourceBuilder[ProjectResource],
    app_id: str,
    components: Iterable[str] = (),
) -> ResourceBuilder[ProjectResource]:
    """Attach a Dapr sidecar named after ``app_id`` to a project.

    Returns:
        The project builder, for further chaining.
    """
    add_dapr_sidecar(project.graph, app_id, project.resource.name, components, app_id=app_id)
    return project


def write_dapr_component_to_manifest(context: ManifestPublishingContext) -> None:
    resource = context.resource
    if not isinstance(resource, ComponentResource):
        raise UnpublishableResourceError(resource.name, "expected a ComponentResource")
    context.write_type("dapr.component.v0")
    context.write_object("daprComponent")["type"] = resource.component_type


def write_dapr_sidecar_to_manifest(context: ManifestPublishingContext) -> None:
    resource = context.resource
    if not isinstance(resource, SidecarResource):
        raise UnpublishableResourceError(resource.name, "expected a SidecarResource")
    context.write_type("dapr.v0")
    dapr = context.write_object("dapr")
    dapr["application"] = context.resolve_relation(RelationRole.APPLICATION)
    dapr["appId"] = resource.effective_app_id
    dapr["components"] = context.resolve_relations(RelationRole.COMPONENT)

from miraveja_apphost.application import ApplicationGraph, ManifestPublishingContext, ResourceBuilder
from miraveja_apphost.domain import ProjectResource, UnpublishableResourceError


def add_project(graph: ApplicationGraph, name: str, path: str) -> ResourceBuilder[ProjectResource]:
    """Add an application project to the application graph.

    Args:
        graph: The application graph.
        name: The name of the resource.
        path: Path of the project, relative to the manifest.

    Example:
        >>> add_project(graph, "servicea", "../ServiceA/ServiceA.csproj").with_service_binding(
        ...     uri_scheme="http"
        ... )
    """
    builder: ResourceBuilder[ProjectResource] = graph.add_resource(ProjectResource(name=name, path=path))
    return builder.with_manifest_publishing_callback(write_project_to_manifest)


def write_project_to_manifest(context: ManifestPublishingContext) -> None:
    resource = context.resource
    if not isinstance(resource, ProjectResource):
        raise UnpublishableResourceError(resource.name, "expected a ProjectResource")
    context.write_type("project.v0")
    context.write("path", resource.path)
    context.write_environment_variables()
    context.write_service_bindings()

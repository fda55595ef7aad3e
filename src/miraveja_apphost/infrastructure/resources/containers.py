from miraveja_apphost.application import ApplicationGraph, ManifestPublishingContext, ResourceBuilder
from miraveja_apphost.domain import ContainerResource

CONTAINER_MANIFEST_TYPE = "container.v0"


def add_container(
    graph: ApplicationGraph, name: str, image: str, tag: str = "latest"
) -> ResourceBuilder[ContainerResource]:
    """Add a generic container resource to the application graph.

    Args:
        graph: The application graph.
        name: The name of the resource.
        image: The container image name.
        tag: The container image tag.

    Returns:
        A builder wrapping the new container resource.

    Example:
        >>> add_container(graph, "cache", "redis").with_service_binding(container_port=6379)
    """
    return (
        graph.add_resource(ContainerResource(name=name))
        .with_manifest_publishing_callback(write_container_to_manifest)
        .with_container_image(image, tag)
    )


def write_container_to_manifest(context: ManifestPublishingContext) -> None:
    context.write_type(CONTAINER_MANIFEST_TYPE)
    context.write_container_image()
    context.write_environment_variables()
    context.write_service_bindings()

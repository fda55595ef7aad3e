"""MySQL server, connection and database resources."""

from typing import Optional

from miraveja_apphost.application import ApplicationGraph, ManifestPublishingContext, ResourceBuilder
from miraveja_apphost.domain import (
    ConnectionResource,
    ContainerResource,
    DatabaseResource,
    ProtocolType,
    RelationRole,
)

PASSWORD_ENV_VAR_NAME = "MYSQL_ROOT_PASSWORD"
MYSQL_CONTAINER_PORT = 3306
MYSQL_CONNECTION_STRING_TEMPLATE = 'Server={host};Port={port};User ID=root;Password="{password}";'


def add_mysql_container(
    graph: ApplicationGraph,
    name: str,
    port: Optional[int] = None,
    password: Optional[str] = None,
) -> ResourceBuilder[ContainerResource]:
    """Add a MySQL container to the application graph.

    The image is ``mysql:latest`` and the container always listens on 3306.

    Args:
        graph: The application graph.
        name: The name of the resource, also used as its connection string name.
        port: Optional host port for MySQL.
        password: Root password. Generated by the graph's credential generator when omitted.

    Returns:
        A builder wrapping the MySQL container resource.
    """
    container = ContainerResource(
        name=name,
        password=password if password is not None else graph.credentials.generate(),
        connection_string_template=MYSQL_CONNECTION_STRING_TEMPLATE,
    )
    builder: ResourceBuilder[ContainerResource] = graph.add_resource(container)
    return (
        builder.with_manifest_publishing_callback(write_mysql_container_to_manifest)
        .with_service_binding(ProtocolType.TCP, port=port, container_port=MYSQL_CONTAINER_PORT)
        .with_container_image("mysql", "latest")
        .with_environment(PASSWORD_ENV_VAR_NAME, lambda: container.password or "")
    )


def add_mysql_connection(
    graph: ApplicationGraph, name: str, connection_string: Optional[str] = None
) -> ResourceBuilder[ConnectionResource]:
    """Add a MySQL connection to the application graph.

    When no connection string is given it is read from the configured
    connection strings under the resource name.
    """
    builder: ResourceBuilder[ConnectionResource] = graph.add_resource(
        ConnectionResource(name=name, connection_string=connection_string)
    )
    return builder.with_manifest_publishing_callback(write_mysql_connection_to_manifest)


def add_database(builder: ResourceBuilder[ContainerResource], name: str) -> ResourceBuilder[DatabaseResource]:
    """Add a MySQL database hosted by a MySQL container.

    The database is registered in the same graph as its server and points
    back at it through a ``parent`` relation.

    Args:
        builder: Builder of a registered MySQL container resource.
        name: The name of the database resource.

    Raises:
        TypeError: If the builder does not wrap a container resource.
        DuplicateResourceNameError: If the name is already registered.
    """
    server = builder.resource
    if not isinstance(server, ContainerResource):
        raise TypeError(f"Databases can only be added to container resources, not '{server.name}'")

    database: ResourceBuilder[DatabaseResource] = builder.graph.add_resource(DatabaseResource(name=name))
    return database.with_relation(server.name, RelationRole.PARENT).with_manifest_publishing_callback(
        write_mysql_database_to_manifest
    )


def write_mysql_container_to_manifest(context: ManifestPublishingContext) -> None:
    context.write_type("mysql.server.v0")


def write_mysql_connection_to_manifest(context: ManifestPublishingContext) -> None:
    context.write_type("mysql.connection.v0")
    context.write("connectionString", context.connection_string_of())


def write_mysql_database_to_manifest(context: ManifestPublishingContext) -> None:
    context.write_type("mysql.database.v0")
    context.write("parent", context.resolve_relation(RelationRole.PARENT))

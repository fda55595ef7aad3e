"""Unit tests for ResourceBuilder."""

import pytest

from miraveja_apphost.application.builder import ResourceBuilder
from miraveja_apphost.application.graph import ApplicationGraph
from miraveja_apphost.application.settings import AppHostSettings
from miraveja_apphost.domain import (
    ConnectionResource,
    ContainerImageAnnotation,
    ContainerResource,
    DatabaseResource,
    EnvironmentAnnotation,
    GraphSealedError,
    ManifestPublishingCallbackAnnotation,
    ProtocolType,
    RelationAnnotation,
    RelationRole,
    ResourceNotFoundError,
    ServiceBindingAnnotation,
)


@pytest.fixture
def graph():
    return ApplicationGraph(settings=AppHostSettings(_env_file=None))


class TestBuilderConstruction:
    """Test cases for ResourceBuilder construction."""

    def test_builder_for_registered_resource(self, graph):
        """Test that a builder can be created for a registered name."""
        resource = ContainerResource(name="mysql")
        graph.add_resource(resource)

        builder = ResourceBuilder(graph, "mysql")

        assert builder.resource is resource

    def test_builder_for_unregistered_resource_raises(self, graph):
        """Test that a builder cannot wrap an orphan resource."""
        with pytest.raises(ResourceNotFoundError):
            ResourceBuilder(graph, "mysql")

    def test_repr(self, graph):
        """Test the builder representation."""
        builder = graph.add_resource(ContainerResource(name="mysql"))

        assert repr(builder) == "ResourceBuilder(resource='mysql')"


class TestFluentChaining:
    """Test cases for fluent mutation methods."""

    def test_every_call_returns_same_builder(self, graph):
        """Test that chained calls return the same handle."""
        builder = graph.add_resource(ContainerResource(name="mysql"))

        result = (
            builder.with_annotation(ServiceBindingAnnotation(container_port=3306))
            .with_container_image("mysql")
            .with_environment("MYSQL_ROOT_PASSWORD", lambda: "pw")
            .with_manifest_publishing_callback(lambda context: None)
            .with_relation("other", RelationRole.REFERENCE)
        )

        assert result is builder

    def test_with_annotation_appends(self, graph):
        """Test that annotations land on the wrapped resource."""
        builder = graph.add_resource(ContainerResource(name="mysql"))
        annotation = ServiceBindingAnnotation(container_port=3306)

        builder.with_annotation(annotation)

        assert builder.resource.annotations == [annotation]

    def test_with_environment_literal(self, graph):
        """Test that literal values are wrapped in a factory."""
        builder = graph.add_resource(ContainerResource(name="mysql"))

        builder.with_environment("MODE", "standalone")

        annotation = builder.resource.find_annotation(EnvironmentAnnotation)
        assert annotation.name == "MODE"
        assert annotation.value_factory() == "standalone"

    def test_with_environment_factory_is_lazy(self, graph):
        """Test that callable values are not evaluated when attached."""
        calls = []
        builder = graph.add_resource(ContainerResource(name="mysql"))

        builder.with_environment("PASSWORD", lambda: calls.append(1) or "pw")

        assert calls == []
        assert builder.resource.environment()["PASSWORD"]() == "pw"

    def test_with_manifest_publishing_callback_replaces(self, graph):
        """Test that only the latest publishing callback is kept."""
        builder = graph.add_resource(ContainerResource(name="mysql"))

        def first(context):
            return None

        def second(context):
            return None

        builder.with_manifest_publishing_callback(first).with_manifest_publishing_callback(second)

        callbacks = builder.resource.annotations_of_type(ManifestPublishingCallbackAnnotation)
        assert len(callbacks) == 1
        assert builder.resource.publishing_callback is second

    def test_with_service_binding(self, graph):
        """Test binding creation through the builder."""
        builder = graph.add_resource(ContainerResource(name="dns"))

        builder.with_service_binding(ProtocolType.UDP, port=53)

        binding = builder.resource.service_bindings()["udp"]
        assert binding.protocol is ProtocolType.UDP
        assert binding.port == 53

    def test_with_container_image_replaces(self, graph):
        """Test that only one container image is kept."""
        builder = graph.add_resource(ContainerResource(name="mysql"))

        builder.with_container_image("mysql", "5.7").with_container_image("mysql", "8.0", registry="docker.io")

        images = builder.resource.annotations_of_type(ContainerImageAnnotation)
        assert [image.reference for image in images] == ["docker.io/mysql:8.0"]

    def test_with_relation_allows_forward_reference(self, graph):
        """Test that relation targets may be registered later."""
        builder = graph.add_resource(DatabaseResource(name="catalog"))

        builder.with_relation("mysql", RelationRole.PARENT)

        assert builder.resource.relations() == [RelationAnnotation(target="mysql", role=RelationRole.PARENT)]


class TestWithReference:
    """Test cases for with_reference."""

    def test_reference_adds_relation_and_environment(self, graph):
        """Test that a reference injects the target's connection string lazily."""
        orders = graph.add_resource(ConnectionResource(name="orders", connection_string="Server=orders"))
        api = graph.add_resource(ContainerResource(name="api"))

        api.with_reference(orders)

        resource = api.resource
        assert resource.relations(RelationRole.REFERENCE)[0].target == "orders"
        assert resource.environment()["ConnectionStrings__orders"]() == "Server=orders"

    def test_reference_by_name_is_resolved_at_evaluation(self, graph):
        """Test that a reference by name may precede the target's registration."""
        api = graph.add_resource(ContainerResource(name="api"))
        api.with_reference("orders")
        graph.add_resource(ConnectionResource(name="orders", connection_string="Server=orders"))

        assert api.resource.environment()["ConnectionStrings__orders"]() == "Server=orders"


class TestSealedBuilder:
    """Test cases for builder mutations after sealing."""

    def test_mutation_after_seal_raises(self, graph):
        """Test that a sealed graph rejects builder mutations."""
        builder = graph.add_resource(ContainerResource(name="mysql"))
        graph.seal()

        with pytest.raises(GraphSealedError):
            builder.with_environment("MODE", "x")

        assert builder.resource.annotations == []

    def test_reading_after_seal_is_allowed(self, graph):
        """Test that the wrapped resource remains readable."""
        builder = graph.add_resource(ContainerResource(name="mysql"))
        graph.seal()

        assert builder.resource.name == "mysql"

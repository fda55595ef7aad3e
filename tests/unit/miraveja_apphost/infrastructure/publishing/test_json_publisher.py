"""Unit tests for JsonManifestPublisher."""

import json
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from miraveja_apphost.application import AppHostSettings
from miraveja_apphost.domain import IManifestWriter, ManifestDocument, UnpublishableResourceError
from miraveja_apphost.domain.models import ContainerResource
from miraveja_apphost.infrastructure.publishing import JsonManifestPublisher
from miraveja_apphost.infrastructure.resources.mysql import add_database, add_mysql_container
from miraveja_apphost.infrastructure.testing import TestApplicationGraph


class TestJsonManifestPublisher:
    """Test cases for JsonManifestPublisher."""

    def test_publish_writes_manifest(self, tmp_path):
        """Test that the manifest is written as JSON."""
        graph = TestApplicationGraph()
        add_database(add_mysql_container(graph, "mysql"), "catalog")
        output_path = tmp_path / "manifest.json"

        document = JsonManifestPublisher(output_path).publish(graph)

        content = json.loads(output_path.read_text(encoding="utf-8"))
        assert content == {"resources": document.resources}
        assert list(content["resources"]) == ["mysql", "catalog"]

    def test_publish_creates_parent_directories(self, tmp_path):
        """Test that missing directories are created."""
        graph = TestApplicationGraph()
        add_mysql_container(graph, "mysql")
        output_path = tmp_path / "out" / "aspire" / "manifest.json"

        JsonManifestPublisher(str(output_path)).publish(graph)

        assert output_path.exists()
        assert not (output_path.parent / ".manifest.json.tmp").exists()

    def test_publish_uses_indent(self, tmp_path):
        """Test compact output."""
        graph = TestApplicationGraph()
        add_mysql_container(graph, "mysql")
        output_path = tmp_path / "manifest.json"

        settings = AppHostSettings(_env_file=None, manifest_indent=None)

        JsonManifestPublisher(output_path, settings=settings).publish(graph)

        assert output_path.read_text(encoding="utf-8") == '{"resources": {"mysql": {"type": "mysql.server.v0"}}}\n'

    def test_failed_publish_writes_nothing(self, tmp_path):
        """Test that no file is produced when rendering fails."""
        graph = TestApplicationGraph()
        graph.add_resource(ContainerResource(name="bare"))
        output_path = tmp_path / "manifest.json"

        with pytest.raises(UnpublishableResourceError):
            JsonManifestPublisher(output_path).publish(graph)

        assert not output_path.exists()

    def test_failed_publish_keeps_previous_manifest(self, tmp_path):
        """Test that an existing manifest survives a failed publish."""
        output_path = tmp_path / "manifest.json"
        output_path.write_text("previous", encoding="utf-8")
        graph = TestApplicationGraph()
        graph.add_resource(ContainerResource(name="bare"))

        with pytest.raises(UnpublishableResourceError):
            JsonManifestPublisher(output_path).publish(graph)

        assert output_path.read_text(encoding="utf-8") == "previous"

    def test_failed_write_removes_temporary_file(self, tmp_path):
        """Test that a failed replace leaves neither a temporary file nor a manifest."""
        graph = TestApplicationGraph()
        add_mysql_container(graph, "mysql")
        output_path = tmp_path / "manifest.json"

        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                JsonManifestPublisher(output_path).publish(graph)

        assert not (tmp_path / ".manifest.json.tmp").exists()
        assert not output_path.exists()

    def test_custom_writer(self, tmp_path):
        """Test that an injected writer is used."""
        writer = Mock(spec=IManifestWriter)
        writer.publish.return_value = ManifestDocument(resources={"x": {"type": "x.v0"}})
        graph = TestApplicationGraph()
        output_path = tmp_path / "manifest.json"

        JsonManifestPublisher(output_path, writer=writer).publish(graph)

        writer.publish.assert_called_once_with(graph)
        assert json.loads(output_path.read_text(encoding="utf-8")) == {"resources": {"x": {"type": "x.v0"}}}

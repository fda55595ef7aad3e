from pathlib import Path
from typing import Optional, Union

import structlog

from miraveja_apphost.application import AppHostSettings, ManifestWriter, get_settings
from miraveja_apphost.domain import IApplicationGraph, IManifestWriter, ManifestDocument

logger = structlog.get_logger()


class JsonManifestPublisher:
    """Publishes an application graph as a JSON manifest file.

    The manifest is rendered in full before the file is touched, so a failed
    publish never leaves a partial manifest behind.

    Attributes:
        output_path: Destination of the manifest file.
        indent: JSON indentation, or None for a compact document.
    """

    def __init__(
        self,
        output_path: Union[str, Path],
        writer: Optional[IManifestWriter] = None,
        settings: Optional[AppHostSettings] = None,
    ) -> None:
        """Initialize the publisher.

        Args:
            output_path: Destination of the manifest file.
            writer: Manifest writer to render with. Defaults to ``ManifestWriter``.
            settings: Settings providing the JSON indentation. Defaults to the cached settings.
        """
        self.output_path = Path(output_path)
        self.indent = (settings if settings is not None else get_settings()).manifest_indent
        self._writer: IManifestWriter = writer if writer is not None else ManifestWriter()

    def publish(self, graph: IApplicationGraph) -> ManifestDocument:
        """Render the graph and write it to ``output_path``.

        Returns:
            The published manifest document.

        Raises:
            AppHostException: If the manifest cannot be rendered. No file is written.
        """
        document = self._writer.publish(graph)
        content = document.to_json(indent=self.indent)

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        temporary_path = self.output_path.with_name(f".{self.output_path.name}.tmp")
        try:
            temporary_path.write_text(content + "\n", encoding="utf-8")
            temporary_path.replace(self.output_path)
        except OSError as e:
            temporary_path.unlink(missing_ok=True)
            logger.warning("manifest_write_failed", path=str(self.output_path), error=str(e))
            raise

        logger.info("manifest_written", path=str(self.output_path), resources=len(document.resources))
        return document

from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException

from miraveja_apphost.application import ManifestWriter
from miraveja_apphost.domain import AppHostException, IApplicationGraph, IManifestWriter


def create_manifest_router(
    graph: IApplicationGraph,
    writer: Optional[IManifestWriter] = None,
    path: str = "/manifest",
) -> APIRouter:
    """Create a FastAPI router serving the manifest of an application graph.

    The first request publishes (and therefore seals) the graph. Later
    requests re-publish the sealed graph.

    Args:
        graph: The application graph to serve.
        writer: Manifest writer to render with. Defaults to ``ManifestWriter``.
        path: Route path of the manifest endpoint.

    Returns:
        A router that can be mounted with ``app.include_router``.

    Example:
        >>> app = FastAPI()
        >>> app.include_router(create_manifest_router(graph))
        >>> # GET /manifest -> {"resources": {...}}
    """
    manifest_writer: IManifestWriter = writer if writer is not None else ManifestWriter()
    router = APIRouter()

    @router.get(path)
    def get_manifest() -> Dict[str, Any]:
        """Publish the graph and return the manifest document."""
        try:
            document = manifest_writer.publish(graph)
        except AppHostException as e:
            raise HTTPException(status_code=500, detail=str(e)) from e
        return {"resources": document.resources}

    return router

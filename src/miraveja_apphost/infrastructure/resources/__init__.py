"""
Resource integrations module.

Typed "add" operations registering concrete resources and their manifest
publishing callbacks on an application graph.
"""

from .containers import add_container
from .dapr import add_dapr_component, add_dapr_sidecar, with_dapr_sidecar
from .mysql import add_database, add_mysql_connection, add_mysql_container
from .projects import add_project

__all__ = [
    "add_container",
    "add_mysql_container",
    "add_mysql_connection",
    "add_database",
    "add_project",
    "add_dapr_component",
    "add_dapr_sidecar",
    "with_dapr_sidecar",
]

"""
Infrastructure layer - External integrations.

This layer contains the technology integrations built on the graph
(containers, MySQL, projects, Dapr), manifest publishers and tooling.
It depends on both Application and Domain layers.

The FastAPI integration is imported on demand since FastAPI is optional.
"""

from . import logging_config, publishing, resources, testing

__all__ = [
    "logging_config",
    "publishing",
    "resources",
    "testing",
]

"""
Publishing module.

Hands rendered manifests off to their consumers.
"""

from .json_publisher import JsonManifestPublisher

__all__ = [
    "JsonManifestPublisher",
]

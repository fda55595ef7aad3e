"""
Testing utilities module.

Provides helpers for testing application definitions built on miraveja-apphost.
"""

from .utilities import TestApplicationGraph, create_test_graph

__all__ = [
    "TestApplicationGraph",
    "create_test_graph",
]

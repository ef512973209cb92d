"""Graph module holding the import graph recorded during traversal."""

from .model import ImportGraph

__all__ = ["ImportGraph"]

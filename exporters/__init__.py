"""Exporters for turning traversal results into output text."""

from .json_exporter import to_json
from .tree_exporter import files_to_tree, project_tree
from .weave_exporter import weave

__all__ = ["to_json", "files_to_tree", "project_tree", "weave"]

"""JSON exporter for import graphs (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List

from graph.model import ImportGraph
from scanner.resolver import get_relative_path


def to_json(
    graph: ImportGraph,
    base: Path,
    indent: int = 2,
    include_missing: bool = True,
    include_external: bool = True,
) -> str:
    """
    Convert an import graph to JSON format.

    Args:
        graph: The import graph to export.
        base: Base path for relative path display.
        indent: JSON indentation level.
        include_missing: If True, include unresolved local references.
        include_external: If True, include external (package) references.

    Returns:
        JSON string with `nodes` (path and depth, in discovery order),
        `edges`, and optionally `missing` and `external`.
    """
    nodes: List[Dict[str, Any]] = [
        {"path": _get_path_str(node, base), "depth": graph.depth_of(node)}
        for node in graph.nodes
    ]

    edges: List[Dict[str, str]] = [
        {"source": _get_path_str(source, base), "target": _get_path_str(target, base)}
        for source, target in graph.iter_edges()
    ]

    data: Dict[str, Any] = {
        "nodes": nodes,
        "edges": edges,
    }

    if include_missing:
        data["missing"] = [
            {"source": _get_path_str(source, base), "reference": reference}
            for source, reference in graph.iter_missing()
        ]

    if include_external:
        data["external"] = [
            {"source": _get_path_str(source, base), "reference": reference}
            for source, reference in graph.iter_external()
        ]

    return json.dumps(data, indent=indent)


def _get_path_str(path: Path, base: Path) -> str:
    """Get the string representation of a path."""
    return str(get_relative_path(path, base)).replace("\\", "/")

"""Graph data model for storing import relationships found during traversal."""

from pathlib import Path
from typing import Dict, Iterator, List, Set, Tuple


class ImportGraph:
    """
    A directed graph of followed imports.

    Nodes are resolved file paths, and edges represent 'importer -> imported'
    relationships. Local references that could not be resolved and external
    (package) references are tracked separately, keyed by the importing file.
    """

    def __init__(self):
        self._nodes: Dict[Path, int] = {}  # node -> BFS depth at discovery
        self._edges: Dict[Path, Set[Path]] = {}
        self._missing: Dict[Path, Set[str]] = {}  # source -> unresolved local references
        self._external: Dict[Path, Set[str]] = {}  # source -> package references

    @property
    def nodes(self) -> List[Path]:
        """Return all nodes in discovery order."""
        return list(self._nodes)

    @property
    def edges(self) -> Dict[Path, Set[Path]]:
        """Return adjacency list representation of edges."""
        return {k: v.copy() for k, v in self._edges.items()}

    @property
    def missing(self) -> Dict[Path, Set[str]]:
        """Return unresolved local references (source -> set of reference strings)."""
        return {k: v.copy() for k, v in self._missing.items()}

    @property
    def external(self) -> Dict[Path, Set[str]]:
        """Return external references (source -> set of package names)."""
        return {k: v.copy() for k, v in self._external.items()}

    def add_node(self, node: Path, depth: int = 0) -> None:
        """Add a node, keeping the depth it was first seen at."""
        self._nodes.setdefault(node, depth)

    def depth_of(self, node: Path) -> int:
        """Return the BFS depth at which a node was discovered."""
        return self._nodes[node]

    def add_edge(self, source: Path, target: Path) -> None:
        """
        Add a directed edge from source to target.

        Both endpoints must already be nodes, or are added at depth 0 and
        depth+1 of the source respectively.
        """
        self.add_node(source)
        self.add_node(target, self._nodes[source] + 1)
        self._edges.setdefault(source, set()).add(target)

    def add_missing(self, source: Path, reference: str) -> None:
        """Record a local reference that did not resolve to a file."""
        self.add_node(source)
        self._missing.setdefault(source, set()).add(reference)

    def add_external(self, source: Path, reference: str) -> None:
        """Record a reference classified as an installed package."""
        self.add_node(source)
        self._external.setdefault(source, set()).add(reference)

    def get_targets(self, source: Path) -> Set[Path]:
        """Get all files that the source file imports."""
        return self._edges.get(source, set()).copy()

    def get_sources(self, target: Path) -> Set[Path]:
        """Get all files that import the target file."""
        return {source for source, targets in self._edges.items() if target in targets}

    def get_missing(self, source: Path) -> Set[str]:
        return self._missing.get(source, set()).copy()

    def get_external(self, source: Path) -> Set[str]:
        return self._external.get(source, set()).copy()

    def iter_edges(self) -> Iterator[Tuple[Path, Path]]:
        """Iterate over all edges as (source, target) tuples."""
        for source, targets in self._edges.items():
            for target in sorted(targets):
                yield source, target

    def iter_missing(self) -> Iterator[Tuple[Path, str]]:
        """Iterate over unresolved references as (source, reference) tuples."""
        for source, references in self._missing.items():
            for reference in sorted(references):
                yield source, reference

    def iter_external(self) -> Iterator[Tuple[Path, str]]:
        """Iterate over external references as (source, reference) tuples."""
        for source, references in self._external.items():
            for reference in sorted(references):
                yield source, reference

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node: Path) -> bool:
        """Check if a node is in the graph."""
        return node in self._nodes

    def __repr__(self) -> str:
        missing_count = sum(len(m) for m in self._missing.values())
        external_count = sum(len(e) for e in self._external.values())
        edge_count = sum(len(t) for t in self._edges.values())
        return (
            f"ImportGraph(nodes={len(self._nodes)}, edges={edge_count}, "
            f"missing={missing_count}, external={external_count})"
        )

"""Breadth-first import following from one or more entry files."""

import logging
from collections import deque
from pathlib import Path
from typing import Callable, Deque, Iterable, List, Optional, Set, Tuple

from graph.model import ImportGraph
from .classifier import is_local_reference
from .config import DEFAULT_CONFIG, ResolverConfig
from .parser import extract_references
from .resolver import PathLike, find_project_root, normalize_path, resolve_reference

logger = logging.getLogger(__name__)

# Called with (file, depth) each time a file is added to the result list
ProgressCallback = Callable[[Path, int], None]


class TraversalSession:
    """
    Import-following state shared by every entry file of one run.

    The session owns the visited set, so a file reached from one entry is
    never read again when a later entry reaches it too. A file is marked
    visited as soon as it is queued, which keeps each file in the queue at
    most once.

    Per-file problems (missing entries, unreadable files) never stop the
    traversal: they are logged, recorded in `warnings`, and the file is
    skipped.
    """

    def __init__(
        self,
        max_depth: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
        config: Optional[ResolverConfig] = None,
    ):
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth must be a non-negative integer, got {max_depth}")

        self.max_depth = max_depth
        self.config = config or DEFAULT_CONFIG
        self.visited: Set[Path] = set()
        self.graph = ImportGraph()
        self.warnings: List[str] = []
        self._on_progress = on_progress

    def follow_all(self, entries: Iterable[PathLike]) -> List[Path]:
        """
        Follow imports from each entry in order.

        Returns:
            The concatenated per-entry results, de-duplicated with the first
            occurrence kept.
        """
        all_files: List[Path] = []
        for entry in entries:
            all_files.extend(self.follow(entry))
        return list(dict.fromkeys(all_files))

    def follow(self, entry: PathLike) -> List[Path]:
        """
        Follow imports breadth-first from a single entry file.

        Args:
            entry: Path to the entry file.

        Returns:
            Files processed for this entry, in discovery order, starting with
            the entry itself. Empty if the entry is invalid or was already
            visited through an earlier entry.
        """
        entry_path = normalize_path(entry)

        try:
            exists, is_file = entry_path.exists(), entry_path.is_file()
        except OSError as e:
            self._warn(f"Cannot access entry file {entry}: {e}, skipping")
            return []

        if not exists:
            self._warn(f"Entry file not found: {entry}, skipping")
            return []
        if not is_file:
            self._warn(f"{entry} is not a valid file, skipping")
            return []
        if entry_path in self.visited:
            return []

        project_root = find_project_root(entry_path, self.config)
        logger.debug("Project root for %s: %s", entry_path, project_root)

        files: List[Path] = []
        queue: Deque[Tuple[Path, int]] = deque()
        self._enqueue(queue, entry_path, 0)

        while queue:
            current, depth = queue.popleft()

            try:
                if not current.is_file():
                    continue
            except OSError as e:
                self._warn(f"Cannot access {current}: {e}")
                continue

            files.append(current)
            self._report(current, depth)

            if self.max_depth is not None and depth >= self.max_depth:
                continue

            try:
                text = current.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                self._warn(f"Cannot read {current}: {e}")
                continue

            for child in self._expand(current, text, project_root):
                self._enqueue(queue, child, depth + 1)

        return files

    def _expand(self, current: Path, text: str, project_root: Optional[Path]) -> List[Path]:
        """Resolve the local references of a file to not-yet-visited files."""
        children: List[Path] = []

        for reference in extract_references(text):
            if not is_local_reference(reference, self.config):
                self.graph.add_external(current, reference)
                continue

            try:
                resolved = resolve_reference(reference, current, project_root, self.config)
            except OSError as e:
                self._warn(f"Cannot resolve '{reference}' from {current}: {e}")
                continue

            if resolved is None:
                logger.debug("Unresolved reference '%s' in %s", reference, current)
                self.graph.add_missing(current, reference)
                continue

            self.graph.add_edge(current, resolved)
            if resolved not in self.visited and resolved not in children:
                children.append(resolved)

        return children

    def _enqueue(self, queue: Deque[Tuple[Path, int]], path: Path, depth: int) -> None:
        self.visited.add(path)
        self.graph.add_node(path, depth)
        queue.append((path, depth))

    def _report(self, path: Path, depth: int) -> None:
        logger.debug("Processing (depth %d): %s", depth, path)
        if self._on_progress is not None:
            self._on_progress(path, depth)

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


def follow_imports(
    entries: Iterable[PathLike],
    max_depth: Optional[int] = None,
    on_progress: Optional[ProgressCallback] = None,
    config: Optional[ResolverConfig] = None,
) -> List[Path]:
    """
    Collect the files reachable from entry files through local imports.

    Args:
        entries: Entry files, processed in order.
        max_depth: Maximum number of import hops from an entry. None means
            unlimited; 0 returns only the entries.
        on_progress: Optional callback receiving (file, depth) per file.
        config: Resolver conventions (alias, marker file, extensions).

    Returns:
        Ordered, de-duplicated list of normalized file paths.
    """
    session = TraversalSession(max_depth=max_depth, on_progress=on_progress, config=config)
    return session.follow_all(entries)

"""Path resolution utilities for mapping module references to actual files."""

import os
from pathlib import Path
from typing import Iterator, Optional, Union

from .config import DEFAULT_CONFIG, ResolverConfig


PathLike = Union[str, Path]


def normalize_path(path: PathLike) -> Path:
    """
    Return the absolute, normalized form of a path.

    Symlinks are left alone; `..` segments are collapsed lexically. This is
    the identity used for visited-file bookkeeping.
    """
    return Path(os.path.abspath(path))


def find_project_root(
    file_path: PathLike,
    config: ResolverConfig = DEFAULT_CONFIG,
) -> Optional[Path]:
    """
    Find the nearest ancestor directory of a file holding the project marker.

    Starts at the file's own directory and walks up at most
    `config.max_root_search_levels` levels.

    Args:
        file_path: A file inside the project.
        config: Resolver conventions (marker name and search bound).

    Returns:
        The first directory containing the marker file, or None.
    """
    current = normalize_path(file_path).parent

    for _ in range(config.max_root_search_levels):
        if (current / config.marker_file_name).exists():
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def resolve_reference(
    reference: str,
    referencing_file: PathLike,
    project_root: Optional[PathLike] = None,
    config: ResolverConfig = DEFAULT_CONFIG,
) -> Optional[Path]:
    """
    Resolve a local module reference to an existing file.

    Resolution order:
    1. Relative to the referencing file's directory (absolute references
       are used as-is).
    2. Alias references are instead placed under
       `<project_root>/<alias_target_subdir>`.
    3. The candidate itself, then the candidate with each configured
       extension appended. The first regular file wins, so the extension
       order decides ties such as `x.js` next to `x.ts`.
    4. `<candidate>/index<ext>` for each configured extension.

    Args:
        reference: The module reference as written in the source.
        referencing_file: The file containing the reference.
        project_root: Directory anchoring alias references, if known.
        config: Resolver conventions.

    Returns:
        Normalized path of the resolved file, or None if nothing matches.

    Raises:
        ValueError: If `reference` or `referencing_file` is empty.
    """
    if not referencing_file:
        raise ValueError("Referencing file path is required to resolve a reference")
    if not reference:
        raise ValueError("Reference is required to resolve a reference")

    if os.path.isabs(reference):
        candidate = reference
    else:
        candidate = os.path.join(normalize_path(referencing_file).parent, reference)

    if reference.startswith(config.alias_prefix):
        if project_root is None:
            return None
        candidate = os.path.join(
            project_root,
            config.alias_target_subdir,
            reference[len(config.alias_prefix):],
        )

    candidate = os.path.normpath(candidate)

    for path in _iter_candidates(candidate, config):
        if path.is_file():
            return path

    return None


def _iter_candidates(candidate: str, config: ResolverConfig) -> Iterator[Path]:
    """Yield probe paths for a candidate in resolution order."""
    yield normalize_path(candidate)
    for ext in config.extensions:
        yield normalize_path(candidate + ext)
    for ext in config.extensions:
        yield normalize_path(os.path.join(candidate, "index" + ext))


def get_relative_path(file_path: Path, base: Path) -> Path:
    """
    Get the path relative to base.

    Args:
        file_path: The file path to make relative.
        base: The base directory.

    Returns:
        Relative path, or the original path if it can't be made relative.
    """
    try:
        return normalize_path(file_path).relative_to(normalize_path(base))
    except ValueError:
        return file_path

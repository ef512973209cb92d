"""ASCII tree rendering for file lists and project directories."""

import fnmatch
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from scanner.config import DEFAULT_CONFIG, ResolverConfig
from scanner.resolver import find_project_root, get_relative_path

logger = logging.getLogger(__name__)

# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "

# Names never shown in the project tree (fnmatch patterns)
PROJECT_TREE_IGNORE = [
    "node_modules", ".git", ".svn", ".hg",
    "dist", "build", "out", ".next", ".nuxt",
    ".cache", ".temp", ".tmp", "tmp",
    "coverage", ".nyc_output", ".coverage",
    "logs", "*.log",
    ".env", ".env.*",
    ".DS_Store", "Thumbs.db",
    "*.swp", "*.swo",
    ".vscode", ".idea", "*.iml",
    ".eslintcache", "*.tsbuildinfo",
    "npm-debug.log*", "yarn-error.log*", "lerna-debug.log*", ".pnpm-debug.log*",
]

PROJECT_TREE_DEPTH = 3

# Directories within this many levels are shown even when empty
_ALWAYS_SHOWN_LEVELS = 2

Tree = Dict[str, "Tree"]


def _chars(style: str) -> Tuple[str, str, str, str]:
    if style == "ascii":
        return ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE
    return UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE


def render_tree(tree: Tree, style: str = "tree") -> str:
    """Render a nested dict tree, one entry per line, in dict order."""
    lines: List[str] = []
    _render_node(tree, "", _chars(style), lines)
    return "\n".join(lines) + "\n" if lines else ""


def _render_node(
    node: Tree,
    prefix: str,
    chars: Tuple[str, str, str, str],
    lines: List[str],
) -> None:
    branch, last, vertical, space = chars
    entries = list(node.items())

    for i, (name, children) in enumerate(entries):
        is_last = i == len(entries) - 1
        lines.append(f"{prefix}{last if is_last else branch}{name}")
        if children:
            _render_node(children, prefix + (space if is_last else vertical), chars, lines)


def files_to_tree(files: Sequence[Path], base: Path, style: str = "tree") -> str:
    """
    Render a list of files as a directory tree relative to base.

    Args:
        files: Files to show.
        base: Directory the displayed paths are relative to.
        style: "tree" (Unicode) or "ascii" (pure ASCII).

    Returns:
        Tree string, one line per path component.
    """
    tree: Tree = {}
    for file_path in sorted(files):
        current = tree
        for part in get_relative_path(file_path, base).parts:
            current = current.setdefault(part, {})
    return render_tree(tree, style)


def should_ignore(name: str, patterns: Sequence[str] = PROJECT_TREE_IGNORE) -> bool:
    """Check if a file or directory name matches any ignore pattern."""
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)


def build_directory_tree(
    directory: Path,
    max_depth: int = PROJECT_TREE_DEPTH,
    current_depth: int = 0,
) -> Tree:
    """
    Build a nested dict of a directory's contents, down to max_depth levels.

    Directory keys carry a trailing '/'. Subdirectories deeper than the
    first levels are only kept when they have visible content.
    """
    if current_depth >= max_depth:
        return {}

    tree: Tree = {}
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.debug("Cannot list %s: %s", directory, e)
        return tree

    for entry in entries:
        if should_ignore(entry.name):
            continue
        try:
            if entry.is_dir():
                subtree = build_directory_tree(entry, max_depth, current_depth + 1)
                if subtree or current_depth < _ALWAYS_SHOWN_LEVELS:
                    tree[entry.name + "/"] = subtree
            else:
                tree[entry.name] = {}
        except OSError as e:
            logger.debug("Cannot access %s: %s", entry, e)

    return tree


def project_tree(
    base_dir: Path,
    config: ResolverConfig = DEFAULT_CONFIG,
    style: str = "tree",
    max_depth: int = PROJECT_TREE_DEPTH,
) -> Tuple[str, Path]:
    """
    Render the tree of the project containing base_dir.

    The project root is the nearest ancestor (base_dir included) holding the
    project marker file; base_dir itself is used when none is found.

    Returns:
        (tree string, directory the tree was rendered from)
    """
    root: Optional[Path] = find_project_root(base_dir / "__probe__", config)
    if root is None:
        root = base_dir
    return render_tree(build_directory_tree(root, max_depth), style), root

"""File discovery utilities for directory-scan mode."""

import os
import re
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Set


DEFAULT_EXCLUDE_DIRS: Set[str] = {"node_modules"}


def iter_files(
    root: Path,
    exclude_dirs: Optional[Set[str]] = None,
) -> Iterator[Path]:
    """
    Iterate over every regular file in a directory tree.

    Args:
        root: Root directory to scan.
        exclude_dirs: Directory names never entered.
                     If None, uses DEFAULT_EXCLUDE_DIRS.
                     Symlinked directories are never entered either.

    Yields:
        Absolute Path objects, sorted within each directory.
    """
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    root = Path(os.path.abspath(root))

    def _walk(current: Path) -> Iterator[Path]:
        try:
            entries = sorted(current.iterdir())
        except PermissionError:
            return

        for entry in entries:
            if entry.is_dir():
                # Never descend through symlinked directories
                if entry.name in exclude_dirs or entry.is_symlink():
                    continue
                yield from _walk(entry)
            elif entry.is_file():
                yield entry

    yield from _walk(root)


def filter_files(
    files: Sequence[Path],
    root: Path,
    pattern: Optional[str] = None,
    ignore_pattern: Optional[str] = None,
) -> List[Path]:
    """
    Apply include/ignore regular expressions to a file list.

    `pattern` is searched in the file's basename. `ignore_pattern` drops a
    file when it is found in either the path relative to `root` or the
    absolute path.

    Raises:
        re.error: If either pattern is not a valid regular expression.
    """
    result = list(files)

    if pattern:
        regex = re.compile(pattern)
        result = [f for f in result if regex.search(f.name)]

    if ignore_pattern:
        ignore = re.compile(ignore_pattern)
        kept = []
        for f in result:
            relative = os.path.relpath(f, root)
            if not ignore.search(relative) and not ignore.search(str(f)):
                kept.append(f)
        result = kept

    return result


def find_common_base_directory(files: Sequence[Path]) -> Path:
    """
    Find the deepest directory shared by all files.

    A single file yields its own directory; an empty list yields the
    current working directory.
    """
    unique = list(dict.fromkeys(os.path.abspath(f) for f in files))
    if not unique:
        return Path.cwd()
    if len(unique) == 1:
        return Path(unique[0]).parent

    try:
        common = os.path.commonpath(unique)
    except ValueError:
        # Paths on different drives
        return Path.cwd()
    return Path(common)

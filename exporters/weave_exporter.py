"""Weaves file contents, trees and a prompt into a single text document."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from processing.minifier import compression_stats, CompressionStats, minify_content
from scanner.resolver import get_relative_path

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 50


@dataclass
class WeaveResult:
    """The woven document plus what went into it."""

    text: str
    processed: List[Path]
    original_size: int = 0
    minified_size: int = 0

    @property
    def stats(self) -> CompressionStats:
        return compression_stats(self.original_size, self.minified_size)


def section(title: str) -> str:
    """Return a section banner."""
    return f"\n{SEPARATOR}\n{title}\n{SEPARATOR}\n\n"


def weave(
    files: Sequence[Path],
    base: Path,
    headers: bool = True,
    minify_level: Optional[str] = "aggressive",
    project_tree: Optional[str] = None,
    processed_tree: Optional[str] = None,
    prompt: Optional[str] = None,
    on_file: Optional[Callable[[Path], None]] = None,
) -> WeaveResult:
    """
    Concatenate files into one document.

    Args:
        files: Files in output order.
        base: Directory the header paths are relative to.
        headers: If True, precede each file with a "File: <path>" banner.
        minify_level: Minify level per file, or None to keep content as-is.
        project_tree: Rendered project tree; adds a "Project Structure" section.
        processed_tree: Rendered tree of the processed files; shown after the
            project tree when it differs and fewer than 50 files were woven.
        prompt: Optional text appended in a "Prompt" section.
        on_file: Optional callback invoked after each file is woven.

    Returns:
        WeaveResult with the stripped document text. Unreadable files are
        skipped and left out of `processed`.
    """
    parts: List[str] = []
    processed: List[Path] = []
    original_size = 0
    minified_size = 0

    for file_path in files:
        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Skipping unreadable file %s: %s", file_path, e)
            continue

        if minify_level:
            processed_content = minify_content(content, file_path, minify_level)
            original_size += len(content)
            minified_size += len(processed_content)
        else:
            processed_content = content

        if headers:
            relative = str(get_relative_path(file_path, base)).replace("\\", "/")
            parts.append(f"\n{SEPARATOR}\nFile: {relative}\n{SEPARATOR}\n\n")
        parts.append(processed_content + "\n")

        processed.append(file_path)
        if on_file is not None:
            on_file(file_path)

    if project_tree is not None:
        parts.append(section("Project Structure:"))
        parts.append(project_tree)

        if processed_tree is not None and processed_tree != project_tree and len(files) < 50:
            parts.append(section("Processed Files:"))
            parts.append(processed_tree)

    if prompt:
        parts.append(section("Prompt:"))
        parts.append(prompt + "\n")

    return WeaveResult(
        text="".join(parts).strip(),
        processed=processed,
        original_size=original_size,
        minified_size=minified_size,
    )

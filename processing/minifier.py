"""Per-extension content minification applied before files are woven together."""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

MINIFY_LEVELS = ("light", "medium", "aggressive")

JS_EXTENSIONS = {".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"}
CSS_EXTENSIONS = {".css", ".scss", ".sass", ".less"}
MARKUP_EXTENSIONS = {".html", ".htm", ".xml", ".svg"}

# Extensions safe for whitespace collapsing around punctuation
AGGRESSIVE_EXTENSIONS = {".js", ".jsx", ".ts", ".tsx", ".css", ".html"}

# `//` not preceded by ':' so URLs such as http://host survive
_LINE_COMMENT = re.compile(r"(?<!:)//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_MARKUP_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION_SPACE = re.compile(r"\s*([{}();,])\s*")
_SEMICOLON_BEFORE_BRACE = re.compile(r";\s*}")


@dataclass(frozen=True)
class CompressionStats:
    original_size: int
    minified_size: int

    @property
    def reduction(self) -> int:
        return self.original_size - self.minified_size

    @property
    def percentage(self) -> float:
        """Reduction as a percentage of the original size, one decimal."""
        if self.original_size <= 0:
            return 0.0
        return round(self.reduction / self.original_size * 100, 1)


def compression_stats(original_size: int, minified_size: int) -> CompressionStats:
    return CompressionStats(original_size=original_size, minified_size=minified_size)


def minify_content(
    content: str,
    file_path: Union[str, Path],
    level: str = "aggressive",
) -> str:
    """
    Minify file content according to its extension and a minify level.

    Comments are removed first (JS/TS, CSS-like and markup files; JSON is
    re-serialized compactly), then the level is applied:
    - light: drop blank lines.
    - medium: strip every line and drop blank lines.
    - aggressive: medium, then collapse whitespace around punctuation for
      JS/TS, CSS and HTML.

    Unknown levels behave like medium.
    """
    extension = Path(file_path).suffix.lower()
    minified = _strip_comments(content, extension)

    if level == "light":
        minified = "\n".join(line for line in minified.split("\n") if line.strip())
    elif level == "aggressive" and extension in AGGRESSIVE_EXTENSIONS:
        minified = _collapse(_basic_minify(minified))
    else:
        minified = _basic_minify(minified)

    logger.debug("Minified %s (%s): %d -> %d chars", file_path, level, len(content), len(minified))
    return minified


def _strip_comments(content: str, extension: str) -> str:
    if extension in JS_EXTENSIONS:
        content = _LINE_COMMENT.sub("", content)
        return _BLOCK_COMMENT.sub("", content)
    if extension in CSS_EXTENSIONS:
        return _BLOCK_COMMENT.sub("", content)
    if extension in MARKUP_EXTENSIONS:
        return _MARKUP_COMMENT.sub("", content)
    if extension == ".json":
        try:
            return json.dumps(json.loads(content), separators=(",", ":"), ensure_ascii=False)
        except json.JSONDecodeError:
            return content
    return content


def _basic_minify(text: str) -> str:
    """Strip each line and drop the empty ones."""
    return "\n".join(stripped for stripped in (line.strip() for line in text.split("\n")) if stripped)


def _collapse(text: str) -> str:
    text = _WHITESPACE.sub(" ", text)
    text = _PUNCTUATION_SPACE.sub(r"\1", text)
    text = _SEMICOLON_BEFORE_BRACE.sub("}", text)
    return text.strip()

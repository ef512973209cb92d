"""Heuristic extraction of module references from JavaScript/TypeScript source text."""

import re
from typing import Dict, Iterable, List, Tuple


# Quoted module reference, accepting ', " and ` as delimiters
_SOURCE = r"""['"`]([^'"`]+)['"`]"""

# One binding in an import clause: { a, b }, * as ns, or a default name
_BINDING = r"(?:\{[^}]*\}|\*\s+as\s+\w+|\w+)"

# Markers that open a comment line; such lines are never scanned
COMMENT_PREFIXES = ("//", "/*", "*")

# Patterns applied to each trimmed, non-comment line. Order is the order in
# which references found on the same line are reported.
LINE_PATTERNS: List[Tuple[str, re.Pattern[str]]] = [
    ("import", re.compile(
        rf"import\s+(?:{_BINDING}(?:\s*,\s*{_BINDING})*\s+)?from\s+{_SOURCE}"
    )),
    ("import-type", re.compile(rf"import\s+type\s+.*?\s+from\s+{_SOURCE}")),
    ("require-assign", re.compile(
        rf"(?:const|let|var)\s+(?:\{{[^}}]*\}}|\w+|\[[^\]]*\])\s*=\s*require\s*\(\s*{_SOURCE}\s*\)"
    )),
    ("require", re.compile(rf"(?:^|[^=\w])require\s*\(\s*{_SOURCE}\s*\)")),
    ("dynamic-import", re.compile(rf"import\s*\(\s*{_SOURCE}\s*\)")),
    ("export-named", re.compile(rf"export\s+\{{[^}}]*\}}\s+from\s+{_SOURCE}")),
    ("export-type", re.compile(rf"export\s+type\s+\{{[^}}]*\}}\s+from\s+{_SOURCE}")),
    ("export-all", re.compile(rf"export\s+\*\s+from\s+{_SOURCE}")),
    ("export-all-as", re.compile(rf"export\s+\*\s+as\s+\w+\s+from\s+{_SOURCE}")),
    ("export-default", re.compile(
        rf"export\s+\{{\s*default\s*(?:,\s*[^}}]*)?\}}\s+from\s+{_SOURCE}"
    )),
    ("export-default-as", re.compile(
        rf"export\s+\{{\s*default\s+as\s+\w+\s*(?:,\s*[^}}]*)?\}}\s+from\s+{_SOURCE}"
    )),
]

# Bare `import 'x'`. Only tried on lines without a " from " keyword so that a
# binding import is never read as a side-effect import.
SIDE_EFFECT_PATTERN: re.Pattern[str] = re.compile(rf"import\s+{_SOURCE}")

# Patterns applied to the whole text; these recover forms spread over
# several lines, which the line pass cannot see.
TEXT_PATTERNS: List[Tuple[str, re.Pattern[str]]] = [
    ("import-multiline", re.compile(rf"import\s*\{{[^}}]*\}}\s*from\s*{_SOURCE}")),
    ("require-destructure-multiline", re.compile(
        rf"(?:const|let|var)\s*\{{[^}}]*\}}\s*=\s*require\s*\(\s*{_SOURCE}\s*\)"
    )),
    ("import-default-named-multiline", re.compile(
        rf"import\s+\w+\s*,\s*\{{[^}}]*\}}\s*from\s*{_SOURCE}"
    )),
    ("export-multiline", re.compile(rf"export\s*\{{[^}}]*\}}\s*from\s*{_SOURCE}")),
    ("export-type-multiline", re.compile(rf"export\s+type\s*\{{[^}}]*\}}\s*from\s*{_SOURCE}")),
]


def is_comment_line(stripped: str) -> bool:
    """Check if a stripped line starts with a comment marker."""
    return stripped.startswith(COMMENT_PREFIXES)


def extract_references(text: str) -> List[str]:
    """
    Extract the distinct module references found in source text.

    Runs a line-by-line pass (skipping blank and comment lines) followed by
    whole-text scans for multi-line forms.

    Args:
        text: Raw file content.

    Returns:
        Reference strings in first-seen order, without duplicates. Empty if
        the text holds no recognizable references.
    """
    seen: Dict[str, None] = {}
    code_lines: List[str] = []

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or is_comment_line(stripped):
            continue
        code_lines.append(line)
        _collect(seen, _scan_line(stripped))

    code = "\n".join(code_lines)
    for _, pattern in TEXT_PATTERNS:
        _collect(seen, (m.group(1) for m in pattern.finditer(code)))

    return list(seen)


def _scan_line(stripped: str) -> Iterable[str]:
    """Yield references from a single trimmed line."""
    for _, pattern in LINE_PATTERNS:
        for match in pattern.finditer(stripped):
            yield match.group(1)

    if " from " not in stripped:
        for match in SIDE_EFFECT_PATTERN.finditer(stripped):
            yield match.group(1)


def _collect(seen: Dict[str, None], references: Iterable[str]) -> None:
    for reference in references:
        seen.setdefault(reference, None)

#!/usr/bin/env python3
"""
FileWeaver CLI

Weaves source files together into a single text file, either by scanning a
directory or by following local imports from one or more entry files.
"""

import argparse
import functools
import logging
import os
import re
import sys
from pathlib import Path
from typing import List, Optional

from exporters import files_to_tree, project_tree, to_json, weave
from processing.minifier import MINIFY_LEVELS
from scanner.builder import TraversalSession
from scanner.config import DEFAULT_CONFIG, ConfigError, load_config
from scanner.discovery import filter_files, find_common_base_directory, iter_files

__version__ = "1.4.1"

logger = logging.getLogger("fileweaver")


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {number}")
    return number


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="fileweaver",
        description="Weave files together, by directory scan or by following imports.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fileweaver                               # Weave every file under the current directory
  fileweaver -d src -r "\\.tsx?$"           # Only TypeScript files under src/
  fileweaver -d . -ir "test|fixtures"      # Skip tests and fixtures
  fileweaver -f src/main.ts                # Follow imports from an entry file
  fileweaver -f a.ts b.ts --max-depth 2    # Two entries, at most two hops deep
  fileweaver -f src/index.js --no-minify -p "Review this code"
        """,
    )

    # Mode selection
    parser.add_argument(
        "-d", "--directory",
        default=".",
        help="Directory to scan (default: current directory)",
    )

    parser.add_argument(
        "-f", "--follow-imports",
        nargs="+",
        metavar="FILE",
        default=None,
        help="Follow imports from entry files instead of scanning a directory",
    )

    parser.add_argument(
        "--max-depth",
        type=_non_negative_int,
        default=None,
        help="Maximum depth for following imports (default: unlimited)",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="YAML, TOML or JSON file overriding the alias/marker/extension conventions",
    )

    # Directory-scan filters
    parser.add_argument(
        "-r", "--regex",
        default=None,
        help="Regex pattern matched against file names",
    )

    parser.add_argument(
        "-ir", "--ignoreregex", "--ignore-regex",
        dest="ignore_regex",
        default=None,
        help="Regex pattern of paths to ignore",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        default="output.txt",
        help="Output file name (default: output.txt)",
    )

    parser.add_argument(
        "-p", "--prompt",
        default=None,
        help="Prompt appended to the output file",
    )

    parser.add_argument(
        "-t", "--tree",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Add the project tree to the output file (default: on)",
    )

    parser.add_argument(
        "--tree-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Tree style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "--headers",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Add a header before each file's content (default: on)",
    )

    parser.add_argument(
        "-m", "--minify",
        nargs="?",
        const="aggressive",
        default="aggressive",
        choices=MINIFY_LEVELS,
        help="Minify content before concatenation (default: aggressive)",
    )

    parser.add_argument(
        "--no-minify",
        dest="minify",
        action="store_const",
        const=None,
        help="Keep file contents as-is",
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show compression statistics",
    )

    parser.add_argument(
        "--graph-json",
        default=None,
        metavar="FILE",
        help="Write the followed import graph as JSON (follow mode only)",
    )

    # Verbosity
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show progress (-v) or debug output (-vv)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only report errors",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(args)


def configure_logging(verbose: int = 0, quiet: bool = False) -> None:
    """Send log records to stderr at a level chosen by the verbosity flags."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr, force=True)


def _status(message: str, quiet: bool = False) -> None:
    if not quiet:
        print(message, file=sys.stderr)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _report_progress(path: Path, depth: int, quiet: bool = False) -> None:
    _status(f"Processing (depth {depth}): {path.name}", quiet)


def _collect_directory_files(directory: Path, parsed) -> Optional[List[Path]]:
    """Scan a directory and apply the regex filters; None on an invalid pattern."""
    files = list(iter_files(directory))
    try:
        return filter_files(files, directory, parsed.regex, parsed.ignore_regex)
    except re.error as e:
        print(f"Error: Invalid regex pattern: {e}", file=sys.stderr)
        return None


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose, parsed.quiet)

    config = DEFAULT_CONFIG
    if parsed.config:
        try:
            config = load_config(parsed.config)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    session: Optional[TraversalSession] = None

    if parsed.follow_imports:
        entries = [Path(os.path.abspath(entry)) for entry in parsed.follow_imports]
        _status(f"Following imports from {_plural(len(entries), 'entry file')}...", parsed.quiet)

        session = TraversalSession(
            max_depth=parsed.max_depth,
            on_progress=functools.partial(_report_progress, quiet=parsed.quiet),
            config=config,
        )
        files = session.follow_all(entries)
        base = find_common_base_directory(entries + files)

        if not files:
            print("Error: No valid entry files found or no files to process", file=sys.stderr)
            return 1

        mode = f"imports chain from {_plural(len(entries), 'entry file')}"
    else:
        base = Path(os.path.abspath(parsed.directory))
        if not base.is_dir():
            print(f"Error: '{parsed.directory}' is not a directory", file=sys.stderr)
            return 1

        _status("Scanning directory...", parsed.quiet)
        files = _collect_directory_files(base, parsed)
        if files is None:
            return 1
        # A previous run's output file is not part of the input
        output_path = Path(os.path.abspath(parsed.output))
        files = [f for f in files if f != output_path]

        mode = "directory scan"

    if not files:
        print("Error: No files found matching the specified patterns", file=sys.stderr)
        return 1

    minify_text = f" (minify: {parsed.minify})" if parsed.minify else ""
    _status(f"Found {_plural(len(files), 'file')} to process ({mode}{minify_text})", parsed.quiet)

    tree_text: Optional[str] = None
    processed_tree: Optional[str] = None
    if parsed.tree:
        tree_text, tree_root = project_tree(base, config, style=parsed.tree_style)
        logger.info("Project tree generated from %s", tree_root)
        processed_tree = files_to_tree(files, base, style=parsed.tree_style)

    result = weave(
        files,
        base,
        headers=parsed.headers,
        minify_level=parsed.minify,
        project_tree=tree_text,
        processed_tree=processed_tree,
        prompt=parsed.prompt,
        on_file=lambda path: logger.debug("Woven: %s", path),
    )

    output_path = Path(os.path.abspath(parsed.output))
    try:
        output_path.write_text(result.text, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    if parsed.graph_json:
        if session is None:
            logger.warning("--graph-json only applies when following imports; ignored")
        else:
            try:
                Path(parsed.graph_json).write_text(to_json(session.graph, base), encoding="utf-8")
            except OSError as e:
                print(f"Error writing graph: {e}", file=sys.stderr)
                return 1

    if parsed.stats and parsed.minify and result.original_size > 0:
        stats = result.stats
        _status("\nCompression Statistics:", parsed.quiet)
        _status(f"Original size: {stats.original_size:,} bytes", parsed.quiet)
        _status(f"Minified size: {stats.minified_size:,} bytes", parsed.quiet)
        _status(f"Reduction: {stats.reduction:,} bytes ({stats.percentage}%)", parsed.quiet)

    if session is not None:
        names = ", ".join(Path(entry).name for entry in parsed.follow_imports)
        depth = f"max depth: {parsed.max_depth}" if parsed.max_depth is not None else "unlimited depth"
        description = (
            f"Following imports from {_plural(len(parsed.follow_imports), 'entry file')}: "
            f"{names} ({depth})"
        )
    else:
        description = "Directory scan"

    _status(
        f"Successfully processed {_plural(len(result.processed), 'file')} "
        f"and saved to {output_path} ({description})",
        parsed.quiet,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

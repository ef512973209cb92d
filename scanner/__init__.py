"""Scanner module for import following and file discovery."""

from .builder import TraversalSession, follow_imports
from .classifier import is_local_reference
from .config import ResolverConfig, load_config
from .discovery import iter_files, filter_files, find_common_base_directory
from .parser import extract_references
from .resolver import find_project_root, resolve_reference

__all__ = [
    "TraversalSession",
    "follow_imports",
    "is_local_reference",
    "ResolverConfig",
    "load_config",
    "iter_files",
    "filter_files",
    "find_common_base_directory",
    "extract_references",
    "find_project_root",
    "resolve_reference",
]

"""Content processing applied to files before weaving."""

from .minifier import MINIFY_LEVELS, CompressionStats, compression_stats, minify_content

__all__ = ["MINIFY_LEVELS", "CompressionStats", "compression_stats", "minify_content"]

"""Utilities for JSON:API request parsing."""

from .dependencies import include_paths
from .query_params import parse_include, parse_query_params

__all__ = ["include_paths", "parse_include", "parse_query_params"]

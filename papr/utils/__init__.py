"""
Utility module providing shared helper functions.

Contains file operations and text processing utilities used across
the application. Depends on nothing inside the package.
"""

from .file_utils import (
    read_asset,
    get_file_size_mb,
    directory_name_for_title,
    path_basename,
    ensure_directory
)
from .text_utils import (
    normalize_tag_name,
    normalize_tag_names,
    split_comma_list,
    fold_for_matching
)

__all__ = [
    "read_asset",
    "get_file_size_mb",
    "directory_name_for_title",
    "path_basename",
    "ensure_directory",
    "normalize_tag_name",
    "normalize_tag_names",
    "split_comma_list",
    "fold_for_matching"
]

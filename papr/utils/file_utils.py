"""
File utility functions for the paper library.

Provides the PDF byte accessor, paper directory naming and path helpers.
"""

from pathlib import Path
from typing import Optional, Union


def read_asset(filepath: Union[str, Path]) -> Optional[bytes]:
    """
    Read a file if it exists.

    Args:
        filepath: Path to the file.

    Returns:
        File bytes, or None when the file is absent.
    """
    filepath = Path(filepath)

    if not filepath.is_file():
        return None

    return filepath.read_bytes()


def get_file_size_mb(filepath: Union[str, Path]) -> float:
    """
    Get file size in megabytes.

    Args:
        filepath: Path to the file.

    Returns:
        File size in MB, rounded to 2 decimal places.
    """
    size_bytes = Path(filepath).stat().st_size
    return round(size_bytes / (1024 * 1024), 2)


def directory_name_for_title(title: str) -> str:
    """
    Derive the directory name of a paper from its title.

    "Attention Is All You Need" becomes "attention_is_all_you_need".
    """
    return title.strip().lower().replace(" ", "_")


def path_basename(path: Union[str, Path]) -> str:
    """
    Final segment of a path, empty when there is none.

    Trailing separators are ignored; "/", "" and ".." yield "".
    """
    name = Path(str(path)).name
    return "" if name == ".." else name


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Create directory tree if it doesn't exist.

    Args:
        path: Directory path to create.

    Returns:
        Path object of the directory.
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path

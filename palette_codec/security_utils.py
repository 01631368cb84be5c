#!/usr/bin/env python3
"""
Security utilities for safe file operations
"""

import pathlib
from typing import Optional, Union

from .constants import MAX_PALETTE_FILE_SIZE


class SecurityError(Exception):
    """Raised when a security violation is detected"""


def _check_path_format(file_path_str: str) -> None:
    """Path format checks shared by all validators"""
    # Check for URI schemes
    if any(file_path_str.startswith(scheme) for scheme in ["file:", "http:", "https:", "ftp:", "sftp:"]):
        raise SecurityError(f"URI schemes not allowed: {file_path_str}")

    # Check for UNC paths
    if file_path_str.startswith("\\\\") or "\\\\?\\" in file_path_str:
        raise SecurityError(f"UNC paths not allowed: {file_path_str}")

    # Check for path traversal attempts
    if ".." in pathlib.PurePath(file_path_str).parts or file_path_str.startswith("~"):
        raise SecurityError("Path traversal attempt detected")


def validate_file_path(file_path: Union[str, pathlib.Path],
                       base_dir: Optional[Union[str, pathlib.Path]] = None,
                       max_size: int = MAX_PALETTE_FILE_SIZE) -> str:
    """
    Validate a file path for security issues

    Args:
        file_path: Path to validate, relative paths are resolved against base_dir
        base_dir: Optional base directory to restrict access to
        max_size: Maximum allowed file size in bytes

    Returns:
        Absolute path if valid

    Raises:
        SecurityError: If path is invalid or unsafe
    """
    file_path_str = str(file_path)
    _check_path_format(file_path_str)

    try:
        path = pathlib.Path(file_path)
        if base_dir and not path.is_absolute():
            path = pathlib.Path(base_dir) / path
        path = path.resolve()
    except (ValueError, RuntimeError) as e:
        raise SecurityError(f"Invalid path: {e}") from e

    # If base_dir is specified, ensure path is within it
    if base_dir:
        base = pathlib.Path(base_dir).resolve()
        try:
            path.relative_to(base)
        except ValueError:
            raise SecurityError(f"Path outside allowed directory: {path}")

    # Check if path exists and is a file (not directory)
    if path.exists():
        if not path.is_file():
            raise SecurityError(f"Path is not a file: {path}")

        file_size = path.stat().st_size
        if file_size > max_size:
            raise SecurityError(f"File too large: {file_size} bytes (max {max_size})")

    return str(path)

#!/usr/bin/env python3
"""
File system access for palette assets
Opens files by path and hands out bounds-checked readers over their contents
"""

import pathlib
from typing import Optional, Protocol, Union

from .constants import MAX_PALETTE_FILE_SIZE
from .exceptions import FileSystemError
from .logging_config import get_logger
from .reader import BufferedReader
from .security_utils import SecurityError, validate_file_path

logger = get_logger(__name__)

PathLike = Union[str, pathlib.PurePath]


class File:
    """An opened file whose contents are resident in memory"""

    def __init__(self, path: PathLike, data: bytes) -> None:
        self.path = str(path)
        self._data = bytes(data)

    @property
    def size(self) -> int:
        return len(self._data)

    def reader(self) -> BufferedReader:
        """Get a fresh reader positioned at the start of the file."""
        return BufferedReader(self._data)


class FileSystem(Protocol):
    """Anything that can open a file by path"""

    def open_file(self, path: PathLike) -> File:
        ...


class DiskFileSystem:
    """File system backed by a directory on disk"""

    def __init__(self, root_dir: Optional[PathLike] = None,
                 max_file_size: int = MAX_PALETTE_FILE_SIZE) -> None:
        self.root_dir = str(root_dir) if root_dir is not None else None
        self.max_file_size = max_file_size

    def open_file(self, path: PathLike) -> File:
        """
        Open a file and read its contents.

        Args:
            path: File path, relative paths are resolved against the root directory

        Returns:
            Opened file

        Raises:
            FileSystemError: If the path is unsafe or the file cannot be read
        """
        try:
            resolved = validate_file_path(path, base_dir=self.root_dir,
                                          max_size=self.max_file_size)
            data = pathlib.Path(resolved).read_bytes()
        except SecurityError as e:
            raise FileSystemError(f"Rejected path '{path}': {e}") from e
        except OSError as e:
            raise FileSystemError(f"Cannot open file '{path}': {e}") from e

        logger.debug(f"Opened {resolved} ({len(data)} bytes)")
        return File(path, data)


class MemoryFileSystem:
    """File system over a dict of path -> bytes, for archive members held in memory"""

    def __init__(self, files: Optional[dict[str, bytes]] = None) -> None:
        self._files: dict[str, bytes] = {}
        for path, data in (files or {}).items():
            self.add_file(path, data)

    @staticmethod
    def _key(path: PathLike) -> str:
        return pathlib.PurePosixPath(str(path).replace("\\", "/")).as_posix().lower()

    def add_file(self, path: PathLike, data: bytes) -> None:
        self._files[self._key(path)] = bytes(data)

    def open_file(self, path: PathLike) -> File:
        try:
            data = self._files[self._key(path)]
        except KeyError:
            raise FileSystemError(f"File not found: {path}") from None
        return File(path, data)

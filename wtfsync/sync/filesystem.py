"""Filesystem access used by the sync engine.

The engine only talks to the :class:`FileSystem` protocol so that platform
specifics stay in one place and tests can substitute failing operations.
"""

import logging
import shutil
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class FileSystem(Protocol):
    """Operations the sync engine needs from a filesystem."""

    def list_dir(self, path: Path) -> list[Path]: ...

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def make_dirs(self, path: Path) -> None: ...

    def copy_file(self, source: Path, destination: Path) -> None: ...

    def remove_file(self, path: Path) -> None: ...


class LocalFileSystem:
    """FileSystem implementation backed by the local disk."""

    def list_dir(self, path: Path) -> list[Path]:
        """List the entries of a directory, sorted by name.

        Sorting keeps log output and first-match lookups reproducible
        across platforms whose native listing order differs.
        """
        return sorted(path.iterdir(), key=lambda p: p.name)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def copy_file(self, source: Path, destination: Path) -> None:
        """Copy a file, overwriting the destination.

        Content and modification time are preserved.
        """
        logger.debug("copy %s -> %s", source, destination)
        shutil.copy2(source, destination)

    def remove_file(self, path: Path) -> None:
        logger.debug("unlink %s", path)
        path.unlink()

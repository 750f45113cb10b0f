"""Template file discovery beneath one language entry.

DirectoryScanner expands a top-level entry of the catalog root (a single
template file, or a language directory) into the ordered list of template
files to compile for that language.

Failure policy:
    - The path handed to scan() must be readable; a directory that cannot be
      listed raises ResourceIOError.
    - Nested directories that cannot be listed, and broken symbolic links,
      are skipped, reported in ScanResult.skipped and logged at WARNING.
    - A directory is not re-entered while it is one of its own ancestors,
      which ends symbolic-link cycles. A directory reachable through several
      links that do not form a cycle is scanned once per link.

Ordering:
    Entries are visited sorted by name at every level, so repeated scans of
    an unchanged tree return files in the same order.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ftlcatalog.config import CatalogConfig
from ftlcatalog.diagnostics import Diagnostic, DiagnosticCode, ResourceIOError

__all__ = ["DirectoryScanner", "ScanResult"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Files found beneath one language entry.

    Attributes:
        files: Template files in deterministic depth-first, name-sorted order
        skipped: Nested paths that could not be read
    """

    files: tuple[Path, ...]
    skipped: tuple[Path, ...] = ()


class DirectoryScanner:
    """Enumerates template files beneath a file or directory.

    Example:
        >>> scanner = DirectoryScanner()
        >>> result = scanner.scan(Path("locales/en-US"))
        >>> [p.name for p in result.files]
        ['errors.ftl', 'main.ftl', 'settings.ftl']
    """

    __slots__ = ("_extension", "_follow_symlinks")

    def __init__(self, config: CatalogConfig | None = None) -> None:
        """Initialize scanner.

        Args:
            config: Load configuration (extension, symlink policy). Defaults
                to ``CatalogConfig()``.
        """
        config = config if config is not None else CatalogConfig()
        self._extension = config.extension
        self._follow_symlinks = config.follow_symlinks

    def is_template(self, path: Path) -> bool:
        """Check if a path name carries the template extension."""
        return path.suffix == self._extension

    def scan(self, path: str | Path) -> ScanResult:
        """Collect all template files for one language entry.

        Args:
            path: A template file or a language directory

        Returns:
            ScanResult with the files to compile. A non-template file yields
            an empty result.

        Raises:
            ResourceIOError: If path is a directory that cannot be listed
        """
        path = Path(path)
        if not path.is_dir():
            return ScanResult(files=(path,) if self.is_template(path) else ())

        files: list[Path] = []
        skipped: list[Path] = []
        try:
            entries = self._list(path)
            ancestors = {self._identity(path)}
        except OSError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.RESOURCE_UNREADABLE,
                message=f"Cannot list language directory {path}: {e.strerror or e}",
                ftl_location=str(path),
            )
            raise ResourceIOError(diagnostic, path=path) from e

        self._walk(entries, files, skipped, ancestors)

        logger.debug(
            "Scanned %s: %d template files, %d unreadable entries",
            path,
            len(files),
            len(skipped),
        )
        return ScanResult(files=tuple(files), skipped=tuple(skipped))

    def _walk(
        self,
        entries: list[os.DirEntry[str]],
        files: list[Path],
        skipped: list[Path],
        ancestors: set[tuple[int, int]],
    ) -> None:
        for entry in entries:
            entry_path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=self._follow_symlinks)
                is_file = not is_dir and entry.is_file(follow_symlinks=self._follow_symlinks)
            except OSError as e:
                logger.warning("Skipping unreadable entry %s: %s", entry_path, e)
                skipped.append(entry_path)
                continue

            if is_dir:
                try:
                    identity = self._identity(entry_path)
                    if identity in ancestors:
                        logger.debug("Not re-entering %s (symlink cycle)", entry_path)
                        continue
                    children = self._list(entry_path)
                except OSError as e:
                    logger.warning("Skipping unreadable directory %s: %s", entry_path, e)
                    skipped.append(entry_path)
                    continue
                ancestors.add(identity)
                self._walk(children, files, skipped, ancestors)
                ancestors.discard(identity)
            elif is_file:
                if self.is_template(entry_path):
                    files.append(entry_path)
            elif entry.is_symlink() and not os.path.exists(entry.path):
                # Dangling link: target missing
                logger.warning("Skipping broken symbolic link %s", entry_path)
                skipped.append(entry_path)

    @staticmethod
    def _list(path: Path) -> list[os.DirEntry[str]]:
        with os.scandir(path) as it:
            return sorted(it, key=lambda entry: entry.name)

    @staticmethod
    def _identity(path: Path) -> tuple[int, int]:
        stat = path.stat()
        return (stat.st_dev, stat.st_ino)

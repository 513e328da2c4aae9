"""Project and component-file discovery.

``list_projects`` enumerates the immediate, non-hidden subdirectories of the
project root. ``scan_component_files`` walks one project depth-first and
collects React component files. Neither raises on bad paths or filesystem
errors: an unreadable directory is logged and skipped while its siblings are
still scanned.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

COMPONENT_EXTENSIONS = (".jsx", ".tsx")
HIDDEN_PREFIX = "."


@dataclass(frozen=True)
class ScanError:
    path: Path
    message: str

    def to_dict(self) -> dict:
        return {"path": str(self.path), "message": self.message}


def _is_component_file(name: str, extensions: Tuple[str, ...]) -> bool:
    return name.endswith(extensions)


def scan_component_files_with_diagnostics(
    root: Union[str, Path],
    extensions: Iterable[str] = COMPONENT_EXTENSIONS,
) -> Tuple[List[Path], List[ScanError]]:
    """Collect component files under ``root`` along with per-directory errors.

    Traversal keeps an explicit stack of pending directory listings, so deep
    trees do not grow the call stack while files are still visited in the
    same order a recursive walk would produce. Hidden directories are
    scanned too. Symlinks are never followed, to files or to directories.

    Returns:
        Tuple of (component file paths, directories that could not be listed)
    """
    suffixes = tuple(extensions)
    files: List[Path] = []
    errors: List[ScanError] = []

    def list_dir(directory: Path) -> Optional[Iterator[os.DirEntry]]:
        try:
            with os.scandir(directory) as entries:
                return iter(list(entries))
        except (OSError, ValueError) as exc:
            logger.warning(f"Error scanning directory {directory}: {exc}")
            errors.append(ScanError(path=directory, message=str(exc)))
            return None

    root_entries = list_dir(Path(root))
    stack: List[Iterator[os.DirEntry]] = [root_entries] if root_entries else []

    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue
        try:
            if entry.is_dir(follow_symlinks=False):
                children = list_dir(Path(entry.path))
                if children is not None:
                    stack.append(children)
            elif entry.is_file(follow_symlinks=False) and _is_component_file(
                entry.name, suffixes
            ):
                files.append(Path(entry.path))
        except OSError as exc:
            # Entry vanished between listing and stat
            logger.warning(f"Error reading entry {entry.path}: {exc}")

    return files, errors


def scan_component_files(
    root: Union[str, Path],
    extensions: Iterable[str] = COMPONENT_EXTENSIONS,
) -> List[Path]:
    """Return every component file under ``root``."""
    files, _ = scan_component_files_with_diagnostics(root, extensions)
    return files


def list_projects(project_root: Union[str, Path]) -> List[str]:
    """List project names: non-hidden directories directly under the root."""
    try:
        with os.scandir(project_root) as entries:
            return [
                entry.name
                for entry in entries
                if entry.is_dir() and not entry.name.startswith(HIDDEN_PREFIX)
            ]
    except (OSError, ValueError) as exc:
        logger.error(f"Error listing projects in {project_root}: {exc}")
        return []

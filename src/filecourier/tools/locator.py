"""
Filename locator for File Courier.

This module walks a directory tree depth-first from a root directory and
returns the first entry whose name matches a target filename exactly.
Directories that cannot be listed are skipped, not reported as failures.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Union
import logging

from ..models.search_task import SearchTask


logger = logging.getLogger(__name__)


class Locator:
    """
    Depth-first filename search over a directory tree.

    The traversal keeps an explicit stack of directories still to be listed.
    Sibling order is whatever os.scandir yields, so when several entries match
    the one returned depends on the platform and filesystem state. Symlinked
    directories are followed and there is no cycle guard.
    """

    def __init__(self):
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'directories_traversed': 0,
            'entries_scanned': 0,
            'errors': 0
        }

    def find(self, root_dir: Union[str, Path], target_name: str) -> Optional[Path]:
        """
        Locate the first entry named target_name under root_dir.

        Args:
            root_dir: Directory to start from; it need not exist
            target_name: Exact, case-sensitive filename to look for

        Returns:
            Path of the matching entry, or None if the tree holds no match
        """
        self.reset_stats()
        frontier: List[Path] = [Path(root_dir)]

        while frontier:
            directory = frontier.pop()
            match = self._scan_directory(directory, target_name, frontier)
            if match is not None:
                logger.info(f"Located {target_name} at {match}")
                return match

        logger.info(f"{target_name} not found under {root_dir} "
                    f"({self._stats['directories_traversed']} directories searched)")
        return None

    def locate(self, task: SearchTask) -> Optional[Path]:
        """Run find() for a SearchTask."""
        return self.find(task.root, task.target_name)

    def _scan_directory(self, directory: Path, target_name: str, frontier: List[Path]) -> Optional[Path]:
        """
        List one directory, pushing subdirectories onto the frontier.

        Args:
            directory: Directory to list
            target_name: Filename to match
            frontier: Pending directories, extended in place

        Returns:
            Path of the first matching non-directory entry, or None
        """
        try:
            with os.scandir(directory) as entries:
                self._stats['directories_traversed'] += 1
                for entry in entries:
                    self._stats['entries_scanned'] += 1
                    if self._is_directory(entry):
                        frontier.append(Path(entry.path))
                    elif entry.name == target_name:
                        return Path(entry.path)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            self._stats['errors'] += 1

        return None

    def _is_directory(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir()
        except OSError as e:
            logger.debug(f"Cannot stat {entry.path}: {e}")
            self._stats['errors'] += 1
            return False

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the most recent traversal.

        Returns:
            Dictionary containing traversal statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()


def find_file(root_dir: Union[str, Path], target_name: str) -> Optional[Path]:
    """
    Convenience function to locate a file with a fresh Locator.

    Args:
        root_dir: Directory to start from
        target_name: Exact filename to look for

    Returns:
        Path of the first match, or None
    """
    return Locator().find(root_dir, target_name)

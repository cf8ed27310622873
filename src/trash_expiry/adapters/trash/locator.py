"""Trash directory discovery for the freedesktop.org Trash layout."""

import logging
import os
import stat
from collections.abc import Callable, Iterable
from pathlib import Path

import psutil

from ...domain.models import TrashDirectory
from ...ports.locator import LocatorPort

logger = logging.getLogger(__name__)


def list_mount_points() -> list[Path]:
    """Return mount points of all mounted filesystems, in mount table order."""
    return [Path(p.mountpoint) for p in psutil.disk_partitions(all=True)]


def _probe_dir(path: Path) -> bool | None:
    """True if path is a directory, False if missing, None if unprobeable."""
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError:
        return None


def is_safe_shared_trash(path: Path) -> bool:
    """Check a $topdir/.Trash directory before trusting it.

    It must be a real directory (not a symlink) with the sticky bit set.
    """
    try:
        st = os.lstat(path)
    except OSError:
        return False
    if stat.S_ISLNK(st.st_mode) or not stat.S_ISDIR(st.st_mode):
        logger.warning(f"Ignoring {path}: not a directory")
        return False
    if not st.st_mode & stat.S_ISVTX:
        logger.warning(f"Ignoring {path}: sticky bit not set")
        return False
    return True


class FreedesktopLocator(LocatorPort):
    """Finds the home trash and the per-user trash of every mount."""

    def __init__(
        self,
        home_trash: Path,
        uid: int,
        mount_points: Callable[[], Iterable[Path]] | None = None,
    ) -> None:
        self.home_trash = home_trash
        self.uid = uid
        self.mount_points = mount_points

    def locate(self) -> list[TrashDirectory]:
        found: list[TrashDirectory] = []
        seen: set[str] = set()

        for root in self._candidates():
            key = os.path.realpath(root)
            if key in seen:
                continue
            seen.add(key)
            if self._usable(root):
                logger.debug(f"Trash directory: {root}")
                found.append(TrashDirectory(root))

        return found

    def _candidates(self) -> Iterable[Path]:
        yield self.home_trash

        try:
            mounts = list((self.mount_points or list_mount_points)())
        except OSError as e:
            logger.warning(f"Cannot list mounted filesystems: {e}")
            return

        for mount in mounts:
            shared = mount / ".Trash"
            if _probe_dir(shared) and is_safe_shared_trash(shared):
                yield shared / str(self.uid)
            yield mount / f".Trash-{self.uid}"

    def _usable(self, root: Path) -> bool:
        """Decide whether a candidate is a trash directory worth scanning.

        Missing candidates are skipped. A candidate whose subdirectories
        exist but cannot be probed is kept so the reader reports it.
        """
        probe = _probe_dir(root)
        if probe is None:
            # A mount we have no access to is not ours; the home trash is
            return root == self.home_trash
        if not probe:
            return False

        for sub in (root / "files", root / "info"):
            if _probe_dir(sub) is False:
                logger.debug(f"Skipping {root}: no {sub.name}/ directory")
                return False
        return True

"""Permanent removal of expired trash items."""

import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from urllib.parse import unquote

from ...domain.errors import DeletionFailed
from ...domain.models import TrashDirectory, TrashItem
from ...ports.deleter import DeleterPort

logger = logging.getLogger(__name__)


def remove_content(path: Path) -> bool:
    """Remove a trashed file or directory tree without following symlinks.

    Returns False if there was nothing to remove.
    """
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return False

    try:
        if stat.S_ISDIR(st.st_mode):
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        return False
    return True


def prune_directorysizes(cache: Path, name: str) -> None:
    """Drop the entry for a removed directory from the directorysizes cache.

    Lines have the form "<size> <mtime> <percent-encoded name>".
    """
    try:
        lines = cache.read_text(encoding="utf-8").splitlines(keepends=True)
    except FileNotFoundError:
        return

    kept = []
    for line in lines:
        fields = line.rstrip("\n").split(" ", 2)
        if len(fields) == 3 and unquote(fields[2]) == name:
            continue
        kept.append(line)

    if len(kept) == len(lines):
        return

    # Atomic replace
    fd, tmp = tempfile.mkstemp(dir=cache.parent, prefix=".directorysizes.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.writelines(kept)
        os.replace(tmp, cache)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


class FilesystemDeleter(DeleterPort):
    """Deletes content before its record so an interruption leaves an orphan."""

    def delete(self, directory: TrashDirectory, item: TrashItem) -> None:
        # 1. Content
        try:
            is_dir = item.content_path.is_dir() and not item.content_path.is_symlink()
            removed = remove_content(item.content_path)
        except OSError as e:
            raise DeletionFailed(item.content_path, str(e)) from e

        if not removed:
            logger.debug(f"Content already gone: {item.content_path}")

        # 2. Record
        try:
            item.info_path.unlink(missing_ok=True)
        except OSError as e:
            raise DeletionFailed(item.info_path, str(e)) from e

        # 3. Size cache, best effort
        if removed and is_dir:
            try:
                prune_directorysizes(directory.directorysizes, item.name)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Could not update {directory.directorysizes}: {e}")

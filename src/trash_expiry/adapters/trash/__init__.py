"""Trash adapters for the freedesktop.org Trash layout."""

from .deleter import FilesystemDeleter
from .locator import FreedesktopLocator, list_mount_points
from .trashinfo import TrashInfoReader

__all__ = [
    "FilesystemDeleter",
    "FreedesktopLocator",
    "TrashInfoReader",
    "list_mount_points",
]

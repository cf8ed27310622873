"""Domain errors.

Everything derived from TrashExpiryError is non-fatal: it is collected in the
run report and the run carries on with the next item or directory.
"""

from pathlib import Path


class TrashExpiryError(Exception):
    """Base class for per-item and per-directory failures."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason

    @property
    def kind(self) -> str:
        return type(self).__name__


class DirectoryUnavailable(TrashExpiryError):
    """A trash directory exists but could not be listed."""


class MetadataUnreadable(TrashExpiryError):
    """A .trashinfo record could not be read or parsed."""


class DateUnparsable(TrashExpiryError):
    """A record has no usable DeletionDate; the item is never expired."""


class DeletionFailed(TrashExpiryError):
    """Removing an expired item's content or record failed."""


class ConfigInvalid(TrashExpiryError):
    """A config value was rejected and its default used instead."""


class UserUnknown(Exception):
    """The invoking user's id or home directory cannot be determined."""

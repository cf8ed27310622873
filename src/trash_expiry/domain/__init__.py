"""Domain layer - core business logic."""

from .errors import (
    ConfigInvalid,
    DateUnparsable,
    DeletionFailed,
    DirectoryUnavailable,
    MetadataUnreadable,
    TrashExpiryError,
    UserUnknown,
)
from .models import (
    Classification,
    ExpiryReport,
    RunContext,
    TrashDirectory,
    TrashItem,
)

__all__ = [
    "Classification",
    "ConfigInvalid",
    "DateUnparsable",
    "DeletionFailed",
    "DirectoryUnavailable",
    "ExpiryReport",
    "MetadataUnreadable",
    "RunContext",
    "TrashDirectory",
    "TrashExpiryError",
    "TrashItem",
    "UserUnknown",
]

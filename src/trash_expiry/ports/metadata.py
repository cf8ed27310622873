"""Metadata port - interface for reading .trashinfo records."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import TrashDirectory, TrashItem


class MetadataPort(ABC):
    """Interface for trash metadata records."""

    @abstractmethod
    def iter_records(self, directory: "TrashDirectory") -> Iterator[Path]:
        """Yield the metadata record paths of a trash directory.

        Raises DirectoryUnavailable if the info/ directory cannot be listed.
        """
        pass

    @abstractmethod
    def read(self, directory: "TrashDirectory", info_path: Path) -> "TrashItem":
        """Parse one record into a TrashItem.

        An absent or malformed DeletionDate gives an item with unknown age.
        Raises MetadataUnreadable if the record cannot be read at all.
        """
        pass

"""Deleter port - interface for permanently removing trashed items."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import TrashDirectory, TrashItem


class DeleterPort(ABC):
    """Interface for removing an item's content and metadata record."""

    @abstractmethod
    def delete(self, directory: "TrashDirectory", item: "TrashItem") -> None:
        """Remove content first, then the record.

        Already-missing halves are not errors.
        Raises DeletionFailed on any other failure.
        """
        pass

"""Locator port - interface for finding trash directories."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import TrashDirectory


class LocatorPort(ABC):
    """Interface for trash directory discovery."""

    @abstractmethod
    def locate(self) -> list["TrashDirectory"]:
        """Return every trash directory of the user, home trash first.

        Never raises for a missing or unsafe candidate; such candidates
        are left out.
        """
        pass

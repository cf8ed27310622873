"""Ports - interfaces for external dependencies."""

from .deleter import DeleterPort
from .locator import LocatorPort
from .metadata import MetadataPort

__all__ = ["DeleterPort", "LocatorPort", "MetadataPort"]

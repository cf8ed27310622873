"""Domain models."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path

from .errors import TrashExpiryError

TRASHINFO_SUFFIX = ".trashinfo"


class Classification(str, Enum):
    """What the engine does with an item."""

    FRESH = "fresh"
    WARN = "warn"
    EXPIRED = "expired"
    UNKNOWN = "unknown"  # DeletionDate missing or unparsable


@dataclass(frozen=True)
class RunContext:
    """Process-wide state captured once at start-up."""

    uid: int
    home: Path
    data_home: Path
    now: datetime

    @property
    def home_trash(self) -> Path:
        return self.data_home / "Trash"


@dataclass(frozen=True)
class TrashDirectory:
    """A trash root holding sibling files/ and info/ directories."""

    root: Path

    @property
    def files(self) -> Path:
        return self.root / "files"

    @property
    def info(self) -> Path:
        return self.root / "info"

    @property
    def directorysizes(self) -> Path:
        return self.root / "directorysizes"

    def content_path_for(self, info_path: Path) -> Path:
        """Return files/<name> for info/<name>.trashinfo."""
        return self.files / info_path.name[: -len(TRASHINFO_SUFFIX)]


@dataclass
class TrashItem:
    """One trashed entity, identified by its metadata record."""

    info_path: Path
    content_path: Path
    deletion_date: datetime | None  # naive local time
    original_path: str | None = None
    date_error: str | None = None

    @property
    def name(self) -> str:
        return self.content_path.name

    def age(self, now: datetime) -> timedelta | None:
        """Time spent in the trash, clamped at zero; None if unknown."""
        if self.deletion_date is None:
            return None
        return max(now - self.deletion_date, timedelta(0))


@dataclass
class ExpiryReport:
    """Outcome of one expiry pass."""

    directories: int = 0
    scanned: int = 0
    warned: list[TrashItem] = field(default_factory=list)
    deleted: list[TrashItem] = field(default_factory=list)
    errors: list[TrashExpiryError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

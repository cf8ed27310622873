"""Shared test fixtures."""

from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from trash_expiry.domain.models import TrashDirectory, TrashItem
from trash_expiry.ports.deleter import DeleterPort
from trash_expiry.ports.locator import LocatorPort
from trash_expiry.ports.metadata import MetadataPort

NOW = datetime(2024, 6, 1, 12, 0, 0)


def trashinfo_text(original: str, deletion_date: str | None) -> str:
    lines = ["[Trash Info]", f"Path={original}"]
    if deletion_date is not None:
        lines.append(f"DeletionDate={deletion_date}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def now() -> datetime:
    """Fixed clock for the run."""
    return NOW


@pytest.fixture
def make_trash(tmp_path: Path) -> Callable[..., TrashDirectory]:
    """Factory for an empty trash directory with files/ and info/."""

    def _make(name: str = "Trash") -> TrashDirectory:
        directory = TrashDirectory(tmp_path / name)
        directory.files.mkdir(parents=True)
        directory.info.mkdir(parents=True)
        return directory

    return _make


@pytest.fixture
def trash(make_trash: Callable[..., TrashDirectory]) -> TrashDirectory:
    return make_trash()


@pytest.fixture
def add_item() -> Callable[..., TrashItem]:
    """Factory that trashes a file (or directory) with a given age."""

    def _add(
        directory: TrashDirectory,
        name: str,
        days_ago: float | None = None,
        deletion_date: str | None = None,
        is_dir: bool = False,
        with_content: bool = True,
    ) -> TrashItem:
        deleted_at = None
        if days_ago is not None:
            deleted_at = (NOW - timedelta(days=days_ago)).replace(microsecond=0)
            deletion_date = deleted_at.strftime("%Y-%m-%dT%H:%M:%S")

        content = directory.files / name
        if with_content:
            if is_dir:
                content.mkdir()
                (content / "nested.txt").write_text("nested")
            else:
                content.write_text("content")

        info = directory.info / f"{name}.trashinfo"
        info.write_text(trashinfo_text(f"/home/user/{name}", deletion_date))
        return TrashItem(
            info_path=info,
            content_path=content,
            deletion_date=deleted_at,
            original_path=f"/home/user/{name}",
        )

    return _add


@pytest.fixture
def mock_locator() -> MagicMock:
    """Mock locator port."""
    mock = MagicMock(spec=LocatorPort)
    mock.locate.return_value = []
    return mock


@pytest.fixture
def mock_metadata() -> MagicMock:
    """Mock metadata port."""
    mock = MagicMock(spec=MetadataPort)
    mock.iter_records.return_value = iter([])
    return mock


@pytest.fixture
def mock_deleter() -> MagicMock:
    """Mock deleter port."""
    return MagicMock(spec=DeleterPort)

"""Unit tests for trash directory discovery."""

import os
from pathlib import Path

import pytest

from trash_expiry.adapters.trash.locator import FreedesktopLocator, is_safe_shared_trash
from trash_expiry.domain.models import TrashDirectory

UID = 1000


def make_trash_dir(root: Path) -> Path:
    (root / "files").mkdir(parents=True)
    (root / "info").mkdir(parents=True)
    return root


def make_shared_trash(mount: Path, sticky: bool = True) -> Path:
    shared = mount / ".Trash"
    shared.mkdir(parents=True)
    os.chmod(shared, 0o1777 if sticky else 0o777)
    return shared


@pytest.fixture
def home_trash(tmp_path: Path) -> Path:
    return make_trash_dir(tmp_path / "home" / ".local" / "share" / "Trash")


def locator_for(home_trash: Path, mounts: list[Path]) -> FreedesktopLocator:
    return FreedesktopLocator(home_trash, UID, mount_points=lambda: mounts)


class TestIsSafeSharedTrash:
    """Tests for is_safe_shared_trash."""

    def test_sticky_directory_is_safe(self, tmp_path: Path) -> None:
        assert is_safe_shared_trash(make_shared_trash(tmp_path)) is True

    def test_missing_sticky_bit(self, tmp_path: Path) -> None:
        assert is_safe_shared_trash(make_shared_trash(tmp_path, sticky=False)) is False

    def test_symlink_rejected(self, tmp_path: Path) -> None:
        real = make_shared_trash(tmp_path / "real")
        link = tmp_path / ".Trash"
        link.symlink_to(real)
        assert is_safe_shared_trash(link) is False

    def test_regular_file_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / ".Trash"
        path.write_text("")
        assert is_safe_shared_trash(path) is False

    def test_missing(self, tmp_path: Path) -> None:
        assert is_safe_shared_trash(tmp_path / ".Trash") is False


class TestFreedesktopLocator:
    """Tests for FreedesktopLocator.locate."""

    def test_home_trash_only(self, home_trash: Path) -> None:
        assert locator_for(home_trash, []).locate() == [TrashDirectory(home_trash)]

    def test_missing_home_trash_skipped(self, tmp_path: Path) -> None:
        locator = locator_for(tmp_path / "nowhere" / "Trash", [])
        assert locator.locate() == []

    def test_home_trash_without_info_skipped(self, tmp_path: Path) -> None:
        root = tmp_path / "Trash"
        (root / "files").mkdir(parents=True)
        assert locator_for(root, []).locate() == []

    def test_mount_trash_dash_uid(self, home_trash: Path, tmp_path: Path) -> None:
        mount = tmp_path / "media" / "usb"
        per_user = make_trash_dir(mount / f".Trash-{UID}")

        result = locator_for(home_trash, [mount]).locate()

        assert result == [TrashDirectory(home_trash), TrashDirectory(per_user)]

    def test_shared_trash_with_sticky_bit(
        self, home_trash: Path, tmp_path: Path
    ) -> None:
        mount = tmp_path / "data"
        shared = make_shared_trash(mount)
        user_dir = make_trash_dir(shared / str(UID))
        per_user = make_trash_dir(mount / f".Trash-{UID}")

        result = locator_for(home_trash, [mount]).locate()

        assert result == [
            TrashDirectory(home_trash),
            TrashDirectory(user_dir),
            TrashDirectory(per_user),
        ]

    def test_shared_trash_without_sticky_bit_skipped(
        self, home_trash: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        mount = tmp_path / "data"
        shared = make_shared_trash(mount, sticky=False)
        make_trash_dir(shared / str(UID))

        result = locator_for(home_trash, [mount]).locate()

        assert result == [TrashDirectory(home_trash)]
        assert "sticky bit" in caplog.text

    def test_shared_trash_symlink_skipped(
        self, home_trash: Path, tmp_path: Path
    ) -> None:
        elsewhere = make_shared_trash(tmp_path / "elsewhere")
        make_trash_dir(elsewhere / str(UID))
        mount = tmp_path / "data"
        mount.mkdir()
        (mount / ".Trash").symlink_to(elsewhere)

        assert locator_for(home_trash, [mount]).locate() == [TrashDirectory(home_trash)]

    def test_other_users_trash_ignored(self, home_trash: Path, tmp_path: Path) -> None:
        mount = tmp_path / "data"
        make_trash_dir(mount / ".Trash-1001")

        assert locator_for(home_trash, [mount]).locate() == [TrashDirectory(home_trash)]

    def test_duplicates_removed(self, home_trash: Path, tmp_path: Path) -> None:
        mount = tmp_path / "data"
        per_user = make_trash_dir(mount / f".Trash-{UID}")

        result = locator_for(home_trash, [mount, mount, mount]).locate()

        assert result == [TrashDirectory(home_trash), TrashDirectory(per_user)]

    def test_symlinked_duplicate_of_home_removed(
        self, home_trash: Path, tmp_path: Path
    ) -> None:
        mount = tmp_path / "data"
        mount.mkdir()
        (mount / f".Trash-{UID}").symlink_to(home_trash)

        assert locator_for(home_trash, [mount]).locate() == [TrashDirectory(home_trash)]

    def test_mount_listing_failure_keeps_home(self, home_trash: Path) -> None:
        def broken() -> list[Path]:
            raise OSError("cannot read mount table")

        locator = FreedesktopLocator(home_trash, UID, mount_points=broken)
        assert locator.locate() == [TrashDirectory(home_trash)]

    def test_default_mount_source(
        self, home_trash: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mount = tmp_path / "media"
        per_user = make_trash_dir(mount / f".Trash-{UID}")
        monkeypatch.setattr(
            "trash_expiry.adapters.trash.locator.list_mount_points", lambda: [mount]
        )

        result = FreedesktopLocator(home_trash, UID).locate()

        assert result == [TrashDirectory(home_trash), TrashDirectory(per_user)]

"""Expire old trash items based on the retention policy."""

import logging
import os
import pwd
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path

from .adapters.trash import FilesystemDeleter, FreedesktopLocator, TrashInfoReader
from .config import Settings
from .domain.errors import ConfigInvalid, UserUnknown
from .domain.models import ExpiryReport, RunContext
from .domain.services import ExpiryService

logger = logging.getLogger(__name__)


def capture_context(
    environ: Mapping[str, str] | None = None, now: datetime | None = None
) -> RunContext:
    """Capture user identity, home and clock once for the whole run.

    Raises UserUnknown if the user id or home directory cannot be found.
    """
    environ = os.environ if environ is None else environ

    try:
        uid = os.getuid()
    except AttributeError as e:
        raise UserUnknown("no user id on this platform") from e

    home_dir = environ.get("HOME")
    if not home_dir:
        try:
            home_dir = pwd.getpwuid(uid).pw_dir
        except KeyError as e:
            raise UserUnknown(f"no passwd entry for uid {uid}") from e
    if not home_dir:
        raise UserUnknown(f"no home directory for uid {uid}")
    home = Path(home_dir)

    # XDG: relative paths are invalid and must be ignored
    data_home_dir = environ.get("XDG_DATA_HOME", "")
    if data_home_dir and os.path.isabs(data_home_dir):
        data_home = Path(data_home_dir)
    else:
        data_home = home / ".local" / "share"

    return RunContext(
        uid=uid,
        home=home,
        data_home=data_home,
        now=now or datetime.now(),
    )


def create_expiry_service(
    settings: Settings, context: RunContext, dry_run: bool = False
) -> ExpiryService:
    """Create an ExpiryService with the filesystem adapters."""
    return ExpiryService(
        locator=FreedesktopLocator(context.home_trash, context.uid),
        metadata=TrashInfoReader(),
        deleter=FilesystemDeleter(),
        warn_after=settings.warn_after,
        delete_after=settings.delete_after,
        dry_run=dry_run,
    )


def run_expiry(
    settings: Settings,
    context: RunContext | None = None,
    config_problems: list[ConfigInvalid] | None = None,
    dry_run: bool = False,
) -> ExpiryReport:
    """Run one expiry pass over all trash directories.

    Safe to repeat: a second run finds nothing left to delete.
    """
    context = context or capture_context()
    report = ExpiryReport(errors=list(config_problems or []))

    logger.info(
        f"Expiring trash items older than {settings.delete_after_days} days"
        + (" (dry run)" if dry_run else "")
    )
    service = create_expiry_service(settings, context, dry_run=dry_run)
    return service.run(context.now, report)

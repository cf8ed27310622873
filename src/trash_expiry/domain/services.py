"""Domain services - orchestrate business logic."""

import logging
from datetime import datetime, timedelta
from pathlib import Path

from ..ports.deleter import DeleterPort
from ..ports.locator import LocatorPort
from ..ports.metadata import MetadataPort
from .errors import DateUnparsable, TrashExpiryError
from .models import Classification, ExpiryReport, TrashDirectory, TrashItem

logger = logging.getLogger(__name__)


def classify(
    age: timedelta | None, warn_after: timedelta, delete_after: timedelta
) -> Classification:
    """Classify an item by its age in the trash.

    Each threshold is checked on its own and EXPIRED wins over WARN,
    so warn_after > delete_after simply means no warning phase.
    """
    if age is None:
        return Classification.UNKNOWN
    if age >= delete_after:
        return Classification.EXPIRED
    if age >= warn_after:
        return Classification.WARN
    return Classification.FRESH


class ExpiryService:
    """Runs one scan-and-expire pass over every trash directory."""

    def __init__(
        self,
        locator: LocatorPort,
        metadata: MetadataPort,
        deleter: DeleterPort,
        warn_after: timedelta,
        delete_after: timedelta,
        dry_run: bool = False,
    ) -> None:
        self.locator = locator
        self.metadata = metadata
        self.deleter = deleter
        self.warn_after = warn_after
        self.delete_after = delete_after
        self.dry_run = dry_run

    def run(self, now: datetime, report: ExpiryReport | None = None) -> ExpiryReport:
        """Expire old items.

        Directories are visited in locator order and items in enumeration
        order. Failures are recorded in the report and never stop the pass.
        """
        report = report or ExpiryReport()

        for directory in self.locator.locate():
            report.directories += 1
            logger.debug(f"Scanning: {directory.root}")
            try:
                for info_path in self.metadata.iter_records(directory):
                    self._process_record(directory, info_path, now, report)
            except TrashExpiryError as e:
                self._record_error(report, e)

        logger.info(
            f"Expiry complete: {len(report.deleted)} deleted, "
            f"{len(report.warned)} expiring soon, {len(report.errors)} errors"
        )
        return report

    def _process_record(
        self,
        directory: TrashDirectory,
        info_path: Path,
        now: datetime,
        report: ExpiryReport,
    ) -> None:
        try:
            item = self.metadata.read(directory, info_path)
        except TrashExpiryError as e:
            self._record_error(report, e)
            return

        report.scanned += 1
        age = item.age(now)
        status = classify(age, self.warn_after, self.delete_after)

        if status is Classification.UNKNOWN:
            self._record_error(
                report, DateUnparsable(item.info_path, item.date_error or "no date")
            )
        elif status is Classification.WARN:
            logger.warning(
                f"Expiring soon: {self._describe(item)} "
                f"({age.days} days in trash)"
            )
            report.warned.append(item)
        elif status is Classification.EXPIRED:
            self._expire(directory, item, age, report)

    def _expire(
        self,
        directory: TrashDirectory,
        item: TrashItem,
        age: timedelta,
        report: ExpiryReport,
    ) -> None:
        if self.dry_run:
            logger.info(f"Would erase: {self._describe(item)} ({age.days} days old)")
            report.deleted.append(item)
            return

        try:
            self.deleter.delete(directory, item)
        except TrashExpiryError as e:
            self._record_error(report, e)
            return

        logger.info(f"Erased: {self._describe(item)} ({age.days} days old)")
        report.deleted.append(item)

    @staticmethod
    def _describe(item: TrashItem) -> str:
        return item.original_path or str(item.content_path)

    @staticmethod
    def _record_error(report: ExpiryReport, error: TrashExpiryError) -> None:
        logger.error(f"{error.kind}: {error}")
        report.errors.append(error)

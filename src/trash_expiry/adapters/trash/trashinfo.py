"""Metadata reader for .trashinfo records."""

import configparser
import logging
import os
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path
from urllib.parse import unquote

from ...domain.errors import DirectoryUnavailable, MetadataUnreadable
from ...domain.models import TRASHINFO_SUFFIX, TrashDirectory, TrashItem
from ...ports.metadata import MetadataPort

logger = logging.getLogger(__name__)

TRASH_INFO_GROUP = "Trash Info"
DELETION_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_deletion_date(value: str) -> datetime:
    """Parse a DeletionDate value (local time, no UTC offset).

    Raises ValueError for anything but YYYY-MM-DDThh:mm:ss.
    """
    return datetime.strptime(value.strip(), DELETION_DATE_FORMAT)


def _parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        delimiters=("=",),
        comment_prefixes=("#",),
        interpolation=None,
        strict=False,
    )
    parser.optionxform = str  # keys are case-sensitive
    return parser


class TrashInfoReader(MetadataPort):
    """Reads the info/ directory of a trash directory."""

    def iter_records(self, directory: TrashDirectory) -> Iterator[Path]:
        try:
            with os.scandir(directory.info) as entries:
                for entry in entries:
                    name = entry.name
                    if not name.endswith(TRASHINFO_SUFFIX) or name == TRASHINFO_SUFFIX:
                        logger.debug(f"Not a '{TRASHINFO_SUFFIX}' file: {entry.path}")
                        continue
                    yield Path(entry.path)
        except OSError as e:
            raise DirectoryUnavailable(directory.root, str(e)) from e

    def read(self, directory: TrashDirectory, info_path: Path) -> TrashItem:
        try:
            text = info_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MetadataUnreadable(info_path, str(e)) from e

        parser = _parser()
        try:
            parser.read_string(text, source=str(info_path))
        except configparser.Error as e:
            raise MetadataUnreadable(info_path, f"invalid trash info: {e}") from e

        item = TrashItem(
            info_path=info_path,
            content_path=directory.content_path_for(info_path),
            deletion_date=None,
        )

        if not parser.has_section(TRASH_INFO_GROUP):
            item.date_error = f"no [{TRASH_INFO_GROUP}] group"
            return item

        section = parser[TRASH_INFO_GROUP]
        if "Path" in section:
            item.original_path = unquote(section["Path"])

        raw_date = section.get("DeletionDate")
        if raw_date is None:
            item.date_error = "no DeletionDate key"
            return item

        try:
            item.deletion_date = parse_deletion_date(raw_date)
        except ValueError:
            item.date_error = f"unparsable DeletionDate {raw_date!r}"

        return item

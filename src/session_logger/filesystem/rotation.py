"""
Startup rotation of the previous session's log.

Before a new session starts writing, the "latest" log of the previous
session is copied into a date-derived archive tree and replaced by an empty
file::

    full/
        00A-latest.log
        2024/
            March/
                05 Tue/
                    14-03-59  2024-03-05.log

Rotation is best-effort: if archiving fails the previous log is lost but
the new session still gets a fresh "latest" file.
"""

from __future__ import annotations

import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from session_logger.config.logging_config import logger
from session_logger.core.constants import (
    ARCHIVE_FILE_FORMAT,
    LATEST_LOG_NAME,
    LOG_SUFFIX,
    MONTH_NAMES,
    UNSAFE_FILENAME_CHARS,
    WEEKDAY_ABBREVIATIONS,
)


def archive_dir_for(full_dir: Path, moment: datetime) -> Path:
    """
    Directory receiving the logs of sessions last written at ``moment``.

    :param full_dir: The ``full/`` log directory.
    :param moment: Last-modified time of the archived log (local time).
    :return: ``full_dir/<year>/<Month>/<dd Www>``
    """
    return full_dir.joinpath(
        f"{moment.year:04d}",
        MONTH_NAMES[moment.month - 1],
        f"{moment.day:02d} {WEEKDAY_ABBREVIATIONS[moment.weekday()]}",
    )


def archive_file_for(full_dir: Path, moment: datetime) -> Path:
    return archive_dir_for(full_dir, moment).joinpath(
        moment.strftime(ARCHIVE_FILE_FORMAT) + LOG_SUFFIX
    )


def sanitize_filename(name: str) -> str:
    """Remove characters that would break a file name on any platform."""
    return re.sub(UNSAFE_FILENAME_CHARS, "", name)


def rotate_latest(full_dir: Path, latest: Optional[Path] = None) -> Optional[Path]:
    """
    Archive the previous session's log and leave an empty one in its place.

    An existing archive with the same name is never overwritten.

    :param full_dir: The ``full/`` log directory.
    :param latest: The "latest" log file, ``full_dir/00A-latest.log`` by default.
    :return: The archive file the previous log was copied to, or None if nothing was archived.
    """
    if latest is None:
        latest = full_dir.joinpath(LATEST_LOG_NAME)

    archived: Optional[Path] = None
    try:
        archived = _archive(full_dir, latest)
    except Exception as e:
        logger.exception(f"Failed to archive previous log {latest}: {e}")

    _recreate(latest)
    return archived


def _archive(full_dir: Path, latest: Path) -> Optional[Path]:
    if not latest.is_file() or latest.stat().st_size == 0:
        return None

    last_modified = datetime.fromtimestamp(latest.stat().st_mtime)
    archive_file = archive_file_for(full_dir, last_modified)
    archive_file.parent.mkdir(parents=True, exist_ok=True)

    if archive_file.exists():
        logger.warning(f"Archive {archive_file} already exists. Skipping copy.")
        return None

    shutil.copyfile(latest, archive_file)
    logger.debug(f"Previous log archived to {archive_file}")
    return archive_file


def _recreate(latest: Path) -> None:
    try:
        latest.unlink(missing_ok=True)
        latest.touch()
    except OSError as e:
        logger.error(f"Could not recreate {latest}: {e}")


def list_archives(full_dir: Path) -> list[Path]:
    """
    Archived session logs under ``full_dir``, newest first.

    :param full_dir: The ``full/`` log directory.
    :return: Archive files; the "latest" log is not included.
    """
    if not full_dir.is_dir():
        return []

    archives = [
        path
        for path in full_dir.rglob(f"*{LOG_SUFFIX}")
        if path.is_file() and path.parent != full_dir
    ]
    archives.sort(key=_archive_sort_key, reverse=True)
    return archives


def _archive_sort_key(path: Path) -> tuple[str, str]:
    # File names are "HH-MM-SS  YYYY-MM-DD"; sort by date, then time
    time_part, _, date_part = path.stem.partition("  ")
    return date_part, time_part

"""Log directory and log file naming.

File names follow ``<channel>-<YYYY-MM-DD>-<hash>.log`` where ``hash`` is a
host-supplied keyed hash of the date string. The name is stable for a whole
calendar day, so every write of that day lands in the same file, and a new
file starts automatically on the next day.
"""

from __future__ import annotations

import hashlib
import hmac
import re
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path

# Maps a string to a stable opaque string using a host secret.
KeyedHash = Callable[[str], str]

LOG_FILE_SUFFIX = ".log"
DATE_FORMAT = "%Y-%m-%d"

_LOG_FILE_RE = re.compile(
    r"^(?P<channel>.+)-(?P<date>\d{4}-\d{2}-\d{2})-(?P<hash>[^/\\]+)\.log$"
)


def make_hmac_hasher(secret: str | bytes, *, digestmod: str = "md5") -> KeyedHash:
    """Build a KeyedHash backed by HMAC with ``secret``."""
    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    if not key:
        raise ValueError("secret must not be empty")

    def _hash(value: str) -> str:
        return hmac.new(key, value.encode("utf-8"), getattr(hashlib, digestmod)).hexdigest()

    return _hash


def is_log_file_name(name: str) -> bool:
    """True when ``name`` follows the log file naming convention."""
    return _LOG_FILE_RE.match(name) is not None


class PathResolver:
    """Computes the log directory and per-day file names."""

    __slots__ = ("_hasher",)

    def __init__(self, hasher: KeyedHash) -> None:
        self._hasher = hasher

    @staticmethod
    def directory_path(storage_base: str | Path, dir_name: str) -> Path:
        return Path(storage_base) / dir_name

    def file_name(self, channel: str, now: datetime | date) -> str:
        """Return the file name for ``channel`` on the calendar day of ``now``."""
        day = now.strftime(DATE_FORMAT)
        suffix = self._hasher(day)
        if not suffix or "/" in suffix or "\\" in suffix or "." in suffix:
            raise ValueError(f"keyed hash produced an unusable file name suffix: {suffix!r}")
        return f"{channel}-{day}-{suffix}{LOG_FILE_SUFFIX}"

    def final_path(
        self,
        storage_base: str | Path,
        dir_name: str,
        channel: str,
        now: datetime | date,
    ) -> Path:
        return self.directory_path(storage_base, dir_name) / self.file_name(channel, now)

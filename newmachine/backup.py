# newmachine/backup.py

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable

from newmachine.config import DOTFILES

logger = logging.getLogger(__name__)


class BackupStatus(str, Enum):
    COPIED = "copied"
    SKIPPED_MISSING = "skipped-missing"
    FAILED = "failed"


@dataclass(frozen=True)
class BackupItemResult:
    source: Path
    status: BackupStatus
    error: str | None = None


@dataclass
class BackupReport:
    destination: Path
    items: list[BackupItemResult] = field(default_factory=list)

    def _with(self, status):
        return [i for i in self.items if i.status is status]

    @property
    def copied(self) -> list[BackupItemResult]:
        return self._with(BackupStatus.COPIED)

    @property
    def skipped(self) -> list[BackupItemResult]:
        return self._with(BackupStatus.SKIPPED_MISSING)

    @property
    def failed(self) -> list[BackupItemResult]:
        return self._with(BackupStatus.FAILED)


def _copy_one(source: Path, destination: Path) -> None:
    target = destination / source.name
    if source.is_dir() and not source.is_symlink():
        shutil.copytree(source, target, symlinks=True, dirs_exist_ok=True)
    else:
        shutil.copy2(source, target, follow_symlinks=False)


def backup_dotfiles(
    home: Path,
    destination: Path,
    items: Iterable[str] = DOTFILES,
) -> BackupReport:
    """
    Best-effort snapshot of home-relative dotfiles into ``destination``.

    Missing sources are skipped, copy errors are recorded per item; nothing
    here raises. Existing copies in ``destination`` are overwritten.
    """
    report = BackupReport(destination=destination)
    items = list(items)

    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Cannot create backup directory %s: %s", destination, e)
        report.items = [
            BackupItemResult(home / rel, BackupStatus.FAILED, str(e)) for rel in items
        ]
        return report

    for rel in items:
        source = home / rel
        if not source.exists() and not source.is_symlink():
            logger.debug("Backup: %s does not exist, skipping", source)
            report.items.append(BackupItemResult(source, BackupStatus.SKIPPED_MISSING))
            continue
        try:
            _copy_one(source, destination)
        except OSError as e:
            logger.warning("Backup of %s failed: %s", source, e)
            report.items.append(BackupItemResult(source, BackupStatus.FAILED, str(e)))
        else:
            report.items.append(BackupItemResult(source, BackupStatus.COPIED))

    logger.info(
        "Backed up %d of %d dotfiles to %s",
        len(report.copied),
        len(report.items),
        destination,
    )
    return report

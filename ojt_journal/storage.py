from __future__ import annotations

from datetime import datetime
from pathlib import Path

from . import config


def journal_filename(now: datetime | None = None) -> str:
    moment = now or datetime.now()
    return f"{config.JOURNAL_FILE_PREFIX}_{int(moment.timestamp() * 1000)}.pdf"


def journal_path(base_dir: Path | None = None, now: datetime | None = None) -> Path:
    root = base_dir or config.OUT_DIR
    return root / journal_filename(now)


def write_journal(data: bytes, path: Path | None = None) -> Path:
    target = path or journal_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target

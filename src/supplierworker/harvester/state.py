"""
Durable last-run cutoff.

A single ISO-8601 timestamp in a text file, overwritten after each run
whose fetch phase completed. A missing or unreadable file means "no
cutoff", which selects every supplier.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def parse_timestamp(value: str) -> datetime:
    """Parse ISO-8601; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class CutoffStore:
    """Reads and writes the cutoff file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read(self) -> Optional[datetime]:
        if not self.path.exists():
            return None

        try:
            return parse_timestamp(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cutoff in {self.path}: {e}")
            return None

    def write(self, cutoff: datetime) -> None:
        if cutoff.tzinfo is None:
            cutoff = cutoff.replace(tzinfo=timezone.utc)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(cutoff.isoformat(), encoding="utf-8")
        os.replace(tmp, self.path)
        logger.info(f"Saved cutoff {cutoff.isoformat()} to {self.path}")

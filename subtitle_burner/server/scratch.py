"""Per-request scratch file naming and cleanup.

WHY: Concurrent requests share the upload and output directories. Each
request must get names nobody else will pick, and must leave nothing behind
except the rendered video it promised to serve.

HOW: Names embed a millisecond timestamp plus a short random suffix.
ScratchFiles hands out paths and remembers them so one cleanup() call at
the end of a request removes everything not explicitly kept.

RULES:
- Directories are created on first use
- Cleanup is best-effort: a failed delete logs a warning and never raises
"""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def timestamp_name(prefix: str = "", suffix: str = "") -> str:
    """Return a unique file name like ``output-1718000000000-3fa9c2.mp4``."""
    millis = int(time.time() * 1000)
    return "{}{}-{}{}".format(prefix, millis, uuid.uuid4().hex[:6], suffix)


class ScratchFiles:
    """Tracks the files one request creates."""

    def __init__(self) -> None:
        self._paths: List[Path] = []

    def path(self, directory: Path, prefix: str = "", suffix: str = "") -> Path:
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / timestamp_name(prefix, suffix)
        self._paths.append(path)
        return path

    def cleanup(self, keep: Optional[Path] = None) -> None:
        """Delete every tracked file except ``keep``."""
        for path in self._paths:
            if keep is not None and path == keep:
                continue
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove scratch file %s: %s", path, exc)
        self._paths = [keep] if keep is not None and keep in self._paths else []

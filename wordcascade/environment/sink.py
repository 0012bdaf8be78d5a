"""Destinations for end-of-match stats."""

import json
import logging
from pathlib import Path
from typing import List, Protocol

from ..engine.models import FinalStats


logger = logging.getLogger(__name__)


class StatsSink(Protocol):
    """Write-only receiver of a finished match's stats."""

    def submit(self, stats: FinalStats) -> None: ...


class MemorySink:
    """Keeps submitted stats in a list."""

    def __init__(self):
        self.submitted: List[FinalStats] = []

    def submit(self, stats: FinalStats) -> None:
        self.submitted.append(stats)


class JsonFileSink:
    """Writes submitted stats to a JSON file, replacing any previous content."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def submit(self, stats: FinalStats) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(stats.model_dump(), f, indent=2)
        logger.info("Final stats written to %s", self.path)

"""Local JSON file store, used as the fallback when the state server is unavailable."""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _default_state_path() -> Path:
    configured = os.getenv("WEEKPLAN_STATE_FILE")
    if configured:
        return Path(configured)
    return Path.home() / ".weekplan" / "state.json"


class LocalStatePersistence:
    """PersistencePort writing the snapshot to a JSON file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else _default_state_path()

    def write(self, snapshot: dict) -> None:
        """Write the snapshot, creating parent directories if needed.

        Raises:
            OSError: If the file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(snapshot, ensure_ascii=False), encoding="utf-8")

    def save(self, snapshot: dict) -> None:
        try:
            self.write(snapshot)
        except OSError as e:
            logger.warning(f"Failed to write state file {self.path}: {type(e).__name__}: {str(e)}")

    def load(self) -> Optional[dict]:
        """Read the snapshot. Returns None if the file is missing or unreadable."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read state file {self.path}: {type(e).__name__}: {str(e)}")
            return None
        return data if isinstance(data, dict) else None

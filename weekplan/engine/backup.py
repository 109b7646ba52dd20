"""Backup export/import of planner state as JSON text."""

import json

from pydantic import ValidationError

from weekplan.models.snapshot import Snapshot


class MalformedBackupError(ValueError):
    """Raised when backup text cannot be turned into a snapshot."""


def export_backup(snapshot: Snapshot) -> str:
    """Serialize a snapshot for download. UI preferences are not part of a backup."""
    data = snapshot.model_copy(update={"ui": None}).to_wire()
    return json.dumps(data, indent=2, ensure_ascii=False)


def parse_backup(text: str) -> Snapshot:
    """Parse backup text.

    Both `events` and `todos` must be arrays. A missing `nextId` is left as
    None so the registry derives it from the event ids.

    Raises:
        MalformedBackupError: If the text is not valid JSON or misses required arrays
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedBackupError(f"Backup is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedBackupError("Backup must be a JSON object")
    if not isinstance(data.get("events"), list) or not isinstance(data.get("todos"), list):
        raise MalformedBackupError("Backup must contain 'events' and 'todos' arrays")
    try:
        return Snapshot.model_validate({**data, "version": data.get("version") or 1})
    except ValidationError as e:
        raise MalformedBackupError(f"Backup contains invalid entries: {e.error_count()} errors") from e

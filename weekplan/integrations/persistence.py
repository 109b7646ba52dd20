"""Combined persistence: local file first, state server in the background.

Saves write the local file synchronously and push to the state server on a
single background worker, so a slow or unreachable server never delays a
commit. Loads prefer the server and fall back to the local file.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from weekplan.engine.ports import LoggingMessages, Renderer, UserMessages
from weekplan.engine.store import ScheduleStore
from weekplan.integrations.local_state import LocalStatePersistence
from weekplan.integrations.state_server import RemoteStatePersistence

logger = logging.getLogger(__name__)

STORAGE_WARNING_MESSAGE = "Unable to save data. Make sure local storage is writable."


class FallbackStatePersistence:
    """PersistencePort composing a local file store and the remote state server."""

    def __init__(
        self,
        local: Optional[LocalStatePersistence] = None,
        remote: Optional[RemoteStatePersistence] = None,
        messages: Optional[UserMessages] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.local = local or LocalStatePersistence()
        self.remote = remote
        self.messages = messages or LoggingMessages()
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="weekplan-save")
        self._warning_shown = False
        self._pending: Optional[Future] = None

    def save(self, snapshot: dict) -> None:
        try:
            self.local.write(snapshot)
        except OSError as e:
            logger.warning(f"Local state write failed: {type(e).__name__}: {str(e)}")
            self._warn_once()
        if self.remote is not None:
            self._pending = self._executor.submit(self.remote.save, snapshot)

    def load(self) -> Optional[dict]:
        state = self.remote.load() if self.remote is not None else None
        if not state:
            state = self.local.load()
        return state

    def flush(self, timeout: Optional[float] = None) -> None:
        """Wait for the most recent background push to finish."""
        if self._pending is not None:
            self._pending.result(timeout=timeout)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def _warn_once(self) -> None:
        if self._warning_shown:
            return
        self._warning_shown = True
        self.messages.warn(STORAGE_WARNING_MESSAGE)


def create_store(
    renderer: Optional[Renderer] = None,
    messages: Optional[UserMessages] = None,
    local: Optional[LocalStatePersistence] = None,
    remote: Optional[RemoteStatePersistence] = None,
) -> ScheduleStore:
    """Build a ScheduleStore backed by the local state file and the state server, then load it.

    Locations come from WEEKPLAN_STATE_FILE and WEEKPLAN_API_BASE unless
    explicit stores are given.
    """
    messages = messages or LoggingMessages()
    persistence = FallbackStatePersistence(
        local=local or LocalStatePersistence(),
        remote=remote or RemoteStatePersistence(),
        messages=messages,
    )
    store = ScheduleStore(persistence=persistence, renderer=renderer, messages=messages)
    store.load()
    return store

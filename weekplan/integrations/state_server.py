"""State server integration for weekplan.

Talks to the `/api/state` endpoints served by `weekplan.api.app`.
"""

import logging
import os
from typing import Optional
import requests
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

WEEKPLAN_API_BASE = os.getenv("WEEKPLAN_API_BASE", "http://localhost:5173")
HTTP_TIMEOUT_SEC = float(os.getenv("WEEKPLAN_HTTP_TIMEOUT_SEC", "5"))


class StateServerClient:
    """Client for the planner state API."""

    def __init__(self, api_base: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize state server client.

        Args:
            api_base: Server base URL. If None, reads from WEEKPLAN_API_BASE env var.
            timeout: Request timeout in seconds. If None, reads from WEEKPLAN_HTTP_TIMEOUT_SEC.
        """
        self.api_base = (api_base or WEEKPLAN_API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else HTTP_TIMEOUT_SEC
        self.headers = {"Content-Type": "application/json"}

    @property
    def state_url(self) -> str:
        return f"{self.api_base}/api/state"

    def fetch_state(self) -> Optional[dict]:
        """Fetch the stored snapshot.

        Returns:
            Snapshot dict, or None if the server has no state (204) or answers with an error

        Raises:
            requests.RequestException: If the server cannot be reached
            ValueError: If the response body is not JSON
        """
        response = requests.get(self.state_url, headers={"Cache-Control": "no-store"}, timeout=self.timeout)
        if response.status_code == 204 or not response.ok:
            return None
        return response.json()

    def push_state(self, state: dict) -> None:
        """Store a snapshot on the server.

        Raises:
            requests.RequestException: If the request fails or the server rejects the state
        """
        response = requests.post(self.state_url, json=state, headers=self.headers, timeout=self.timeout)
        response.raise_for_status()


class RemoteStatePersistence:
    """PersistencePort backed by the state server. Failures are logged and ignored."""

    def __init__(self, client: Optional[StateServerClient] = None):
        self.client = client or StateServerClient()

    def save(self, snapshot: dict) -> None:
        try:
            self.client.push_state(snapshot)
        except requests.RequestException as e:
            logger.warning(f"Failed to push state to {self.client.state_url}: {type(e).__name__}: {str(e)}")

    def load(self) -> Optional[dict]:
        try:
            return self.client.fetch_state()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Failed to fetch state from {self.client.state_url}: {type(e).__name__}: {str(e)}")
            return None

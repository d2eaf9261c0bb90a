# =============================================================================
# lib/usage_store.py - Anonymous Usage Counter Store
# =============================================================================
# Callers that have not signed in still get a small extraction allowance.
# Their counters have no profile row to live in, so they are kept in a local
# JSON file keyed by the client id the caller sends (X-Client-Id).
#
# File format:
#   {"<client_id>": <count>, ...}
#
# Counters only ever go up. A missing or unreadable file reads as empty.
# =============================================================================

import json
import logging
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


class AnonymousUsageStore:
    """
    JSON-file backed extraction counters for anonymous callers.

    Example:
        store = AnonymousUsageStore(".recipegenie/anonymous_usage.json")
        store.get("device-123")        # 0
        store.increment("device-123")  # 1
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, int]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not read usage file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed usage file {self.path}")
            return {}

        counts: dict[str, int] = {}
        for key, value in data.items():
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                counts[str(key)] = value
        return counts

    def _save(self, counts: dict[str, int]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(counts, f, indent=2, sort_keys=True)
        tmp_path.replace(self.path)

    def get(self, client_id: str) -> int:
        """Return the number of extractions recorded for a client."""
        with self._lock:
            return self._load().get(client_id, 0)

    def increment(self, client_id: str) -> int:
        """Record one extraction for a client and return the new count."""
        with self._lock:
            counts = self._load()
            new_count = counts.get(client_id, 0) + 1
            counts[client_id] = new_count
            self._save(counts)

        logger.debug(f"Anonymous usage for {client_id} is now {new_count}")
        return new_count


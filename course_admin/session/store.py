"""
Session persistence.

The store is a dumb key-value surface holding two records:
``session.user`` (JSON text with userId, displayName, email) and
``session.token`` (the opaque bearer token). Deciding whether a loaded
record is complete is the auth flow's job, not the store's.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.session import TOKEN_KEY, USER_KEY, Session
from ..utils.file_utils import load_json, save_json


logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """
    Abstract session store.

    Subclasses provide raw keyed reads and writes; serialization of the
    Session into the two records lives here.
    """

    @abstractmethod
    def _read_records(self) -> Dict[str, str]:
        pass

    @abstractmethod
    def _write_records(self, records: Dict[str, str]):
        pass

    @abstractmethod
    def clear(self):
        """Remove all session keys. Must not raise."""
        pass

    def save(self, session: Session):
        """Serialize and store the session and its token."""
        self._write_records({
            USER_KEY: json.dumps(session.user_record()),
            TOKEN_KEY: session.token,
        })
        logger.debug(f"Session saved for user {session.user_id}")

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Read back the stored record.

        Returns:
            Flat dict merging the user fields and ``token``, possibly
            incomplete, or None when nothing is stored
        """
        records = self._read_records()
        if USER_KEY not in records and TOKEN_KEY not in records:
            return None

        record: Dict[str, Any] = {}
        raw_user = records.get(USER_KEY)
        if raw_user:
            try:
                user = json.loads(raw_user)
            except (TypeError, ValueError):
                logger.warning("Stored session user record is not valid JSON")
                user = None
            if isinstance(user, dict):
                record.update(user)

        token = records.get(TOKEN_KEY)
        if token:
            record["token"] = token

        return record


class MemorySessionStore(SessionStore):
    """In-process store, used by tests and one-shot scripts."""

    def __init__(self, records: Optional[Dict[str, str]] = None):
        self.records: Dict[str, str] = dict(records or {})

    def _read_records(self) -> Dict[str, str]:
        return dict(self.records)

    def _write_records(self, records: Dict[str, str]):
        self.records.update(records)

    def clear(self):
        self.records.pop(USER_KEY, None)
        self.records.pop(TOKEN_KEY, None)


class FileSessionStore(SessionStore):
    """
    Store backed by a JSON file, so the session survives between CLI runs.

    Examples:
        >>> store = FileSessionStore(Path("output/session.json"))
        >>> store.save(session)
        >>> store.load()["userId"]
        1
    """

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)

    def _read_records(self) -> Dict[str, str]:
        data = load_json(self.filepath)
        if not isinstance(data, dict):
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def _write_records(self, records: Dict[str, str]):
        data = self._read_records()
        data.update(records)
        if not save_json(data, self.filepath):
            logger.warning(f"Session could not be persisted to {self.filepath}")

    def clear(self):
        data = self._read_records()
        data.pop(USER_KEY, None)
        data.pop(TOKEN_KEY, None)
        try:
            if data:
                save_json(data, self.filepath)
            elif self.filepath.exists():
                self.filepath.unlink()
            logger.debug(f"Session cleared: {self.filepath}")
        except OSError as e:
            logger.error(f"Failed to clear session file {self.filepath}: {e}")

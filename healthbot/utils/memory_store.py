"""
In-process store with the same coroutine interface as DatabaseManager.

Selected with STORAGE_BACKEND=memory for local development without MongoDB;
data lives only as long as the process.
"""
import copy
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set

from healthbot.utils.indian_states import normalize_name
from healthbot.utils.logger import get_db_logger

logger = get_db_logger()


def _utcnow():
    return datetime.now(timezone.utc)


class InMemoryStore:

    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self.preferences: Dict[str, Dict[str, Any]] = {}
        self.cache: Dict[tuple, Dict[str, Any]] = {}
        self.states: Dict[int, Dict[str, Any]] = {}
        self.diseases: Dict[str, Dict[str, Any]] = {}
        self.alert_history: List[Dict[str, Any]] = []
        self.feedback: List[Dict[str, Any]] = []

    async def connect(self):
        logger.info("Using in-memory store")
        return self

    async def connect_with_retry(self, max_retries=5, retry_delay=2):
        return await self.connect()

    async def close(self):
        return None

    async def ping(self) -> bool:
        return True

    # Canonical states

    async def seed_states(self, states: Iterable[Dict[str, Any]]) -> int:
        inserted = 0
        for state in states:
            if state["id"] not in self.states:
                self.states[state["id"]] = dict(state)
                inserted += 1
        return inserted

    async def list_states(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        needle = (search or "").strip().lower()
        matches = [s for s in self.states.values() if needle in s["name"].lower()]
        return copy.deepcopy(sorted(matches, key=lambda s: s["name"]))

    async def get_state(self, state_id: int) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.states.get(state_id))

    async def find_state_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        wanted = normalize_name(name)
        for state in self.states.values():
            if normalize_name(state["name"]) == wanted:
                return copy.deepcopy(state)
        return None

    # Alert preferences

    async def get_alert_preference(self, phone_number: str) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.preferences.get(phone_number))

    async def upsert_alert_preference(self, phone_number: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        now = _utcnow()
        row = self.preferences.get(phone_number)
        if row is None:
            row = {"phone_number": phone_number, "created_at": now, "alert_frequency": "daily", "alert_enabled": True}
            self.preferences[phone_number] = row
        row.update(fields)
        row["updated_at"] = now
        return copy.deepcopy(row)

    async def set_alert_enabled(self, phone_number: str, enabled: bool) -> bool:
        row = self.preferences.get(phone_number)
        if row is None:
            return False
        row["alert_enabled"] = enabled
        row["updated_at"] = _utcnow()
        return True

    async def delete_alert_preference(self, phone_number: str) -> bool:
        return self.preferences.pop(phone_number, None) is not None

    async def list_enabled_alert_preferences(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(row) for row in self.preferences.values() if row.get("alert_enabled")]

    async def mark_alert_sent(self, phone_number: str, sent_at: datetime) -> None:
        if phone_number in self.preferences:
            self.preferences[phone_number]["last_alert_sent"] = sent_at

    # Outbreak cache

    async def get_cache_entry(self, cache_type: str, state_name: Optional[str], query_date: str) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.cache.get((cache_type, state_name, query_date)))

    async def upsert_cache_entry(self, entry: Dict[str, Any]) -> bool:
        key = (entry["cache_type"], entry["state_name"], entry["query_date"])
        created = key not in self.cache
        self.cache[key] = copy.deepcopy(entry)
        return created

    async def delete_cache_entries_before(self, query_date: str) -> int:
        stale = [key for key in self.cache if key[2] < query_date]
        for key in stale:
            del self.cache[key]
        return len(stale)

    async def list_cache_entries(self) -> List[Dict[str, Any]]:
        fields = ("cache_type", "state_name", "query_date", "created_at")
        return [{f: entry.get(f) for f in fields} for entry in self.cache.values()]

    # Known-disease ledger

    async def get_active_disease_names(self) -> Set[str]:
        return {name for name, row in self.diseases.items() if row.get("is_active")}

    async def upsert_active_disease(self, disease: Dict[str, Any], seen_at: datetime) -> None:
        name_normalized = normalize_name(disease["name"])
        row = self.diseases.setdefault(name_normalized, {"first_seen": seen_at})
        row.update(copy.deepcopy(disease), name_normalized=name_normalized, is_active=True, last_updated=seen_at)

    async def deactivate_diseases_before(self, cutoff: datetime) -> int:
        count = 0
        for row in self.diseases.values():
            if row.get("is_active") and row["last_updated"] < cutoff:
                row["is_active"] = False
                count += 1
        return count

    # Alert history

    async def insert_alert_history(self, record: Dict[str, Any]) -> None:
        self.alert_history.append(copy.deepcopy(record))

    async def delete_alert_history_before(self, cutoff: datetime) -> int:
        kept = [row for row in self.alert_history if row["sent_at"] >= cutoff]
        removed = len(self.alert_history) - len(kept)
        self.alert_history = kept
        return removed

    # Users and sessions

    async def get_or_create_user(self, phone_number: str, default_language: str = "en") -> Dict[str, Any]:
        now = _utcnow()
        user = self.users.setdefault(
            phone_number,
            {"phone_number": phone_number, "preferred_language": default_language, "created_at": now},
        )
        user["last_active_at"] = now
        return copy.deepcopy(user)

    async def get_user(self, phone_number: str) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.users.get(phone_number))

    async def update_user(self, phone_number: str, fields: Dict[str, Any]) -> None:
        if phone_number in self.users:
            self.users[phone_number].update(fields, updated_at=_utcnow())

    async def get_session(self, phone_number: str) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.sessions.get(phone_number))

    async def set_session(self, phone_number: str, session_state: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.sessions[phone_number] = {
            "phone_number": phone_number,
            "session_state": session_state,
            "context": copy.deepcopy(context or {}),
            "updated_at": _utcnow(),
        }

    # Feedback

    async def insert_feedback(self, record: Dict[str, Any]) -> None:
        self.feedback.append(copy.deepcopy(record))

    async def list_feedback_since(self, cutoff: datetime) -> List[Dict[str, Any]]:
        return [copy.deepcopy(row) for row in self.feedback if row["created_at"] >= cutoff]

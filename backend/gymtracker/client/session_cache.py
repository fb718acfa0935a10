"""In-progress workout state kept on the client between page loads.

``SessionStateCache`` is the only place that mutates this state. Remote
writes happen first; the local cache changes only after they succeed.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from typing import Any, Protocol

from gymtracker.client.storage import Storage

log = logging.getLogger(__name__)

STORAGE_KEY = "gymtracker.workout-session"
MAX_WEIGHT = 1000.0


class SessionAccessor(Protocol):
    def start_session(self, day_id: int) -> dict: ...
    def open_session(self, day_id: int) -> dict | None: ...
    def add_progress(self, exercise_id: int, weight: float, notes: str | None = None) -> dict: ...
    def complete_session(self, session_id: int) -> dict: ...
    def add_session_exercises(self, session_id: int, rows: list[dict]) -> list[dict]: ...


@dataclass
class SetEntry:
    exercise_id: int
    set_index: int
    weight: float = 0.0
    reps: int | None = None
    notes: str | None = None
    # set once a weight has been sent for this set, even a weight of 0
    recorded: bool = False


@dataclass
class ActiveSession:
    id: int
    day_id: int
    started_at: str


def _key(exercise_id: int, set_index: int) -> str:
    return f"{exercise_id}:{set_index}"


class SessionStateCache:
    def __init__(self, client: SessionAccessor, storage: Storage, *, storage_key: str = STORAGE_KEY):
        self.client = client
        self.storage = storage
        self.storage_key = storage_key
        self.session: ActiveSession | None = None
        self.entries: dict[str, SetEntry] = {}
        self.completed_sets: dict[int, int] = {}
        self.load()

    # persistence
    def to_json(self) -> str:
        return json.dumps({
            "session": asdict(self.session) if self.session else None,
            "entries": {k: asdict(v) for k, v in self.entries.items()},
            "completed_sets": {str(k): v for k, v in self.completed_sets.items()},
        })

    def load(self) -> None:
        raw = self.storage.get_item(self.storage_key)
        if not raw:
            return
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("session cache is not an object")
            self.session = ActiveSession(**data["session"]) if data.get("session") else None
            self.entries = {k: SetEntry(**v) for k, v in data.get("entries", {}).items()}
            self.completed_sets = {int(k): int(v) for k, v in data.get("completed_sets", {}).items()}
        except (ValueError, TypeError, KeyError):
            # unreadable leftovers from an older layout: start clean
            log.warning("discarding unreadable session cache under %s", self.storage_key)
            self._reset()
            self.storage.remove_item(self.storage_key)

    def save(self) -> None:
        self.storage.set_item(self.storage_key, self.to_json())

    def _reset(self) -> None:
        self.session = None
        self.entries = {}
        self.completed_sets = {}

    # reads
    @property
    def active(self) -> bool:
        return self.session is not None

    def entry(self, exercise_id: int, set_index: int) -> SetEntry | None:
        return self.entries.get(_key(exercise_id, set_index))

    def sets_done(self, exercise_id: int) -> int:
        return self.completed_sets.get(exercise_id, 0)

    # operations
    def start_session(self, day_id: int) -> ActiveSession:
        if self.session is not None:
            raise ValueError(f"session {self.session.id} is still active")
        created = self.client.start_session(day_id)
        self.session = ActiveSession(id=created["id"], day_id=created["day_id"], started_at=created["started_at"])
        self.entries = {}
        self.completed_sets = {}
        self.save()
        return self.session

    def resume(self, day_id: int) -> ActiveSession | None:
        """Adopt the open remote session for ``day_id``, if there is one."""
        if self.session is not None and self.session.day_id == day_id:
            return self.session
        found = self.client.open_session(day_id)
        if found is None:
            return None
        if self.session is None or self.session.id != found["id"]:
            self._reset()
            self.session = ActiveSession(id=found["id"], day_id=found["day_id"], started_at=found["started_at"])
            self.save()
        return self.session

    def record_weight(self, exercise_id: int, weight: float, set_index: int, notes: str | None = None) -> SetEntry:
        if self.session is None:
            raise ValueError("no active session")
        if not 0 <= weight <= MAX_WEIGHT:
            raise ValueError(f"weight must be between 0 and {MAX_WEIGHT:g}")

        # remote first; a failure here leaves the cache untouched
        self.client.add_progress(exercise_id, weight, notes)

        key = _key(exercise_id, set_index)
        current = self.entries.get(key)
        first_time = current is None or not current.recorded
        entry = SetEntry(
            exercise_id=exercise_id,
            set_index=set_index,
            weight=float(weight),
            reps=current.reps if current else None,
            notes=notes if notes is not None else (current.notes if current else None),
            recorded=True,
        )
        self.entries[key] = entry
        if first_time:
            self.completed_sets[exercise_id] = self.completed_sets.get(exercise_id, 0) + 1
        self.save()
        return entry

    def complete_set(self, exercise_id: int, set_index: int, reps: int) -> SetEntry:
        if reps < 0:
            raise ValueError("reps must not be negative")
        key = _key(exercise_id, set_index)
        entry = self.entries.get(key) or SetEntry(exercise_id=exercise_id, set_index=set_index)
        entry.reps = reps
        self.entries[key] = entry
        self.save()
        return entry

    def session_rows(self) -> list[dict[str, Any]]:
        """One row per exercise, built from the sets that carry a weight."""
        grouped: dict[int, list[SetEntry]] = {}
        for entry in sorted(self.entries.values(), key=lambda e: (e.exercise_id, e.set_index)):
            if entry.weight:
                grouped.setdefault(entry.exercise_id, []).append(entry)

        rows = []
        for exercise_id, sets in grouped.items():
            reps = [str(s.reps) for s in sets if s.reps is not None]
            notes = [s.notes for s in sets if s.notes]
            rows.append({
                "exercise_id": exercise_id,
                "weight": max(s.weight for s in sets),
                "sets_completed": len(sets),
                "reps_performed": "/".join(reps) or None,
                "notes": "; ".join(notes) or None,
            })
        return rows

    def complete_session(self) -> list[dict]:
        if self.session is None:
            raise ValueError("no active session")
        session_id = self.session.id

        self.client.complete_session(session_id)
        rows = self.session_rows()
        saved: list[dict] = []
        if rows:
            # on failure the cache stays as it was so the user can retry
            saved = self.client.add_session_exercises(session_id, rows)

        self._reset()
        self.storage.remove_item(self.storage_key)
        log.info("session %s completed with %d exercise rows", session_id, len(rows))
        return saved

import pytest

from gymtracker.client import RemoteError, SessionStateCache, MemoryStorage, JsonFileStorage, SetEntry
from gymtracker.client.session_cache import STORAGE_KEY


class FakeAccessor:
    """Records calls; flip the ``fail_*`` flags to simulate remote errors."""

    def __init__(self):
        self.calls = []
        self.fail_progress = False
        self.fail_bulk = False
        self.open = None
        self._next_id = 100

    def start_session(self, day_id):
        self.calls.append(("start", day_id))
        self._next_id += 1
        return {"id": self._next_id, "day_id": day_id, "started_at": "2026-10-18T10:00:00"}

    def open_session(self, day_id):
        self.calls.append(("open", day_id))
        return self.open

    def add_progress(self, exercise_id, weight, notes=None):
        self.calls.append(("progress", exercise_id, weight))
        if self.fail_progress:
            raise RemoteError(503, "backend unavailable")
        return {"id": 1, "exercise_id": exercise_id, "weight": weight}

    def complete_session(self, session_id):
        self.calls.append(("complete", session_id))
        return {"id": session_id}

    def add_session_exercises(self, session_id, rows):
        self.calls.append(("bulk", session_id, rows))
        if self.fail_bulk:
            raise RemoteError(500, "insert failed")
        return rows


@pytest.fixture
def remote():
    return FakeAccessor()


@pytest.fixture
def cache(remote):
    c = SessionStateCache(remote, MemoryStorage())
    c.start_session(day_id=7)
    return c


def test_start_session_caches_and_persists(remote):
    storage = MemoryStorage()
    c = SessionStateCache(remote, storage)
    sess = c.start_session(7)
    assert c.active and sess.day_id == 7
    assert storage.get_item(STORAGE_KEY) is not None

def test_start_while_active_is_refused(cache, remote):
    with pytest.raises(ValueError):
        cache.start_session(8)
    assert [c[0] for c in remote.calls] == ["start"]

def test_start_failure_leaves_cache_empty():
    class Down(FakeAccessor):
        def start_session(self, day_id):
            raise RemoteError(None, "connection refused")
    c = SessionStateCache(Down(), MemoryStorage())
    with pytest.raises(RemoteError):
        c.start_session(1)
    assert not c.active

def test_record_weight_updates_entry_and_counter(cache, remote):
    cache.record_weight(3, 60, set_index=0)
    cache.record_weight(3, 62.5, set_index=1)
    # re-recording a set replaces the weight but does not count twice
    cache.record_weight(3, 65, set_index=1)

    assert cache.entry(3, 1).weight == 65
    assert cache.sets_done(3) == 2
    assert [c[0] for c in remote.calls].count("progress") == 3

def test_zero_then_real_weight_counts_set_once(cache):
    cache.record_weight(3, 0, set_index=0)
    assert cache.sets_done(3) == 1
    cache.record_weight(3, 40, set_index=0)
    assert cache.entry(3, 0).weight == 40
    assert cache.sets_done(3) == 1

def test_reps_before_weight_still_counts_once(cache):
    cache.complete_set(3, 0, reps=10)
    assert cache.sets_done(3) == 0
    cache.record_weight(3, 50, set_index=0)
    cache.record_weight(3, 55, set_index=0)
    assert cache.entry(3, 0).reps == 10
    assert cache.sets_done(3) == 1

def test_record_weight_remote_failure_keeps_previous_entry(cache, remote):
    cache.record_weight(3, 60, set_index=0)
    cache.complete_set(3, 0, reps=10)
    before = SetEntry(**vars(cache.entry(3, 0)))

    remote.fail_progress = True
    with pytest.raises(RemoteError):
        cache.record_weight(3, 80, set_index=0)

    assert cache.entry(3, 0) == before
    assert cache.sets_done(3) == 1

def test_record_weight_remote_failure_creates_nothing(cache, remote):
    remote.fail_progress = True
    with pytest.raises(RemoteError):
        cache.record_weight(4, 50, set_index=0)
    assert cache.entry(4, 0) is None
    assert cache.sets_done(4) == 0

@pytest.mark.parametrize("weight", [-0.5, 1000.01])
def test_out_of_range_weight_never_reaches_remote(cache, remote, weight):
    with pytest.raises(ValueError):
        cache.record_weight(3, weight, set_index=0)
    assert not any(c[0] == "progress" for c in remote.calls)

def test_record_weight_needs_active_session(remote):
    c = SessionStateCache(remote, MemoryStorage())
    with pytest.raises(ValueError):
        c.record_weight(3, 50, set_index=0)

def test_complete_set_is_local_only(cache, remote):
    calls_before = list(remote.calls)
    entry = cache.complete_set(3, 2, reps=8)
    assert entry.reps == 8 and entry.weight == 0
    assert remote.calls == calls_before

def test_complete_session_without_weights_skips_bulk(cache, remote):
    sid = cache.session.id
    cache.complete_set(3, 0, reps=12)
    assert cache.complete_session() == []
    assert ("complete", sid) in remote.calls
    assert not any(c[0] == "bulk" for c in remote.calls)
    assert not cache.active and cache.entries == {}

def test_complete_session_aggregates_per_exercise(cache, remote):
    cache.record_weight(3, 60, 0, notes="fácil")
    cache.complete_set(3, 0, 10)
    cache.record_weight(3, 65, 1)
    cache.complete_set(3, 1, 8)
    cache.record_weight(5, 20, 0)
    cache.complete_set(9, 0, 15)  # reps without weight: dropped

    cache.complete_session()
    bulk = [c for c in remote.calls if c[0] == "bulk"]
    assert len(bulk) == 1
    rows = {r["exercise_id"]: r for r in bulk[0][2]}
    assert set(rows) == {3, 5}
    assert rows[3] == {"exercise_id": 3, "weight": 65, "sets_completed": 2, "reps_performed": "10/8", "notes": "fácil"}
    assert rows[5]["reps_performed"] is None

def test_bulk_failure_keeps_cache(remote):
    storage = MemoryStorage()
    c = SessionStateCache(remote, storage)
    c.start_session(7)
    c.record_weight(3, 60, 0)
    snapshot = c.to_json()

    remote.fail_bulk = True
    with pytest.raises(RemoteError):
        c.complete_session()
    assert c.active
    assert c.to_json() == snapshot
    assert storage.get_item(STORAGE_KEY) == snapshot

    # retry succeeds and clears everything
    remote.fail_bulk = False
    c.complete_session()
    assert not c.active
    assert storage.get_item(STORAGE_KEY) is None

def test_reload_round_trip(tmp_path, remote):
    storage = JsonFileStorage(tmp_path / "state.json")
    c = SessionStateCache(remote, storage)
    c.start_session(7)
    c.record_weight(3, 60, 0, notes="ok")
    c.record_weight(3, 62.5, 1)
    c.complete_set(3, 1, 9)

    reloaded = SessionStateCache(remote, JsonFileStorage(tmp_path / "state.json"))
    assert reloaded.session == c.session
    assert reloaded.entries == c.entries
    assert set(reloaded.entries) == {"3:0", "3:1"}
    assert reloaded.sets_done(3) == 2

@pytest.mark.parametrize("raw", ["{not json", "[]", "1", '"text"'])
def test_unreadable_storage_is_discarded(remote, raw):
    storage = MemoryStorage()
    storage.set_item(STORAGE_KEY, raw)
    c = SessionStateCache(remote, storage)
    assert not c.active
    assert storage.get_item(STORAGE_KEY) is None

def test_resume_adopts_open_remote_session(remote):
    remote.open = {"id": 55, "day_id": 7, "started_at": "2026-10-18T09:00:00"}
    c = SessionStateCache(remote, MemoryStorage())
    sess = c.resume(7)
    assert sess.id == 55 and c.active

def test_resume_with_nothing_open(remote):
    c = SessionStateCache(remote, MemoryStorage())
    assert c.resume(7) is None
    assert not c.active

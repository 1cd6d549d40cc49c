from __future__ import annotations

import json

from school_attendance.attendance.model import PendingChange
from school_attendance.core.constants import QUEUE_CACHE_KEY
from school_attendance.core.enums import AttendanceStatus, OutcomeKind
from school_attendance.storage.local import InMemoryStorage, JsonFileStorage
from school_attendance.sync.queue import PendingChangeQueue


def _change(status=AttendanceStatus.PRESENT, idx=0, sid="s-1"):
    return PendingChange(student_id=sid, date="2025-03-05", lesson_index=idx, status=status)


def test_enqueue_keeps_one_entry_per_cell():
    queue = PendingChangeQueue(InMemoryStorage())

    queue.enqueue(_change(AttendanceStatus.PRESENT))
    queue.enqueue(_change(AttendanceStatus.ABSENT, idx=1))
    queue.enqueue(_change(AttendanceStatus.EXCUSED))

    assert [(c.lesson_index, c.status) for c in queue] == [(1, AttendanceStatus.ABSENT), (0, AttendanceStatus.EXCUSED)]


def test_queue_survives_restart():
    storage = InMemoryStorage()
    PendingChangeQueue(storage).enqueue(_change())

    reloaded = PendingChangeQueue(storage)
    reloaded.load()

    assert len(reloaded) == 1
    assert reloaded.is_pending("s-1", "2025-03-05", 0)


def test_queue_survives_restart_on_disk(tmp_path):
    PendingChangeQueue(JsonFileStorage(tmp_path / "data")).enqueue(_change(AttendanceStatus.ABSENT, idx=2))

    reloaded = PendingChangeQueue(JsonFileStorage(tmp_path / "data"))
    reloaded.load()

    assert [(c.lesson_index, c.status) for c in reloaded] == [(2, AttendanceStatus.ABSENT)]
    assert (tmp_path / "data" / f"{QUEUE_CACHE_KEY}.json").exists()
    assert not list((tmp_path / "data").glob("*.tmp"))


def test_file_storage_remove_and_missing_key(tmp_path):
    storage = JsonFileStorage(tmp_path)
    storage.write("k", "v")
    storage.remove("k")
    storage.remove("k")

    assert storage.read("k") is None


def test_corrupt_blob_loads_as_empty_queue():
    storage = InMemoryStorage({QUEUE_CACHE_KEY: "{not json"})
    queue = PendingChangeQueue(storage)

    queue.load()

    assert len(queue) == 0


def test_flush_empty_queue_is_ok_without_remote_call(remote):
    outcome = PendingChangeQueue(InMemoryStorage()).flush(remote, online=True)

    assert outcome.is_ok
    assert remote.calls == []


def test_flush_offline_keeps_everything(remote):
    queue = PendingChangeQueue(InMemoryStorage())
    queue.enqueue(_change())

    outcome = queue.flush(remote, online=False)

    assert outcome.kind is OutcomeKind.QUEUED_OFFLINE
    assert len(queue) == 1
    assert remote.calls == []


def test_flush_failure_keeps_queue(remote):
    queue = PendingChangeQueue(InMemoryStorage())
    queue.enqueue(_change())
    remote.fail.add("save_attendance_batch")

    outcome = queue.flush(remote, online=True)

    assert outcome.kind is OutcomeKind.FAILED
    assert len(queue) == 1


def test_flush_success_clears_persisted_queue(remote):
    storage = InMemoryStorage()
    queue = PendingChangeQueue(storage)
    queue.enqueue(_change())
    queue.enqueue(_change(idx=1))

    outcome = queue.flush(remote, online=True)

    assert outcome.is_ok
    assert len(remote.batches[0]) == 2
    assert len(queue) == 0
    assert json.loads(storage.read(QUEUE_CACHE_KEY)) == []


def test_edit_made_during_flush_stays_queued(remote):
    queue = PendingChangeQueue(InMemoryStorage())
    queue.enqueue(_change())
    remote.on_batch = lambda: queue.enqueue(_change(sid="s-2"))

    queue.flush(remote, online=True)

    assert [c.student_id for c in queue] == ["s-2"]

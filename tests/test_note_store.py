import json
import os
import stat
import threading

import pytest

from domains.core.exceptions import StorageLockError, StorageWriteError
from domains.note_hub import Note, NoteStore
from domains.note_hub.core.lock import FileLock


def ids(store):
    return [n.id for n in store.list()]


def test_list_without_file_is_empty(store, notes_file):
    assert not notes_file.exists()
    assert store.list() == []


def test_upsert_then_list_returns_equal_record(store):
    note = Note(id=7, title="A", content="<b>x</b>", updated_at=123)
    assert store.upsert(note) is True
    assert store.list() == [note]


def test_upsert_same_note_twice_keeps_one_record(store):
    note = Note(id=1, title="A", content="x", updated_at=10)
    store.upsert(note)
    store.upsert(note)
    assert store.list() == [note]


def test_upsert_new_id_appends(seeded):
    seeded.upsert(Note(id=4, title="four", content="", updated_at=1))
    assert ids(seeded) == [1, 2, 3, 4]


def test_upsert_existing_id_replaces_in_place(seeded):
    replacement = Note(id=2, title="two v2", content="new", updated_at=999)
    assert seeded.upsert(replacement) is False

    notes = seeded.list()
    assert [n.id for n in notes] == [1, 2, 3]
    assert notes[1] == replacement


def test_upsert_replaces_whole_record(store):
    store.upsert(Note(id=1, title="kept?", content="old body", updated_at=1))
    store.upsert(Note(id=1, title="", content="", updated_at=2))
    assert store.list() == [Note(id=1, title="", content="", updated_at=2)]


def test_remove_deletes_only_target(seeded):
    assert seeded.remove(2) == 1
    assert ids(seeded) == [1, 3]


def test_remove_absent_id_is_noop(seeded):
    before = seeded.list()
    assert seeded.remove(99) == 0
    assert seeded.list() == before


def test_remove_drops_duplicate_ids(notes_file, store):
    notes_file.parent.mkdir(parents=True)
    records = [
        {"id": 5, "title": "a", "content": "", "updatedAt": 1},
        {"id": 6, "title": "b", "content": "", "updatedAt": 2},
        {"id": 5, "title": "c", "content": "", "updatedAt": 3},
    ]
    notes_file.write_text(json.dumps(records), encoding="utf-8")

    assert store.remove(5) == 2
    assert ids(store) == [6]


def test_file_is_json_array_with_wire_field_names(store, notes_file):
    store.upsert(Note(id=1, title="标题", content="<p>内容</p>", updated_at=10))

    data = json.loads(notes_file.read_text(encoding="utf-8"))
    assert data == [{"id": 1, "title": "标题", "content": "<p>内容</p>", "updatedAt": 10}]
    assert "标题" in notes_file.read_text(encoding="utf-8")


def test_state_survives_new_store_instance(store, notes_file):
    store.upsert(Note(id=1, title="A", content="x", updated_at=10))
    assert NoteStore(notes_file).list() == store.list()


@pytest.mark.parametrize(
    "payload",
    [
        "not json at all",
        '{"id": 1}',
        '[{"id": 1, "title": "missing updatedAt"}]',
        '[{"id": "1", "title": "", "content": "", "updatedAt": 1}]',
        "",
    ],
)
def test_unparsable_file_reads_as_empty(store, notes_file, payload):
    notes_file.parent.mkdir(parents=True)
    notes_file.write_text(payload, encoding="utf-8")
    assert store.list() == []


def test_upsert_over_corrupt_file_starts_fresh(store, notes_file):
    notes_file.parent.mkdir(parents=True)
    notes_file.write_text("{broken", encoding="utf-8")

    note = Note(id=1, title="A", content="", updated_at=1)
    store.upsert(note)
    assert store.list() == [note]


def test_write_failure_is_raised(tmp_path):
    target = tmp_path / "notes.json"
    target.mkdir()
    store = NoteStore(target)

    with pytest.raises(StorageWriteError) as exc_info:
        store.upsert(Note(id=1, title="A", content="", updated_at=1))

    assert exc_info.value.http_status_code == 500
    assert not any(p.name.endswith(".tmp") for p in tmp_path.iterdir())


def test_remove_write_failure_is_raised(tmp_path):
    target = tmp_path / "notes.json"
    target.mkdir()

    with pytest.raises(StorageWriteError):
        NoteStore(target).remove(1)


def test_concurrent_upserts_are_not_lost(store):
    errors = []

    def worker(offset):
        try:
            for i in range(10):
                note_id = offset * 100 + i
                store.upsert(Note(id=note_id, title=str(note_id), content="", updated_at=note_id))
        except Exception as e:  # pragma: no cover - surfaced by the assertion below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert sorted(ids(store)) == sorted(o * 100 + i for o in range(8) for i in range(10))


def test_mutation_times_out_while_lock_is_held(tmp_path):
    store = NoteStore(tmp_path / "notes.json", lock_timeout=0.1)
    holder = FileLock(store.lock_path)
    assert holder.acquire()
    try:
        with pytest.raises(StorageLockError):
            store.upsert(Note(id=1, title="", content="", updated_at=1))
    finally:
        holder.release()

    assert store.list() == []
    store.upsert(Note(id=1, title="", content="", updated_at=1))
    assert ids(store) == [1]


def test_file_lock_is_exclusive(tmp_path):
    first = FileLock(tmp_path / "x.lock", timeout=0.05)
    second = FileLock(tmp_path / "x.lock", timeout=0.05)

    assert first.acquire()
    assert second.acquire(blocking=False) is False
    first.release()
    assert second.acquire(blocking=False) is True
    assert second.locked
    second.release()
    assert not second.locked


def test_invalid_record_is_skipped_and_valid_records_survive_upsert(store, notes_file):
    notes_file.parent.mkdir(parents=True)
    notes_file.write_text(
        json.dumps([
            {"id": 1, "title": "keep", "content": "", "updatedAt": 1},
            {"id": 2, "title": 5, "content": "", "updatedAt": 2},
            {"id": 4, "title": "also kept", "content": "", "updatedAt": 4},
        ]),
        encoding="utf-8",
    )

    assert [n.id for n in store.list()] == [1, 4]

    store.upsert(Note(id=3, title="new", content="", updated_at=3))
    assert [n.id for n in store.list()] == [1, 4, 3]
    assert store.list()[0].title == "keep"


def test_write_keeps_existing_file_mode(store, notes_file):
    store.upsert(Note(id=1, title="A", content="", updated_at=1))
    notes_file.chmod(0o644)

    store.upsert(Note(id=2, title="B", content="", updated_at=2))
    assert stat.S_IMODE(notes_file.stat().st_mode) == 0o644


def test_new_file_is_not_private_to_owner(store, notes_file):
    old_umask = os.umask(0o022)
    try:
        store.upsert(Note(id=1, title="A", content="", updated_at=1))
    finally:
        os.umask(old_umask)

    assert stat.S_IMODE(notes_file.stat().st_mode) == 0o644

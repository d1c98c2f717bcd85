import json

import httpx
import pytest

from app.cli import build_parser, run_command
from domains.note_hub import Note, NoteClient


def run(app, argv):
    args = build_parser().parse_args(argv)
    client = NoteClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))
    return run_command(args, client=client)


@pytest.mark.asyncio
async def test_save_new_note_then_list_json(app, store, capsys):
    assert await run(app, ["save", "--title", "Groceries", "--content", "<p>milk</p>"]) == 0

    [saved] = store.list()
    assert saved.title == "Groceries"
    assert saved.id == saved.updated_at

    capsys.readouterr()
    assert await run(app, ["list", "--format", "json"]) == 0
    assert json.loads(capsys.readouterr().out) == [saved.to_dict()]


@pytest.mark.asyncio
async def test_save_existing_id_replaces(app, store):
    store.upsert(Note(id=10, title="old", content="", updated_at=1))

    await run(app, ["save", "--id", "10", "--title", "new"])

    [note] = store.list()
    assert (note.id, note.title) == (10, "new")
    assert note.updated_at > 1


@pytest.mark.asyncio
async def test_list_search_and_delete(app, seeded, capsys):
    assert await run(app, ["list", "--search", "note 2"]) == 0
    out = capsys.readouterr().out
    assert "note 2" in out
    assert "note 1" not in out

    assert await run(app, ["delete", "2"]) == 0
    assert [n.id for n in seeded.list()] == [1, 3]


@pytest.mark.asyncio
async def test_list_empty_table(app, capsys):
    await run(app, ["list"])
    assert "(无笔记)" in capsys.readouterr().out


def test_delete_requires_integer_id():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["delete", "abc"])

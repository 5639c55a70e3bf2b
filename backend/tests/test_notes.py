"""Tests for the notes store and the notes panel client."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from graphnav.services.notes_panel import NotesClient, NotesPanel
from graphnav.services.notes_store import NotesStorageError, NotesStore

# --- NotesStore ---


def test_store_missing_file_is_empty(tmp_path: Path):
    assert NotesStore(tmp_path / "none.json").get() == {}


def test_store_round_trip_under_fixed_key(tmp_path: Path):
    path = tmp_path / "nested" / "notes.json"
    store = NotesStore(path)
    store.put({"Home": "hello"})
    assert store.get() == {"Home": "hello"}
    assert json.loads(path.read_text())["nodes"] == {"Home": "hello"}


def test_store_keeps_other_keys(tmp_path: Path):
    path = tmp_path / "notes.json"
    path.write_text(json.dumps({"other": 1}))
    NotesStore(path).put({"Home": "x"})
    assert json.loads(path.read_text()) == {"other": 1, "nodes": {"Home": "x"}}


def test_store_corrupt_file_raises(tmp_path: Path):
    path = tmp_path / "notes.json"
    path.write_text("{not json")
    with pytest.raises(NotesStorageError):
        NotesStore(path).get()
    with pytest.raises(NotesStorageError):
        NotesStore(path).put({"Home": "x"})


def test_store_non_object_file_raises(tmp_path: Path):
    path = tmp_path / "notes.json"
    path.write_text("[1, 2]")
    with pytest.raises(NotesStorageError):
        NotesStore(path).get()


def test_store_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("GRAPHNAV_NOTES_PATH", str(tmp_path / "env.json"))
    store = NotesStore.from_config()
    assert store.path == tmp_path / "env.json"


# --- NotesPanel ---


class FakeNotesServer:
    def __init__(self, record: dict | None = None, fail: bool = False):
        self.record = record or {}
        self.fail = fail

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.fail:
            return httpx.Response(500, json={"detail": "Failed"})
        if request.method == "GET":
            return httpx.Response(200, json=self.record)
        if request.method == "PUT":
            self.record = json.loads(request.content)
            return httpx.Response(200, json={"message": "Notes saved"})
        return httpx.Response(405)


def _panel(server: FakeNotesServer) -> NotesPanel:
    client = NotesClient("http://notes.test/", client=httpx.Client(transport=httpx.MockTransport(server)))
    return NotesPanel(client)


def test_toggle_loads_note_for_label():
    panel = _panel(FakeNotesServer({"Home": "welcome"}))
    assert panel.toggle("Home") is True
    assert panel.visible
    assert panel.draft == "welcome"
    assert panel.toggle() is False


def test_save_sends_whole_record():
    server = FakeNotesServer({"Home": "welcome"})
    panel = _panel(server)
    panel.toggle("Music")
    assert panel.draft == ""
    panel.edit("jazz")
    assert panel.save() is True
    assert server.record == {"Home": "welcome", "Music": "jazz"}
    assert panel.notes["Music"] == "jazz"


def test_show_switches_node_and_drops_draft():
    panel = _panel(FakeNotesServer({"Home": "welcome", "Music": "jazz"}))
    panel.toggle("Home")
    panel.edit("unsaved")
    panel.show("Music")
    assert panel.label == "Music"
    assert panel.draft == "jazz"


def test_load_failure_leaves_panel_empty():
    panel = _panel(FakeNotesServer(fail=True))
    panel.toggle("Home")
    assert panel.notes == {}
    assert panel.draft == ""


def test_save_failure_reports_false():
    server = FakeNotesServer({"Home": "welcome"})
    panel = _panel(server)
    panel.toggle("Home")
    panel.edit("changed")
    server.fail = True
    assert panel.save() is False
    assert panel.notes["Home"] == "welcome"


def test_save_without_label():
    panel = _panel(FakeNotesServer())
    assert panel.save() is False

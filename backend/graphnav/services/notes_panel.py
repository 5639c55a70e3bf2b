"""Notes panel state and the HTTP client it saves through.

The panel shows the note for the current node's label. ``GraphSession``
keeps it on the current node and turns navigation off while it is open.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class NotesClient:
    """Thin client for GET/PUT /api/nodes."""

    def __init__(self, base_url: str | None = None, client: httpx.Client | None = None):
        self._base_url = (base_url or _DEFAULT_BASE_URL).rstrip("/")
        self._client = client or httpx.Client(timeout=10.0)

    def load(self) -> dict[str, Any]:
        resp = self._client.get(f"{self._base_url}/api/nodes")
        resp.raise_for_status()
        data = resp.json()
        return data if isinstance(data, dict) else {}

    def save(self, record: dict[str, Any]) -> str:
        resp = self._client.put(f"{self._base_url}/api/nodes", json=record)
        resp.raise_for_status()
        return resp.json().get("message", "")


class NotesPanel:
    def __init__(self, client: NotesClient):
        self._client = client
        self._notes: dict[str, Any] = {}
        self.visible = False
        self.label: str | None = None
        self.draft = ""

    @property
    def notes(self) -> dict[str, Any]:
        return dict(self._notes)

    def refresh(self) -> None:
        """Reload the record. A failed load leaves the panel empty."""
        try:
            self._notes = self._client.load()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Could not load notes: %s", e)
            self._notes = {}
        if self.label is not None:
            self.draft = self.note_for(self.label)

    def note_for(self, label: str) -> str:
        note = self._notes.get(label, "")
        return note if isinstance(note, str) else str(note)

    def toggle(self, label: str | None = None) -> bool:
        self.visible = not self.visible
        if self.visible:
            if label is not None:
                self.show(label)
            self.refresh()
        return self.visible

    def show(self, label: str) -> None:
        """Point the panel at another node; unsaved edits are dropped."""
        self.label = label
        self.draft = self.note_for(label)

    def edit(self, text: str) -> None:
        self.draft = text

    def save(self) -> bool:
        if self.label is None:
            return False
        record = dict(self._notes)
        record[self.label] = self.draft
        try:
            message = self._client.save(record)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Could not save note for %s: %s", self.label, e)
            return False
        self._notes = record
        logger.debug("Saved note for %s: %s", self.label, message)
        return True

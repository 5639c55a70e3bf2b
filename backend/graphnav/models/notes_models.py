"""Pydantic models for the notes endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class NotesSavedResponse(BaseModel):
    message: str


class NotesStoreConfig(BaseModel):
    path: str
    record_key: str = "nodes"

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from graphnav.models.notes_models import NotesSavedResponse
from graphnav.rate_limit import NOTES_WRITE_LIMIT, limiter
from graphnav.services.notes_store import NotesStorageError, NotesStore, get_notes_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/nodes", tags=["nodes"])


@router.get("")
async def get_notes(store: NotesStore = Depends(get_notes_store)) -> dict[str, Any]:
    """Return the stored notes record, or {} if nothing was saved."""
    try:
        return store.get()
    except NotesStorageError as e:
        logger.error("Failed to read notes: %s", e)
        raise HTTPException(status_code=500, detail="Failed to read notes")


@router.put("", response_model=NotesSavedResponse)
@limiter.limit(NOTES_WRITE_LIMIT)
async def put_notes(
    request: Request,
    record: dict[str, Any] = Body(...),
    store: NotesStore = Depends(get_notes_store),
) -> NotesSavedResponse:
    """Store the request body verbatim, replacing the previous record."""
    try:
        store.put(record)
    except NotesStorageError as e:
        logger.error("Failed to save notes: %s", e)
        raise HTTPException(status_code=500, detail="Failed to save notes")
    return NotesSavedResponse(message="Notes saved")

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response
from typing import List

from ..config import Settings, get_settings
from ..dependencies import get_store
from ..models.game import UploadSummary
from ..services.photos import Upload
from ..services.store import GameStore

router = APIRouter(prefix="/photos", tags=["Photos"])


@router.post("", response_model=UploadSummary)
async def upload_photos(
    files: List[UploadFile] = File(...),
    store: GameStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Scan a new photo set for GPS data. Replaces the current set."""
    if len(files) > settings.MAX_UPLOAD_FILES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Too many files. Upload at most {settings.MAX_UPLOAD_FILES} photos at once."
        )

    uploads = []
    for file in files:
        uploads.append(Upload(
            name=file.filename or "untitled",
            content_type=file.content_type or "application/octet-stream",
            data=await file.read()
        ))

    return await store.ingest(uploads)


@router.get("", response_model=UploadSummary)
async def get_photos(store: GameStore = Depends(get_store)):
    """Get the current photo set."""
    return store.library.summary()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_photos(store: GameStore = Depends(get_store)):
    """Discard the photo set and any game in progress."""
    store.reset()
    return None


@router.get("/{photo_id}/image")
async def get_photo_image(photo_id: str, store: GameStore = Depends(get_store)):
    """Serve the photo behind a display handle."""
    entry = store.photo_store.resolve(photo_id)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Photo not found."
        )
    data, content_type = entry
    return Response(content=data, media_type=content_type)

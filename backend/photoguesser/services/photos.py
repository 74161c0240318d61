"""Photo ingestion and display handle bookkeeping."""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..models.game import Coordinate, PhotoSummary, UploadSummary
from .exif import extract_all

log = logging.getLogger("photoguesser.photos")


@dataclass(frozen=True)
class Upload:
    """A raw file handed over by the file picker."""
    name: str
    content_type: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class Photo:
    """An ingested photo. `coordinate` is None when it cannot be played."""
    id: str
    name: str
    content_type: str
    data: bytes = field(repr=False, compare=False)
    url: str
    coordinate: Optional[Coordinate] = None

    @property
    def has_gps(self) -> bool:
        return self.coordinate is not None


class PhotoStore:
    """Registry backing photo display handles.

    A handle is the URL a front end uses to render the photo. It resolves
    only between acquire() and release().
    """

    def __init__(self, url_prefix: str = "/api/photos"):
        self.url_prefix = url_prefix.rstrip("/")
        self._entries: Dict[str, Tuple[bytes, str]] = {}

    def acquire(self, photo_id: str, data: bytes, content_type: str) -> str:
        self._entries[photo_id] = (data, content_type)
        return f"{self.url_prefix}/{photo_id}/image"

    def resolve(self, photo_id: str) -> Optional[Tuple[bytes, str]]:
        return self._entries.get(photo_id)

    def release(self, photo_id: str) -> None:
        self._entries.pop(photo_id, None)

    def release_all(self) -> None:
        self._entries.clear()

    @property
    def active_count(self) -> int:
        return len(self._entries)


async def build_photos(
    uploads: Sequence[Upload], store: PhotoStore, concurrency: int = 4
) -> List[Photo]:
    """Extract GPS data for every image upload and register its display handle.

    Non-image uploads are skipped.
    """
    images = [u for u in uploads if u.content_type.startswith("image/")]
    if len(images) < len(uploads):
        log.info("Ignoring %d non-image file(s)", len(uploads) - len(images))

    coordinates = await extract_all([u.data for u in images], concurrency)

    photos = []
    for upload, coordinate in zip(images, coordinates):
        photo_id = uuid.uuid4().hex
        url = store.acquire(photo_id, upload.data, upload.content_type)
        photos.append(Photo(
            id=photo_id,
            name=upload.name,
            content_type=upload.content_type,
            data=upload.data,
            url=url,
            coordinate=coordinate,
        ))
    return photos


class PhotoLibrary:
    """The current ingestion batch. Replacing it releases the old handles."""

    def __init__(self, store: PhotoStore):
        self.store = store
        self._photos: List[Photo] = []

    @property
    def photos(self) -> List[Photo]:
        return list(self._photos)

    @property
    def playable(self) -> List[Photo]:
        return [p for p in self._photos if p.has_gps]

    @property
    def excluded(self) -> List[Photo]:
        return [p for p in self._photos if not p.has_gps]

    def get(self, photo_id: str) -> Optional[Photo]:
        for photo in self._photos:
            if photo.id == photo_id:
                return photo
        return None

    def replace(self, photos: Sequence[Photo]) -> None:
        new_ids = {p.id for p in photos}
        for photo in self._photos:
            if photo.id not in new_ids:
                self.store.release(photo.id)
        self._photos = list(photos)
        log.info(
            "Loaded %d photo(s), %d usable for gameplay",
            len(self._photos), len(self.playable),
        )

    def clear(self) -> None:
        for photo in self._photos:
            self.store.release(photo.id)
        self._photos = []

    def summary(self) -> UploadSummary:
        excluded = len(self.excluded)
        message = None
        if excluded:
            message = (
                f"{excluded} photo(s) excluded because their EXIF metadata "
                "lacks location coordinates."
            )
        return UploadSummary(
            total=len(self._photos),
            playable=len(self._photos) - excluded,
            excluded=excluded,
            photos=[
                PhotoSummary(id=p.id, name=p.name, url=p.url, has_gps=p.has_gps)
                for p in self._photos
            ],
            message=message,
        )

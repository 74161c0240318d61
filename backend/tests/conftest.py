"""Shared fixtures for PhotoGuesser tests."""

import io
import random
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from PIL.ExifTags import GPS, IFD
from PIL.TiffImagePlugin import IFDRational

from photoguesser.config import Settings, get_settings
from photoguesser.dependencies import get_store
from photoguesser.main import app
from photoguesser.models.game import Coordinate
from photoguesser.services.photos import Photo
from photoguesser.services.store import GameStore


def _to_dms(value: float) -> tuple[IFDRational, IFDRational, IFDRational]:
    value = abs(value)
    degrees = int(value)
    minutes_float = (value - degrees) * 60
    minutes = int(minutes_float)
    seconds = round((minutes_float - minutes) * 60 * 100)
    return IFDRational(degrees, 1), IFDRational(minutes, 1), IFDRational(seconds, 100)


def make_jpeg(latitude: float | None = None, longitude: float | None = None) -> bytes:
    """Encode a tiny JPEG, with a GPS block when a position is given."""
    image = Image.new("RGB", (8, 8), "white")
    buffer = io.BytesIO()
    if latitude is None or longitude is None:
        image.save(buffer, "JPEG")
        return buffer.getvalue()

    exif = Image.Exif()
    exif[IFD.GPSInfo] = {
        GPS.GPSLatitudeRef: "S" if latitude < 0 else "N",
        GPS.GPSLatitude: _to_dms(latitude),
        GPS.GPSLongitudeRef: "W" if longitude < 0 else "E",
        GPS.GPSLongitude: _to_dms(longitude),
    }
    image.save(buffer, "JPEG", exif=exif)
    return buffer.getvalue()


def make_photo(
    photo_id: str, latitude: float | None = None, longitude: float | None = None
) -> Photo:
    coordinate = None
    if latitude is not None and longitude is not None:
        coordinate = Coordinate(latitude=latitude, longitude=longitude)
    return Photo(
        id=photo_id,
        name=f"{photo_id}.jpg",
        content_type="image/jpeg",
        data=b"",
        url=f"/api/photos/{photo_id}/image",
        coordinate=coordinate,
    )


@pytest.fixture
def photo_factory() -> Callable[..., Photo]:
    return make_photo


@pytest.fixture
def jpeg_factory() -> Callable[..., bytes]:
    return make_jpeg


@pytest.fixture
def store() -> GameStore:
    return GameStore(concurrency=2, rng=random.Random(7))


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, GOOGLE_MAPS_API_KEY="test-key")


@pytest.fixture
def client(store, settings):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

"""EXIF GPS extraction."""
import asyncio
import io
import logging
import math
from typing import List, Optional, Sequence

from PIL import Image
from PIL.ExifTags import GPS, IFD

from ..models.game import Coordinate

log = logging.getLogger("photoguesser.exif")


def _to_degrees(value) -> Optional[float]:
    """Convert an EXIF (degrees, minutes, seconds) triple to decimal degrees."""
    try:
        if isinstance(value, (tuple, list)):
            parts = [float(v) for v in value]
            if not parts:
                return None
            parts += [0.0] * (3 - len(parts))
            degrees, minutes, seconds = parts[:3]
            result = degrees + minutes / 60 + seconds / 3600
        else:
            result = float(value)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    return result if math.isfinite(result) else None


def _ref(value) -> str:
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    return str(value or "").strip("\x00 ").upper()


def extract_coordinates(data: bytes) -> Optional[Coordinate]:
    """Read the GPS position from a photo's EXIF metadata.

    Returns None if the image cannot be decoded, carries no GPS block, or
    the stored position is out of range.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            gps = img.getexif().get_ifd(IFD.GPSInfo)
    except Exception as e:
        log.debug("EXIF extraction failed: %s", e)
        return None

    if not gps:
        return None

    latitude = _to_degrees(gps.get(GPS.GPSLatitude))
    longitude = _to_degrees(gps.get(GPS.GPSLongitude))
    if latitude is None or longitude is None:
        return None

    if _ref(gps.get(GPS.GPSLatitudeRef)) == "S":
        latitude = -latitude
    if _ref(gps.get(GPS.GPSLongitudeRef)) == "W":
        longitude = -longitude

    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        log.debug("Discarding out-of-range GPS position %s, %s", latitude, longitude)
        return None

    return Coordinate(latitude=latitude, longitude=longitude)


async def extract_all(
    payloads: Sequence[bytes], concurrency: int = 4
) -> List[Optional[Coordinate]]:
    """Extract coordinates for every payload in worker threads.

    Results come back in input order. At most `concurrency` files are
    decoded at the same time.
    """
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def _extract(data: bytes) -> Optional[Coordinate]:
        async with semaphore:
            return await asyncio.to_thread(extract_coordinates, data)

    return list(await asyncio.gather(*(_extract(data) for data in payloads)))

from dataclasses import dataclass
from math import radians, sin, cos, sqrt, atan2, floor
from typing import Dict

from ..models.game import Coordinate, ScoreScale

# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0

MAX_SCORE = 5000


@dataclass(frozen=True)
class ScoreProfile:
    """Inverse power curve parameters: smaller scale and steeper falloff is stricter."""
    scale_km: float
    falloff: float
    label: str
    description: str


SCORE_PROFILES: Dict[ScoreScale, ScoreProfile] = {
    ScoreScale.CITY: ScoreProfile(
        scale_km=10.0,
        falloff=1.5,
        label="City scale",
        description="Best for close memories within a metro area.",
    ),
    ScoreScale.STATE: ScoreProfile(
        scale_km=150.0,
        falloff=1.3,
        label="State scale",
        description="A forgiving midpoint for regions and road trips.",
    ),
    ScoreScale.COUNTRY: ScoreProfile(
        scale_km=1000.0,
        falloff=1.15,
        label="Country scale",
        description="Loose scoring for big, cross-country spreads.",
    ),
}


def _round_half_up(value: float) -> int:
    return int(floor(value + 0.5))


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        a, b: Coordinates in degrees

    Returns:
        Distance in kilometers
    """
    lat1_rad = radians(a.latitude)
    lon1_rad = radians(a.longitude)
    lat2_rad = radians(b.latitude)
    lon2_rad = radians(b.longitude)

    # Haversine formula
    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    h = sin(dlat / 2)**2 + cos(lat1_rad) * cos(lat2_rad) * sin(dlon / 2)**2
    # Rounding can push antipodal points just past 1
    h = min(1.0, max(0.0, h))
    c = 2 * atan2(sqrt(h), sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def calculate_score(distance_km: float, scale: ScoreScale = ScoreScale.COUNTRY) -> int:
    """
    Calculate score based on distance from actual location.

    The score follows an inverse power curve:
        normalized = (distance_km / scale_km) ** falloff
        raw = MAX_SCORE / (1 + normalized)

    An exact match always yields MAX_SCORE and the score decays towards 0
    as the distance grows. For the same miss, CITY <= STATE <= COUNTRY.

    Args:
        distance_km: Distance in kilometers
        scale: Scoring profile to apply

    Returns:
        Score (0 to MAX_SCORE)
    """
    profile = SCORE_PROFILES[scale]
    distance_km = max(0.0, distance_km)

    normalized = (distance_km / profile.scale_km) ** profile.falloff
    raw = MAX_SCORE / (1 + normalized)

    return max(0, min(MAX_SCORE, _round_half_up(raw)))


def format_distance(distance_km: float) -> str:
    """Render a distance in meters below 1 km, otherwise in kilometers."""
    if distance_km < 1:
        return f"{_round_half_up(distance_km * 1000)} m"
    return f"{distance_km:.1f} km"


def round_progress(round_index: int, total_rounds: int) -> float:
    """Percentage of the game reached once the given round is on screen."""
    if total_rounds <= 0:
        return 0.0
    return (round_index + 1) / total_rounds * 100

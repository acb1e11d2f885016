import math
from typing import NamedTuple

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LAT = 111.0


# --- distance ---
def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in km between two points given in degrees.

    No range checks; out-of-range coordinates give a well-defined but
    meaningless number. Non-finite input gives NaN.
    """
    if not all(math.isfinite(v) for v in (lat1, lng1, lat2, lng2)):
        return math.nan
    dlat = (lat2 - lat1) * math.pi / 180
    dlng = (lng2 - lng1) * math.pi / 180
    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1 * math.pi / 180) * math.cos(lat2 * math.pi / 180) *
         math.sin(dlng / 2) ** 2)
    # float error can push antipodal points just past 1
    a = min(1.0, a)
    return EARTH_RADIUS_KM * (2 * math.atan2(math.sqrt(a), math.sqrt(1 - a)))


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float, ndigits: int = 2) -> float:
    return round(haversine_km(lat1, lng1, lat2, lng2), ndigits)


# --- pre-filtering ---
class BoundingBox(NamedTuple):
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lat: float, lng: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


def bounding_box(lat: float, lng: float, radius_km: float) -> BoundingBox:
    """Approximate square around (lat, lng) for a cheap pre-filter.

    The longitude delta grows without bound towards the poles.
    """
    lat_delta = radius_km / KM_PER_DEGREE_LAT
    lng_delta = radius_km / (KM_PER_DEGREE_LAT * math.cos(lat * math.pi / 180.0))
    return BoundingBox(
        min_lat=lat - lat_delta,
        max_lat=lat + lat_delta,
        min_lng=lng - lng_delta,
        max_lng=lng + lng_delta,
    )


# --- display ---
def format_distance(km: float) -> str:
    if km < 1:
        return f"{round(km * 1000)}m"
    return f"{km:.1f}km"


def walking_minutes(km: float) -> int:
    # ~5 km/h
    return round(km * 12)

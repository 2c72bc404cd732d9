"""지오펜스 - 구면 지구 근사 대원 거리

게임 규모(수십~수백 m) 반경 판정용. 측지 정밀도 아님.
"""

import math
from dataclasses import dataclass
from typing import Optional

from wasteland.core.item.models import Location

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class GeofenceResult:
    accepted: bool
    distance_m: Optional[float]  # 좌표 미제공 시 None
    allowed_m: float


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """두 좌표(도 단위) 사이 거리(m)"""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(a))


def check_geofence(
    lat: Optional[float], lng: Optional[float], location: Location
) -> GeofenceResult:
    """보고 좌표가 위치 반경 안인지 판정.

    lat/lng 중 하나라도 없으면 검증 생략 (accepted).
    거리 == 반경은 통과.
    """
    if lat is None or lng is None:
        return GeofenceResult(accepted=True, distance_m=None, allowed_m=location.radius_m)

    distance = haversine_m(lat, lng, location.lat, location.lng)
    return GeofenceResult(
        accepted=distance <= location.radius_m,
        distance_m=distance,
        allowed_m=location.radius_m,
    )

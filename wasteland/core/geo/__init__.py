"""지오펜스 검증"""

from .geofence import EARTH_RADIUS_M, GeofenceResult, check_geofence, haversine_m

__all__ = ["EARTH_RADIUS_M", "GeofenceResult", "check_geofence", "haversine_m"]

"""Geographic primitives: coordinates, polylines, distances and geocoding."""

from .coordinates import Coordinate, is_coordinate_string, parse_coordinate_string
from .distance import haversine_distance_km, haversine_distance_m
from .geocoder import GeocodeServiceError, GeocodeTimeoutError, OneMapGeocoder
from .polyline_codec import PolylineDecodeError, decode_polyline, encode_polyline

__all__ = [
    "Coordinate",
    "is_coordinate_string",
    "parse_coordinate_string",
    "haversine_distance_m",
    "haversine_distance_km",
    "OneMapGeocoder",
    "GeocodeServiceError",
    "GeocodeTimeoutError",
    "PolylineDecodeError",
    "decode_polyline",
    "encode_polyline",
]

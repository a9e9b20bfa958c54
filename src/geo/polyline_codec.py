"""Encoded polyline geometry (Google format, 1e-5 precision by default)."""

from collections.abc import Sequence

import polyline

from core.exceptions import ValidationError


class PolylineDecodeError(ValidationError):
    """Encoded polyline is truncated or otherwise malformed."""

    pass


def decode_polyline(encoded: str, precision: int = 5) -> list[tuple[float, float]]:
    """Decode polyline string to list of (lat, lon) tuples.

    Every decode step consumes at least one character, so the work is bounded
    by ``len(encoded)``. A string that ends mid-value raises
    PolylineDecodeError instead of an IndexError.
    """
    try:
        coords = polyline.decode(encoded, precision)
    except (IndexError, TypeError, ValueError) as e:
        raise PolylineDecodeError(
            "Malformed encoded polyline", details={"length": len(encoded or "")}
        ) from e
    return [(lat, lon) for lat, lon in coords]


def encode_polyline(points: Sequence[tuple[float, float]], precision: int = 5) -> str:
    """Encode (lat, lon) pairs into a polyline string."""
    return polyline.encode([(lat, lon) for lat, lon in points], precision)

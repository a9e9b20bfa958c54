import pytest

from core.exceptions import ValidationError
from geo.polyline_codec import PolylineDecodeError, decode_polyline, encode_polyline


@pytest.mark.unit
def test_decodes_reference_polyline():
    coords = decode_polyline("_p~iF~ps|U_ulLnnqC_mqNvxq`@")

    assert coords == [
        pytest.approx((38.5, -120.2)),
        pytest.approx((40.7, -120.95)),
        pytest.approx((43.252, -126.453)),
    ]


@pytest.mark.unit
def test_encodes_reference_polyline():
    points = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
    assert encode_polyline(points) == "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


@pytest.mark.unit
def test_singapore_route_round_trips_within_precision():
    points = [(1.30401, 103.83182), (1.29903, 103.84001), (1.28402, 103.85153)]

    decoded = decode_polyline(encode_polyline(points))

    assert len(decoded) == len(points)
    for (lat, lon), (exp_lat, exp_lon) in zip(decoded, points, strict=True):
        assert abs(lat - exp_lat) <= 1e-5
        assert abs(lon - exp_lon) <= 1e-5


@pytest.mark.unit
def test_decodes_to_tuples():
    coords = decode_polyline(encode_polyline([(1.3, 103.8)]))
    assert all(isinstance(c, tuple) and len(c) == 2 for c in coords)


@pytest.mark.unit
def test_empty_string_decodes_to_empty_list():
    assert decode_polyline("") == []


@pytest.mark.unit
@pytest.mark.parametrize("encoded", ["_p~iF~ps|U_", "_", "~~~~"])
def test_truncated_input_raises_decode_error(encoded):
    with pytest.raises(PolylineDecodeError):
        decode_polyline(encoded)


@pytest.mark.unit
def test_decode_error_is_a_validation_error():
    with pytest.raises(ValidationError):
        decode_polyline("_p~iF~ps|U_")

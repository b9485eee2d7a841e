import math

import pytest
from pydantic import ValidationError

from pathpos.app.formatters import GeoPointFormatter
from pathpos.app.interpolator import PositionInterpolator, make_interpolator
from pathpos.domain.entities.geography import Point
from pathpos.sim.clock import hms

# ---------- Fixtures

SPEC = {
    "coordinates": [[1, 2], [3, 4], [5, 6]],
    "speed": {"value": 30, "units": "km/h"},
    "time": {"from": 10, "to": 22},
}

AT_17 = [2.3351126503586808, 3.3363745940384257]
AT_20 = [2.9083307610874596, 3.90859448519012]
AT_22 = [3.28983941389133, 4.29091997098259]


@pytest.fixture
def geojson() -> PositionInterpolator:
    return make_interpolator(SPEC)


@pytest.fixture
def geopoint() -> PositionInterpolator:
    return make_interpolator({**SPEC, "return": "geo:point"})


def _close(got, want, tol=1e-12):
    return all(abs(g - w) < tol for g, w in zip(got, want, strict=True))


# ---------- Known positions


def test_geojson_positions_across_the_day(geojson: PositionInterpolator):
    for h in (5, 7, 8, 10):
        assert geojson(h) == {"type": "Point", "coordinates": [1, 2]}

    assert geojson(17)["type"] == "Point"
    assert _close(geojson(17)["coordinates"], AT_17)
    assert _close(geojson(20)["coordinates"], AT_20)

    for h in (22, hms(22, 30), 23):
        got = geojson(h)["coordinates"]
        assert [round(c, 14) for c in got] == AT_22


def test_geopoint_positions_across_the_day(geopoint: PositionInterpolator):
    for h in (5, 7, 8, 10):
        assert geopoint(h) == "1,2"

    for h, want in ((17, AT_17), (20, AT_20)):
        out = geopoint(h)
        assert isinstance(out, str)
        assert _close([float(c) for c in out.split(",")], want)

    for h in (22, hms(22, 30), 23):
        lon, lat = geopoint(h).split(",")
        assert f"{float(lon):.14f}" == "3.28983941389133"
        assert f"{float(lat):.14f}" == "4.29091997098259"


def test_geopoint_is_joined_geojson_pair(geojson, geopoint):
    for h in (0.0, 10.0, 12.75, 17.0, 21.99, 22.0, 30.0):
        assert geopoint(h) == ",".join(str(c) for c in geojson(h)["coordinates"])


def test_return_format_override_beats_spec():
    interp = make_interpolator({**SPEC, "return": "geo:json"}, return_format="geo:point")
    assert interp(5) == "1,2"


# ---------- Time-to-distance rules


def test_before_start_is_first_vertex(geojson: PositionInterpolator):
    for h in (-100.0, 0.0, 9.999, -math.inf):
        assert geojson.traveled_distance(h) == 0.0
        assert geojson(h)["coordinates"] == [1, 2]


def test_after_end_is_frozen(geojson: PositionInterpolator):
    frozen = geojson(22.0001)
    for h in (23.0, 48.0, 1e6, math.inf):
        assert geojson(h) == frozen
    assert geojson.traveled_distance(100.0) == pytest.approx(
        (30 * (22 - 10)) % geojson.total_length
    )


def test_in_window_matches_wrapped_distance(geojson: PositionInterpolator):
    for h in (10.0, 12.5, 17.0, 21.0, 22.0):
        want = (30 * (h - 10)) % geojson.total_length
        assert geojson.traveled_distance(h) == pytest.approx(want)
        assert geojson.position_at(h) == geojson.path.point_at(want)


def test_entity_loops_around_short_path():
    # one degree of meridian, ~111.23 km; 100 km/h covers it several times in the window
    interp = make_interpolator(
        {
            "coordinates": [[0, 0], [0, 1]],
            "speed": {"value": 100, "units": "km/h"},
            "time": {"from": 0, "to": 10},
        }
    )
    one_degree = 6373 * math.pi / 180
    assert interp.total_length == pytest.approx(one_degree)

    lon, lat = interp(1.5)["coordinates"]
    assert abs(lon) < 1e-12
    assert lat == pytest.approx((150 % one_degree) / one_degree, abs=1e-9)

    # a full lap later the entity is back at the same place
    lap_h = one_degree / 100
    again = interp(1.5 + lap_h)["coordinates"]
    assert again == pytest.approx([lon, lat], abs=1e-9)


def test_miles_per_hour_uses_mile_radius():
    km = make_interpolator(SPEC)
    mi = make_interpolator(
        {**SPEC, "speed": {"value": 30 * 3960 / 6373, "units": "mi/h"}}
    )
    assert mi.distance_unit == "miles"
    assert mi.total_length == pytest.approx(km.total_length * 3960 / 6373)
    for h in (12.0, 17.0, 22.0):
        assert mi(h)["coordinates"] == pytest.approx(km(h)["coordinates"], abs=1e-9)


def test_nan_is_rejected_at_query_time(geojson: PositionInterpolator):
    with pytest.raises(ValueError):
        geojson(math.nan)


def test_zero_length_window_stays_at_start():
    interp = make_interpolator({**SPEC, "time": {"from": 10, "to": 10}})
    assert interp(9)["coordinates"] == [1, 2]
    assert interp(11)["coordinates"] == [1, 2]
    assert interp(50)["coordinates"] == [1, 2]


def test_inverted_window_is_not_validated():
    # from > to is accepted as-is; only check that queries stay on the path without raising
    interp = make_interpolator({**SPEC, "time": {"from": 22, "to": 10}})
    for h in (5.0, 15.0, 30.0):
        d = interp.traveled_distance(h)
        assert 0.0 <= d <= interp.total_length
        lon, lat = interp(h)["coordinates"]
        assert 1 <= lon <= 5 and 2 <= lat <= 6


def test_interpolator_is_immutable(geojson: PositionInterpolator):
    with pytest.raises(AttributeError):
        geojson.spec = None
    with pytest.raises(ValueError):
        geojson.path.cumulative[0] = 1.0


# ---------- Checkpoints


def test_checkpoints_are_ordered_and_match_queries(geojson: PositionInterpolator):
    ticks = list(geojson.checkpoints(9.0, 23.0, 0.5))
    assert len(ticks) == 29
    hs = [h for h, _ in ticks]
    assert all(hs[i] < hs[i + 1] for i in range(len(hs) - 1))
    assert hs[0] == 9.0 and hs[-1] == pytest.approx(23.0)
    for h, pos in ticks:
        assert pos == geojson(h)


def test_checkpoints_edge_cases(geojson: PositionInterpolator):
    assert list(geojson.checkpoints(12.0, 11.0, 1.0)) == []
    assert [h for h, _ in geojson.checkpoints(12.0, 12.0, 1.0)] == [12.0]
    with pytest.raises(ValueError):
        list(geojson.checkpoints(0.0, 1.0, 0.0))


# ---------- Settings


def test_settings_select_geometry_radius():
    unit_sphere = make_interpolator(
        SPEC, settings={"geometry": {"kind": "spherical", "km_radius": 1.0}}
    )
    default = make_interpolator(SPEC)
    assert unit_sphere.total_length == pytest.approx(default.total_length / 6373)


def test_settings_reject_unknown_keys():
    with pytest.raises(ValidationError):
        make_interpolator(SPEC, settings={"geometry": {"kind": "flat"}})
    with pytest.raises(ValidationError):
        make_interpolator(SPEC, settings={"log": {"colour": True}})


def test_geopoint_uses_python_float_repr():
    fmt = GeoPointFormatter()
    assert fmt.format(Point(1, 2)) == "1,2"
    assert fmt.format(Point(0.00001, 45.5)) == "1e-05,45.5"

from __future__ import annotations

import math

import pytest

from farmplot.area import compute_area_acres, round_half_up, signed_planar_area
from farmplot.errors import InvalidInputError
from farmplot.models import GeoPoint


def _square(lat: float = 19.0, lon: float = 73.0, side: float = 0.001) -> list[GeoPoint]:
    return [
        GeoPoint(lat, lon),
        GeoPoint(lat, lon + side),
        GeoPoint(lat + side, lon + side),
        GeoPoint(lat + side, lon),
    ]


class TestComputeAreaAcres:
    def test_reference_square_near_mumbai(self) -> None:
        assert compute_area_acres(_square()) == pytest.approx(2.889)

    def test_result_has_at_most_three_decimals(self) -> None:
        points = [
            GeoPoint(18.52041, 73.85674),
            GeoPoint(18.52133, 73.85791),
            GeoPoint(18.52019, 73.85903),
            GeoPoint(18.51957, 73.85722),
        ]
        area = compute_area_acres(points)
        assert area > 0
        assert area == round(area, 3)

    def test_identical_points_yield_zero(self) -> None:
        point = GeoPoint(19.0, 73.0)
        assert compute_area_acres([point] * 4) == 0.0

    def test_collinear_points_yield_zero(self) -> None:
        points = [GeoPoint(19.0 + i * 0.001, 73.0 + i * 0.002) for i in range(4)]
        assert compute_area_acres(points) == pytest.approx(0.0, abs=1e-3)

    def test_rotation_does_not_change_area(self) -> None:
        points = _square()
        expected = compute_area_acres(points)
        for shift in range(1, 4):
            rotated = points[shift:] + points[:shift]
            assert compute_area_acres(rotated) == expected

    def test_reversal_keeps_magnitude(self) -> None:
        points = _square()
        assert compute_area_acres(list(reversed(points))) == compute_area_acres(points)

    def test_area_shrinks_toward_the_poles(self) -> None:
        equator = compute_area_acres(_square(lat=0.0))
        north = compute_area_acres(_square(lat=60.0))
        assert north < equator
        assert north / equator == pytest.approx(math.cos(math.radians(60.0005)), rel=1e-3)

    def test_self_intersecting_boundary_is_accepted(self) -> None:
        square = _square()
        bowtie = [square[0], square[2], square[1], square[3]]
        assert compute_area_acres(bowtie) >= 0.0

    @pytest.mark.parametrize("count", [0, 3, 5])
    def test_rejects_wrong_point_count(self, count: int) -> None:
        points = [GeoPoint(19.0, 73.0 + i * 0.001) for i in range(count)]
        with pytest.raises(InvalidInputError):
            compute_area_acres(points)

    def test_invalid_input_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            compute_area_acres([])

    def test_nan_propagates(self) -> None:
        points = _square()
        points[1] = GeoPoint(float("nan"), 73.001)
        assert math.isnan(compute_area_acres(points))

    def test_infinity_propagates(self) -> None:
        points = _square()
        points[2] = GeoPoint(19.001, float("inf"))
        result = compute_area_acres(points)
        assert math.isnan(result) or math.isinf(result)


class TestSignedPlanarArea:
    def test_counter_clockwise_is_positive(self) -> None:
        assert signed_planar_area(_square()) > 0

    def test_reversal_flips_sign(self) -> None:
        points = _square()
        forward = signed_planar_area(points)
        backward = signed_planar_area(list(reversed(points)))
        assert backward == pytest.approx(-forward)

    def test_rotation_is_invariant(self) -> None:
        points = _square()
        forward = signed_planar_area(points)
        rotated = points[2:] + points[:2]
        assert signed_planar_area(rotated) == pytest.approx(forward)

    def test_matches_side_squared(self) -> None:
        side = math.radians(0.001)
        assert signed_planar_area(_square()) == pytest.approx(side * side, rel=1e-6)


class TestRoundHalfUp:
    def test_rounds_half_up_on_fourth_digit(self) -> None:
        assert round_half_up(2.0005) == 2.001
        assert round_half_up(2.0004) == 2.0

    def test_non_finite_values_pass_through(self) -> None:
        assert math.isinf(round_half_up(float("inf")))
        assert math.isnan(round_half_up(float("nan")))

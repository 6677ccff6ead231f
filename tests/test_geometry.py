import math

import pytest

from fracbem.geometry import (
    Point2D,
    PolyPeriodicCurve,
    StraightCurve,
    TrigonometricCurve,
    Vector2D,
)


def test_point_arithmetic_round_trip():
    p = Point2D(1.5, -2.0)
    q = Point2D(0.25, 4.0)
    assert (p + q) - q == p
    assert p * 2.0 == p + p


def test_point_norm():
    assert Point2D(3.0, 4.0).norm() == pytest.approx(5.0)


def test_point_is_mutable():
    p = Point2D(0.0, 0.0)
    p.x = 2.0
    p.y = 3.0
    assert p == Point2D(2.0, 3.0)


def test_point_str():
    assert str(Point2D(1.0, 2.0)) == "(1.0, 2.0)"


def test_interpolate_endpoints_and_midpoint():
    a = Point2D(0.0, 1.0)
    b = Point2D(2.0, 3.0)
    assert Point2D.interpolate(a, b, 0.0) == a
    assert Point2D.interpolate(a, b, 1.0) == b
    mid = Point2D.interpolate(a, b, 0.5)
    assert (mid - a).norm() == pytest.approx((b - mid).norm())


@pytest.mark.parametrize("t", [-0.1, 1.1])
def test_interpolate_rejects_out_of_range(t):
    with pytest.raises(ValueError):
        Point2D.interpolate(Point2D(0, 0), Point2D(1, 1), t)


def test_vector_operations():
    v = Vector2D(1.0, 2.0)
    w = Vector2D(-3.0, 0.5)
    assert (v + w) - w == v
    assert (v * 3.0).norm() == pytest.approx(3.0 * v.norm())


def test_straight_curve():
    curve = StraightCurve(2.0)
    assert curve.low_limit == 0.0
    assert curve.upp_limit == 2.0
    assert curve.at(1.25) == Point2D(1.25, 0.0)
    assert curve.normal(0.5) == Vector2D(0.0, 1.0)
    assert curve.jacobian(1.0) == 1.0
    assert curve.surface_measure()(0.3) == 1.0
    assert curve.parameters() == []


def test_curve_at_out_of_range_raises():
    curve = StraightCurve(1.0)
    with pytest.raises(ValueError):
        curve.at(1.5)
    with pytest.raises(ValueError):
        curve.normal(-0.1)


def test_curve_at_accepts_small_tolerance():
    curve = StraightCurve(1.0)
    assert curve.at(1.0 + 1e-6).x == pytest.approx(1.0)


def test_trigonometric_flat_curve():
    curve = TrigonometricCurve(3.0, 0.7, [], [])
    point = curve.at(0.4)
    assert point.x == pytest.approx(3.0 * 0.4)
    assert point.y == pytest.approx(0.7)
    assert curve.jacobian(0.4) == pytest.approx(3.0)


def test_trigonometric_parameters_order():
    curve = TrigonometricCurve(1.0, 0.0, [0.1, 0.2], [0.3])
    assert curve.parameters() == [0.1, 0.2, 0.3]


def test_trigonometric_is_periodic():
    curve = TrigonometricCurve(2.0, 0.5, [0.3, -0.1], [0.2])
    assert curve.at(0.0).y == pytest.approx(curve.at(1.0).y)
    assert curve.at(1.0).x - curve.at(0.0).x == pytest.approx(2.0)


def test_trigonometric_normal_is_rotated_tangent():
    curve = TrigonometricCurve(2.0, 0.5, [0.3, -0.1], [0.2, 0.05])
    t, h = 0.37, 1e-6
    dx = (curve.at(t + h).x - curve.at(t - h).x) / (2 * h)
    dy = (curve.at(t + h).y - curve.at(t - h).y) / (2 * h)
    normal = curve.normal(t)
    assert normal.x == pytest.approx(-dy, rel=1e-5)
    assert normal.y == pytest.approx(dx, rel=1e-5)


def _triangle():
    return PolyPeriodicCurve(1.0, [Point2D(0.0, 0.0), Point2D(0.5, 1.0), Point2D(1.0, 0.0)])


def test_poly_curve_partition_and_vertices():
    curve = _triangle()
    assert curve.partition() == [0.0, 0.5, 1.0]
    assert curve.at(0.0) == Point2D(0.0, 0.0)
    assert curve.at(0.5) == Point2D(0.5, 1.0)
    assert curve.at(1.0) == Point2D(1.0, 0.0)


def test_poly_curve_interpolates_segments():
    curve = _triangle()
    expected = Point2D.interpolate(Point2D(0.0, 0.0), Point2D(0.5, 1.0), 0.5)
    assert curve.at(0.25) == expected


def test_poly_curve_normal_orthogonal_to_segment():
    curve = _triangle()
    for t, (a, b) in [(0.2, (Point2D(0, 0), Point2D(0.5, 1))), (0.8, (Point2D(0.5, 1), Point2D(1, 0)))]:
        n = curve.normal(t)
        seg = b - a
        assert n.x * seg.x + n.y * seg.y == pytest.approx(0.0)
        assert curve.jacobian(t) == pytest.approx(seg.norm() / 0.5)


def test_poly_curve_normal_at_end():
    curve = _triangle()
    assert curve.normal(1.0) == curve.normal(0.9)


@pytest.mark.parametrize(
    "points",
    [
        [Point2D(0.1, 0.0), Point2D(1.0, 0.0)],
        [Point2D(0.0, 0.0), Point2D(0.9, 0.0)],
        [Point2D(0.0, 0.0), Point2D(1.0, 0.5)],
    ],
)
def test_poly_curve_invalid_points(points):
    with pytest.raises(ValueError):
        PolyPeriodicCurve(1.0, points)


def test_poly_curve_period_used_for_last_point():
    curve = PolyPeriodicCurve(2.0, [Point2D(0.0, 1.0), Point2D(2.0, 1.0)])
    assert math.isclose(curve.at(0.5).x, 1.0)
"""Points, vectors and parametrized curves in the plane."""

from __future__ import annotations

import bisect
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Sequence

_AT_TOLERANCE = 1e-5


@dataclass
class Point2D:
    """A point in the plane."""

    x: float
    y: float

    def __add__(self, other: Point2D) -> Point2D:
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point2D) -> Point2D:
        return Point2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point2D:
        return Point2D(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def norm(self) -> float:
        """Euclidean norm of the point seen as a vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    @staticmethod
    def interpolate(first: Point2D, second: Point2D, t: float) -> Point2D:
        """Point at fraction ``t`` of the segment from ``first`` to ``second``."""
        if not 0 <= t <= 1:
            raise ValueError(f"interpolation parameter {t} not in [0, 1]")
        return first * (1 - t) + second * t


@dataclass(frozen=True)
class Vector2D:
    """A geometric vector in the plane."""

    x: float
    y: float

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"Vector[{self.x},{self.y}]"

    def norm(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.x * self.x + self.y * self.y)


class Curve2D(ABC):
    """A curve in the plane parametrized over ``[low_limit, upp_limit]``."""

    def __init__(self, low_limit: float, upp_limit: float) -> None:
        self._low_limit = float(low_limit)
        self._upp_limit = float(upp_limit)

    @property
    def low_limit(self) -> float:
        return self._low_limit

    @property
    def upp_limit(self) -> float:
        return self._upp_limit

    def at(self, t: float) -> Point2D:
        """Point of the curve at parameter ``t``."""
        if not (self._low_limit - _AT_TOLERANCE <= t <= self._upp_limit + _AT_TOLERANCE):
            raise ValueError(
                f"parameter {t} outside [{self._low_limit}, {self._upp_limit}]"
            )
        return self.evaluate_at(t)

    def normal(self, t: float) -> Vector2D:
        """Non-normalized normal vector at parameter ``t``."""
        if not (self._low_limit <= t <= self._upp_limit):
            raise ValueError(
                f"parameter {t} outside [{self._low_limit}, {self._upp_limit}]"
            )
        return self.evaluate_normal_at(t)

    def jacobian(self, t: float) -> float:
        """Length of the normal vector at ``t``."""
        return self.normal(t).norm()

    def surface_measure(self) -> Callable[[float], float]:
        """The jacobian as a function of the parameter."""
        return self.jacobian

    @abstractmethod
    def evaluate_at(self, t: float) -> Point2D:
        """Curve-specific evaluation, without range checks."""

    @abstractmethod
    def evaluate_normal_at(self, t: float) -> Vector2D:
        """Curve-specific normal, without range checks."""

    def parameters(self) -> list[float]:
        """Parameters describing the curve."""
        return []


class StraightCurve(Curve2D):
    """Horizontal segment from the origin of the given length."""

    def __init__(self, length: float) -> None:
        super().__init__(0.0, length)
        self.length = float(length)

    def evaluate_at(self, t: float) -> Point2D:
        return Point2D(t, 0.0)

    def evaluate_normal_at(self, t: float) -> Vector2D:
        return Vector2D(t * 0.0, 1.0)


class PeriodicCurve(Curve2D, ABC):
    """Curve parametrized over ``[0, 1]`` covering one period."""

    def __init__(self, period: float) -> None:
        super().__init__(0.0, 1.0)
        self.period = float(period)


class TrigonometricCurve(PeriodicCurve):
    """Graph of a trigonometric polynomial over one period."""

    def __init__(
        self,
        period: float,
        height: float,
        sine_coefficients: Sequence[float],
        cosine_coefficients: Sequence[float],
    ) -> None:
        super().__init__(period)
        self.height = float(height)
        self.sine_coefficients = tuple(float(c) for c in sine_coefficients)
        self.cosine_coefficients = tuple(float(c) for c in cosine_coefficients)

    def parameters(self) -> list[float]:
        return [*self.sine_coefficients, *self.cosine_coefficients]

    def evaluate_at(self, t: float) -> Point2D:
        y = self.height
        for i, coef in enumerate(self.sine_coefficients, start=1):
            y += coef * math.sin(2.0 * math.pi * i * t)
        for i, coef in enumerate(self.cosine_coefficients, start=1):
            y += coef * math.cos(2.0 * math.pi * i * t)
        return Point2D(self.period * t, y)

    def evaluate_normal_at(self, t: float) -> Vector2D:
        x = 0.0
        for i, coef in enumerate(self.sine_coefficients, start=1):
            x += -coef * math.cos(2.0 * math.pi * i * t) * 2.0 * math.pi * i
        for i, coef in enumerate(self.cosine_coefficients, start=1):
            x += coef * math.sin(2.0 * math.pi * i * t) * 2.0 * math.pi * i
        return Vector2D(x, self.period)


class PolyPeriodicCurve(PeriodicCurve):
    """Periodic polygonal curve through an ordered list of vertices."""

    def __init__(self, period: float, ordered_points: Sequence[Point2D]) -> None:
        super().__init__(period)
        points = [Point2D(p.x, p.y) for p in ordered_points]
        if len(points) < 2:
            raise ValueError("a polygonal curve needs at least two points")
        if points[0].x != 0:
            raise ValueError("first point must have x == 0")
        if points[-1].x != period:
            raise ValueError("last point must have x == period")
        if points[0].y != points[-1].y:
            raise ValueError("first and last points must have the same height")
        self._points = points
        self._num_lines = len(points) - 1
        self._partition = [i / self._num_lines for i in range(self._num_lines + 1)]

    def partition(self) -> list[float]:
        """Parameter values of the vertices."""
        return list(self._partition)

    def _segment(self, t: float) -> tuple[int, int]:
        upper = min(bisect.bisect_right(self._partition, t), len(self._partition) - 1)
        return upper - 1, upper

    def evaluate_at(self, t: float) -> Point2D:
        if t == 0:
            return Point2D(self._points[0].x, self._points[0].y)
        if t == 1:
            return Point2D(self._points[-1].x, self._points[-1].y)
        lower, upper = self._segment(t)
        p_low, p_up = self._partition[lower], self._partition[upper]
        return Point2D.interpolate(
            self._points[lower], self._points[upper], (t - p_low) / (p_up - p_low)
        )

    def evaluate_normal_at(self, t: float) -> Vector2D:
        lower, upper = self._segment(t)
        diff = self._points[upper] - self._points[lower]
        jac = self._partition[upper] - self._partition[lower]
        return Vector2D(-diff.y / jac, diff.x / jac)
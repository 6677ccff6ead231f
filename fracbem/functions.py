"""Scalar functions of one and two variables and numerical quadrature."""

from __future__ import annotations

import math
import numbers
import sys
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Callable

import numpy as np

from .geometry import Curve2D, Point2D

Interval = tuple[float, float]

_TANH_SINH_TMAX = 4.0
_TANH_SINH_MAX_LEVEL = 10
_TANH_SINH_TOLERANCE = math.sqrt(sys.float_info.epsilon)


@lru_cache(maxsize=None)
def _legendre_rule(points: int) -> tuple[tuple[float, ...], tuple[float, ...]]:
    nodes, weights = np.polynomial.legendre.leggauss(points)
    return tuple(float(x) for x in nodes), tuple(float(w) for w in weights)


def gauss_legendre(function: Callable[[float], complex], a: float, b: float, points: int):
    """Integrate ``function`` over ``[a, b]`` with a Gauss-Legendre rule."""
    if points < 1:
        raise ValueError("a quadrature rule needs at least one point")
    nodes, weights = _legendre_rule(points)
    half = 0.5 * (b - a)
    mid = 0.5 * (a + b)
    return half * sum(w * function(mid + half * x) for x, w in zip(nodes, weights))


def _takes_complement(function: Callable) -> bool:
    """True when ``function`` needs two positional arguments."""
    target = function
    code = getattr(target, "__code__", None)
    if code is None:
        target = getattr(function, "__call__", None)
        code = getattr(target, "__code__", None)
        if code is None:
            return False
    required = code.co_argcount - len(getattr(target, "__defaults__", None) or ())
    if getattr(target, "__self__", None) is not None:
        required -= 1
    return required >= 2


def tanh_sinh(function: Callable, a: float, b: float):
    """Integrate ``function`` over ``[a, b]`` with tanh-sinh quadrature.

    A function of two arguments also receives the signed distance to the
    nearest endpoint: ``a - t`` on the lower half, ``b - t`` on the upper half.
    Endpoint singularities are handled without evaluating at the endpoints.
    """
    if a == b:
        return 0.0
    if b < a:
        return -tanh_sinh(function, b, a)
    with_complement = _takes_complement(function)
    half = 0.5 * (b - a)

    def term(u: float):
        v = 0.5 * math.pi * math.sinh(u)
        cv = math.cosh(v)
        weight = 0.5 * math.pi * math.cosh(u) / (cv * cv)
        distance = 2.0 * half / (1.0 + math.exp(2.0 * abs(v)))
        if distance == 0.0:
            return 0.0
        if u >= 0:
            t, xc = b - distance, distance
        else:
            t, xc = a + distance, -distance
        if t <= a or t >= b:
            return 0.0
        value = function(t, xc) if with_complement else function(t)
        return weight * value

    h = 1.0
    total = term(0.0)
    k = 1
    while k * h <= _TANH_SINH_TMAX:
        total += term(k * h) + term(-k * h)
        k += 1
    estimate = half * h * total
    for level in range(1, _TANH_SINH_MAX_LEVEL + 1):
        h *= 0.5
        k = 1
        while k * h <= _TANH_SINH_TMAX:
            total += term(k * h) + term(-k * h)
            k += 2
        refined = half * h * total
        if level >= 2 and abs(refined - estimate) <= _TANH_SINH_TOLERANCE * abs(refined):
            return refined
        estimate = refined
    return estimate


class ScalarFunction1D(ABC):
    """A complex-valued function of one real variable."""

    @abstractmethod
    def __call__(self, t: float) -> complex:
        """Evaluate at ``t``."""

    @abstractmethod
    def support(self) -> Interval:
        """Interval outside which the function vanishes."""

    @abstractmethod
    def broken_support(self) -> list[Interval]:
        """Support as a list of intervals."""

    def __mul__(self, other):
        if isinstance(other, ScalarFunction1D):
            return ExplicitScalarFunction1D(lambda t: self(t) * other(t))
        if isinstance(other, numbers.Number):
            return ExplicitScalarFunction1D(lambda t: self(t) * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Number):
            return ExplicitScalarFunction1D(lambda t: other * self(t))
        return NotImplemented

    def __add__(self, other):
        if isinstance(other, ScalarFunction1D):
            return ExplicitScalarFunction1D(lambda t: self(t) + other(t))
        return NotImplemented

    @staticmethod
    def tensor(first: ScalarFunction1D, second: ScalarFunction1D) -> ExplicitScalarFunction2D:
        """The function ``(t, s) -> first(t) * second(s)``."""
        return ExplicitScalarFunction2D(lambda t, s: first(t) * second(s))


_FULL_SUPPORT: Interval = (sys.float_info.min, sys.float_info.max)


class ExplicitScalarFunction1D(ScalarFunction1D):
    """Function given by a callable."""

    def __init__(self, function: Callable[[float], complex]) -> None:
        self._function = function

    def __call__(self, t: float) -> complex:
        return self._function(t)

    def support(self) -> Interval:
        return _FULL_SUPPORT

    def broken_support(self) -> list[Interval]:
        return [_FULL_SUPPORT]


class BoundaryScalarTrace1D(ExplicitScalarFunction1D):
    """Function living on the parameter domain of a curve."""

    def __init__(self, function: Callable[[float], complex], curve: Curve2D) -> None:
        super().__init__(function)
        self.curve = curve


class BoundaryScalarRestriction1D(BoundaryScalarTrace1D):
    """Restriction of a function of the plane to a curve."""

    def __init__(self, function: Callable[[float, float], complex], curve: Curve2D) -> None:
        def restricted(t: float) -> complex:
            point = curve.at(t)
            return function(point.x, point.y)

        super().__init__(restricted, curve)
        self.planar_function = function


class ScalarFunction2D(ABC):
    """A complex-valued function of two real variables."""

    @abstractmethod
    def __call__(self, t: float, s: float) -> complex:
        """Evaluate at ``(t, s)``."""

    def __mul__(self, other):
        if isinstance(other, ScalarFunction2D):
            return ExplicitScalarFunction2D(lambda t, s: self(t, s) * other(t, s))
        return NotImplemented


class ExplicitScalarFunction2D(ScalarFunction2D):
    """Two-variable function given by a callable."""

    def __init__(self, function: Callable[[float, float], complex]) -> None:
        self._function = function

    def __call__(self, t: float, s: float) -> complex:
        return self._function(t, s)


class Transformation2D:
    """Map from the plane onto the plane given by a callable."""

    def __init__(self, transformation: Callable[[Point2D], Point2D]) -> None:
        self._transformation = transformation

    def __call__(self, point: Point2D) -> Point2D:
        return self._transformation(point)
"""Green functions in the plane: Laplace, Helmholtz and their quasi-periodic sums."""

from __future__ import annotations

import cmath
import math
from abc import ABC, abstractmethod

import scipy.special

from .discrete_mesh import BasisFunctionMesh
from .functions import gauss_legendre
from .geometry import Point2D
from .mesh import MeshElement1D

_DISPLACED_SUM_TERMS = 100
_WINDOW_FRACTION = 0.35
_DEFAULT_1D_POINTS = 8
_DEFAULT_2D_POINTS = (5, 5)
_HIGH_PRECISION = {
    0: (40, (25, 24)),
    1: (80, (50, 51)),
    2: (200, (401, 400)),
}


def _window(x: float, x0: float, x1: float) -> float:
    """Smooth cut-off equal to 1 on ``|x| <= x0`` and 0 on ``|x| >= x1``."""
    ax = abs(x)
    if ax <= x0:
        return 1.0
    if ax >= x1:
        return 0.0
    u = (ax - x0) / (x1 - x0)
    return math.exp((2.0 * math.exp(-1.0 / u)) / (u - 1.0))


class GreenFunction2D(ABC):
    """Green function of two points in the plane."""

    @abstractmethod
    def __call__(self, x: Point2D, y: Point2D) -> complex:
        """Value of the Green function at ``(x, y)``."""

    @abstractmethod
    def singularity(self, x: Point2D, y: Point2D) -> complex:
        """Singular part extracted before numerical integration."""

    @abstractmethod
    def singularity_simple(self, x: Point2D, y: Point2D) -> complex:
        """Only the central singular part."""

    def integrate_singularity(
        self,
        test_element: MeshElement1D,
        trial_element: MeshElement1D,
        test_function: BasisFunctionMesh,
        trial_function: BasisFunctionMesh,
    ) -> complex:
        """Integral of singularity times test and trial functions over two elements."""
        return 0j

    def smooth_part(self, x: Point2D, y: Point2D) -> complex:
        """Green function minus its singular part."""
        return self(x, y) - self.singularity(x, y)


class PeriodizableGreenFunction2D(GreenFunction2D, ABC):
    """Green function whose singularity can also be integrated when shifted."""

    @abstractmethod
    def integrate_shifted_singularity(
        self,
        test_element: MeshElement1D,
        trial_element: MeshElement1D,
        test_function: BasisFunctionMesh,
        trial_function: BasisFunctionMesh,
        shift: float,
    ) -> complex:
        """Integral of the singularity shifted by ``shift`` in the first coordinate."""


class GreenLogSing2D(PeriodizableGreenFunction2D, ABC):
    """Green function with a logarithmic singularity ``log|x1 - y1| / (2 pi)``."""

    def __init__(self) -> None:
        self._points_1d = _DEFAULT_1D_POINTS
        self._points_2d = _DEFAULT_2D_POINTS

    def set_1d_quad(self, points: int) -> None:
        """Number of points of the one-dimensional quadrature."""
        self._points_1d = points

    def set_high_precision(self, level: int = 0) -> None:
        """Raise the quadrature precision; levels 0, 1 and 2 are known."""
        if level in _HIGH_PRECISION:
            self._points_1d, self._points_2d = _HIGH_PRECISION[level]

    def singularity(self, x: Point2D, y: Point2D) -> complex:
        return complex(math.log(abs(x.x - y.x)) / (2.0 * math.pi))

    def singularity_simple(self, x: Point2D, y: Point2D) -> complex:
        return complex(math.log(abs(x.x - y.x)) / (2.0 * math.pi))

    def integrate_singularity(
        self,
        test_element: MeshElement1D,
        trial_element: MeshElement1D,
        test_function: BasisFunctionMesh,
        trial_function: BasisFunctionMesh,
    ) -> complex:
        return self.integrate_shifted_singularity(
            test_element, trial_element, test_function, trial_function, 0.0
        )

    def integrate_shifted_singularity(
        self,
        test_element: MeshElement1D,
        trial_element: MeshElement1D,
        test_function: BasisFunctionMesh,
        trial_function: BasisFunctionMesh,
        shift: float,
    ) -> complex:
        if shift != 0.0:
            raise ValueError("only the unshifted singularity can be integrated on mesh elements")
        anti = trial_function.anti_derivative(trial_element.index)
        test_index = test_element.index
        c = trial_element.position(0.0)
        d = trial_element.position(1.0)

        def one_dim(t: float) -> complex:
            x = test_element.position(t)
            return (
                math.log(abs(x - d)) * (anti(1.0) - t) - math.log(abs(x - c)) * (anti(0.0) - t)
            ) * test_function.evaluate(test_index, -t)

        def two_dim(t: float, s: float) -> complex:
            if s == t:
                return 0j
            return (
                (d - c)
                * (anti(s) - t)
                * test_function.evaluate(test_index, -t)
                / (test_element.position(t) - trial_element.position(s))
            )

        n_t, n_s = self._points_2d
        first = gauss_legendre(one_dim, 0.0, 1.0, self._points_1d)
        second = gauss_legendre(
            lambda t: gauss_legendre(lambda s: two_dim(t, s), 0.0, 1.0, n_s), 0.0, 1.0, n_t
        )
        return complex(
            test_element.size() * trial_element.size() * (first + second) / (2.0 * math.pi)
        )


class GreenH2D(GreenLogSing2D):
    """Helmholtz Green function ``-i/4 H0(k |x - y|)``."""

    def __init__(self, wavenumber: float) -> None:
        if not wavenumber > 0:
            raise ValueError("wavenumber should be positive")
        super().__init__()
        self.wavenumber = float(wavenumber)

    def __call__(self, x: Point2D, y: Point2D) -> complex:
        value = scipy.special.hankel1(0, self.wavenumber * (x - y).norm())
        return complex(value) * (-0.25j)


class GreenL2D(GreenLogSing2D):
    """Laplace Green function ``log|x - y| / (2 pi)``."""

    def __call__(self, x: Point2D, y: Point2D) -> complex:
        return complex(math.log((x - y).norm()) / (2.0 * math.pi))


class GreenQP2D(GreenFunction2D):
    """Quasi-periodic sum of a periodizable Green function."""

    def __init__(self, period: float, green: PeriodizableGreenFunction2D, qp: complex = 1.0) -> None:
        if not period > 0:
            raise ValueError("period should be positive")
        self.period = float(period)
        self.green = green
        self.qp = complex(qp)
        self.window_terms = 20

    def __call__(self, x: Point2D, y: Point2D) -> complex:
        return self.windowed_sum(x, y)

    def singularity(self, x: Point2D, y: Point2D) -> complex:
        shift = Point2D(self.period, 0.0)
        return (
            self.green.singularity(x, y)
            + (1.0 / self.qp) * self.green.singularity(x + shift, y)
            + self.qp * self.green.singularity(x - shift, y)
        )

    def singularity_simple(self, x: Point2D, y: Point2D) -> complex:
        return self.green.singularity(x, y)

    def displaced_sum(self, x: Point2D, y: Point2D) -> complex:
        """Plain truncated sum over the periodic copies."""
        return sum(
            (
                self.green(x - Point2D(self.period * n, 0.0), y) * self.qp**n
                for n in range(-_DISPLACED_SUM_TERMS, _DISPLACED_SUM_TERMS + 1)
            ),
            0j,
        )

    def windowed_sum(self, x: Point2D, y: Point2D) -> complex:
        """Sum over the periodic copies with a smooth window."""
        rx = (x - y).x
        outer = self.window_terms * self.period
        inner = _WINDOW_FRACTION * outer
        total = 0j
        for n in range(-self.window_terms, self.window_terms + 1):
            weight = _window(rx - self.period * n, inner, outer)
            if weight == 0.0:
                continue
            total += self.green(x - Point2D(self.period * n, 0.0), y) * self.qp**n * weight
        return total

    def integrate_singularity(
        self,
        test_element: MeshElement1D,
        trial_element: MeshElement1D,
        test_function: BasisFunctionMesh,
        trial_function: BasisFunctionMesh,
    ) -> complex:
        """Only the central singularity contributes on mesh elements."""
        return self.green.integrate_singularity(
            test_element, trial_element, test_function, trial_function
        )


class GreenLQP2D(GreenQP2D):
    """Periodic Laplace Green function."""

    def __init__(self, period: float) -> None:
        super().__init__(period, GreenL2D())


class GreenHQP2D(GreenQP2D):
    """Quasi-periodic Helmholtz Green function for an incidence angle."""

    def __init__(
        self, period: float, angle: float, wavenumber: float, quad_points: int | None = None
    ) -> None:
        if not wavenumber > 0:
            raise ValueError("wavenumber should be positive")
        green = GreenH2D(wavenumber)
        super().__init__(period, green, cmath.exp(1j * wavenumber * math.sin(angle) * period))
        self.angle = float(angle)
        self.wavenumber = float(wavenumber)
        self._green_h = green
        if quad_points is not None:
            green.set_1d_quad(quad_points)

    def set_high_precision(self, level: int = 0) -> None:
        self._green_h.set_high_precision(level)

    def spectral_sum(self, x: Point2D, y: Point2D) -> complex:
        """Spectral representation as a sum over Rayleigh modes."""
        r = x - y
        k = self.wavenumber
        total = 0j
        for n in range(-self.window_terms, self.window_terms + 1):
            beta = k * math.sin(self.angle) + n * 2.0 * math.pi / self.period
            if k * k >= beta * beta:
                gamma = complex(math.sqrt(k * k - beta * beta))
            else:
                gamma = 1j * math.sqrt(beta * beta - k * k)
            total += cmath.exp(1j * beta * r.x) * cmath.exp(1j * gamma * abs(r.y)) / gamma
        return -(1j / (2.0 * self.period)) * total
"""Space of continuous piecewise linear functions on a mesh."""

from __future__ import annotations

import math
import threading
from typing import Callable, Iterable

import numpy as np

from .discrete_mesh import BasisFunctionMesh, DiscreteFunctionMesh, DiscreteSpaceMesh
from .functions import gauss_legendre, tanh_sinh
from .mesh import Mesh1D, MeshElement1D
from .p0_mesh import P0Function

_QUADRATURE_POINTS = 2
_SUPPORT_TOLERANCE = 1e-9


def _unit_vector(index: int, size: int) -> list[complex]:
    return [1.0 + 0j if i == index else 0j for i in range(size)]


def _check_order(order: int) -> None:
    if not (-100 < order < 100) or order == 0:
        raise ValueError(f"fractional order {order} must be in (-100, 100) and non-zero")


class P1Function(DiscreteFunctionMesh):
    """Continuous piecewise linear function; coefficient ``k`` is the value at node ``k``."""

    def __init__(
        self,
        mesh: Mesh1D,
        coefficients: Iterable[complex],
        quadrature_points: int = _QUADRATURE_POINTS,
    ) -> None:
        super().__init__(mesh, coefficients)
        self._size = mesh.num_elements() + 1
        if len(self._coefficients) != self._size:
            raise ValueError(
                f"expected {self._size} coefficients, got {len(self._coefficients)}"
            )
        self._quadrature_points = quadrature_points
        last = mesh.num_elements()
        support: set[int] = set()
        for i, value in enumerate(self._coefficients):
            if abs(value) <= _SUPPORT_TOLERANCE:
                continue
            if 0 < i < last:
                support.update((i - 1, i))
            elif i == 0:
                support.add(0)
            else:
                support.add(i - 1)
        self._support = sorted(support)
        self._lock = threading.Lock()
        self._derivative: P0Function | None = None
        self._frac_derivatives: dict[int, P0Function] = {}

    def evaluate(self, element_index: int, t: float) -> complex:
        """Value at local coordinate ``t`` of the given element."""
        if not 0 <= element_index < self._mesh.num_elements():
            raise IndexError(f"element index {element_index} out of range")
        a = self._coefficients[element_index]
        b = self._coefficients[element_index + 1]
        return a + (b - a) * t

    def derivative(self, order=None) -> P0Function:
        """Classical derivative, or the P0 projection of a Caputo derivative.

        ``order`` is the fractional order times 100, in ``(-100, 100)`` and non-zero;
        a positive value gives the left derivative, a negative one the right derivative.
        """
        if order is None:
            with self._lock:
                if self._derivative is None:
                    self._derivative = self._classical_derivative()
                return self._derivative
        _check_order(order)
        with self._lock:
            if order not in self._frac_derivatives:
                self._frac_derivatives[order] = self._fractional_derivative(order)
            return self._frac_derivatives[order]

    def _classical_derivative(self) -> P0Function:
        coefficients = [
            (self._coefficients[i + 1] - self._coefficients[i]) / self._mesh.element(i).size()
            for i in range(self._mesh.num_elements())
        ]
        return P0Function(self._mesh, coefficients)

    def _real(self, element_index: int, t: float) -> float:
        return self.evaluate(element_index, t).real

    def _gauss(self, function: Callable[[float], float]) -> float:
        return gauss_legendre(function, 0.0, 1.0, self._quadrature_points)

    def _fractional_derivative(self, order: int) -> P0Function:
        alpha = abs(order * 0.01)
        scale = math.gamma(1.0 - alpha)
        compute = self._left_coefficient if order > 0 else self._right_coefficient
        coefficients = []
        for i in range(self._mesh.num_elements()):
            element = self._mesh.element(i)
            coefficients.append(compute(i, element, alpha, scale) / (scale * element.size()))
        return P0Function(self._mesh, coefficients)

    def _left_coefficient(
        self, i: int, evaluation: MeshElement1D, alpha: float, scale: float
    ) -> complex:
        size = evaluation.size()
        end_x = evaluation(1.0).x

        def self_integrand(t: float, xc: float) -> float:
            if t > 0.9:
                return self._real(i, t) * (xc * size) ** -alpha
            return self._real(i, t) * (end_x - evaluation(t).x) ** -alpha

        x_a = evaluation.a.x
        x_b = evaluation.b.x
        value = tanh_sinh(self_integrand, 0.0, 1.0) * size - self.evaluate(0, 0.0) * (
            x_b ** (1.0 - alpha) - x_a ** (1.0 - alpha)
        ) / (scale * (1.0 - alpha))
        point_a = evaluation(0.0)
        point_b = evaluation(1.0)
        for j in range(i):
            integration = self._mesh.element(j)
            j_size = integration.size()

            def integrand_a(t: float, j=j, integration=integration) -> float:
                return self._real(j, t) * (point_a - integration(t)).norm() ** -alpha

            def integrand_b(t: float, j=j, integration=integration) -> float:
                return self._real(j, t) * (point_b - integration(t)).norm() ** -alpha

            if j < i - 1:
                value += (self._gauss(integrand_b) - self._gauss(integrand_a)) * j_size
            else:

                def integrand_a_near(
                    t: float, xc: float, j=j, integration=integration, j_size=j_size
                ) -> float:
                    if t > 0.9:
                        return self._real(j, 1.0 - xc) * (xc * j_size) ** -alpha
                    return self._real(j, t) * (point_a - integration(t)).norm() ** -alpha

                value += (
                    self._gauss(integrand_b) - tanh_sinh(integrand_a_near, 0.0, 1.0)
                ) * j_size
        return value

    def _right_coefficient(
        self, i: int, evaluation: MeshElement1D, alpha: float, scale: float
    ) -> complex:
        size = evaluation.size()
        start_x = evaluation(0.0).x

        def self_integrand(t: float, xc: float) -> float:
            if t < 0.1:
                return self._real(i, t) * (-xc * size) ** -alpha
            return self._real(i, t) * (evaluation(t).x - start_x) ** -alpha

        x_a = evaluation.a.x
        x_b = evaluation.b.x
        last = self._mesh.num_elements() - 1
        value = tanh_sinh(self_integrand, 0.0, 1.0) * size - self.evaluate(last, 1.0) * (
            (1.0 - x_a) ** (1.0 - alpha) - abs(1.0 - x_b) ** (1.0 - alpha)
        ) / (scale * (1.0 - alpha))
        point_a = evaluation(0.0)
        point_b = evaluation(1.0)
        for j in range(last, i, -1):
            integration = self._mesh.element(j)
            j_size = integration.size()

            def integrand_a(t: float, j=j, integration=integration) -> float:
                return self._real(j, t) * (integration(t) - point_a).norm() ** -alpha

            def integrand_b(t: float, j=j, integration=integration) -> float:
                return self._real(j, t) * (integration(t) - point_b).norm() ** -alpha

            if j > i + 1:
                value -= (self._gauss(integrand_b) - self._gauss(integrand_a)) * j_size
            else:

                def integrand_b_near(
                    t: float, xc: float, j=j, integration=integration, j_size=j_size
                ) -> float:
                    if t < 0.1:
                        return self._real(j, t) * (-xc * j_size) ** -alpha
                    return self._real(j, t) * (integration(t) - point_b).norm() ** -alpha

                value -= (
                    tanh_sinh(integrand_b_near, 0.0, 1.0) - self._gauss(integrand_a)
                ) * j_size
        return value


class P1BasisFunction(BasisFunctionMesh, P1Function):
    """Hat function centred at one mesh node."""

    def __init__(
        self, mesh: Mesh1D, index: int, quadrature_points: int = _QUADRATURE_POINTS
    ) -> None:
        self.index = index
        super().__init__(mesh, _unit_vector(index, mesh.num_elements() + 1), quadrature_points)

    def anti_derivative(self, element_index: int) -> Callable[[float], complex]:
        """Ramp ``t -> t`` on the local coordinate of ``[0, 1]`` of an element."""
        with self._lock:
            if element_index not in self._anti_derivatives:

                def anti_derivative(t: float) -> complex:
                    if t < 0 or t > 1:
                        raise ValueError(f"argument {t} should be between 0 and 1")
                    return t

                self._anti_derivatives[element_index] = anti_derivative
            return self._anti_derivatives[element_index]


class RegularP1Mesh1D(DiscreteSpaceMesh):
    """Continuous piecewise linear functions, one basis function per mesh node."""

    def __init__(self, mesh: Mesh1D) -> None:
        super().__init__(mesh)
        self._size = mesh.num_elements() + 1
        self._basis: dict[int, P1BasisFunction] = {}
        self._basis_lock = threading.Lock()

    @property
    def size(self) -> int:
        return self._size

    @property
    def base_name(self) -> str:
        return "RegularP1_Mesh"

    def test_against_base_element(
        self, function: Callable[[float, float], complex], global_number: int
    ) -> complex:
        basis = self.basis_function(global_number)
        result = 0j
        for i in basis.support:
            element = self._mesh.element(i)
            jacobian = element.size()

            def integrand(t: float, i=i, element=element) -> complex:
                point = element(t)
                return jacobian * basis.evaluate(i, t) * function(point.x, point.y)

            result += tanh_sinh(integrand, 0.0, 1.0)
        return complex(result)

    def generate_function(self, coefficients: Iterable[complex]) -> P1Function:
        return P1Function(self._mesh, coefficients, _QUADRATURE_POINTS)

    def function_from(self, function: Callable[[float, float], complex]) -> P1Function:
        """Interpolant of ``function`` at the mesh nodes."""
        coefficients = []
        for i in range(self._size):
            point = self._mesh.point(i)
            coefficients.append(complex(function(point.x, point.y)))
        return self.generate_function(coefficients)

    def basis_function(self, global_number: int) -> P1BasisFunction:
        if not 0 <= global_number <= self._mesh.num_elements():
            raise ValueError("Invalid basis index (out of bounds)")
        with self._basis_lock:
            if global_number not in self._basis:
                self._basis[global_number] = P1BasisFunction(
                    self._mesh, global_number, _QUADRATURE_POINTS
                )
            return self._basis[global_number]

    def l2_identity_op(self) -> np.ndarray:
        """Tridiagonal mass matrix of the hat functions."""
        sizes = [self._mesh.element(i).size() for i in range(self._mesh.num_elements())]
        matrix = np.zeros((self._size, self._size), dtype=complex)
        for i, h in enumerate(sizes):
            matrix[i, i] += h / 3.0
            matrix[i + 1, i + 1] += h / 3.0
            matrix[i, i + 1] = matrix[i + 1, i] = h / 6.0
        return matrix
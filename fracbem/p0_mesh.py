"""Space of piecewise constant functions on a mesh."""

from __future__ import annotations

import threading
from typing import Callable, Iterable

import numpy as np

from .discrete_mesh import BasisFunctionMesh, DiscreteFunctionMesh, DiscreteSpaceMesh
from .functions import gauss_legendre
from .mesh import Mesh1D

_QUADRATURE_POINTS = 30
_SUPPORT_TOLERANCE = 1e-9


def _unit_vector(index: int, size: int) -> list[complex]:
    return [1.0 + 0j if i == index else 0j for i in range(size)]


class P0Function(DiscreteFunctionMesh):
    """Function constant on every element of a mesh."""

    def __init__(self, mesh: Mesh1D, coefficients: Iterable[complex]) -> None:
        super().__init__(mesh, coefficients)
        if len(self._coefficients) != mesh.num_elements():
            raise ValueError(
                f"expected {mesh.num_elements()} coefficients, got {len(self._coefficients)}"
            )
        self._support = [
            i for i, value in enumerate(self._coefficients) if abs(value) > _SUPPORT_TOLERANCE
        ]
        self._lock = threading.Lock()
        self._derivative: P0Function | None = None

    def evaluate(self, element_index: int, t: float) -> complex:
        """Value on the given element; the local coordinate does not matter."""
        if not 0 <= element_index < self._mesh.num_elements():
            raise IndexError(f"element index {element_index} out of range")
        return self._coefficients[element_index]

    def derivative(self, order=None) -> P0Function:
        """Classical derivative, which vanishes identically."""
        if order is not None:
            raise ValueError("fractional derivatives are not available for piecewise constants")
        with self._lock:
            if self._derivative is None:
                self._derivative = P0Function(self._mesh, [0j] * self._mesh.num_elements())
            return self._derivative


class P0BasisFunction(BasisFunctionMesh, P0Function):
    """Indicator function of one element."""

    def __init__(self, mesh: Mesh1D, index: int) -> None:
        self.index = index
        super().__init__(mesh, _unit_vector(index, mesh.num_elements()))

    def anti_derivative(self, element_index: int) -> Callable[[float], complex]:
        """Anti-derivative on an element in the local coordinate ``t`` of ``[0, 1]``."""
        with self._lock:
            if element_index not in self._anti_derivatives:

                def anti_derivative(t: float) -> complex:
                    if t < 0 or t > 1:
                        raise ValueError(f"argument {t} should be between 0 and 1")
                    return t

                self._anti_derivatives[element_index] = anti_derivative
            return self._anti_derivatives[element_index]


class RegularP0Mesh1D(DiscreteSpaceMesh):
    """Piecewise constant functions, one basis function per mesh element."""

    def __init__(self, mesh: Mesh1D) -> None:
        super().__init__(mesh)
        self._size = mesh.num_elements()
        self._basis: dict[int, P0BasisFunction] = {}
        self._basis_lock = threading.Lock()

    @property
    def size(self) -> int:
        return self._size

    @property
    def base_name(self) -> str:
        return "RegularP0Mesh"

    def test_against_base_element(
        self, function: Callable[[float, float], complex], global_number: int
    ) -> complex:
        basis = self.basis_function(global_number)
        element = self._mesh.element(global_number)
        jacobian = element.size()

        def integrand(t: float) -> complex:
            point = element(t)
            return jacobian * basis.evaluate(global_number, t) * function(point.x, point.y)

        return complex(gauss_legendre(integrand, 0.0, 1.0, _QUADRATURE_POINTS))

    def generate_function(self, coefficients: Iterable[complex]) -> P0Function:
        return P0Function(self._mesh, coefficients)

    def function_from(self, function: Callable[[float, float], complex]) -> P0Function:
        """Piecewise constant function with the element averages of ``function``."""
        coefficients = []
        for i in range(self._mesh.num_elements()):
            element = self._mesh.element(i)

            def integrand(t: float, element=element) -> complex:
                point = element(t)
                return function(point.x, point.y)

            coefficients.append(complex(gauss_legendre(integrand, 0.0, 1.0, _QUADRATURE_POINTS)))
        return self.generate_function(coefficients)

    def basis_function(self, global_number: int) -> P0BasisFunction:
        if not 0 <= global_number < self._mesh.num_elements():
            raise ValueError("Invalid basis index (out of bounds)")
        with self._basis_lock:
            if global_number not in self._basis:
                self._basis[global_number] = P0BasisFunction(self._mesh, global_number)
            return self._basis[global_number]

    def l2_identity_op(self) -> np.ndarray:
        """Mass matrix: diagonal with the element lengths."""
        sizes = [self._mesh.element(i).size() for i in range(self._mesh.num_elements())]
        return np.diag(np.array(sizes, dtype=complex))
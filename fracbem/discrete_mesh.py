"""Base classes for discrete spaces and functions over one-dimensional meshes."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Callable, Iterable

import numpy as np

from .functions import gauss_legendre, tanh_sinh
from .mesh import Mesh1D


class DiscreteFunctionMesh(ABC):
    """Function given by coefficients on a mesh."""

    def __init__(self, mesh: Mesh1D, coefficients: Iterable[complex]) -> None:
        self._mesh = mesh
        self._coefficients = [complex(c) for c in coefficients]
        self._support: list[int] = []

    @property
    def mesh(self) -> Mesh1D:
        return self._mesh

    @property
    def coefficients(self) -> list[complex]:
        return list(self._coefficients)

    @property
    def support(self) -> list[int]:
        """Indices of the elements on which the function may be non-zero."""
        return list(self._support)

    @abstractmethod
    def evaluate(self, element_index: int, t: float) -> complex:
        """Value at local coordinate ``t`` of the given element."""

    @abstractmethod
    def derivative(self, order=None) -> DiscreteFunctionMesh:
        """Derivative; ``order`` selects a fractional derivative where supported."""

    def __call__(self, t: float) -> complex:
        index, position = self._mesh.element_with_point(t)
        return self.evaluate(index, position)

    def l2_norm(self) -> float:
        """L2 norm over the mesh."""
        result = 0.0
        for i in range(self._mesh.num_elements()):
            size = self._mesh.element(i).size()
            local = gauss_legendre(
                lambda t, i=i: abs(self.evaluate(i, t) * self.evaluate(i, t)) * size, 0.0, 1.0, 4
            )
            result += local
        return math.sqrt(result)

    def l2_error(self, other: Callable[[float, float], complex]) -> float:
        """L2 distance to a function of the plane restricted to the mesh."""
        result = 0.0
        for i in range(self._mesh.num_elements()):
            element = self._mesh.element(i)
            size = element.size()

            def integrand(t: float, i=i, element=element) -> float:
                point = element(t)
                return abs(self.evaluate(i, t) - other(point.x, point.y)) ** 2 * size

            result += abs(tanh_sinh(integrand, 0.0, 1.0))
        return math.sqrt(result)

    def _check_same_length(self, other: DiscreteFunctionMesh) -> None:
        if len(self._coefficients) != len(other._coefficients):
            raise ValueError("discrete functions have different numbers of coefficients")

    def __isub__(self, other: DiscreteFunctionMesh) -> DiscreteFunctionMesh:
        self._check_same_length(other)
        self._coefficients = [a - b for a, b in zip(self._coefficients, other._coefficients)]
        return self

    def __imul__(self, other: DiscreteFunctionMesh) -> DiscreteFunctionMesh:
        self._check_same_length(other)
        self._coefficients = [a * b for a, b in zip(self._coefficients, other._coefficients)]
        return self


class BasisFunctionMesh(DiscreteFunctionMesh, ABC):
    """Basis function of a discrete space on a mesh."""

    def __init__(self, *args, **kwargs) -> None:
        self._anti_derivatives: dict[int, Callable[[float], complex]] = {}
        super().__init__(*args, **kwargs)

    @abstractmethod
    def anti_derivative(self, element_index: int) -> Callable[[float], complex]:
        """Anti-derivative of the function on the given element."""


class DiscreteSpaceMesh(ABC):
    """Discrete space of functions over a mesh."""

    def __init__(self, mesh: Mesh1D) -> None:
        self._mesh = mesh

    @property
    def mesh(self) -> Mesh1D:
        return self._mesh

    @property
    @abstractmethod
    def size(self) -> int:
        """Dimension of the space."""

    @property
    @abstractmethod
    def base_name(self) -> str:
        """Name identifying the kind of space."""

    @abstractmethod
    def test_against_base_element(
        self, function: Callable[[float, float], complex], global_number: int
    ) -> complex:
        """L2 product of ``function`` with one basis function."""

    @abstractmethod
    def generate_function(self, coefficients: Iterable[complex]) -> DiscreteFunctionMesh:
        """Discrete function with the given coefficients."""

    @abstractmethod
    def function_from(self, function: Callable[[float, float], complex]) -> DiscreteFunctionMesh:
        """Discrete function sharing the degrees of freedom of ``function``."""

    @abstractmethod
    def basis_function(self, global_number: int) -> BasisFunctionMesh:
        """The basis function with the given global number."""

    @abstractmethod
    def l2_identity_op(self) -> np.ndarray:
        """Matrix of L2 products between basis functions."""

    def test_against_basis(self, function: Callable[[float, float], complex]) -> np.ndarray:
        """Vector of L2 products of ``function`` with every basis function."""
        return np.array(
            [self.test_against_base_element(function, i) for i in range(self.size)],
            dtype=complex,
        )

    def project_function_l2(self, function: Callable[[float, float], complex]) -> np.ndarray:
        """Coefficients of the L2 projection of ``function`` onto the space."""
        matrix = np.asarray(self.l2_identity_op(), dtype=complex)
        rhs = self.test_against_basis(function)
        solution, *_ = np.linalg.lstsq(matrix, rhs, rcond=None)
        return solution
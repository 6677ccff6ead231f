"""Functions of one variable built from a list of parameters."""

from __future__ import annotations

import math
from abc import ABC
from typing import Sequence

from .functions import Interval, ScalarFunction1D


class ParametrizedFunction1D(ScalarFunction1D, ABC):
    """Function determined by a list of complex parameters."""

    def __init__(self, params: Sequence[complex], sup_low: float, sup_upp: float) -> None:
        self.params = tuple(complex(p) for p in params)
        self._support: Interval = (float(sup_low), float(sup_upp))

    def support(self) -> Interval:
        return self._support

    def broken_support(self) -> list[Interval]:
        return [self._support]


class TrigonometricFunction1D(ParametrizedFunction1D):
    """Trigonometric polynomial with parameters ``[a0, b1, a1, b2, a2, ...]``.

    ``a_k`` multiplies ``cos(2 pi k t / period)`` and ``b_k`` the matching sine.
    """

    def __init__(self, period: float, params: Sequence[complex]) -> None:
        super().__init__(params, 0.0, period)
        self.period = float(period)

    def __call__(self, t: float) -> complex:
        result = 0j
        order = 0
        for i, param in enumerate(self.params):
            if i % 2 == 0:
                result += param * math.cos(2.0 * math.pi * t * order / self.period)
                order += 1
            else:
                result += param * math.sin(2.0 * math.pi * t * order / self.period)
        return result


class PolynomialFunction1D(ParametrizedFunction1D):
    """Polynomial with parameters as coefficients of increasing powers."""

    def __init__(self, params: Sequence[complex]) -> None:
        super().__init__(params, -1000.0, 1000.0)

    def __call__(self, t: float) -> complex:
        result = 0j
        for power, param in enumerate(self.params):
            result += param * t**power
        return result


class PwConstantFunction1D(ParametrizedFunction1D):
    """Piecewise constant function on equal pieces of ``[lower, upper]``."""

    def __init__(self, lower: float, upper: float, params: Sequence[complex]) -> None:
        if not params:
            raise ValueError("a piecewise constant function needs at least one value")
        super().__init__(params, lower, upper)
        self.lower = float(lower)
        self.upper = float(upper)

    def __call__(self, t: float) -> complex:
        if t < self.lower or t > self.upper:
            return 0j
        delta = (self.upper - self.lower) / len(self.params)
        index = min(math.floor((t - self.lower) / delta), len(self.params) - 1)
        return self.params[index]
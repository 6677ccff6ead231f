import math

import pytest

from fracbem.parametrized import (
    PolynomialFunction1D,
    PwConstantFunction1D,
    TrigonometricFunction1D,
)


def test_polynomial_evaluation():
    p = PolynomialFunction1D([1, 2, 3])
    assert p(2.0) == pytest.approx(1 + 2 * 2 + 3 * 2**2)
    assert p(0.0) == pytest.approx(1)


def test_polynomial_support():
    p = PolynomialFunction1D([1])
    assert p.support() == (-1000.0, 1000.0)
    assert p.broken_support() == [(-1000.0, 1000.0)]


def test_trigonometric_ordering():
    t = 0.13
    assert TrigonometricFunction1D(1.0, [5])(t) == pytest.approx(5)
    assert TrigonometricFunction1D(1.0, [0, 1])(t) == pytest.approx(math.sin(2 * math.pi * t))
    assert TrigonometricFunction1D(1.0, [0, 0, 1])(t) == pytest.approx(math.cos(2 * math.pi * t))
    assert TrigonometricFunction1D(1.0, [0, 0, 0, 1])(t) == pytest.approx(
        math.sin(4 * math.pi * t)
    )


def test_trigonometric_period():
    f = TrigonometricFunction1D(2.0, [1, 2, 3])
    assert f(0.3) == pytest.approx(f(2.3))
    assert f.support() == (0.0, 2.0)


def test_piecewise_constant():
    f = PwConstantFunction1D(0.0, 1.0, [1, 2])
    assert f(0.25) == pytest.approx(1)
    assert f(0.75) == pytest.approx(2)
    assert f(1.0) == pytest.approx(2)
    assert f(-0.1) == 0
    assert f(1.1) == 0


def test_piecewise_constant_requires_values():
    with pytest.raises(ValueError):
        PwConstantFunction1D(0.0, 1.0, [])
import math

import numpy as np
import pytest
from scipy.integrate import quad

from fracbem.geometry import StraightCurve
from fracbem.mesh import MeshCurve1D
from fracbem.p0_mesh import P0Function
from fracbem.p1_zero_mesh import P10BasisFunction, P10Function, RegularP10Mesh1D


def make_space(elements):
    mesh = MeshCurve1D(elements, StraightCurve(1.0))
    return mesh, RegularP10Mesh1D(mesh)


def test_size_and_name():
    _, space = make_space(4)
    assert space.size == 3
    assert space.base_name == "RegularP1_0Mesh"


def test_wrong_number_of_coefficients():
    mesh, space = make_space(4)
    with pytest.raises(ValueError):
        space.generate_function([1.0, 2.0])
    with pytest.raises(ValueError):
        P10Function(mesh, [1.0] * 4)


def test_zero_boundary_and_continuity():
    _, space = make_space(4)
    coefficients = [1.0, -2.0, 3.0]
    function = space.generate_function(coefficients)
    assert function.evaluate(0, 0.0) == 0
    assert function.evaluate(3, 1.0) == 0
    for i, value in enumerate(coefficients):
        assert function.evaluate(i, 1.0) == pytest.approx(value)
        assert function.evaluate(i + 1, 0.0) == pytest.approx(value)


def test_evaluate_rejects_bad_element():
    _, space = make_space(3)
    function = space.generate_function([1.0, 1.0])
    with pytest.raises(IndexError):
        function.evaluate(3, 0.5)


def test_support_of_basis():
    _, space = make_space(4)
    basis = space.basis_function(1)
    assert basis.support == [1, 2]
    assert isinstance(basis, P10BasisFunction)


def test_basis_cached_and_out_of_range():
    _, space = make_space(4)
    assert space.basis_function(2) is space.basis_function(2)
    with pytest.raises(ValueError):
        space.basis_function(3)
    with pytest.raises(ValueError):
        space.basis_function(-1)


def test_function_from_interpolates_nodes():
    mesh, space = make_space(4)
    function = space.function_from(lambda x, y: x)
    expected = [mesh.point(i).x for i in range(1, 4)]
    assert function.coefficients == pytest.approx(expected)


def test_classical_derivative_telescopes():
    mesh, space = make_space(5)
    function = space.generate_function([0.3, -1.2, 2.0, 0.7])
    derivative = function.derivative()
    assert isinstance(derivative, P0Function)
    total = sum(
        derivative.coefficients[i] * mesh.element(i).size() for i in range(mesh.num_elements())
    )
    assert abs(total) < 1e-12
    assert function.derivative() is derivative


def test_invalid_fractional_order():
    _, space = make_space(2)
    function = space.generate_function([1.0])
    for order in (0, 100, -100, 150):
        with pytest.raises(ValueError):
            function.derivative(order)


def test_left_derivative_vanishes_before_support():
    _, space = make_space(4)
    basis = space.basis_function(2)
    derivative = basis.derivative(50)
    assert derivative.coefficients[0] == 0
    assert derivative.coefficients[1] == 0
    assert basis.derivative(50) is derivative


def test_right_derivative_vanishes_after_support():
    _, space = make_space(4)
    basis = space.basis_function(0)
    derivative = basis.derivative(-50)
    assert derivative.coefficients[2] == 0
    assert derivative.coefficients[3] == 0


def test_left_derivative_total_matches_integral():
    mesh, space = make_space(2)
    alpha = 0.5
    function = space.generate_function([1.0])
    derivative = function.derivative(50)
    total = sum(
        derivative.coefficients[i].real * mesh.element(i).size() for i in range(2)
    )

    def hat(y):
        return 2 * y if y <= 0.5 else 2 * (1 - y)

    integral, _ = quad(hat, 0.0, 1.0, weight="alg", wvar=(0.0, -alpha), points=[0.5])
    expected = integral / math.gamma(1 - alpha)
    assert total == pytest.approx(expected, rel=2e-2)


def test_right_derivative_mirrors_left_for_symmetric_hat():
    _, space = make_space(2)
    function = space.generate_function([1.0])
    left = function.derivative(40).coefficients
    right = function.derivative(-40).coefficients
    assert right[0].real == pytest.approx(-left[1].real, rel=1e-6)
    assert right[1].real == pytest.approx(-left[0].real, rel=1e-6)


def test_mass_matrix_symmetric_and_row_sum():
    _, space = make_space(4)
    matrix = space.l2_identity_op()
    assert np.allclose(matrix, matrix.T)
    tested = space.test_against_base_element(lambda x, y: 1.0, 1)
    assert tested == pytest.approx(matrix[1].sum(), abs=1e-8)


def test_projection_reproduces_discrete_function():
    _, space = make_space(4)
    coefficients = [0.5, -1.0, 2.0]
    function = space.generate_function(coefficients)
    projected = space.project_function_l2(lambda x, y: function(x))
    assert np.allclose(projected, coefficients, atol=1e-6)


def test_anti_derivative_range():
    _, space = make_space(3)
    basis = space.basis_function(0)
    ramp = basis.anti_derivative(1)
    assert ramp(0.25) == 0.25
    assert basis.anti_derivative(1) is ramp
    with pytest.raises(ValueError):
        ramp(1.5)
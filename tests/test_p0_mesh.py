import pytest

from fracbem.geometry import StraightCurve
from fracbem.mesh import MeshCurve1D
from fracbem.p0_mesh import P0BasisFunction, P0Function, RegularP0Mesh1D


@pytest.fixture
def mesh():
    return MeshCurve1D(4, StraightCurve(1.0))


@pytest.fixture
def space(mesh):
    return RegularP0Mesh1D(mesh)


def test_space_size_and_name(space, mesh):
    assert space.size == mesh.num_elements()
    assert space.base_name == "RegularP0Mesh"


def test_function_support_and_evaluation(mesh):
    f = P0Function(mesh, [0, 2, 0, 3j])
    assert f.support == [1, 3]
    assert f.evaluate(1, 0.7) == 2
    assert f.evaluate(3, 0.1) == 3j


def test_function_call_uses_element(mesh):
    f = P0Function(mesh, [1, 2, 3, 4])
    assert f(mesh.element(2)(0.5).x) == 3


def test_wrong_number_of_coefficients(mesh):
    with pytest.raises(ValueError):
        P0Function(mesh, [1, 2, 3])


def test_evaluate_out_of_range(mesh):
    f = P0Function(mesh, [1, 2, 3, 4])
    with pytest.raises(IndexError):
        f.evaluate(4, 0.5)


def test_derivative_is_zero_and_cached(mesh):
    f = P0Function(mesh, [1, 2, 3, 4])
    d = f.derivative()
    assert d.coefficients == [0j] * 4
    assert f.derivative() is d


def test_fractional_derivative_rejected(mesh):
    f = P0Function(mesh, [1, 2, 3, 4])
    with pytest.raises(ValueError):
        f.derivative(50)


def test_basis_function_is_indicator(space):
    basis = space.basis_function(2)
    assert isinstance(basis, P0BasisFunction)
    assert basis.coefficients == [0j, 0j, 1 + 0j, 0j]
    assert basis.support == [2]
    assert space.basis_function(2) is basis


@pytest.mark.parametrize("index", [-1, 4])
def test_basis_function_out_of_bounds(space, index):
    with pytest.raises(ValueError):
        space.basis_function(index)


def test_anti_derivative(space):
    anti = space.basis_function(1).anti_derivative(1)
    assert anti(0.3) == pytest.approx(0.3)
    with pytest.raises(ValueError):
        anti(1.5)


def test_test_against_constant_gives_element_size(space, mesh):
    for i in range(space.size):
        value = space.test_against_base_element(lambda x, y: 1.0, i)
        assert value == pytest.approx(mesh.element(i).size())


def test_function_from_constant(space):
    f = space.function_from(lambda x, y: 2.0)
    assert f.coefficients == pytest.approx([2.0] * 4)


def test_function_from_linear_gives_midpoints(space, mesh):
    f = space.function_from(lambda x, y: x)
    midpoints = [mesh.element(i)(0.5).x for i in range(4)]
    assert [c.real for c in f.coefficients] == pytest.approx(midpoints)


def test_projection_round_trip(space):
    coefficients = space.project_function_l2(lambda x, y: 3.0)
    assert list(coefficients) == pytest.approx([3.0] * 4)


def test_l2_norm_of_unit_function(space):
    f = space.generate_function([1, 1, 1, 1])
    assert f.l2_norm() == pytest.approx(1.0)
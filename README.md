# fracbem

Numerical building blocks for boundary and finite element computations on
one-dimensional curves in the plane. Piecewise linear functions on these curves
support Riemann–Liouville and Caputo fractional derivatives.

## Modules

- `fracbem.geometry`: `Point2D`, `Vector2D` and parametrized curves.
  - The curves are `StraightCurve`, `TrigonometricCurve` and `PolyPeriodicCurve`.
  - Every curve provides `at(t)`, `normal(t)`, `jacobian(t)` and
    `surface_measure()`.
  - Evaluating a curve outside its parameter range raises `ValueError`.
- `fracbem.mesh`: meshes of straight `MeshElement1D`s over a curve.
  - `MeshCurve1D` is uniform in the curve parameter.
  - `MeshCurveGraded1D` is graded towards the lower end of the parameter.
  - `element_with_point(t)` returns the element index and the local position
    in `[0, 1]`.
  - `element(i)`, `point(i)` and `num_elements()` give access to the parts of
    the mesh.
- `fracbem.functions`: quadrature and scalar functions.
  - `gauss_legendre(function, a, b, points)` is Gauss–Legendre quadrature.
  - `tanh_sinh(function, a, b)` is tanh-sinh quadrature for integrands that are
    singular at the endpoints. If the integrand takes two arguments, the second
    is the signed distance to the nearest endpoint.
  - `ExplicitScalarFunction1D` and `ExplicitScalarFunction2D` wrap callables.
    They support `*`, `+` (one variable only) and `ScalarFunction1D.tensor`.
  - `BoundaryScalarRestriction1D` restricts a function of the plane to a curve.
- `fracbem.parametrized`: functions given by a coefficient list.
  - `PolynomialFunction1D` takes the coefficients of increasing powers.
  - `TrigonometricFunction1D` takes `[a0, b1, a1, b2, a2, ...]`, where `a` are
    cosine coefficients and `b` are sine coefficients.
  - `PwConstantFunction1D` takes one value for each of the equal pieces of an
    interval.
- `fracbem.discrete_mesh`: abstract base classes for discrete functions and
  spaces on a mesh.
  - Discrete functions provide `l2_norm()`, `l2_error(f)` and in-place `-=` and
    `*=` on their coefficients.
  - Spaces provide `test_against_basis(f)` and `project_function_l2(f)`.
- `fracbem.p0_mesh`: `RegularP0Mesh1D`, with one basis function per element.
  - `function_from(f)` uses element averages.
- `fracbem.p1_mesh`: `RegularP1Mesh1D`, with one basis function per node.
  - `function_from(f)` interpolates at the nodes.
  - `derivative(order)` returns the P0 projection of a Caputo derivative.
- `fracbem.p1_zero_mesh`: `RegularP10Mesh1D`, with one basis function per
  interior node and zero values at both ends.
  - `derivative(order)` returns the P0 projection of a Riemann–Liouville
    derivative.
- `fracbem.green`: Green functions and the integration of their singular part.
  - `GreenL2D` is the Laplace Green function.
  - `GreenH2D` is the Helmholtz Green function.
  - `GreenLQP2D` and `GreenHQP2D` are the quasi-periodic versions, evaluated by
    a windowed sum. `displaced_sum` and (for Helmholtz) `spectral_sum` are also
    available.
  - The logarithmic singularity can be integrated over pairs of mesh elements
    with `integrate_singularity`.

## Fractional derivatives

`derivative()` with no argument returns the classical derivative as a
`P0Function`.

`derivative(order)` takes a whole number in `(-100, 100)`, not zero. This number
is the fractional order times 100:

- a positive number gives the left derivative;
- a negative number gives the right derivative.

Any other value raises `ValueError`. Results are cached for each order.

## Example

```python
from fracbem.geometry import TrigonometricCurve
from fracbem.mesh import MeshCurve1D
from fracbem.p1_zero_mesh import RegularP10Mesh1D

curve = TrigonometricCurve(1.0, 0.0, [0.0], [0.0])   # the segment [0, 1]
mesh = MeshCurve1D(50, curve)
space = RegularP10Mesh1D(mesh)

# Values at the interior nodes
coefficients = [min(x, 1 - x) for x in (mesh.point(i).x for i in range(1, 50))]
u = space.generate_function(coefficients)

print(u(0.5))           # value at curve parameter 0.5
print(u.l2_norm())      # L2 norm over the curve
d = u.derivative(70)    # left Riemann-Liouville derivative of order 0.70
print(d(0.25))
```

## What it does not do

This is a library only.

- It has no command-line program.
- It does not assemble or solve a complete fractional boundary value problem.
- It does not build reduced bases.
- Singular integrals of the Green functions are available only on mesh
  elements.

## Running the tests

```
pip install .[test]
pytest
```
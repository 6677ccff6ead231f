"""Meshes, discrete P0/P1 spaces with fractional derivatives, quadrature and Green functions on 1D curves."""

__version__ = "1.0.0"

__all__ = [
    "geometry",
    "mesh",
    "functions",
    "parametrized",
    "discrete_mesh",
    "p0_mesh",
    "p1_mesh",
    "p1_zero_mesh",
    "green",
]
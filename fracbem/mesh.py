"""Elements and meshes on one-dimensional curves embedded in the plane."""

from __future__ import annotations

import bisect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .geometry import Curve2D, Point2D


@dataclass
class Element1D:
    """Element of an index partition; equality looks at the end nodes only."""

    a: int
    b: int
    number: int = field(compare=False)
    dof: int = field(compare=False)


@dataclass
class MeshElement1D:
    """Straight element of a mesh between two points."""

    index: int
    a: Point2D
    b: Point2D
    shift: float = field(default=0.0, compare=False)

    def __post_init__(self) -> None:
        # Equality only considers the end points.
        pass

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MeshElement1D):
            return NotImplemented
        return self.a == other.a and self.b == other.b

    def size(self) -> float:
        """Length of the element."""
        return (self.b - self.a).norm()

    def __call__(self, t: float) -> Point2D:
        """Point at local coordinate ``t`` in ``[0, 1]``."""
        return self.a + (self.b - self.a) * t

    def position(self, t: float) -> float:
        """Arc-length position of local coordinate ``t`` along the mesh."""
        return self.shift + t * self.size()

    def __str__(self) -> str:
        return f"[{self.a}, {self.b}]"


class Mesh1D(ABC):
    """Base mesh made of consecutive straight elements."""

    def __init__(self, points: list[Point2D], elements: list[MeshElement1D]) -> None:
        if len(points) != len(elements) + 1:
            raise ValueError("a mesh needs one more point than elements")
        self._points = points
        self._elements = elements

    def num_elements(self) -> int:
        """Number of elements."""
        return len(self._elements)

    def element(self, i: int) -> MeshElement1D:
        """The ``i``-th element."""
        if not 0 <= i < len(self._elements):
            raise IndexError(f"element index {i} out of range")
        return self._elements[i]

    def point(self, i: int) -> Point2D:
        """Coordinates of node ``i``; indices past the end wrap to node 0."""
        index = i if i <= self.num_elements() else 0
        return self._points[index]

    def element_from_b_point(self, i: int) -> MeshElement1D:
        """Element whose right node is node ``i`` (node 0 wraps to the last element)."""
        index = i - 1 if i >= 1 else self.num_elements() - 1
        return self.element(index)

    def element_from_a_point(self, i: int) -> MeshElement1D:
        """Element whose left node is node ``i``."""
        index = i if i <= self.num_elements() else 0
        return self.element(index)

    @abstractmethod
    def element_with_point(self, t: float) -> tuple[int, float]:
        """Element index holding parameter ``t`` and the local position in it."""


class _CurveMesh(Mesh1D):
    """Mesh over a curve given by increasing parameter breaks."""

    def __init__(self, curve: Curve2D, breaks: list[float]) -> None:
        self._curve = curve
        self._breaks = breaks
        points = [curve.at(b) for b in breaks]
        elements = []
        shift = 0.0
        for i in range(len(breaks) - 1):
            element = MeshElement1D(i, curve.at(breaks[i]), curve.at(breaks[i + 1]), shift)
            shift += element.size()
            elements.append(element)
        super().__init__(points, elements)

    @property
    def curve(self) -> Curve2D:
        return self._curve

    def element_with_point(self, t: float) -> tuple[int, float]:
        low, upp = self._curve.low_limit, self._curve.upp_limit
        if not low <= t <= upp:
            raise ValueError(f"parameter {t} outside [{low}, {upp}]")
        if t == upp:
            return self.num_elements() - 1, 1.0
        if t == low:
            return 0, 0.0
        lb = bisect.bisect_left(self._breaks, t)
        lower, upper = self._breaks[lb - 1], self._breaks[lb]
        return lb - 1, (t - lower) / (upper - lower)


def _check_count(num_elements: int) -> None:
    if num_elements < 1:
        raise ValueError("a mesh needs at least one element")


class MeshCurve1D(_CurveMesh):
    """Mesh uniform in the curve's parametrization."""

    def __init__(self, num_elements: int, curve: Curve2D) -> None:
        _check_count(num_elements)
        length = (curve.upp_limit - curve.low_limit) / num_elements
        breaks = [curve.low_limit]
        a = curve.low_limit
        for _ in range(num_elements):
            a += length
            breaks.append(a)
        if abs(breaks[-1] - curve.upp_limit) >= length / 10.0:
            raise ValueError("mesh breaks do not reach the end of the curve")
        super().__init__(curve, breaks)


class MeshCurveGraded1D(_CurveMesh):
    """Mesh graded towards the start of the curve's parametrization."""

    def __init__(self, num_elements: int, curve: Curve2D, grade: float) -> None:
        _check_count(num_elements)
        total = curve.upp_limit - curve.low_limit
        length = total / num_elements
        a = curve.low_limit
        b = a + (length / total) ** grade * total
        breaks = [a]
        for i in range(num_elements):
            a = b
            b = (length * (i + 2) / total) ** grade * total
            breaks.append(a)
        if abs(breaks[-1] - curve.upp_limit) >= length / 10.0:
            raise ValueError("mesh breaks do not reach the end of the curve")
        super().__init__(curve, breaks)
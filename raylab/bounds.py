"""Rays and axis-aligned bounding boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from raylab.vector import Vector3f, vec_max, vec_min

_INF = math.inf


def _reciprocal(value: float) -> float:
    if value == 0:
        return math.copysign(_INF, value)
    return 1.0 / value


@dataclass(frozen=True)
class Ray:
    """A ray with its origin, direction and the direction's reciprocal."""

    origin: Vector3f
    direction: Vector3f
    direction_inv: Vector3f = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        inverse = Vector3f(*(_reciprocal(c) for c in self.direction))
        object.__setattr__(self, "direction_inv", inverse)


@dataclass(frozen=True)
class Bounds3:
    """An axis-aligned box; the default box is empty and absorbs any union."""

    p_min: Vector3f = Vector3f(_INF, _INF, _INF)
    p_max: Vector3f = Vector3f(-_INF, -_INF, -_INF)

    @classmethod
    def from_point(cls, p: Vector3f) -> Bounds3:
        """A box holding the single point ``p``."""
        return cls(p, p)

    @classmethod
    def spanning(cls, p1: Vector3f, p2: Vector3f) -> Bounds3:
        """The smallest box holding both corners ``p1`` and ``p2``."""
        return cls(vec_min(p1, p2), vec_max(p1, p2))

    def diagonal(self) -> Vector3f:
        """Vector from the minimum corner to the maximum corner."""
        return self.p_max - self.p_min

    def max_extent(self) -> int:
        """Index of the axis along which the box is longest (ties favour later axes)."""
        d = self.diagonal()
        if d.x > d.y and d.x > d.z:
            return 0
        if d.y > d.z:
            return 1
        return 2

    def surface_area(self) -> float:
        """Total area of the box's six faces."""
        d = self.diagonal()
        return 2 * (d.x * d.y + d.x * d.z + d.y * d.z)

    def centroid(self) -> Vector3f:
        """Centre point of the box."""
        return 0.5 * self.p_min + 0.5 * self.p_max

    def intersect(self, other: Bounds3) -> Bounds3:
        """The overlap of this box and ``other``."""
        return Bounds3.spanning(
            vec_max(self.p_min, other.p_min), vec_min(self.p_max, other.p_max)
        )

    def offset(self, p: Vector3f) -> Vector3f:
        """Position of ``p`` relative to the box: 0 at ``p_min``, 1 at ``p_max``."""
        o = p - self.p_min
        return Vector3f(
            *(
                oc / (hi - lo) if hi > lo else oc
                for oc, lo, hi in zip(o, self.p_min, self.p_max)
            )
        )

    def __getitem__(self, index: int) -> Vector3f:
        return self.p_min if index == 0 else self.p_max

    def intersect_p(
        self, ray: Ray, inv_dir: Vector3f, dir_is_neg: Sequence[int | bool]
    ) -> bool:
        """Slab test of ``ray`` against the box.

        ``dir_is_neg[i]`` is true when the ray's direction along axis ``i`` is
        non-negative, so the near slab is the one at ``p_min``.
        """
        t_lo = (self.p_min - ray.origin) * inv_dir
        t_hi = (self.p_max - ray.origin) * inv_dir
        enters = []
        exits = []
        for lo, hi, forward in zip(t_lo, t_hi, dir_is_neg):
            enters.append(lo if forward else hi)
            exits.append(hi if forward else lo)
        t_enter = max(enters)
        t_exit = min(exits)
        return t_enter < t_exit and t_exit >= 0


def overlaps(b1: Bounds3, b2: Bounds3) -> bool:
    """Whether two boxes share at least one point."""
    return all(
        hi1 >= lo2 and lo1 <= hi2
        for lo1, hi1, lo2, hi2 in zip(b1.p_min, b1.p_max, b2.p_min, b2.p_max)
    )


def inside(p: Vector3f, b: Bounds3) -> bool:
    """Whether point ``p`` lies in box ``b`` (boundary included)."""
    return all(lo <= c <= hi for c, lo, hi in zip(p, b.p_min, b.p_max))


def union(b1: Bounds3, b2: Bounds3) -> Bounds3:
    """The smallest box enclosing both boxes."""
    return Bounds3(vec_min(b1.p_min, b2.p_min), vec_max(b1.p_max, b2.p_max))


def union_point(b: Bounds3, p: Vector3f) -> Bounds3:
    """The smallest box enclosing box ``b`` and point ``p``."""
    return Bounds3(vec_min(b.p_min, p), vec_max(b.p_max, p))
"""Small immutable 2D and 3D float vectors used by the ray tracer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float))


@dataclass(frozen=True, slots=True)
class Vector3f:
    """A 3D vector with component-wise arithmetic."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3f) -> Vector3f:
        if not isinstance(other, Vector3f):
            return NotImplemented
        return Vector3f(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3f) -> Vector3f:
        if not isinstance(other, Vector3f):
            return NotImplemented
        return Vector3f(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Vector3f | float) -> Vector3f:
        if isinstance(other, Vector3f):
            return Vector3f(self.x * other.x, self.y * other.y, self.z * other.z)
        if _is_number(other):
            return Vector3f(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Vector3f:
        if _is_number(other):
            return Vector3f(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, other: float) -> Vector3f:
        if not _is_number(other):
            return NotImplemented
        return Vector3f(self.x / other, self.y / other, self.z / other)

    def __neg__(self) -> Vector3f:
        return Vector3f(-self.x, -self.y, -self.z)

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __str__(self) -> str:
        return f"{self.x:g}, {self.y:g}, {self.z:g}"


@dataclass(frozen=True, slots=True)
class Vector2f:
    """A 2D vector, used for texture and barycentric coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2f) -> Vector2f:
        if not isinstance(other, Vector2f):
            return NotImplemented
        return Vector2f(self.x + other.x, self.y + other.y)

    def __mul__(self, other: float) -> Vector2f:
        if not _is_number(other):
            return NotImplemented
        return Vector2f(self.x * other, self.y * other)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


def splat(value: float) -> Vector3f:
    """Return a vector with all three components set to ``value``."""
    return Vector3f(value, value, value)


def vec_min(a: Vector3f, b: Vector3f) -> Vector3f:
    """Component-wise minimum of two vectors."""
    return Vector3f(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))


def vec_max(a: Vector3f, b: Vector3f) -> Vector3f:
    """Component-wise maximum of two vectors."""
    return Vector3f(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))


def lerp(a: Vector3f, b: Vector3f, t: float) -> Vector3f:
    """Linear interpolation between ``a`` (t=0) and ``b`` (t=1)."""
    return a * (1 - t) + b * t


def normalize(v: Vector3f) -> Vector3f:
    """Return ``v`` scaled to unit length; a zero vector is returned unchanged."""
    mag2 = v.x * v.x + v.y * v.y + v.z * v.z
    if mag2 > 0:
        inv_mag = 1 / math.sqrt(mag2)
        return Vector3f(v.x * inv_mag, v.y * inv_mag, v.z * inv_mag)
    return v


def dot_product(a: Vector3f, b: Vector3f) -> float:
    """Scalar product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross_product(a: Vector3f, b: Vector3f) -> Vector3f:
    """Vector product of two vectors."""
    return Vector3f(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )
"""Vector math, point-in-triangle tests and line tokenising for Wavefront OBJ data."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Sequence, TypeVar

_WHITESPACE = " \t"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

T = TypeVar("T")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float))


@dataclass(frozen=True, slots=True)
class Vector2:
    """A 2D vector holding texture coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: float) -> Vector2:
        if not _is_number(other):
            return NotImplemented
        return Vector2(self.x * other, self.y * other)


@dataclass(frozen=True, slots=True)
class Vector3:
    """A 3D vector holding positions and normals."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: float) -> Vector3:
        if not _is_number(other):
            return NotImplemented
        return Vector3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vector3:
        if not _is_number(other):
            return NotImplemented
        return Vector3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, other: float) -> Vector3:
        if not _is_number(other):
            return NotImplemented
        return Vector3(self.x / other, self.y / other, self.z / other)


@dataclass(frozen=True, slots=True)
class Vertex:
    """A model vertex: position, normal and texture coordinate."""

    position: Vector3 = field(default_factory=Vector3)
    normal: Vector3 = field(default_factory=Vector3)
    texture_coordinate: Vector2 = field(default_factory=Vector2)


def cross_v3(a: Vector3, b: Vector3) -> Vector3:
    """Vector product of ``a`` and ``b``."""
    return Vector3(a.y * b.z - a.z * b.y, a.z * b.x - a.x * b.z, a.x * b.y - a.y * b.x)


def magnitude_v3(v: Vector3) -> float:
    """Euclidean length of ``v``."""
    return math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)


def dot_v3(a: Vector3, b: Vector3) -> float:
    """Scalar product of ``a`` and ``b``."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def angle_between_v3(a: Vector3, b: Vector3) -> float:
    """Angle in radians between ``a`` and ``b``; NaN when it is undefined."""
    lengths = magnitude_v3(a) * magnitude_v3(b)
    if lengths == 0:
        return math.nan
    cosine = dot_v3(a, b) / lengths
    if not -1.0 <= cosine <= 1.0:
        return math.nan
    return math.acos(cosine)


def proj_v3(a: Vector3, b: Vector3) -> Vector3:
    """Projection of ``a`` onto ``b``; raises ZeroDivisionError for a zero ``b``."""
    length = magnitude_v3(b)
    if length == 0:
        raise ZeroDivisionError("cannot project onto a zero vector")
    bn = b / length
    return bn * dot_v3(a, bn)


def same_side(p1: Vector3, p2: Vector3, a: Vector3, b: Vector3) -> bool:
    """Whether ``p1`` and ``p2`` lie on the same side of the line through ``a`` and ``b``."""
    cp1 = cross_v3(b - a, p1 - a)
    cp2 = cross_v3(b - a, p2 - a)
    return dot_v3(cp1, cp2) >= 0


def gen_tri_normal(t1: Vector3, t2: Vector3, t3: Vector3) -> Vector3:
    """Unnormalised normal of triangle ``t1 t2 t3`` by the cross product."""
    return cross_v3(t2 - t1, t3 - t1)


def in_triangle(point: Vector3, tri1: Vector3, tri2: Vector3, tri3: Vector3) -> bool:
    """Whether ``point`` is within the triangle's prism and has no component along its normal."""
    within_prism = (
        same_side(point, tri1, tri2, tri3)
        and same_side(point, tri2, tri1, tri3)
        and same_side(point, tri3, tri1, tri2)
    )
    if not within_prism:
        return False
    normal = gen_tri_normal(tri1, tri2, tri3)
    if magnitude_v3(normal) == 0:
        return False
    return magnitude_v3(proj_v3(point, normal)) == 0


def split(text: str, token: str) -> list[str]:
    """Split ``text`` at ``token``.

    A token directly after another token (or at the start) yields an empty
    field; a trailing token yields none.
    """
    if not token:
        raise ValueError("split token must not be empty")
    out: list[str] = []
    temp = ""
    size = len(token)
    i = 0
    while i < len(text):
        if text[i : i + size] == token:
            if temp:
                out.append(temp)
                temp = ""
                i += size - 1
            else:
                out.append("")
        elif i + size >= len(text):
            temp += text[i : i + size]
            out.append(temp)
            break
        else:
            temp += text[i]
        i += 1
    return out


def _first_not_of(text: str, start: int) -> int:
    return next((i for i in range(start, len(text)) if text[i] not in _WHITESPACE), -1)


def _first_of(text: str, start: int) -> int:
    return next((i for i in range(start, len(text)) if text[i] in _WHITESPACE), -1)


def tail(text: str) -> str:
    """Everything after the first token and the blanks following it, right-trimmed."""
    token_start = _first_not_of(text, 0)
    if token_start < 0:
        return ""
    space_start = _first_of(text, token_start)
    if space_start < 0:
        return ""
    tail_start = _first_not_of(text, space_start)
    if tail_start < 0:
        return ""
    return text[tail_start:].rstrip(_WHITESPACE)


def first_token(text: str) -> str:
    """The first blank-separated token of ``text``, or an empty string."""
    token_start = _first_not_of(text, 0)
    if token_start < 0:
        return ""
    token_end = _first_of(text, token_start)
    return text[token_start:] if token_end < 0 else text[token_start:token_end]


def get_element(elements: Sequence[T], index: str) -> T:
    """Element named by an OBJ index: 1-based when positive, from the end when negative."""
    match = _LEADING_INT.match(index)
    if match is None:
        raise ValueError(f"invalid element index {index!r}")
    idx = int(match.group(1))
    idx = len(elements) + idx if idx < 0 else idx - 1
    if not 0 <= idx < len(elements):
        raise IndexError(f"element index {index!r} out of range")
    return elements[idx]
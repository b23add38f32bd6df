"""Renderable objects (spheres, triangle meshes) and light sources."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from raylab.utils import K_INFINITY, MaterialType, get_random_float
from raylab.vector import (
    Vector2f,
    Vector3f,
    cross_product,
    dot_product,
    lerp,
    normalize,
    splat,
)


@dataclass(frozen=True)
class RayHit:
    """The nearest intersection of a ray with one object."""

    t_near: float
    index: int = 0
    uv: Vector2f = field(default_factory=Vector2f)


class SceneObject(ABC):
    """Base class for anything a ray can hit, carrying its material."""

    def __init__(
        self,
        *,
        material_type: MaterialType = MaterialType.DIFFUSE_AND_GLOSSY,
        ior: float = 1.3,
        kd: float = 0.8,
        ks: float = 0.2,
        diffuse_color: Vector3f | None = None,
        specular_exponent: float = 25.0,
    ) -> None:
        self.material_type = material_type
        self.ior = ior
        self.kd = kd
        self.ks = ks
        self.diffuse_color = splat(0.2) if diffuse_color is None else diffuse_color
        self.specular_exponent = specular_exponent

    @abstractmethod
    def intersect(self, orig: Vector3f, direction: Vector3f) -> RayHit | None:
        """Return the nearest hit in front of ``orig``, or ``None``."""

    @abstractmethod
    def get_surface_properties(
        self, point: Vector3f, direction: Vector3f, index: int, uv: Vector2f
    ) -> tuple[Vector3f, Vector2f]:
        """Return the surface normal and texture coordinates at a hit."""

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        """Diffuse colour at texture coordinates ``st``."""
        return self.diffuse_color


class Sphere(SceneObject):
    """A sphere given by its centre and radius."""

    def __init__(self, center: Vector3f, radius: float, **material) -> None:
        super().__init__(**material)
        self.center = center
        self.radius = radius
        self.radius2 = radius * radius

    def intersect(self, orig: Vector3f, direction: Vector3f) -> RayHit | None:
        from raylab.utils import solve_quadratic

        offset = orig - self.center
        a = dot_product(direction, direction)
        b = 2 * dot_product(direction, offset)
        c = dot_product(offset, offset) - self.radius2
        roots = solve_quadratic(a, b, c)
        if roots is None:
            return None
        t0, t1 = roots
        if t0 < 0:
            t0 = t1
        if t0 < 0:
            return None
        return RayHit(t0)

    def get_surface_properties(
        self, point: Vector3f, direction: Vector3f, index: int, uv: Vector2f
    ) -> tuple[Vector3f, Vector2f]:
        return normalize(point - self.center), Vector2f()


def ray_triangle_intersect(
    v0: Vector3f, v1: Vector3f, v2: Vector3f, orig: Vector3f, direction: Vector3f
) -> tuple[float, float, float] | None:
    """Möller–Trumbore test of a ray against triangle ``v0 v1 v2``.

    Returns ``(t, u, v)`` for a hit strictly inside the triangle and in front
    of the origin, otherwise ``None``.
    """
    e1 = v1 - v0
    e2 = v2 - v0
    s = orig - v0
    s1 = cross_product(direction, e2)
    s2 = cross_product(s, e1)
    denom = dot_product(s1, e1)
    if denom == 0:
        return None
    t = dot_product(s2, e2) / denom
    u = dot_product(s1, s) / denom
    v = dot_product(s2, direction) / denom
    if t > 0 and u > 0 and v > 0 and 1 - u - v > 0:
        return t, u, v
    return None


class MeshTriangle(SceneObject):
    """A triangle mesh with per-vertex texture coordinates and a checker pattern."""

    def __init__(
        self,
        vertices: Sequence[Vector3f],
        vertex_index: Iterable[int],
        st_coordinates: Sequence[Vector2f],
        num_triangles: int | None = None,
        **material,
    ) -> None:
        super().__init__(**material)
        indices = tuple(int(i) for i in vertex_index)
        if num_triangles is None:
            if len(indices) % 3:
                raise ValueError("vertex index count must be a multiple of 3")
            num_triangles = len(indices) // 3
        if num_triangles < 0 or len(indices) < num_triangles * 3:
            raise ValueError("not enough vertex indices for the triangle count")
        indices = indices[: num_triangles * 3]
        if any(i < 0 for i in indices):
            raise ValueError("vertex indices must be non-negative")
        count = max(indices, default=-1) + 1
        vertices = tuple(vertices)
        st_coordinates = tuple(st_coordinates)
        if len(vertices) < count or len(st_coordinates) < count:
            raise ValueError("vertex index refers past the supplied vertices")
        self.vertices = vertices[:count]
        self.st_coordinates = st_coordinates[:count]
        self.vertex_index = indices
        self.triangles = tuple(
            (indices[k], indices[k + 1], indices[k + 2]) for k in range(0, len(indices), 3)
        )

    @property
    def num_triangles(self) -> int:
        return len(self.triangles)

    def intersect(self, orig: Vector3f, direction: Vector3f) -> RayHit | None:
        best: RayHit | None = None
        t_near = K_INFINITY
        for k, (a, b, c) in enumerate(self.triangles):
            hit = ray_triangle_intersect(
                self.vertices[a], self.vertices[b], self.vertices[c], orig, direction
            )
            if hit is not None and hit[0] < t_near:
                t_near, u, v = hit
                best = RayHit(t_near, k, Vector2f(u, v))
        return best

    def get_surface_properties(
        self, point: Vector3f, direction: Vector3f, index: int, uv: Vector2f
    ) -> tuple[Vector3f, Vector2f]:
        a, b, c = self.triangles[index]
        v0, v1, v2 = self.vertices[a], self.vertices[b], self.vertices[c]
        e0 = normalize(v1 - v0)
        e1 = normalize(v2 - v1)
        normal = normalize(cross_product(e0, e1))
        st0, st1, st2 = self.st_coordinates[a], self.st_coordinates[b], self.st_coordinates[c]
        st = st0 * (1 - uv.x - uv.y) + st1 * uv.x + st2 * uv.y
        return normal, st

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        scale = 5
        pattern = (math.fmod(st.x * scale, 1) > 0.5) ^ (math.fmod(st.y * scale, 1) > 0.5)
        return lerp(
            Vector3f(0.815, 0.235, 0.031), Vector3f(0.937, 0.937, 0.231), float(pattern)
        )


@dataclass
class Light:
    """A point light."""

    position: Vector3f
    intensity: Vector3f


@dataclass
class AreaLight(Light):
    """A rectangular light spanned by ``u`` and ``v`` from ``position``."""

    length: float = 100.0
    normal: Vector3f = Vector3f(0.0, -1.0, 0.0)
    u: Vector3f = Vector3f(1.0, 0.0, 0.0)
    v: Vector3f = Vector3f(0.0, 0.0, 1.0)

    def sample_point(self) -> Vector3f:
        """Return a uniformly random point on the light's surface."""
        random_u = get_random_float()
        random_v = get_random_float()
        return self.position + random_u * self.u + random_v * self.v
"""Bounding volume hierarchy over primitives that report their bounds."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import accumulate
from typing import Any, Iterable, Protocol

from raylab.bounds import Bounds3, Ray, union, union_point

_log = logging.getLogger(__name__)

_MAX_PRIMS_LIMIT = 255


class _Hit(Protocol):
    distance: float


class _Primitive(Protocol):
    def get_bounds(self) -> Bounds3: ...

    def get_intersection(self, ray: Ray) -> _Hit | None: ...


class SplitMethod(Enum):
    """Strategy for partitioning primitives between child nodes."""

    NAIVE = auto()
    SAH = auto()


@dataclass(eq=False)
class BVHBuildNode:
    """A node of the hierarchy; leaves carry a primitive in ``obj``."""

    bounds: Bounds3 = field(default_factory=Bounds3)
    left: BVHBuildNode | None = None
    right: BVHBuildNode | None = None
    obj: Any = None
    split_axis: int = 0
    first_prim_offset: int = 0
    n_primitives: int = 0

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def _centroid_key(dim: int):
    return lambda obj: obj.get_bounds().centroid()[dim]


def _centroid_bounds(objects: Iterable[_Primitive]) -> Bounds3:
    result = Bounds3()
    for obj in objects:
        result = union_point(result, obj.get_bounds().centroid())
    return result


def _bounds_of(objects: Iterable[_Primitive]) -> Bounds3:
    result = Bounds3()
    for obj in objects:
        result = union(result, obj.get_bounds())
    return result


class BVHAccel:
    """Acceleration structure answering nearest-hit queries for a set of primitives.

    Primitives provide ``get_bounds()`` and ``get_intersection(ray)``; the latter
    returns ``None`` on a miss or a hit carrying a ``distance``.
    The tree is built with the surface area heuristic.
    """

    def __init__(
        self,
        primitives: Iterable[_Primitive],
        max_prims_in_node: int = 1,
        split_method: SplitMethod = SplitMethod.NAIVE,
    ) -> None:
        if max_prims_in_node < 1:
            raise ValueError("max_prims_in_node must be at least 1")
        self.max_prims_in_node = min(_MAX_PRIMS_LIMIT, max_prims_in_node)
        self.split_method = split_method
        self.primitives = list(primitives)
        self.root: BVHBuildNode | None = None
        self.build_seconds = 0.0
        if not self.primitives:
            return
        start = time.perf_counter()
        self.root = self.recursive_build_by_sah(self.primitives)
        self.build_seconds = time.perf_counter() - start
        _log.info("BVH generation complete in %.3f s", self.build_seconds)

    def intersect(self, ray: Ray) -> _Hit | None:
        """Nearest hit of ``ray`` with any primitive, or ``None``."""
        if self.root is None:
            return None
        return self.get_intersection(self.root, ray)

    def get_intersection(self, node: BVHBuildNode | None, ray: Ray) -> _Hit | None:
        """Nearest hit of ``ray`` within the subtree rooted at ``node``."""
        if node is None:
            return None
        d = ray.direction
        dir_is_neg = (d.x >= 0, d.y >= 0, d.z >= 0)
        if not node.bounds.intersect_p(ray, ray.direction_inv, dir_is_neg):
            return None
        if node.is_leaf:
            return node.obj.get_intersection(ray)
        left = self.get_intersection(node.left, ray)
        right = self.get_intersection(node.right, ray)
        if left is None:
            return right
        if right is None:
            return left
        return left if left.distance < right.distance else right

    def recursive_build(self, objects: Iterable[_Primitive]) -> BVHBuildNode:
        """Build a subtree by splitting at the median centroid along the widest axis."""
        objs = list(objects)
        if not objs:
            raise ValueError("cannot build a BVH node from no primitives")
        node = BVHBuildNode()
        if len(objs) == 1:
            node.bounds = objs[0].get_bounds()
            node.obj = objs[0]
            return node
        if len(objs) == 2:
            node.left = self.recursive_build([objs[0]])
            node.right = self.recursive_build([objs[1]])
            node.bounds = union(node.left.bounds, node.right.bounds)
            return node

        dim = _centroid_bounds(objs).max_extent()
        objs.sort(key=_centroid_key(dim))
        middle = len(objs) // 2
        node.left = self.recursive_build(objs[:middle])
        node.right = self.recursive_build(objs[middle:])
        node.bounds = union(node.left.bounds, node.right.bounds)
        return node

    def compute_sah_cost(
        self,
        parent_box: Bounds3,
        left_box: Bounds3,
        right_box: Bounds3,
        left_count: int,
        right_count: int,
    ) -> float:
        """Surface-area-heuristic cost of a split, with unit traversal and test costs."""
        parent_area = parent_box.surface_area()
        if parent_area == 0:
            return math.inf
        pl = left_box.surface_area() / parent_area
        pr = right_box.surface_area() / parent_area
        traversal_cost = 1.0
        intersection_cost = 1.0
        return traversal_cost + (pl * left_count + pr * right_count) * intersection_cost

    def recursive_build_by_sah(self, objects: Iterable[_Primitive]) -> BVHBuildNode:
        """Build a subtree choosing, along the widest axis, the cheapest SAH split."""
        objs = list(objects)
        if not objs:
            raise ValueError("cannot build a BVH node from no primitives")
        node = BVHBuildNode()
        bounds = _bounds_of(objs)

        if len(objs) <= self.max_prims_in_node:
            node.bounds = bounds
            node.obj = objs[0]
            return node

        dim = _centroid_bounds(objs).max_extent()
        objs.sort(key=_centroid_key(dim))
        node.split_axis = dim

        boxes = [obj.get_bounds() for obj in objs]
        prefix = list(accumulate(boxes, union))
        suffix = list(accumulate(reversed(boxes), union))[::-1]

        count = len(objs)
        min_cost = math.inf
        best_split = 0
        for i in range(1, count):
            cost = self.compute_sah_cost(bounds, prefix[i - 1], suffix[i], i, count - i)
            if cost < min_cost:
                min_cost = cost
                best_split = i
        if best_split == 0:
            # No split has a finite cost (degenerate bounds): fall back to the median.
            best_split = count // 2

        node.left = self.recursive_build_by_sah(objs[:best_split])
        node.right = self.recursive_build_by_sah(objs[best_split:])
        node.bounds = union(node.left.bounds, node.right.bounds)
        return node
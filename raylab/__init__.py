"""Vectors, ray-traceable objects and scenes, bounding boxes, a BVH and an OBJ/MTL loader."""

__version__ = "0.1.0"

__all__ = [
    "bounds",
    "bvh",
    "obj_geometry",
    "obj_loader",
    "objects",
    "scene",
    "utils",
    "vector",
]
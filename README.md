# raylab

Dependency-free building blocks for software renderers, in pure Python:

- `raylab.vector`: immutable `Vector3f` and `Vector2f` with component-wise
  arithmetic, plus `normalize`, `dot_product`, `cross_product`, `lerp`,
  `splat`, `vec_min` and `vec_max`;
- `raylab.utils`: `clamp`, `solve_quadratic`, `get_random_float`, the
  `MaterialType` enum and a text progress bar (`progress_bar`,
  `update_progress`);
- `raylab.objects`: ray-traceable `Sphere` and `MeshTriangle` objects (a
  triangle mesh with a checkerboard diffuse pattern), the Möller–Trumbore
  test `ray_triangle_intersect`, point `Light` and rectangular `AreaLight`;
- `raylab.scene`: `Scene`, holding render settings (size, field of view,
  background colour, recursion depth, epsilon) with its objects and lights;
- `raylab.bounds`: `Ray` and axis-aligned `Bounds3` boxes with slab
  intersection, plus `union`, `union_point`, `overlaps` and `inside`;
- `raylab.bvh`: `BVHAccel`, a bounding volume hierarchy built with the
  surface area heuristic;
- `raylab.obj_loader`: `Loader`, which reads Wavefront OBJ files and their MTL
  material libraries into `Mesh` and `Material` objects, triangulating
  polygons; its geometry and tokenising helpers are in `raylab.obj_geometry`.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Examples

Intersecting a ray with a sphere:

```python
from raylab.objects import Sphere
from raylab.vector import Vector3f

sphere = Sphere(Vector3f(0, 0, -5), 1)
hit = sphere.intersect(Vector3f(0, 0, 0), Vector3f(0, 0, -1))
print(hit.t_near)  # 4.0
```

Assembling a scene:

```python
from raylab.objects import Light, Sphere
from raylab.scene import Scene
from raylab.utils import MaterialType
from raylab.vector import Vector3f, splat

scene = Scene(width=320, height=240)
scene.add(Sphere(Vector3f(-1, 0, -12), 2, diffuse_color=Vector3f(0.6, 0.7, 0.8)))
scene.add(Sphere(Vector3f(0.5, -0.5, -8), 1.5, ior=1.5,
                 material_type=MaterialType.REFLECTION_AND_REFRACTION))
scene.add(Light(Vector3f(-20, 70, 20), splat(0.5)))
```

`BVHAccel` accepts any primitives that provide `get_bounds()` returning a
`Bounds3` and `get_intersection(ray)` returning `None` or a hit with a
`distance` attribute; `BVHAccel.intersect(ray)` then returns the nearest hit.

Loading a model:

```python
from raylab.obj_loader import Loader

loader = Loader()
if loader.load_file("model.obj"):
    for mesh in loader.loaded_meshes:
        print(mesh.name, len(mesh.vertices), mesh.material)
```

`load_file` raises `ValueError` for a path that does not end in `.obj` and
`OSError` when the file cannot be read.

## What this package does not do

It provides the pieces of a ray tracer but no renderer: there is no routine
that shades rays or walks the pixels of a `Scene`, no image output (such as
PPM files), and no command-line program. There is no triangle rasterizer
either. Scenes, objects and the BVH are meant to be driven from your own code.
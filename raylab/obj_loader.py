"""Loading of Wavefront OBJ models and their MTL material libraries."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from typing import Iterator, Sequence

from raylab.obj_geometry import (
    Vector2,
    Vector3,
    Vertex,
    cross_v3,
    first_token,
    get_element,
    in_triangle,
    split,
    tail,
)

_FLOAT = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT = re.compile(r"\s*([+-]?\d+)")

_MESH_TOKENS = ("o", "g")
_COLOR_KEYS = {"Ka": "ka", "Kd": "kd", "Ks": "ks"}
_SCALAR_KEYS = {"Ns": "ns", "Ni": "ni", "d": "d"}
_MAP_KEYS = {
    "map_Ka": "map_ka",
    "map_Kd": "map_kd",
    "map_Ks": "map_ks",
    "map_Ns": "map_ns",
    "map_d": "map_d",
    "map_Bump": "map_bump",
    "map_bump": "map_bump",
    "bump": "map_bump",
}


def _stof(text: str) -> float:
    match = _FLOAT.match(text)
    if match is None:
        raise ValueError(f"invalid number {text!r}")
    return float(match.group(1))


def _stoi(text: str) -> int:
    match = _INT.match(text)
    if match is None:
        raise ValueError(f"invalid integer {text!r}")
    return int(match.group(1))


def _read_lines(path: str) -> list[str]:
    with open(path, encoding="utf-8") as handle:
        return [line.rstrip("\n") for line in handle]


@dataclass
class Material:
    """Surface properties read from an MTL file."""

    name: str = ""
    ka: Vector3 = field(default_factory=Vector3)
    kd: Vector3 = field(default_factory=Vector3)
    ks: Vector3 = field(default_factory=Vector3)
    ns: float = 0.0
    ni: float = 0.0
    d: float = 0.0
    illum: int = 0
    map_ka: str = ""
    map_kd: str = ""
    map_ks: str = ""
    map_ns: str = ""
    map_d: str = ""
    map_bump: str = ""


@dataclass
class Mesh:
    """A named list of vertices with triangle indices into it."""

    name: str = ""
    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    material: Material | None = None


def _parse_floats(line: str, count: int) -> list[float]:
    parts = split(tail(line), " ")
    if len(parts) < count:
        raise ValueError(f"expected {count} numbers in {line!r}")
    return [_stof(part) for part in parts[:count]]


def _face_vertices(
    line: str,
    positions: Sequence[Vector3],
    tcoords: Sequence[Vector2],
    normals: Sequence[Vector3],
) -> list[Vertex]:
    verts: list[Vertex] = []
    no_normal = False
    for item in split(tail(line), " "):
        parts = split(item, "/")
        if len(parts) == 1:
            verts.append(Vertex(position=get_element(positions, parts[0])))
            no_normal = True
        elif len(parts) == 2:
            verts.append(
                Vertex(
                    position=get_element(positions, parts[0]),
                    texture_coordinate=get_element(tcoords, parts[1]),
                )
            )
            no_normal = True
        elif len(parts) == 3:
            texture = get_element(tcoords, parts[1]) if parts[1] else Vector2()
            verts.append(
                Vertex(
                    position=get_element(positions, parts[0]),
                    normal=get_element(normals, parts[2]),
                    texture_coordinate=texture,
                )
            )

    if no_normal:
        if len(verts) < 3:
            raise ValueError(f"face {line!r} needs at least three vertices")
        normal = cross_v3(
            verts[0].position - verts[1].position,
            verts[2].position - verts[1].position,
        )
        verts = [replace(v, normal=normal) for v in verts]
    return verts


def _matches(verts: Sequence[Vertex], targets: Sequence[Vector3]) -> Iterator[int]:
    for j, vertex in enumerate(verts):
        for target in targets:
            if vertex.position == target:
                yield j


def _triangulate(verts: Sequence[Vertex]) -> list[int]:
    """Ear-clip a polygon into triangles, returning indices into ``verts``."""
    if len(verts) < 3:
        return []
    if len(verts) == 3:
        return [0, 1, 2]

    indices: list[int] = []
    remaining = list(verts)
    while remaining:
        clipped = False
        for i, cur in enumerate(remaining):
            prev = remaining[i - 1]
            nxt = remaining[(i + 1) % len(remaining)]
            p_cur, p_prev, p_next = cur.position, prev.position, nxt.position

            if len(remaining) == 4:
                indices.extend(_matches(verts, (p_cur, p_prev, p_next)))
                last = next(
                    (
                        v.position
                        for v in remaining
                        if v.position not in (p_cur, p_prev, p_next)
                    ),
                    Vector3(),
                )
                indices.extend(_matches(verts, (p_prev, p_next, last)))
                remaining = []
                clipped = True
                break

            if any(
                in_triangle(v.position, p_prev, p_cur, p_next)
                and v.position not in (p_prev, p_cur, p_next)
                for v in verts
            ):
                continue

            indices.extend(_matches(verts, (p_cur, p_prev, p_next)))
            del remaining[
                next(k for k, v in enumerate(remaining) if v.position == p_cur)
            ]
            clipped = True
            break
        if not clipped:
            break
    return indices


class Loader:
    """Reads OBJ files into meshes, vertices, indices and materials."""

    def __init__(self) -> None:
        self.loaded_meshes: list[Mesh] = []
        self.loaded_vertices: list[Vertex] = []
        self.loaded_indices: list[int] = []
        self.loaded_materials: list[Material] = []

    def load_file(self, path: str | os.PathLike[str]) -> bool:
        """Load an ``.obj`` file; return whether it held any geometry.

        Raises ValueError for a path without the ``.obj`` suffix and OSError
        when the file cannot be read.
        """
        path = os.fspath(path)
        if not path.endswith(".obj"):
            raise ValueError(f"not an .obj file: {path!r}")
        lines = _read_lines(path)

        self.loaded_meshes.clear()
        self.loaded_vertices.clear()
        self.loaded_indices.clear()

        positions: list[Vector3] = []
        tcoords: list[Vector2] = []
        normals: list[Vector3] = []
        vertices: list[Vertex] = []
        indices: list[int] = []
        material_names: list[str] = []
        listening = False
        mesh_name = ""

        for line in lines:
            token = first_token(line)

            if token in _MESH_TOKENS or line.startswith("g"):
                named = token in _MESH_TOKENS
                if not listening:
                    listening = True
                    mesh_name = tail(line) if named else "unnamed"
                elif indices and vertices:
                    self.loaded_meshes.append(Mesh(mesh_name, vertices, indices))
                    vertices, indices = [], []
                    mesh_name = tail(line)
                else:
                    mesh_name = tail(line) if named else "unnamed"

            if token == "v":
                positions.append(Vector3(*_parse_floats(line, 3)))
            elif token == "vt":
                tcoords.append(Vector2(*_parse_floats(line, 2)))
            elif token == "vn":
                normals.append(Vector3(*_parse_floats(line, 3)))
            elif token == "f":
                face = _face_vertices(line, positions, tcoords, normals)
                vertices.extend(face)
                self.loaded_vertices.extend(face)
                for idx in _triangulate(face):
                    indices.append(len(vertices) - len(face) + idx)
                    self.loaded_indices.append(
                        len(self.loaded_vertices) - len(face) + idx
                    )
            elif token == "usemtl":
                material_names.append(tail(line))
                if indices and vertices:
                    self.loaded_meshes.append(
                        Mesh(f"{mesh_name}_2", vertices, indices)
                    )
                    vertices, indices = [], []
            elif token == "mtllib":
                parts = split(path, "/")
                prefix = "".join(p + "/" for p in parts[:-1]) if len(parts) != 1 else ""
                material_path = prefix + tail(line)
                if material_path.endswith(".mtl"):
                    try:
                        self.load_materials(material_path)
                    except OSError:
                        pass

        if indices and vertices:
            self.loaded_meshes.append(Mesh(mesh_name, vertices, indices))

        for mesh, wanted in zip(self.loaded_meshes, material_names):
            material = next(
                (m for m in self.loaded_materials if m.name == wanted), None
            )
            if material is not None:
                mesh.material = replace(material)

        return bool(self.loaded_meshes or self.loaded_vertices or self.loaded_indices)

    def load_materials(self, path: str | os.PathLike[str]) -> bool:
        """Append the materials of an ``.mtl`` file to ``loaded_materials``.

        Raises ValueError for a path without the ``.mtl`` suffix and OSError
        when the file cannot be read.
        """
        path = os.fspath(path)
        if not path.endswith(".mtl"):
            raise ValueError(f"not an .mtl file: {path!r}")
        lines = _read_lines(path)

        current = Material()
        listening = False
        for line in lines:
            token = first_token(line)
            if token == "newmtl":
                if listening:
                    self.loaded_materials.append(current)
                    current = Material()
                listening = True
                current.name = tail(line) if len(line) > 7 else "none"
            elif token in _COLOR_KEYS:
                parts = split(tail(line), " ")
                if len(parts) != 3:
                    continue
                setattr(current, _COLOR_KEYS[token], Vector3(*map(_stof, parts)))
            elif token in _SCALAR_KEYS:
                setattr(current, _SCALAR_KEYS[token], _stof(tail(line)))
            elif token == "illum":
                current.illum = _stoi(tail(line))
            elif token in _MAP_KEYS:
                setattr(current, _MAP_KEYS[token], tail(line))

        self.loaded_materials.append(current)
        return bool(self.loaded_materials)
import pytest

from raylab.obj_geometry import Vector2, Vector3, dot_v3, magnitude_v3
from raylab.obj_loader import Loader, Material, Mesh


def _write(directory, name, text):
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


TRIANGLE = "o tri\nv 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n"


def test_wrong_extension_raises(tmp_path):
    path = _write(tmp_path, "model.txt", TRIANGLE)
    with pytest.raises(ValueError):
        Loader().load_file(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Loader().load_file(tmp_path / "absent.obj")


def test_empty_file_loads_nothing(tmp_path):
    path = _write(tmp_path, "empty.obj", "# nothing here\n")
    loader = Loader()
    assert loader.load_file(path) is False
    assert loader.loaded_meshes == []


def test_single_triangle(tmp_path):
    loader = Loader()
    assert loader.load_file(_write(tmp_path, "tri.obj", TRIANGLE)) is True
    assert len(loader.loaded_meshes) == 1
    mesh = loader.loaded_meshes[0]
    assert mesh.name == "tri"
    assert mesh.indices == [0, 1, 2]
    assert [v.position for v in mesh.vertices] == [
        Vector3(0, 0, 0),
        Vector3(1, 0, 0),
        Vector3(0, 1, 0),
    ]
    assert mesh.material is None


def test_generated_normal_is_perpendicular(tmp_path):
    loader = Loader()
    loader.load_file(_write(tmp_path, "tri.obj", TRIANGLE))
    verts = loader.loaded_meshes[0].vertices
    normal = verts[0].normal
    assert all(v.normal == normal for v in verts)
    assert magnitude_v3(normal) > 0
    assert dot_v3(normal, verts[1].position - verts[0].position) == 0
    assert dot_v3(normal, verts[2].position - verts[0].position) == 0


def test_quad_triangulation(tmp_path):
    text = "o floor\nv -5 -3 -6\nv 5 -3 -6\nv 5 -3 -16\nv -5 -3 -16\nf 1 2 3 4\n"
    loader = Loader()
    loader.load_file(_write(tmp_path, "quad.obj", text))
    assert loader.loaded_meshes[0].indices == [0, 1, 3, 1, 2, 3]
    assert loader.loaded_indices == [0, 1, 3, 1, 2, 3]


def test_pentagon_gives_three_triangles(tmp_path):
    text = "o p\nv 0 0 0\nv 2 0 0\nv 3 2 0\nv 1 3 0\nv -1 2 0\nf 1 2 3 4 5\n"
    loader = Loader()
    loader.load_file(_write(tmp_path, "penta.obj", text))
    indices = loader.loaded_meshes[0].indices
    assert len(indices) == 9
    assert set(indices) == {0, 1, 2, 3, 4}


def test_full_vertex_format(tmp_path):
    text = (
        "o t\nv 0 0 0\nv 1 0 0\nv 0 1 0\n"
        "vt 0.25 0.5\nvt 0.75 0.5\nvt 0.5 1\n"
        "vn 0 0 1\n"
        "f 1/1/1 2/2/1 3/3/1\n"
    )
    loader = Loader()
    loader.load_file(_write(tmp_path, "full.obj", text))
    verts = loader.loaded_meshes[0].vertices
    assert [v.texture_coordinate for v in verts] == [
        Vector2(0.25, 0.5),
        Vector2(0.75, 0.5),
        Vector2(0.5, 1.0),
    ]
    assert all(v.normal == Vector3(0, 0, 1) for v in verts)


def test_position_and_normal_format(tmp_path):
    text = "o t\nv 0 0 0\nv 1 0 0\nv 0 1 0\nvn 0 0 -1\nf 1//1 2//1 3//1\n"
    loader = Loader()
    loader.load_file(_write(tmp_path, "pn.obj", text))
    verts = loader.loaded_meshes[0].vertices
    assert all(v.texture_coordinate == Vector2() for v in verts)
    assert all(v.normal == Vector3(0, 0, -1) for v in verts)


def test_negative_indices_match_positive(tmp_path):
    positive = Loader()
    positive.load_file(_write(tmp_path, "pos.obj", TRIANGLE))
    negative = Loader()
    negative.load_file(
        _write(tmp_path, "neg.obj", TRIANGLE.replace("f 1 2 3", "f -3 -2 -1"))
    )
    assert negative.loaded_meshes[0].vertices == positive.loaded_meshes[0].vertices


def test_two_objects_make_two_meshes(tmp_path):
    text = TRIANGLE + "o second\nv 0 0 1\nv 1 0 1\nv 0 1 1\nf 4 5 6\n"
    loader = Loader()
    loader.load_file(_write(tmp_path, "two.obj", text))
    assert [m.name for m in loader.loaded_meshes] == ["tri", "second"]
    second = loader.loaded_meshes[1]
    assert second.indices == [0, 1, 2]
    assert len(loader.loaded_vertices) == 6
    assert [loader.loaded_vertices[i].position for i in loader.loaded_indices[3:]] == [
        v.position for v in second.vertices
    ]


def test_unnamed_group_line(tmp_path):
    text = "grouping\nv 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n"
    loader = Loader()
    loader.load_file(_write(tmp_path, "g.obj", text))
    assert loader.loaded_meshes[0].name == "unnamed"


def test_material_change_splits_mesh(tmp_path):
    text = TRIANGLE + "usemtl other\nf 3 2 1\n"
    loader = Loader()
    loader.load_file(_write(tmp_path, "split.obj", text))
    assert [m.name for m in loader.loaded_meshes] == ["tri_2", "tri"]
    assert all(len(m.indices) == 3 for m in loader.loaded_meshes)


def test_face_with_two_vertices_raises(tmp_path):
    text = "o t\nv 0 0 0\nv 1 0 0\nf 1 2\n"
    with pytest.raises(ValueError):
        Loader().load_file(_write(tmp_path, "bad.obj", text))


def test_reloading_replaces_meshes(tmp_path):
    loader = Loader()
    loader.load_file(_write(tmp_path, "a.obj", TRIANGLE))
    loader.load_file(_write(tmp_path, "b.obj", TRIANGLE.replace("o tri", "o other")))
    assert [m.name for m in loader.loaded_meshes] == ["other"]
    assert len(loader.loaded_vertices) == 3


def test_mtllib_assigns_material(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, "shapes.mtl", "newmtl red\nKd 1 0 0\nNs 10\nillum 2\n")
    _write(tmp_path, "scene.obj", "mtllib shapes.mtl\nusemtl red\n" + TRIANGLE)
    loader = Loader()
    assert loader.load_file("scene.obj") is True
    material = loader.loaded_meshes[0].material
    assert material is not None
    assert material.name == "red"
    assert material.kd == Vector3(1, 0, 0)
    assert material.ns == 10.0
    assert material.illum == 2


def test_missing_material_library_is_ignored(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, "scene.obj", "mtllib absent.mtl\n" + TRIANGLE)
    loader = Loader()
    assert loader.load_file("scene.obj") is True
    assert loader.loaded_materials == []
    assert loader.loaded_meshes[0].material is None


def test_load_materials_fields(tmp_path):
    text = (
        "newmtl shiny\n"
        "Ka 0.1 0.2 0.3\n"
        "Ks 0.5 0.5\n"
        "Ni 1.5\n"
        "d 0.75\n"
        "map_Kd diffuse.png\n"
        "bump bumps.png\n"
        "newmtl\n"
        "map_Bump other.png\n"
    )
    loader = Loader()
    assert loader.load_materials(_write(tmp_path, "lib.mtl", text)) is True
    first, second = loader.loaded_materials
    assert first.name == "shiny"
    assert first.ka == Vector3(0.1, 0.2, 0.3)
    assert first.ks == Vector3()
    assert first.ni == 1.5
    assert first.d == 0.75
    assert first.map_kd == "diffuse.png"
    assert first.map_bump == "bumps.png"
    assert second.name == "none"
    assert second.map_bump == "other.png"


def test_load_materials_without_newmtl_gives_default(tmp_path):
    loader = Loader()
    loader.load_materials(_write(tmp_path, "blank.mtl", "# empty\n"))
    assert loader.loaded_materials == [Material()]


def test_load_materials_wrong_extension(tmp_path):
    with pytest.raises(ValueError):
        Loader().load_materials(_write(tmp_path, "lib.txt", "newmtl a\n"))


def test_load_materials_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Loader().load_materials(tmp_path / "absent.mtl")


def test_mesh_defaults():
    mesh = Mesh()
    assert (mesh.name, mesh.vertices, mesh.indices, mesh.material) == ("", [], [], None)
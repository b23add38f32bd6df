[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raylab"
version = "0.1.0"
description = "Building blocks for small software renderers: vectors, ray-traceable objects and scenes, bounding boxes, a BVH and an OBJ/MTL model loader"
requires-python = ">=3.10"
dependencies = []
keywords = ["ray tracing", "bvh", "bounding box", "obj", "mtl", "graphics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["raylab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

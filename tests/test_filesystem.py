from pathlib import Path

from balsa.filesystem import get_relative_path, prepend_to_filename


def test_relative_path_uses_parent_directory():
    result = get_relative_path("assets/meshes/plane.obj", "plane.mtl")
    assert result == Path("assets/meshes") / "plane.mtl"


def test_relative_path_accepts_path_objects():
    base = Path("a") / "b" / "c.txt"
    result = get_relative_path(base, Path("d") / "e.txt")
    assert result == Path("a") / "b" / "d" / "e.txt"


def test_relative_path_of_bare_file_name():
    assert get_relative_path("file.txt", "other.txt") == Path("other.txt")


def test_prepend_to_filename_keeps_directory():
    result = prepend_to_filename("out/results/mesh.obj", "tri_")
    assert result.parent == Path("out/results")
    assert result.name == "tri_mesh.obj"


def test_prepend_to_filename_empty_prefix_is_identity():
    original = Path("x") / "y.txt"
    assert prepend_to_filename(original, "") == original
import os

import numpy as np
import yaml

from objremap.cli import main, output_filename


OBJ = """\
mtllib scene.mtl
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vt 0 0
vt 1 0
vt 1 1
o box
usemtl red
f 1/1 2/2 3/3
usemtl blue
f 1/2 3/3 4/1
"""

MTL = "newmtl red\nKd 1 0 0\nnewmtl blue\nKd 0 0 1\n"


def test_main_all(write_file, tmp_path):
    write_file("scene.mtl", MTL)
    path = write_file("scene.obj", OBJ)
    summary = str(tmp_path / "summary.yaml")
    out_dir = str(tmp_path / "out")
    assert main([path, "--all", "--summary", summary, "--out-dir", out_dir]) == 0

    with open(summary) as f:
        data = yaml.safe_load(f)
    assert data["positions"] == 4
    assert data["materials"] == ["red", "blue"]
    assert [m["name"] for m in data["meshes"]] == ["box", "box_2"]
    assert [m["material"] for m in data["meshes"]] == ["red", "blue"]
    assert [m["vertices"] for m in data["meshes"]] == [3, 3]

    assert sorted(os.listdir(out_dir)) == ["000_box.npz", "001_box_2.npz"]
    arrays = np.load(os.path.join(out_dir, "001_box_2.npz"))
    assert arrays["vertices"].shape == (3, 3)
    assert arrays["texcoords"].shape == (3, 2)
    assert arrays["faces"].tolist() == [[0, 1, 2]]


def test_main_single_mesh(write_file):
    write_file("scene.mtl", MTL)
    path = write_file("scene.obj", OBJ)
    assert main([path]) == 0
    assert main([path, "--mesh-index", "1"]) == 0
    assert main([path, "--mesh-index", "2"]) == 1


def test_main_failures(write_file, tmp_path):
    assert main([str(tmp_path / "missing.obj")]) == 1
    assert main([write_file("mesh.txt", OBJ)]) == 1
    assert main([write_file("points.obj", "v 0 0 0\n")]) == 1
    # Texcoord 3 does not exist.
    bad = write_file("bad.obj", "v 0 0 0\nv 1 0 0\nv 0 1 0\nvt 0 0\nf 1/1 2/1 3/3\n")
    assert main([bad]) == 1


def test_output_filename():
    assert output_filename(0, "box") == "000_box.npz"
    assert output_filename(12, "parts/left") == "012_parts_left.npz"
    assert output_filename(3, "../..") == "003_mesh.npz"


def test_main_out_dir_with_repeated_and_unsafe_names(write_file, tmp_path):
    text = (
        "v 0 0 0\nv 1 0 0\nv 0 1 0\n"
        "g a\nf 1 2 3\n"
        "g a\nf 1 2 3\n"
        "g parts/left\nf 1 2 3\n"
    )
    path = write_file("groups.obj", text)
    out_dir = str(tmp_path / "out")
    assert main([path, "--all", "--out-dir", out_dir]) == 0
    assert sorted(os.listdir(out_dir)) == ["000_a.npz", "001_a.npz", "002_parts_left.npz"]

import pytest
import jax.numpy as jnp

from objremap.errors import (
    MalformedNumericFieldError,
    MaterialFileNotFoundError,
    NoMaterialsParsedError,
    NotAMaterialFileError,
)
from objremap.materials import Material, load_materials


MTL = """\
# two materials
newmtl red
Ka 0.1 0.0 0.0
Kd 1.0 0.0 0.0
Ks 0.5 0.5 0.5
Ns 96.0
Ni 1.45
d 0.8
illum 2
map_Kd textures/red diffuse.png
map_Bump red_bump.png

newmtl blue
Kd 0.0 0.0 1.0
Ka 0.1 0.2
bump blue_bump.png
map_d blue_alpha.png
"""


def test_material_defaults():
    material = Material()
    assert material.name == "none"
    assert jnp.allclose(material.ambient, jnp.zeros(3))
    assert jnp.allclose(material.diffuse, jnp.zeros(3))
    assert jnp.allclose(material.specular, jnp.zeros(3))
    assert material.specular_exponent == 0.0
    assert material.optical_density == 0.0
    assert material.dissolve == 0.0
    assert material.illumination == 0
    assert material.map_Ka == material.map_Kd == material.map_bump == ""


def test_load_materials(write_file):
    materials = load_materials(write_file("scene.mtl", MTL))
    assert [m.name for m in materials] == ["red", "blue"]
    red, blue = materials
    assert jnp.allclose(red.ambient, jnp.array([0.1, 0.0, 0.0]))
    assert jnp.allclose(red.diffuse, jnp.array([1.0, 0.0, 0.0]))
    assert jnp.allclose(red.specular, jnp.array([0.5, 0.5, 0.5]))
    assert red.specular_exponent == pytest.approx(96.0)
    assert red.optical_density == pytest.approx(1.45)
    assert red.dissolve == pytest.approx(0.8)
    assert red.illumination == 2
    # String fields take the whole tail.
    assert red.map_Kd == "textures/red diffuse.png"
    assert red.map_bump == "red_bump.png"

    assert jnp.allclose(blue.diffuse, jnp.array([0.0, 0.0, 1.0]))
    # Colors without exactly three values are ignored.
    assert jnp.allclose(blue.ambient, jnp.zeros(3))
    assert blue.map_bump == "blue_bump.png"
    assert blue.map_d == "blue_alpha.png"


def test_unnamed_material(write_file):
    materials = load_materials(write_file("a.mtl", "newmtl\nKd 1 1 1\n"))
    assert materials[0].name == "none"


def test_malformed_scalar_is_skipped(write_file):
    diagnostics = []
    path = write_file("a.mtl", "newmtl a\nNs shiny\nillum 2\nKd 1 x 1\n")
    materials = load_materials(path, diagnostics)
    assert len(materials) == 1
    assert materials[0].specular_exponent == 0.0
    assert materials[0].illumination == 2
    assert jnp.allclose(materials[0].diffuse, jnp.zeros(3))
    assert len(diagnostics) == 2
    assert all(isinstance(d, MalformedNumericFieldError) for d in diagnostics)
    assert diagnostics[0].lineno == 2


def test_errors(write_file, tmp_path):
    pytest.raises(NotAMaterialFileError, load_materials, write_file("a.txt", MTL))
    pytest.raises(MaterialFileNotFoundError, load_materials, str(tmp_path / "missing.mtl"))
    pytest.raises(NoMaterialsParsedError, load_materials, write_file("e.mtl", "# empty\nKd 1 1 1\n"))
    # Missing files are also FileNotFoundErrors.
    pytest.raises(FileNotFoundError, load_materials, str(tmp_path / "missing.mtl"))


def test_scalar_options_are_skipped(write_file):
    path = write_file("opts.mtl", "newmtl a\nd -halo 0.5\nNs 10.0 \nillum 2\n")
    diagnostics = []
    material = load_materials(path, diagnostics)[0]
    assert material.dissolve == pytest.approx(0.5)
    assert material.specular_exponent == pytest.approx(10.0)
    assert material.illumination == 2
    assert diagnostics == []


def test_encoding(tmp_path):
    path = tmp_path / "enc.mtl"
    path.write_bytes(b"\xef\xbb\xbfnewmtl caf\xe9\n# \xff\xfe\nKd 1 1 1\n")
    materials = load_materials(str(path))
    assert len(materials) == 1
    assert materials[0].name.startswith("caf")
    assert jnp.allclose(materials[0].diffuse, jnp.ones(3))

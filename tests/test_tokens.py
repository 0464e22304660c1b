import pytest

from objremap.utils.tokens import fields, first_token, resolve_index, split, tail


def test_first_token():
    assert first_token("v 1.0 2.0 3.0") == "v"
    assert first_token("  \tusemtl red") == "usemtl"
    assert first_token("g\n") == "g"
    assert first_token("") == ""
    assert first_token("   \t \n") == ""


def test_tail():
    assert tail("usemtl  red plastic \n") == "red plastic"
    assert tail("\tmtllib\tscene.mtl\r\n") == "scene.mtl"
    assert tail("g") == ""
    assert tail("g   ") == ""
    assert tail("") == ""


def test_split_keeps_empty_fields():
    assert split("1//3", "/") == ["1", "", "3"]
    assert split("1/2/3", "/") == ["1", "2", "3"]
    assert split("1", "/") == ["1"]
    assert split("a  b", " ") == ["a", "", "b"]
    assert split("a::b", "::") == ["a", "b"]
    assert split("", "/") == []
    pytest.raises(ValueError, split, "a", "")


def test_fields():
    assert fields("  1.0\t2.0   3.0 ") == ["1.0", "2.0", "3.0"]
    assert fields("") == []


def test_resolve_index():
    assert resolve_index("1", 10) == 0
    assert resolve_index("10", 10) == 9
    # Negative indices count back from the current buffer size.
    assert resolve_index("-1", 10) == 9
    assert resolve_index("-1", 3) == 2
    assert resolve_index("-3", 3) == 0
    pytest.raises(ValueError, resolve_index, "x", 3)
    pytest.raises(ValueError, resolve_index, "", 3)

import pytest


@pytest.fixture
def write_file(tmp_path):
    """Write ``text`` to ``tmp_path / name`` and return the path as a string."""

    def _write(name, text):
        path = tmp_path / name
        path.write_text(text)
        return str(path)

    return _write

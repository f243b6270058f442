# conftest.py - shared pytest fixtures
import pytest


@pytest.fixture
def make_tree(tmp_path):
    """Write {relative_path: text} into tmp_path and return the base directory."""

    def _make(files):
        for rel, text in files.items():
            target = tmp_path.joinpath(*rel.split("/"))
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(text.encode("utf-8"))
        return tmp_path

    return _make

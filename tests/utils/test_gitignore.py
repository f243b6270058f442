import pathspec

from v4a.utils import get_gitignore, is_ignored


def test_gitignore_patterns_and_git_dir(tmp_path):
    (tmp_path / ".gitignore").write_text("*.log\nbuild/\n", encoding="utf-8")
    spec = get_gitignore(str(tmp_path))
    assert is_ignored(spec, "debug.log")
    assert is_ignored(spec, "build/out.txt")
    assert is_ignored(spec, ".git/config")
    assert not is_ignored(spec, "src/main.py")


def test_gitignore_found_in_parent(tmp_path):
    (tmp_path / ".gitignore").write_text("secret.txt\n", encoding="utf-8")
    sub = tmp_path / "pkg"
    sub.mkdir()
    spec = get_gitignore(str(sub))
    assert is_ignored(spec, "secret.txt")


def test_gitignore_accepts_file_path(tmp_path):
    (tmp_path / ".gitignore").write_text("*.tmp\n", encoding="utf-8")
    f = tmp_path / "a.py"
    f.write_text("x", encoding="utf-8")
    assert is_ignored(get_gitignore(str(f)), "x.tmp")


def test_malformed_gitignore_falls_back_to_defaults(tmp_path, monkeypatch):
    (tmp_path / ".gitignore").write_text("secret.txt\nbad[\n", encoding="utf-8")
    real_from_lines = pathspec.PathSpec.from_lines

    def strict_from_lines(kind, lines):
        lines = list(lines)
        if "bad[" in lines:
            raise ValueError("Invalid git pattern: 'bad['")
        return real_from_lines(kind, lines)

    monkeypatch.setattr(pathspec.PathSpec, "from_lines", strict_from_lines)
    spec = get_gitignore(str(tmp_path))
    assert is_ignored(spec, ".git/config")
    assert not is_ignored(spec, "secret.txt")

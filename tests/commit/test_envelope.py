import textwrap

import pytest

from v4a.commit.envelope import identify_files_added, identify_files_needed, split_patch
from v4a.errors import DuplicatePathError, InvalidEnvelopeError, MalformedLineError

PATCH = textwrap.dedent("""
    *** Begin Patch
    *** Add File: new.txt
    +hello
    *** Update File: src/a.py
    *** Move to: src/b.py
    @@ def main():
    -    old()
    +    new()
    *** Delete File: gone.txt
    *** End Patch
""")


def test_split_patch_operations():
    ops = split_patch(PATCH)
    assert [(op.action, op.path) for op in ops] == [
        ("create", "new.txt"),
        ("update", "src/a.py"),
        ("delete", "gone.txt"),
    ]
    assert ops[0].diff == "+hello"
    assert ops[1].move_to == "src/b.py"
    assert ops[1].diff == "@@ def main():\n-    old()\n+    new()"
    assert ops[2].diff == ""
    assert ops[2].move_to is None


def test_update_body_keeps_end_of_file_marker():
    text = "*** Begin Patch\n*** Update File: a.txt\n@@\n x\n+y\n*** End of File\n*** End Patch\n"
    (op,) = split_patch(text)
    assert op.diff.endswith("*** End of File")
    assert op.move_to is None


def test_blank_lines_between_sections_are_ignored():
    text = "*** Begin Patch\n\n*** Delete File: a.txt\n\n*** Delete File: b.txt\n*** End Patch"
    assert [op.path for op in split_patch(text)] == ["a.txt", "b.txt"]


def test_missing_begin_marker():
    with pytest.raises(InvalidEnvelopeError, match="Begin Patch"):
        split_patch("*** Update File: a.txt\n@@\n x\n*** End Patch")


def test_missing_end_marker():
    with pytest.raises(InvalidEnvelopeError, match="End Patch"):
        split_patch("*** Begin Patch\n*** Delete File: a.txt\n")


def test_content_after_end_marker():
    with pytest.raises(InvalidEnvelopeError):
        split_patch("*** Begin Patch\n*** Delete File: a.txt\n*** End Patch\ntrailing")


def test_duplicate_path():
    text = "*** Begin Patch\n*** Delete File: a.txt\n*** Delete File: a.txt\n*** End Patch"
    with pytest.raises(DuplicatePathError) as exc:
        split_patch(text)
    assert exc.value.path == "a.txt"


def test_unknown_line_between_sections():
    text = "*** Begin Patch\n*** Delete File: a.txt\nstray\n*** End Patch"
    with pytest.raises(MalformedLineError, match="Unknown Line"):
        split_patch(text)


def test_empty_path():
    with pytest.raises(MalformedLineError, match="Missing path"):
        split_patch("*** Begin Patch\n*** Delete File:   \n*** End Patch")


def test_identify_files():
    assert identify_files_needed(PATCH) == ["src/a.py", "gone.txt"]
    assert identify_files_added(PATCH) == ["new.txt"]

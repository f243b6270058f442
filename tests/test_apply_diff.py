import logging

import pytest

from v4a import (
    ApplyDiffMode,
    ContextNotFoundError,
    MalformedLineError,
    PatchFailedError,
    apply_diff,
    apply_diff_with_fuzz,
)


def test_floating_hunk_adds_lines():
    diff = "\n".join(["@@", "+hello", "+world"])
    assert apply_diff("", diff) == "hello\nworld\n"


def test_create_mode_requires_plus_prefix():
    with pytest.raises(MalformedLineError):
        apply_diff("", "plain line", ApplyDiffMode.CREATE)


def test_create_mode_preserves_trailing_newline():
    diff = "\n".join(["+hello", "+world", "+"])
    assert apply_diff("", diff, ApplyDiffMode.CREATE) == "hello\nworld\n"


def test_create_mode_accepts_string_mode():
    assert apply_diff("ignored", "+only\n", "create") == "only"


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        apply_diff("", "+x", "merge")


def test_contextual_replacement():
    diff = "\n".join(["@@ line1", "-line2", "+updated", " line3"])
    assert apply_diff("line1\nline2\nline3\n", diff) == "line1\nupdated\nline3\n"


def test_context_mismatch_raises():
    # The numeric header is plain anchor text, not a line-range directive.
    diff = "\n".join(["@@ -1,2 +1,2 @@", " x", "-two", "+2"])
    with pytest.raises(ContextNotFoundError):
        apply_diff("one\ntwo\n", diff)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        apply_diff("one\ntwo\n", "@@\n x\n-two")
    assert issubclass(ContextNotFoundError, PatchFailedError)


def test_empty_diff_returns_input():
    assert apply_diff("a\nb\n", "") == "a\nb\n"


def test_blank_patch_line_is_blank_context():
    diff = "\n".join(["@@", " a", "", "-b", "+c"])
    assert apply_diff("a\n\nb\n", diff) == "a\n\nc\n"


def test_indentation_drift_reports_fuzz():
    doc = "def f():\n    return 1\n"
    diff = "\n".join(["@@ def f():", "-  return 1", "+  return 2"])
    text, fuzz = apply_diff_with_fuzz(doc, diff)
    assert text == "def f():\n  return 2\n"
    assert fuzz == 100


def test_trimmed_anchor_reports_fuzz():
    doc = "class A:\n    def m(self):\n        pass\n"
    diff = "\n".join(["@@ def m(self):", "-        pass", "+        return 1"])
    text, fuzz = apply_diff_with_fuzz(doc, diff)
    assert text == "class A:\n    def m(self):\n        return 1\n"
    assert fuzz == 1


def test_end_of_file_section_targets_last_occurrence():
    diff = "\n".join(["@@", " a", "-b", "+B", "*** End of File"])
    assert apply_diff("a\nb\na\nb", diff) == "a\nb\na\nB"


def test_multiple_sections_apply_in_order():
    doc = "one\ntwo\nthree\nfour\nfive\n"
    diff = "\n".join(["@@", " one", "-two", "+2", "@@", " four", "-five", "+5"])
    assert apply_diff(doc, diff) == "one\n2\nthree\nfour\n5\n"


def test_create_mode_fuzz_is_zero():
    assert apply_diff_with_fuzz("", "+x", ApplyDiffMode.CREATE) == ("x", 0)


def test_apply_diff_logs_when_enabled(caplog):
    with caplog.at_level(logging.DEBUG, logger="v4a"):
        apply_diff("a\nb\n", "@@\n a\n-b\n+c", log=True)
    assert any("total fuzz 0" in rec.getMessage() for rec in caplog.records)


def test_apply_diff_is_silent_by_default(caplog):
    with caplog.at_level(logging.DEBUG):
        apply_diff("a\nb\n", "@@\n a\n-b\n+c")
    assert not caplog.records

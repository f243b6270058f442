import pytest

from v4a.diff.apply import apply_chunks
from v4a.errors import ChunkOutOfRangeError, OverlappingChunkError, PatchFailedError
from v4a.models import Chunk


def test_no_chunks_returns_input():
    assert apply_chunks("a\nb\n", []) == "a\nb\n"


def test_replace_line_with_several():
    assert apply_chunks("a\nb\nc", [Chunk(1, ["b"], ["B1", "B2"])]) == "a\nB1\nB2\nc"


def test_pure_insertions_at_same_index():
    chunks = [Chunk(1, [], ["x"]), Chunk(1, [], ["y"])]
    assert apply_chunks("a\nb", chunks) == "a\nx\ny\nb"


def test_insert_at_document_end():
    assert apply_chunks("a\nb", [Chunk(2, [], ["c"])]) == "a\nb\nc"


def test_multiple_chunks_in_order():
    chunks = [Chunk(0, ["a"], ["A"]), Chunk(2, ["c"], [])]
    assert apply_chunks("a\nb\nc\nd", chunks) == "A\nb\nd"


def test_rejects_out_of_range_chunk():
    with pytest.raises(ChunkOutOfRangeError) as exc:
        apply_chunks("abc", [Chunk(10, [], [])])
    assert exc.value.orig_index == 10
    assert exc.value.length == 1
    assert "input length" in str(exc.value)


def test_rejects_overlapping_chunks():
    chunks = [Chunk(0, ["a"], []), Chunk(0, ["b"], [])]
    with pytest.raises(OverlappingChunkError, match="overlapping chunk"):
        apply_chunks("abc", chunks)


def test_apply_errors_share_base_class():
    with pytest.raises(PatchFailedError):
        apply_chunks("a\nb", [Chunk(1, ["b"], []), Chunk(0, [], ["x"])])

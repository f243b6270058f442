from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Chunk:
    """A located delete/insert edit against the original document."""

    orig_index: int         # 0-based line index in the original where del_lines begin
    del_lines: List[str]
    ins_lines: List[str]


@dataclass
class ParserState:
    """Cursor over the patch lines, mutated in place while parsing."""

    lines: List[str]
    index: int = 0
    fuzz: int = 0


@dataclass
class Section:
    """One @@-delimited block; chunk indices are relative to `next_context`."""

    next_context: List[str]
    section_chunks: List[Chunk]
    end_index: int
    eof: bool = False


@dataclass(frozen=True)
class ContextMatch:
    new_index: int          # -1 when the context was not found
    fuzz: int = 0


@dataclass
class ParsedUpdateDiff:
    chunks: List[Chunk] = field(default_factory=list)
    fuzz: int = 0

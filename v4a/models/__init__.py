from .chunk import Chunk, ContextMatch, ParsedUpdateDiff, ParserState, Section
from .operation import FileOperation

__all__ = ["Chunk", "ContextMatch", "ParsedUpdateDiff", "ParserState", "Section", "FileOperation"]

"""Position and statistics types shared by the parsing layers.

Positions are reported in diagnostics and errors; statistics summarize a
single parse for logging and for callers that want metadata.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourcePosition:
    """Position of a character in the source text."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    @classmethod
    def from_offset(cls, text: str, offset: int) -> "SourcePosition":
        """Compute the 1-based line and column of ``offset`` within ``text``."""
        offset = max(0, min(offset, len(text)))
        line = text.count("\n", 0, offset) + 1
        line_start = text.rfind("\n", 0, offset) + 1
        return cls(line=line, column=offset - line_start + 1, offset=offset)

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass
class ParseStatistics:
    """Statistics collected while parsing one document."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    nodes_built: int = 0
    elements: int = 0
    comments: int = 0
    cdata_sections: int = 0
    max_depth: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

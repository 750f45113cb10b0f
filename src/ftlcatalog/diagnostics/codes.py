"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing languages, messages, attributes)
        2000-2999: Formatting errors (runtime evaluation failures)
        3000-3999: Template errors (parse and merge failures)
        4000-4999: Resource errors (filesystem access)
        5000-5999: Language tag errors
    """

    # Lookup errors (1000-1999)
    MESSAGE_NOT_FOUND = 1001
    ATTRIBUTE_NOT_FOUND = 1002
    MESSAGE_NO_VALUE = 1006
    NO_DEFAULT_BUNDLE = 1010

    # Formatting errors (2000-2999)
    CYCLIC_REFERENCE = 2001
    REFERENCE_UNRESOLVED = 2002
    FORMATTING_FAILED = 2014

    # Template errors (3000-3999)
    PARSE_JUNK = 3004
    DUPLICATE_ENTRY = 3006
    SOURCE_TOO_LARGE = 3007

    # Resource errors (4000-4999)
    RESOURCE_UNREADABLE = 4001
    RESOURCE_DECODE_FAILED = 4002

    # Language tag errors (5000-5999)
    INVALID_LANGUAGE_TAG = 5001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, line is
                less than 1, or column is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)

    @classmethod
    def from_offsets(cls, source: str, start: int, end: int) -> SourceSpan:
        """Build a span from character offsets into ``source``.

        Offsets past the end of the source are clamped to its length.

        Args:
            source: Complete template source text
            start: Starting character offset
            end: Ending character offset (exclusive)

        Returns:
            SourceSpan with 1-indexed line and column of ``start``
        """
        start = min(max(start, 0), len(source))
        end = min(max(end, start), len(source))
        line = source.count("\n", 0, start) + 1
        column = start - (source.rfind("\n", 0, start) + 1) + 1
        return cls(start=start, end=end, line=line, column=column)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for non-syntax errors)
        hint: Suggestion for fixing the error
        ftl_location: Template file the diagnostic refers to
        annotation_code: Code reported by the Fluent parser (e.g. "E0003")
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    ftl_location: str | None = None
    annotation_code: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Control characters in the message are escaped so diagnostics built
        from file content cannot inject terminal sequences into logs.

        Example output:
            error[PARSE_JUNK]: Expected token: "=" (E0003)
              --> locales/en/main.ftl:3:7
              = help: Check the message syntax

        Returns:
            Formatted error message
        """
        message = _escape_control(self.message)
        if self.annotation_code:
            message = f"{message} ({self.annotation_code})"
        lines = [f"{self.severity}[{self.code.name}]: {message}"]

        if self.ftl_location and self.span is not None:
            lines.append(f"  --> {self.ftl_location}:{self.span.line}:{self.span.column}")
        elif self.ftl_location:
            lines.append(f"  --> {self.ftl_location}")
        elif self.span is not None:
            lines.append(f"  --> line {self.span.line}, column {self.span.column}")

        if self.hint:
            lines.append(f"  = help: {_escape_control(self.hint)}")

        return "\n".join(lines)


def _escape_control(text: str) -> str:
    return "".join(
        ch if ch.isprintable() or ch == " " else repr(ch)[1:-1] for ch in text
    )

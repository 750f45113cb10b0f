"""Diagnostic system for catalog errors.

Provides structured error diagnostics with codes, spans and hints, and the
exception taxonomy raised by loading and lookup.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    CatalogError,
    DuplicateMessageError,
    FormatError,
    MissingMessageError,
    NoDefaultBundleError,
    ResourceIOError,
    TagParseError,
    TemplateCompileError,
)

__all__ = [
    "CatalogError",
    "Diagnostic",
    "DiagnosticCode",
    "DuplicateMessageError",
    "FormatError",
    "MissingMessageError",
    "NoDefaultBundleError",
    "ResourceIOError",
    "SourceSpan",
    "TagParseError",
    "TemplateCompileError",
]

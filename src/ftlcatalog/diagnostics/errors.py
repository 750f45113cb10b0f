"""Catalog exception hierarchy with structured diagnostics.

All exceptions store an optional Diagnostic object for rich error information.

Hierarchy:
    CatalogError
    ├─ ResourceIOError        (load time, also OSError)
    ├─ TagParseError          (load time, also ValueError)
    ├─ TemplateCompileError   (load time)
    │  └─ DuplicateMessageError
    ├─ NoDefaultBundleError   (lookup time, also LookupError)
    ├─ MissingMessageError    (lookup time, also LookupError)
    └─ FormatError            (lookup time)

Load-time errors abort Catalog.load(); lookup-time errors are per call and
leave the Catalog usable.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from ftlcatalog.locale_utils import LanguageTag

__all__ = [
    "CatalogError",
    "DuplicateMessageError",
    "FormatError",
    "MissingMessageError",
    "NoDefaultBundleError",
    "ResourceIOError",
    "TagParseError",
    "TemplateCompileError",
]


class CatalogError(Exception):
    """Base exception for all catalog errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize CatalogError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ResourceIOError(CatalogError, OSError):
    """Filesystem read failure while loading the catalog.

    Raised when the root directory or a per-language directory cannot be
    listed, or when a template file cannot be read or decoded.

    Attributes:
        path: Path that could not be read
    """

    def __init__(self, message: str | Diagnostic, *, path: str | Path) -> None:
        """Initialize ResourceIOError.

        Args:
            message: Error message string OR Diagnostic object
            path: Path that could not be read
        """
        CatalogError.__init__(self, message)
        self.path = Path(path)

    def __str__(self) -> str:
        """Return the message (OSError would otherwise render errno fields)."""
        return str(self.args[0]) if self.args else ""


class TagParseError(CatalogError, ValueError):
    """Malformed language identifier.

    Surfaced for the explicitly supplied default language. Candidate tags
    derived from file and directory names never raise this; such entries are
    simply not languages.

    Attributes:
        code: The string that failed to parse
    """

    def __init__(self, message: str | Diagnostic, *, code: str) -> None:
        """Initialize TagParseError.

        Args:
            message: Error message string OR Diagnostic object
            code: The string that failed to parse
        """
        super().__init__(message)
        self.code = code


class TemplateCompileError(CatalogError):
    """Malformed message-template syntax in a resource file.

    Attributes:
        path: Template file that failed to compile
        diagnostics: One diagnostic per parse error (never empty)
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | Path,
        diagnostics: tuple[Diagnostic, ...],
    ) -> None:
        """Initialize TemplateCompileError.

        Args:
            message: Summary error message
            path: Template file that failed to compile
            diagnostics: Structured diagnostics, at least one
        """
        super().__init__(message)
        self.path = Path(path)
        self.diagnostics = tuple(diagnostics)
        if self.diagnostics:
            self.diagnostic = self.diagnostics[0]

    def format_errors(self) -> str:
        """Render every diagnostic, one block per error."""
        return "\n".join(d.format_error() for d in self.diagnostics)


class DuplicateMessageError(TemplateCompileError):
    """A message or term id is defined in more than one file of a language.

    Attributes:
        entry_id: Duplicated id (terms carry their leading dash)
        first_path: File that defined the id first
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | Path,
        diagnostics: tuple[Diagnostic, ...],
        entry_id: str,
        first_path: str | Path,
    ) -> None:
        """Initialize DuplicateMessageError.

        Args:
            message: Summary error message
            path: File whose merge was rejected
            diagnostics: Structured diagnostics
            entry_id: Duplicated message or term id
            first_path: File that defined the id first
        """
        super().__init__(message, path=path, diagnostics=diagnostics)
        self.entry_id = entry_id
        self.first_path = Path(first_path)


class NoDefaultBundleError(CatalogError, LookupError):
    """Neither the requested nor the default language has a bundle.

    Indicates the catalog was built from a tree that never contained its
    own default language.

    Attributes:
        requested: Language that was asked for (None if unparseable)
        default: The catalog's default language
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        requested: LanguageTag | None,
        default: LanguageTag,
    ) -> None:
        """Initialize NoDefaultBundleError.

        Args:
            message: Error message string OR Diagnostic object
            requested: Requested language
            default: Default language of the catalog
        """
        super().__init__(message)
        self.requested = requested
        self.default = default


class MissingMessageError(CatalogError, LookupError):
    """Message key (or attribute) absent from the resolved bundle.

    ``language`` is the language whose bundle was actually searched, which
    differs from ``requested`` when language fallback occurred.

    Attributes:
        key: Message identifier
        language: Language actually used for the lookup
        requested: Language that was asked for (None if unparseable)
        attribute: Attribute name, if an attribute was requested
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        key: str,
        language: LanguageTag,
        requested: LanguageTag | None = None,
        attribute: str | None = None,
    ) -> None:
        """Initialize MissingMessageError.

        Args:
            message: Error message string OR Diagnostic object
            key: Message identifier
            language: Language actually used for the lookup
            requested: Language that was asked for
            attribute: Attribute name, if any
        """
        super().__init__(message)
        self.key = key
        self.language = language
        self.requested = requested
        self.attribute = attribute

    def __str__(self) -> str:
        """Return the message (LookupError subclasses would quote it)."""
        return str(self.args[0]) if self.args else ""


class FormatError(CatalogError):
    """Formatting a located message produced errors.

    Attributes:
        key: Message identifier
        language: Language of the bundle that formatted the message
        fluent_errors: Raw errors reported by the Fluent runtime
        diagnostics: One diagnostic per runtime error
        partial: Best-effort output the formatter produced anyway
    """

    def __init__(
        self,
        message: str,
        *,
        key: str,
        language: LanguageTag,
        fluent_errors: tuple[Exception, ...],
        diagnostics: tuple[Diagnostic, ...],
        partial: str = "",
    ) -> None:
        """Initialize FormatError.

        Args:
            message: Summary error message
            key: Message identifier
            language: Language of the formatting bundle
            fluent_errors: Raw runtime errors
            diagnostics: Structured diagnostics
            partial: Best-effort formatted output
        """
        super().__init__(message)
        self.key = key
        self.language = language
        self.fluent_errors = tuple(fluent_errors)
        self.diagnostics = tuple(diagnostics)
        self.partial = partial
        if self.diagnostics:
            self.diagnostic = self.diagnostics[0]

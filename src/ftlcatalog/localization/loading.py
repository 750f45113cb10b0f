"""Resource loading infrastructure for Catalog.

Reads single template files from disk and compiles them, and provides
result/summary data structures for tracking what Catalog.load() did with
each top-level entry of the catalog root.

Components:
    CompiledUnit - Immutable parsed template file, ready to merge into a bundle
    ResourceFileLoader - Reads and compiles one template file
    FallbackInfo - Immutable record of a language fallback event
    LoadRecord - Immutable outcome of one top-level entry
    LoadSummary - Immutable aggregate of all load records

Python 3.13+. External dependency: fluent.syntax (FTL parser).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from fluent.syntax import FluentParser, ast

from ftlcatalog.config import CatalogConfig
from ftlcatalog.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    ResourceIOError,
    SourceSpan,
    TemplateCompileError,
)
from ftlcatalog.enums import EntryKind, LoadStatus, SkipReason
from ftlcatalog.locale_utils import LanguageTag
from ftlcatalog.localization.types import FTLSource, MessageId

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Compilation
    "CompiledUnit",
    "ResourceFileLoader",
    # Fallback observability
    "FallbackInfo",
    # Load result types
    "LoadRecord",
    "LoadSummary",
]

logger = logging.getLogger(__name__)

# Junk content shown in log lines is truncated to keep logs readable.
_LOG_TRUNCATE: int = 100


@dataclass(frozen=True, slots=True)
class CompiledUnit:
    """One successfully compiled template file.

    A unit is only ever produced for a file without syntax errors; it is
    all-or-nothing.

    Attributes:
        path: File the unit was compiled from
        resource: Parsed Fluent AST
        message_ids: Message identifiers in source order
        term_ids: Term identifiers (without leading dash) in source order
    """

    path: Path
    resource: ast.Resource
    message_ids: tuple[MessageId, ...]
    term_ids: tuple[str, ...]


class ResourceFileLoader:
    """Reads a single template file and compiles it into a CompiledUnit.

    Stateless apart from its configuration; one instance may be shared by
    several threads.

    Example:
        >>> loader = ResourceFileLoader()
        >>> unit = loader.load("locales/en/main.ftl")
        >>> unit.message_ids
        ('hello', 'goodbye')
    """

    __slots__ = ("_config", "_parser")

    def __init__(self, config: CatalogConfig | None = None) -> None:
        """Initialize loader.

        Args:
            config: Load configuration (encoding, size limit). Defaults to
                ``CatalogConfig()``.
        """
        self._config = config if config is not None else CatalogConfig()
        self._parser = FluentParser(with_spans=True)

    def load(self, path: str | Path) -> CompiledUnit:
        """Read and compile a template file.

        Args:
            path: Template file path

        Returns:
            CompiledUnit for the file

        Raises:
            ResourceIOError: If the file is missing, unreadable, or not valid
                text in the configured encoding
            TemplateCompileError: If the file contains syntax errors or
                exceeds the configured size limit
        """
        path = Path(path)
        try:
            source = path.read_text(encoding=self._config.encoding)
        except UnicodeDecodeError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.RESOURCE_DECODE_FAILED,
                message=f"Cannot decode {path} as {self._config.encoding}: {e.reason}",
                ftl_location=str(path),
            )
            raise ResourceIOError(diagnostic, path=path) from e
        except OSError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.RESOURCE_UNREADABLE,
                message=f"Cannot read {path}: {e.strerror or e}",
                ftl_location=str(path),
            )
            raise ResourceIOError(diagnostic, path=path) from e

        return self.compile(source, path=path)

    def compile(self, source: FTLSource, *, path: str | Path) -> CompiledUnit:
        """Compile template source that has already been read.

        Args:
            source: FTL source text
            path: File the source came from (used in diagnostics)

        Returns:
            CompiledUnit for the source

        Raises:
            TemplateCompileError: If the source contains syntax errors or
                exceeds the configured size limit
        """
        path = Path(path)
        if len(source) > self._config.max_source_size:
            diagnostic = Diagnostic(
                code=DiagnosticCode.SOURCE_TOO_LARGE,
                message=(
                    f"Source is {len(source)} characters, "
                    f"limit is {self._config.max_source_size}"
                ),
                ftl_location=str(path),
            )
            logger.error("Refusing to compile %s: %s", path, diagnostic.message)
            raise TemplateCompileError(
                f"Template {path} exceeds maximum size", path=path, diagnostics=(diagnostic,)
            )

        resource = self._parser.parse(source)

        diagnostics: list[Diagnostic] = []
        message_ids: list[MessageId] = []
        term_ids: list[str] = []
        for entry in resource.body:
            match entry:
                case ast.Message():
                    message_ids.append(entry.id.name)
                case ast.Term():
                    term_ids.append(entry.id.name)
                case ast.Junk():
                    logger.warning(
                        "Syntax error in %s: %s",
                        path,
                        repr(entry.content[:_LOG_TRUNCATE]),
                    )
                    diagnostics.extend(_junk_diagnostics(entry, source, path))
                case _:
                    # Comments don't contribute messages
                    pass

        if diagnostics:
            logger.error("Failed to compile %s: %d syntax error(s)", path, len(diagnostics))
            msg = f"Syntax errors in {path}: " + "; ".join(
                f"{d.message} at line {d.span.line}" if d.span else d.message
                for d in diagnostics
            )
            raise TemplateCompileError(msg, path=path, diagnostics=tuple(diagnostics))

        logger.debug(
            "Compiled %s: %d messages, %d terms", path, len(message_ids), len(term_ids)
        )
        return CompiledUnit(
            path=path,
            resource=resource,
            message_ids=tuple(message_ids),
            term_ids=tuple(term_ids),
        )


def _junk_diagnostics(junk: ast.Junk, source: str, path: Path) -> list[Diagnostic]:
    """Convert the annotations of a Junk entry into diagnostics."""
    annotations = junk.annotations or []
    if not annotations:
        span = (
            SourceSpan.from_offsets(source, junk.span.start, junk.span.end)
            if junk.span is not None
            else None
        )
        return [
            Diagnostic(
                code=DiagnosticCode.PARSE_JUNK,
                message="Unparseable content",
                span=span,
                ftl_location=str(path),
            )
        ]

    result: list[Diagnostic] = []
    for annotation in annotations:
        annotation_span = getattr(annotation, "span", None)
        span = (
            SourceSpan.from_offsets(source, annotation_span.start, annotation_span.end)
            if annotation_span is not None
            else None
        )
        result.append(
            Diagnostic(
                code=DiagnosticCode.PARSE_JUNK,
                message=annotation.message,
                span=span,
                ftl_location=str(path),
                annotation_code=annotation.code,
            )
        )
    return result


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a language fallback event.

    Provided to the on_fallback callback when a Catalog serves a lookup from
    the default language because the requested language has no bundle.

    Attributes:
        requested_language: Language the caller asked for (None if the
            caller passed a string that is not a language tag)
        resolved_language: Language whose bundle served the lookup
        message_id: The message identifier that was looked up

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.message_id} served by "
        ...           f"{info.resolved_language} (requested {info.requested_language})")
        >>> catalog = Catalog.load("locales", "en", on_fallback=log_fallback)
    """

    requested_language: LanguageTag | None
    resolved_language: LanguageTag
    message_id: MessageId


@dataclass(frozen=True, slots=True)
class LoadRecord:
    """Outcome of one top-level entry of the catalog root.

    Attributes:
        path: The top-level file or directory
        kind: File or directory (None for entries that are neither)
        status: Loaded, skipped, or overwritten by a later entry
        language: Parsed language tag (None when the name is not a tag)
        reason: Why the entry was skipped (None unless SKIPPED)
        files: Template files compiled for this entry, in scan order
        skipped: Nested paths the scanner could not read
    """

    path: Path
    kind: EntryKind | None
    status: LoadStatus
    language: LanguageTag | None = None
    reason: SkipReason | None = None
    files: tuple[Path, ...] = ()
    skipped: tuple[Path, ...] = ()

    @property
    def is_loaded(self) -> bool:
        """Check if the entry's bundle is present in the catalog."""
        return self.status == LoadStatus.LOADED

    @property
    def is_skipped(self) -> bool:
        """Check if the entry was ignored as not-a-language."""
        return self.status == LoadStatus.SKIPPED

    @property
    def is_overwritten(self) -> bool:
        """Check if a later entry with the same language replaced this one."""
        return self.status == LoadStatus.OVERWRITTEN


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of load records from Catalog.load().

    All statistics are computed properties derived from ``records``.

    Attributes:
        records: One record per top-level entry, in processing order

    Example:
        >>> catalog = Catalog.load("locales", "en")
        >>> summary = catalog.get_load_summary()
        >>> for record in summary.get_skipped():
        ...     print(f"Ignored {record.path.name}: {record.reason}")
    """

    records: tuple[LoadRecord, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total}, "
            f"loaded={self.loaded}, "
            f"skipped={self.skipped}, "
            f"overwritten={self.overwritten})"
        )

    @property
    def total(self) -> int:
        """Total number of top-level entries examined."""
        return len(self.records)

    @property
    def loaded(self) -> int:
        """Number of entries whose bundle is in the catalog."""
        return sum(1 for r in self.records if r.is_loaded)

    @property
    def skipped(self) -> int:
        """Number of entries ignored as not-a-language."""
        return sum(1 for r in self.records if r.is_skipped)

    @property
    def overwritten(self) -> int:
        """Number of entries replaced by a later duplicate language."""
        return sum(1 for r in self.records if r.is_overwritten)

    @property
    def file_count(self) -> int:
        """Number of template files compiled into bundles present in the catalog."""
        return sum(len(r.files) for r in self.records if r.is_loaded)

    def get_loaded(self) -> tuple[LoadRecord, ...]:
        """Get records of entries present in the catalog."""
        return tuple(r for r in self.records if r.is_loaded)

    def get_skipped(self) -> tuple[LoadRecord, ...]:
        """Get records of ignored entries."""
        return tuple(r for r in self.records if r.is_skipped)

    def get_overwritten(self) -> tuple[LoadRecord, ...]:
        """Get records of entries replaced by a later duplicate."""
        return tuple(r for r in self.records if r.is_overwritten)

    def get_by_language(self, language: LanguageTag) -> tuple[LoadRecord, ...]:
        """Get all records (loaded or overwritten) for a language."""
        return tuple(r for r in self.records if r.language == language)

    def get_unreadable(self) -> tuple[Path, ...]:
        """Get every nested path the scanner skipped as unreadable."""
        return tuple(p for r in self.records for p in r.skipped)

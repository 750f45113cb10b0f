"""Bundle - compiled messages for exactly one language.

Adapter over ``fluent.runtime.FluentBundle``. A Bundle is assembled from
CompiledUnits in its constructor and is immutable afterwards; the catalog
that created it is its only owner.

Merge policy:
    A message or term id may be defined once per bundle. A second definition,
    in another file or in the same file, fails the merge with
    DuplicateMessageError. Units are checked before any of their entries are
    added, so a rejected unit contributes nothing.

Thread Safety:
    Lookups and formatting never mutate bundle state visible to callers.
    fluent.runtime memoizes compiled messages internally on first access;
    that cache is append-only and safe to populate concurrently.

Python 3.13+. External dependency: fluent.runtime (Babel via fluent.runtime).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fluent.runtime import FluentBundle
from fluent.runtime.errors import FluentCyclicReferenceError, FluentReferenceError

from ftlcatalog.config import CatalogConfig
from ftlcatalog.constants import FALLBACK_INVALID
from ftlcatalog.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DuplicateMessageError,
    FormatError,
    MissingMessageError,
)
from ftlcatalog.locale_utils import LanguageTag

if TYPE_CHECKING:
    from ftlcatalog.localization.loading import CompiledUnit
    from ftlcatalog.localization.types import ArgumentMap, MessageId

__all__ = ["Bundle", "MessageRef"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MessageRef:
    """Handle to one message definition inside a Bundle.

    Only valid together with the bundle that returned it.

    Attributes:
        key: Message identifier
        language: Language of the owning bundle
        compiled: Compiled message (fluent.runtime internal representation)
    """

    key: MessageId
    language: LanguageTag
    compiled: Any

    @property
    def has_value(self) -> bool:
        """Check if the message has a value (attribute-only messages do not)."""
        return self.compiled.value is not None

    @property
    def attributes(self) -> tuple[str, ...]:
        """Attribute names defined on the message, in source order."""
        return tuple(self.compiled.attributes)

    def has_attribute(self, name: str) -> bool:
        """Check if the message defines an attribute."""
        return name in self.compiled.attributes


class Bundle:
    """Compiled, immutable collection of messages for one language.

    Example:
        >>> loader = ResourceFileLoader()
        >>> units = [loader.load(p) for p in ("en/main.ftl", "en/errors.ftl")]
        >>> bundle = Bundle(LanguageTag.parse("en"), units)
        >>> message = bundle.get_message("hello")
        >>> bundle.format(message, {"name": "Anna"})
        'Hello, ⁨Anna⁩!'
    """

    __slots__ = (
        "_fluent",
        "_language",
        "_message_ids",
        "_origins",
        "_sources",
    )

    def __init__(
        self,
        language: LanguageTag,
        units: Iterable[CompiledUnit] = (),
        *,
        config: CatalogConfig | None = None,
        fallback_language: LanguageTag | None = None,
    ) -> None:
        """Build a bundle from compiled units.

        Args:
            language: Language the bundle serves
            units: Compiled template files to merge, in order
            config: Load configuration (isolation, custom functions).
                Defaults to ``CatalogConfig()``.
            fallback_language: Language whose CLDR plural rules apply when
                Babel has no data for ``language`` (usually the catalog's
                default language)

        Raises:
            DuplicateMessageError: If two units (or one unit twice) define
                the same message or term id
        """
        config = config if config is not None else CatalogConfig()
        self._language = language

        locales = [str(language)]
        if fallback_language is not None and fallback_language != language:
            locales.append(str(fallback_language))
        self._fluent = FluentBundle(
            locales,
            functions=dict(config.functions) if config.functions else None,
            use_isolating=config.use_isolating,
        )

        self._origins: dict[str, Path] = {}
        self._message_ids: list[MessageId] = []
        sources: list[Path] = []
        for unit in units:
            self._merge(unit)
            sources.append(unit.path)
        self._sources = tuple(sources)

        logger.debug(
            "Bundle %s assembled from %d file(s): %d messages",
            language,
            len(self._sources),
            len(self._message_ids),
        )

    def _merge(self, unit: CompiledUnit) -> None:
        """Add a unit's entries, rejecting ids that are already defined."""
        seen_in_unit: set[str] = set()
        entry_ids = [*unit.message_ids, *(f"-{term_id}" for term_id in unit.term_ids)]
        for entry_id in entry_ids:
            first_path = self._origins.get(entry_id)
            if first_path is None and entry_id in seen_in_unit:
                first_path = unit.path
            if first_path is not None:
                kind = "Term" if entry_id.startswith("-") else "Message"
                diagnostic = Diagnostic(
                    code=DiagnosticCode.DUPLICATE_ENTRY,
                    message=f"{kind} '{entry_id}' is already defined in {first_path}",
                    ftl_location=str(unit.path),
                    hint="Each message id may be defined once per language",
                )
                logger.error(
                    "Duplicate %s '%s' in %s (first defined in %s)",
                    kind.lower(),
                    entry_id,
                    unit.path,
                    first_path,
                )
                raise DuplicateMessageError(
                    f"Duplicate {kind.lower()} '{entry_id}' in {unit.path} "
                    f"for language {self._language}",
                    path=unit.path,
                    diagnostics=(diagnostic,),
                    entry_id=entry_id,
                    first_path=first_path,
                )
            seen_in_unit.add(entry_id)

        self._fluent.add_resource(unit.resource)
        for entry_id in entry_ids:
            self._origins[entry_id] = unit.path
        self._message_ids.extend(unit.message_ids)

    @property
    def language(self) -> LanguageTag:
        """Language this bundle serves."""
        return self._language

    @property
    def sources(self) -> tuple[Path, ...]:
        """Template files merged into this bundle, in merge order."""
        return self._sources

    def __len__(self) -> int:
        """Number of messages (terms excluded)."""
        return len(self._message_ids)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has_message(key)

    def __repr__(self) -> str:
        return (
            f"Bundle(language={str(self._language)!r}, "
            f"messages={len(self._message_ids)}, files={len(self._sources)})"
        )

    def message_ids(self) -> tuple[MessageId, ...]:
        """Message identifiers in merge order."""
        return tuple(self._message_ids)

    def source_of(self, key: MessageId) -> Path | None:
        """Template file that defines a message, or None if undefined."""
        return self._origins.get(key)

    def has_message(self, key: MessageId) -> bool:
        """Check if the bundle defines a message."""
        return self._fluent.has_message(key)

    def get_message(self, key: MessageId) -> MessageRef | None:
        """Look up a message definition by key.

        Args:
            key: Message identifier

        Returns:
            MessageRef, or None if the bundle does not define the key
        """
        if not self._fluent.has_message(key):
            return None
        return MessageRef(key=key, language=self._language, compiled=self._fluent.get_message(key))

    def format(
        self,
        message: MessageRef,
        args: ArgumentMap | None = None,
        *,
        attribute: str | None = None,
    ) -> str:
        """Format a message against arguments.

        Every call formats from the compiled template; output is not cached.

        Args:
            message: Handle returned by this bundle's get_message()
            args: Placeable arguments
            attribute: Format this attribute instead of the message value

        Returns:
            Formatted string

        Raises:
            MissingMessageError: If the message has no value (or lacks the
                requested attribute)
            FormatError: If the formatter reported any error
        """
        if attribute is None:
            pattern = message.compiled.value
            if pattern is None:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.MESSAGE_NO_VALUE,
                    message=f"Message '{message.key}' has no value in {self._language}",
                    hint="Request one of its attributes instead",
                )
                raise MissingMessageError(
                    diagnostic, key=message.key, language=self._language
                )
        else:
            pattern = message.compiled.attributes.get(attribute)
            if pattern is None:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.ATTRIBUTE_NOT_FOUND,
                    message=(
                        f"Message '{message.key}' has no attribute "
                        f"'{attribute}' in {self._language}"
                    ),
                )
                raise MissingMessageError(
                    diagnostic, key=message.key, language=self._language, attribute=attribute
                )

        try:
            value, errors = self._fluent.format_pattern(pattern, dict(args) if args else None)
        except RecursionError as e:
            # A message that is a single placeable bypasses fluent.runtime's
            # cycle check, so a reference cycle recurses to the interpreter limit.
            logger.warning("Message '%s' in %s has a cyclic reference", message.key, self._language)
            raise FormatError(
                f"Formatting '{message.key}' in {self._language} failed: cyclic reference",
                key=message.key,
                language=self._language,
                fluent_errors=(e,),
                diagnostics=(
                    Diagnostic(
                        code=DiagnosticCode.CYCLIC_REFERENCE,
                        message=f"Message '{message.key}' refers back to itself",
                    ),
                ),
                partial=FALLBACK_INVALID,
            ) from e

        result = str(value)
        if errors:
            logger.warning(
                "Message '%s' in %s formatted with %d error(s)",
                message.key,
                self._language,
                len(errors),
            )
            for err in errors:
                logger.debug("  - %s: %s", type(err).__name__, err)
            raise FormatError(
                f"Formatting '{message.key}' in {self._language} failed: "
                + "; ".join(str(err) for err in errors),
                key=message.key,
                language=self._language,
                fluent_errors=tuple(errors),
                diagnostics=tuple(_format_diagnostic(err) for err in errors),
                partial=result,
            )
        return result


def _format_diagnostic(error: Exception) -> Diagnostic:
    """Map a fluent.runtime error onto a diagnostic code."""
    match error:
        case FluentCyclicReferenceError():
            code = DiagnosticCode.CYCLIC_REFERENCE
        case FluentReferenceError():
            code = DiagnosticCode.REFERENCE_UNRESOLVED
        case _:
            code = DiagnosticCode.FORMATTING_FAILED
    return Diagnostic(code=code, message=str(error))

"""Catalog - per-language bundles loaded from a directory tree.

Layout of the catalog root:

    locales/
        en-US/             # directory: every *.ftl beneath it, at any depth,
            main.ftl       #   merges into one en-US bundle
            settings/
                prefs.ftl
        fr.ftl             # file: a single-file fr bundle
        README.md          # ignored (not a template)
        _partials/         # ignored ("_partials" is not a language tag)

Key architectural decisions:
- Eager, all-or-nothing loading: any read or compile error aborts load()
  and no Catalog is returned
- Read-only after construction: no locks needed for concurrent lookups
- No process-wide instance: callers hold the Catalog they loaded
- Deterministic duplicate handling: top-level entries are processed sorted
  by name, and a later entry with the same language tag replaces the
  earlier one entirely

Lookup resolution:
    1. Language fallback: the requested language's bundle, else the default
       language's bundle, else NoDefaultBundleError.
    2. Message presence: the key must exist in the selected bundle. Under
       MessageFallback.NONE (default) a missing key is MissingMessageError
       even if the default language defines it; MessageFallback.DEFAULT_LANGUAGE
       retries in the default bundle first.
    3. Formatting errors surface as FormatError.

Python 3.13+.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ftlcatalog.config import CatalogConfig
from ftlcatalog.constants import FALLBACK_INVALID, FALLBACK_MISSING_MESSAGE
from ftlcatalog.diagnostics import (
    CatalogError,
    Diagnostic,
    DiagnosticCode,
    FormatError,
    MissingMessageError,
    NoDefaultBundleError,
    ResourceIOError,
)
from ftlcatalog.enums import EntryKind, LoadStatus, MessageFallback, SkipReason
from ftlcatalog.locale_utils import LanguageTag, try_parse_language_tag
from ftlcatalog.localization.bundle import Bundle, MessageRef
from ftlcatalog.localization.loading import (
    CompiledUnit,
    FallbackInfo,
    LoadRecord,
    LoadSummary,
    ResourceFileLoader,
)
from ftlcatalog.localization.scanning import DirectoryScanner
from ftlcatalog.localization.types import ArgumentMap, LanguageCode, MessageId

__all__ = ["Catalog", "get_message", "load_catalog"]

logger = logging.getLogger(__name__)


class Catalog:
    """Languages mapped to compiled bundles, plus a default language.

    Obtain one with ``Catalog.load()``. The default language is not required
    to have a bundle; lookups that would need it then fail with
    NoDefaultBundleError.

    Example:
        >>> catalog = Catalog.load("locales", "en-US")
        >>> catalog.get_message("welcome", "fr", {"name": "Anna"})
        'Bienvenue, ⁨Anna⁩ !'
        >>> catalog.get_message("welcome", "xx-unknown", {"name": "Anna"})
        'Welcome, ⁨Anna⁩!'

    Attributes:
        default_language: Language used when the requested one has no bundle
    """

    __slots__ = (
        "_bundles",
        "_config",
        "_default_language",
        "_load_summary",
        "_on_fallback",
    )

    def __init__(
        self,
        bundles: Mapping[LanguageTag, Bundle],
        default_language: LanguageTag | LanguageCode,
        *,
        config: CatalogConfig | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
        load_summary: LoadSummary | None = None,
    ) -> None:
        """Initialize a catalog from already-built bundles.

        Most callers use ``Catalog.load()`` instead.

        Args:
            bundles: Bundle per language
            default_language: Fallback language (tag or tag string)
            config: Configuration (lookup policy). Defaults to ``CatalogConfig()``.
            on_fallback: Called whenever a lookup is served by the default
                language instead of the requested one
            load_summary: Record of how the bundles were loaded

        Raises:
            TagParseError: If default_language is a string that is not a tag
        """
        self._default_language = _coerce_tag(default_language)
        self._bundles: dict[LanguageTag, Bundle] = dict(bundles)
        self._config = config if config is not None else CatalogConfig()
        self._on_fallback = on_fallback
        self._load_summary = load_summary if load_summary is not None else LoadSummary(())

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        root_path: str | Path,
        default_language: LanguageTag | LanguageCode,
        *,
        config: CatalogConfig | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> Catalog:
        """Load every language found directly under a root directory.

        Args:
            root_path: Directory whose immediate children are ``<tag>.ftl``
                files or ``<tag>/`` directories
            default_language: Fallback language (tag or tag string)
            config: Load configuration. Defaults to ``CatalogConfig()``.
            on_fallback: Called whenever a lookup is served by the default
                language instead of the requested one

        Returns:
            Fully loaded Catalog

        Raises:
            TagParseError: If default_language is not a valid tag (raised
                before the filesystem is touched)
            ResourceIOError: If the root, a language directory, or a template
                file cannot be read
            TemplateCompileError: If any template file fails to compile, or
                two files of one language define the same id
        """
        default = _coerce_tag(default_language)
        config = config if config is not None else CatalogConfig()
        root = Path(root_path)

        try:
            children = sorted(root.iterdir(), key=lambda child: child.name)
        except OSError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.RESOURCE_UNREADABLE,
                message=f"Cannot list catalog root {root}: {e.strerror or e}",
                ftl_location=str(root),
            )
            raise ResourceIOError(diagnostic, path=root) from e

        scanner = DirectoryScanner(config)
        loader = ResourceFileLoader(config)
        bundles: dict[LanguageTag, Bundle] = {}
        records: list[LoadRecord] = []
        record_index: dict[LanguageTag, int] = {}

        for child in children:
            if child.is_dir():
                kind = EntryKind.DIRECTORY
                candidate = child.name
            elif scanner.is_template(child):
                kind = EntryKind.FILE
                candidate = child.stem
            else:
                logger.debug("Ignoring %s: not a template file or directory", child)
                records.append(
                    LoadRecord(
                        path=child,
                        kind=None,
                        status=LoadStatus.SKIPPED,
                        reason=SkipReason.NOT_A_TEMPLATE,
                    )
                )
                continue

            tag = try_parse_language_tag(candidate)
            if tag is None:
                logger.debug("Ignoring %s: %r is not a language tag", child, candidate)
                records.append(
                    LoadRecord(
                        path=child,
                        kind=kind,
                        status=LoadStatus.SKIPPED,
                        reason=SkipReason.INVALID_TAG,
                    )
                )
                continue

            scan = scanner.scan(child)
            units = _compile_all(loader, scan.files, config.max_workers)
            bundle = Bundle(tag, units, config=config, fallback_language=default)

            if tag in bundles:
                previous = record_index[tag]
                logger.warning(
                    "Language %s from %s replaces %s (duplicate language tag)",
                    tag,
                    child,
                    records[previous].path,
                )
                records[previous] = dataclasses.replace(
                    records[previous], status=LoadStatus.OVERWRITTEN
                )

            bundles[tag] = bundle
            record_index[tag] = len(records)
            records.append(
                LoadRecord(
                    path=child,
                    kind=kind,
                    status=LoadStatus.LOADED,
                    language=tag,
                    files=scan.files,
                    skipped=scan.skipped,
                )
            )

        if default not in bundles:
            logger.warning(
                "Default language %s has no bundle under %s; "
                "lookups for unavailable languages will fail",
                default,
                root,
            )
        logger.info(
            "Loaded catalog from %s: %d language(s) [%s], default %s",
            root,
            len(bundles),
            ", ".join(sorted(str(tag) for tag in bundles)),
            default,
        )

        return cls(
            bundles,
            default,
            config=config,
            on_fallback=on_fallback,
            load_summary=LoadSummary(tuple(records)),
        )

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def default_language(self) -> LanguageTag:
        """Language used when the requested one has no bundle."""
        return self._default_language

    @property
    def config(self) -> CatalogConfig:
        """Configuration the catalog was loaded with."""
        return self._config

    @property
    def languages(self) -> frozenset[LanguageTag]:
        """Languages that have a bundle."""
        return frozenset(self._bundles)

    @property
    def available_languages(self) -> dict[str, LanguageTag]:
        """Canonical tag string to tag, for every language with a bundle."""
        return {str(tag): tag for tag in self._bundles}

    def get_bundle(self, language: LanguageTag | LanguageCode) -> Bundle | None:
        """Get the bundle of exactly this language (no fallback)."""
        tag = _try_coerce_tag(language)
        return self._bundles.get(tag) if tag is not None else None

    def get_load_summary(self) -> LoadSummary:
        """Get the record of what load() did with each top-level entry."""
        return self._load_summary

    def __contains__(self, language: object) -> bool:
        if not isinstance(language, LanguageTag | str):
            return False
        tag = _try_coerce_tag(language)
        return tag is not None and tag in self._bundles

    def __iter__(self) -> Iterator[LanguageTag]:
        """Iterate languages in canonical string order."""
        return iter(sorted(self._bundles, key=str))

    def __len__(self) -> int:
        return len(self._bundles)

    def __repr__(self) -> str:
        languages = ", ".join(str(tag) for tag in self)
        return f"Catalog(languages=[{languages}], default={str(self._default_language)!r})"

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def select_bundle(self, language: LanguageTag | LanguageCode | None) -> Bundle:
        """Select the bundle serving a language (language fallback only).

        Args:
            language: Requested language. A string that is not a valid tag,
                or None, behaves like a language without a bundle.

        Returns:
            The requested language's bundle, else the default language's

        Raises:
            NoDefaultBundleError: If neither language has a bundle
        """
        return self._select(_try_coerce_tag(language), key=None)

    def has_message(
        self, key: MessageId, language: LanguageTag | LanguageCode | None
    ) -> bool:
        """Check if a lookup for key in language would find a message.

        Applies the same language and message fallback as get_message(),
        without formatting and without fallback notifications.
        """
        try:
            self._locate(key, _try_coerce_tag(language), None, notify=False)
        except (MissingMessageError, NoDefaultBundleError):
            return False
        return True

    def get_message_ids(self, language: LanguageTag | LanguageCode | None) -> list[str]:
        """Message ids of the bundle selected for a language, sorted.

        Raises:
            NoDefaultBundleError: If neither language has a bundle
        """
        return sorted(self.select_bundle(language).message_ids())

    def get_message(
        self,
        key: MessageId,
        language: LanguageTag | LanguageCode | None,
        args: ArgumentMap | None = None,
        *,
        attribute: str | None = None,
    ) -> str:
        """Look up and format a message.

        Args:
            key: Message identifier
            language: Requested language (tag or tag string). Unavailable
                or unparseable languages fall back to the default language.
            args: Placeable arguments
            attribute: Format this attribute of the message instead of its value

        Returns:
            Formatted message

        Raises:
            NoDefaultBundleError: Neither the requested nor the default
                language has a bundle
            MissingMessageError: The selected bundle lacks the key (or the
                message lacks a value or the requested attribute)
            FormatError: The formatter reported errors
        """
        bundle, message = self._locate(key, _try_coerce_tag(language), attribute, notify=True)
        return bundle.format(message, args, attribute=attribute)

    def format_value(
        self,
        key: MessageId,
        language: LanguageTag | LanguageCode | None,
        args: ArgumentMap | None = None,
        *,
        attribute: str | None = None,
    ) -> tuple[str, tuple[CatalogError, ...]]:
        """Look up and format a message without raising lookup errors.

        Returns:
            Tuple of (formatted_value, errors)
            - Success: (value, ())
            - Formatting errors: (best-effort value, (FormatError,))
            - Lookup failure: ("{key}", (MissingMessageError or NoDefaultBundleError,))

        Example:
            >>> value, errors = catalog.format_value("missing-key", "en")
            >>> value
            '{missing-key}'
        """
        try:
            return (self.get_message(key, language, args, attribute=attribute), ())
        except FormatError as e:
            return (e.partial, (e,))
        except (MissingMessageError, NoDefaultBundleError) as e:
            if isinstance(key, str) and key:
                return (FALLBACK_MISSING_MESSAGE.format(id=key), (e,))
            return (FALLBACK_INVALID, (e,))

    def _select(self, requested: LanguageTag | None, key: MessageId | None) -> Bundle:
        if requested is not None:
            bundle = self._bundles.get(requested)
            if bundle is not None:
                return bundle

        default_bundle = self._bundles.get(self._default_language)
        if default_bundle is None:
            diagnostic = Diagnostic(
                code=DiagnosticCode.NO_DEFAULT_BUNDLE,
                message=(
                    f"No bundle for requested language {requested} "
                    f"nor for default language {self._default_language}"
                ),
                hint="Add the default language to the catalog root",
            )
            raise NoDefaultBundleError(
                diagnostic, requested=requested, default=self._default_language
            )

        logger.debug(
            "Language %s unavailable, using default %s", requested, self._default_language
        )
        if key is not None:
            self._notify(requested, key)
        return default_bundle

    def _locate(
        self,
        key: MessageId,
        requested: LanguageTag | None,
        attribute: str | None,
        *,
        notify: bool,
    ) -> tuple[Bundle, MessageRef]:
        bundle = self._select(requested, key if notify else None)
        message = bundle.get_message(key) if isinstance(key, str) else None
        if _usable(message, attribute):
            return bundle, message  # type: ignore[return-value]

        if (
            self._config.message_fallback is MessageFallback.DEFAULT_LANGUAGE
            and bundle.language != self._default_language
        ):
            default_bundle = self._bundles.get(self._default_language)
            if default_bundle is not None:
                bundle = default_bundle
                message = bundle.get_message(key) if isinstance(key, str) else None
                if _usable(message, attribute):
                    logger.debug(
                        "Message '%s' missing in %s, using default %s",
                        key,
                        requested,
                        self._default_language,
                    )
                    if notify:
                        self._notify(requested, key)
                    return bundle, message  # type: ignore[return-value]

        raise _missing_error(key, bundle, message, requested, attribute)

    def _notify(self, requested: LanguageTag | None, key: MessageId) -> None:
        if self._on_fallback is not None:
            self._on_fallback(
                FallbackInfo(
                    requested_language=requested,
                    resolved_language=self._default_language,
                    message_id=key,
                )
            )


def load_catalog(
    root_path: str | Path,
    default_language: LanguageTag | LanguageCode,
    *,
    config: CatalogConfig | None = None,
    on_fallback: Callable[[FallbackInfo], None] | None = None,
) -> Catalog:
    """Load a catalog. Equivalent to ``Catalog.load()``."""
    return Catalog.load(root_path, default_language, config=config, on_fallback=on_fallback)


def get_message(
    catalog: Catalog,
    key: MessageId,
    language: LanguageTag | LanguageCode | None,
    args: ArgumentMap | None = None,
) -> str:
    """Look up and format a message. Equivalent to ``catalog.get_message()``."""
    return catalog.get_message(key, language, args)


def _coerce_tag(language: LanguageTag | LanguageCode) -> LanguageTag:
    if isinstance(language, LanguageTag):
        return language
    return LanguageTag.parse(language)


def _try_coerce_tag(language: LanguageTag | LanguageCode | None) -> LanguageTag | None:
    if language is None or isinstance(language, LanguageTag):
        return language
    if not isinstance(language, str):
        return None
    return try_parse_language_tag(language)


def _compile_all(
    loader: ResourceFileLoader, files: Sequence[Path], max_workers: int | None
) -> list[CompiledUnit]:
    """Compile files, in parallel when configured; results keep scan order."""
    if max_workers is None or len(files) < 2:
        return [loader.load(path) for path in files]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(loader.load, files))


def _usable(message: MessageRef | None, attribute: str | None) -> bool:
    if message is None:
        return False
    if attribute is None:
        return message.has_value
    return message.has_attribute(attribute)


def _missing_error(
    key: MessageId,
    bundle: Bundle,
    message: MessageRef | None,
    requested: LanguageTag | None,
    attribute: str | None,
) -> MissingMessageError:
    if message is None:
        code = DiagnosticCode.MESSAGE_NOT_FOUND
        text = f"Message '{key}' not found in {bundle.language}"
    elif attribute is None:
        code = DiagnosticCode.MESSAGE_NO_VALUE
        text = f"Message '{key}' has no value in {bundle.language}"
    else:
        code = DiagnosticCode.ATTRIBUTE_NOT_FOUND
        text = f"Message '{key}' has no attribute '{attribute}' in {bundle.language}"
    diagnostic = Diagnostic(code=code, message=text)
    return MissingMessageError(
        diagnostic,
        key=key,
        language=bundle.language,
        requested=requested,
        attribute=attribute,
    )

"""Directory-backed localization package for Catalog.

Provides the full loading stack: type aliases, template file compilation,
directory scanning, per-language bundles, and the catalog itself.

Submodules:
    types    - PEP 695 type aliases (MessageId, LanguageCode, FTLSource, ArgumentMap)
    loading  - ResourceFileLoader, CompiledUnit, FallbackInfo, LoadRecord, LoadSummary
    scanning - DirectoryScanner, ScanResult
    bundle   - Bundle (one language), MessageRef
    catalog  - Catalog (language -> bundle map with fallback)

Python 3.13+. External dependencies: fluent.syntax, fluent.runtime.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from ftlcatalog.enums import EntryKind, LoadStatus, MessageFallback, SkipReason
from ftlcatalog.localization.bundle import Bundle, MessageRef
from ftlcatalog.localization.catalog import Catalog, get_message, load_catalog
from ftlcatalog.localization.loading import (
    CompiledUnit,
    FallbackInfo,
    LoadRecord,
    LoadSummary,
    ResourceFileLoader,
)
from ftlcatalog.localization.scanning import DirectoryScanner, ScanResult
from ftlcatalog.localization.types import ArgumentMap, FTLSource, LanguageCode, MessageId

__all__ = [
    # Catalog
    "Catalog",
    "load_catalog",
    "get_message",
    # Per-language bundles
    "Bundle",
    "MessageRef",
    # Loading pipeline
    "ResourceFileLoader",
    "CompiledUnit",
    "DirectoryScanner",
    "ScanResult",
    # Load tracking
    "EntryKind",
    "LoadStatus",
    "LoadRecord",
    "LoadSummary",
    "SkipReason",
    # Fallback observability
    "FallbackInfo",
    "MessageFallback",
    # Type aliases for user code type annotations
    "ArgumentMap",
    "FTLSource",
    "LanguageCode",
    "MessageId",
]

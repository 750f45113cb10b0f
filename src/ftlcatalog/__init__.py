"""ftlcatalog - runtime loader for directories of Fluent (FTL) translations.

Loads a directory holding one ``<tag>.ftl`` file or ``<tag>/`` directory per
language, compiles every template eagerly, and serves formatted messages by
key and language, falling back to a default language when the requested one
is unavailable.

Public API:
    Catalog - Language-to-bundle map with default-language fallback
    load_catalog - Load a Catalog from a directory
    get_message - Look up and format one message
    CatalogConfig - Load and lookup configuration
    LanguageTag - Parsed, canonical language identifier
    MessageFallback - Policy for keys missing from an existing bundle

Exceptions:
    CatalogError - Base exception class
    ResourceIOError - Filesystem read failures
    TagParseError - Malformed language identifiers
    TemplateCompileError - Template syntax errors (DuplicateMessageError)
    NoDefaultBundleError - Neither requested nor default language available
    MissingMessageError - Key absent from the resolved bundle
    FormatError - Formatter reported errors

Submodules:
    ftlcatalog.localization - Loader, scanner, bundle and load tracking types
    ftlcatalog.diagnostics - Diagnostic codes and the exception hierarchy
"""

from .config import CatalogConfig
from .diagnostics import (
    CatalogError,
    DuplicateMessageError,
    FormatError,
    MissingMessageError,
    NoDefaultBundleError,
    ResourceIOError,
    TagParseError,
    TemplateCompileError,
)
from .enums import MessageFallback
from .locale_utils import LanguageTag
from .localization import Catalog, FallbackInfo, get_message, load_catalog

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("ftlcatalog")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# Encoding recommended for Fluent resource files
__recommended_encoding__ = "UTF-8"

__all__ = [
    "Catalog",
    "CatalogConfig",
    "CatalogError",
    "DuplicateMessageError",
    "FallbackInfo",
    "FormatError",
    "LanguageTag",
    "MessageFallback",
    "MissingMessageError",
    "NoDefaultBundleError",
    "ResourceIOError",
    "TagParseError",
    "TemplateCompileError",
    "__recommended_encoding__",
    "__version__",
    "get_message",
    "load_catalog",
]

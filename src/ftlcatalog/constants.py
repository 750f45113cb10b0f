"""Shared constants for ftlcatalog.

Centralized configuration constants used by the loader, scanner and
catalog. Placing constants here avoids circular imports and provides a
single source of truth.

Constants are grouped by domain:
- Filesystem layout: template file extension and text encoding
- Input limits: DoS prevention via size constraints
- Fallback strings: placeholder output for the non-raising lookup API

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Filesystem layout
    "TEMPLATE_EXTENSION",
    "DEFAULT_ENCODING",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Fallback strings
    "FALLBACK_INVALID",
    "FALLBACK_MISSING_MESSAGE",
]

# ============================================================================
# FILESYSTEM LAYOUT
# ============================================================================

# Extension carried by every Fluent template file. Matching is case-sensitive:
# "main.FTL" is not a template file.
TEMPLATE_EXTENSION: str = ".ftl"

# Fluent recommends UTF-8 for all resource files.
DEFAULT_ENCODING: str = "utf-8"

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum template file size in characters (10 MiB of ASCII text).
# Real-world .ftl files are well under 1 MiB; anything larger is almost
# certainly a mistake (or a generated file pointed at the wrong directory).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Returned by Catalog.format_value() when no message could be resolved.
FALLBACK_INVALID: str = "{???}"
FALLBACK_MISSING_MESSAGE: str = "{{{id}}}"  # e.g., {my-message}

"""Enumerations for ftlcatalog type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class MessageFallback(StrEnum):
    """Policy for a key missing from an existing language bundle.

    Language fallback (requested language has no bundle at all) always
    happens. This policy only governs what happens when the selected bundle
    exists but does not define the requested key.

    StrEnum provides automatic string conversion: str(MessageFallback.NONE) == "none"
    """

    NONE = "none"
    """Report the key as missing in the selected language (default)."""

    DEFAULT_LANGUAGE = "default_language"
    """Retry the key in the default language's bundle before failing."""


class EntryKind(StrEnum):
    """Kind of top-level entry found under the catalog root."""

    FILE = "file"
    """Single template file: <root>/<tag>.ftl"""

    DIRECTORY = "directory"
    """Language directory: <root>/<tag>/**/*.ftl"""


class LoadStatus(StrEnum):
    """Outcome of processing one top-level entry during Catalog.load()."""

    LOADED = "loaded"
    """Compiled into a bundle that is present in the catalog."""

    SKIPPED = "skipped"
    """Not a language entry; ignored without error."""

    OVERWRITTEN = "overwritten"
    """Compiled, then replaced by a later entry with the same language tag."""


class SkipReason(StrEnum):
    """Why a root entry was skipped during loading.

    Unreadable nested paths are listed in ScanResult.skipped instead.
    """

    NOT_A_TEMPLATE = "not_a_template"
    """File without the template extension."""

    INVALID_TAG = "invalid_tag"
    """Name does not parse as a language tag."""


__all__ = [
    "EntryKind",
    "LoadStatus",
    "MessageFallback",
    "SkipReason",
]

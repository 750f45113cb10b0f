"""Load configuration for Catalog.

Provides a single frozen dataclass that encapsulates every knob the loader,
scanner and bundles honor, so Catalog.load() takes one typed object instead
of a growing list of keyword arguments.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ftlcatalog.constants import DEFAULT_ENCODING, MAX_SOURCE_SIZE, TEMPLATE_EXTENSION
from ftlcatalog.enums import MessageFallback

__all__ = ["CatalogConfig"]


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Immutable configuration for catalog loading and lookup.

    All fields have sensible defaults; constructing ``CatalogConfig()`` with
    no arguments produces the behavior described by the package docs.

    Attributes:
        extension: Template file extension, including the leading dot
            (default: ".ftl"). Matched case-sensitively.
        encoding: Text encoding of template files (default: "utf-8").
        max_source_size: Maximum template size in characters (default: 10 MiB).
            Larger files fail the load with TemplateCompileError.
        use_isolating: Wrap placeables in Unicode bidi isolation marks
            (default: True). Disable only when RTL languages are never used.
        follow_symlinks: Follow symbolic links while scanning language
            directories (default: True).
        message_fallback: Policy for keys missing from an existing bundle
            (default: MessageFallback.NONE).
        max_workers: Compile the files of one language directory on a thread
            pool of this size (default: None, compile sequentially). Results
            are identical either way.
        functions: Custom Fluent functions made available to every bundle,
            keyed by their UPPERCASE name (default: None).

    Example:
        >>> config = CatalogConfig(use_isolating=False)
        >>> catalog = Catalog.load("locales", "en-US", config=config)

    Example - Fall back per message:
        >>> config = CatalogConfig(message_fallback=MessageFallback.DEFAULT_LANGUAGE)
    """

    extension: str = TEMPLATE_EXTENSION
    encoding: str = DEFAULT_ENCODING
    max_source_size: int = MAX_SOURCE_SIZE
    use_isolating: bool = True
    follow_symlinks: bool = True
    message_fallback: MessageFallback = MessageFallback.NONE
    max_workers: int | None = None
    functions: Mapping[str, Callable[..., Any]] | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If extension does not start with a dot or is only a
                dot, if max_source_size is not positive, or if max_workers is
                given and not positive.
        """
        if not self.extension.startswith(".") or len(self.extension) < 2:
            msg = f"extension must start with '.' and name a suffix, got {self.extension!r}"
            raise ValueError(msg)
        if self.max_source_size <= 0:
            msg = "max_source_size must be positive"
            raise ValueError(msg)
        if self.max_workers is not None and self.max_workers <= 0:
            msg = "max_workers must be positive"
            raise ValueError(msg)
        # Accept plain strings ("default_language") for convenience
        object.__setattr__(self, "message_fallback", MessageFallback(self.message_fallback))

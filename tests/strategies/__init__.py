"""Hypothesis strategies for ftlcatalog property-based testing.

Usage:
    from tests.strategies import language_codes, message_sets
    from tests.strategies.localization import catalog_layouts, render_ftl
"""

from .localization import (
    INVALID_TAG_POOL,
    LANGUAGE_POOL,
    catalog_layouts,
    invalid_tag_names,
    language_codes,
    message_ids,
    message_sets,
    message_texts,
    render_ftl,
)

__all__ = [
    "INVALID_TAG_POOL",
    "LANGUAGE_POOL",
    "catalog_layouts",
    "invalid_tag_names",
    "language_codes",
    "message_ids",
    "message_sets",
    "message_texts",
    "render_ftl",
]

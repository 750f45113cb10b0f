"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating Catalog call sites.

Python 3.13+.
"""

from collections.abc import Mapping
from typing import Any

__all__ = [
    "ArgumentMap",
    "FTLSource",
    "LanguageCode",
    "MessageId",
]

type MessageId = str
"""Identifier for a Fluent message (e.g., 'welcome', 'error-404')."""

type LanguageCode = str
"""BCP-47 language tag string (e.g., 'en', 'pt-BR', 'zh-Hans-CN')."""

type FTLSource = str
"""Raw FTL source text as a Python string."""

type ArgumentMap = Mapping[str, Any]
"""Caller-supplied placeable arguments (e.g., {'name': 'Anna', 'count': 3})."""

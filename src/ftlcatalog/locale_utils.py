"""Language tag parsing.

Wraps Babel's locale-identifier grammar in an immutable LanguageTag value
used as the unique key for catalog bundles. Two tags are equal iff their
canonical string forms match ("en-us" and "en-US" are the same language).

Python 3.13+. External dependency: Babel (locale identifier grammar).
"""

from __future__ import annotations

from dataclasses import dataclass

from babel.core import parse_locale

from ftlcatalog.diagnostics import Diagnostic, DiagnosticCode, TagParseError

__all__ = [
    "LanguageTag",
    "try_parse_language_tag",
]

# POSIX locale syntax that Babel tolerates but a language tag never contains:
# "_" (territory separator), "." (charset suffix), "@" (modifier suffix).
_FORBIDDEN_CHARS = frozenset("_.@")


@dataclass(frozen=True, slots=True)
class LanguageTag:
    """Canonical identifier for a language or locale.

    Immutable once parsed. Subtag case is normalized at construction, so
    field equality is equality of canonical forms.

    Attributes:
        language: Primary language subtag, lower-case ("en")
        script: Script subtag, title-case ("Hans"), if any
        territory: Region subtag, upper-case ("US") or UN M.49 digits, if any
        variant: Variant subtag, upper-case ("POSIX"), if any

    Example:
        >>> tag = LanguageTag.parse("zh-hans-cn")
        >>> str(tag)
        'zh-Hans-CN'
        >>> tag == LanguageTag.parse("zh-Hans-CN")
        True
    """

    language: str
    script: str | None = None
    territory: str | None = None
    variant: str | None = None

    def __post_init__(self) -> None:
        """Normalize subtag case."""
        object.__setattr__(self, "language", self.language.lower())
        if self.script is not None:
            object.__setattr__(self, "script", self.script.title())
        if self.territory is not None:
            object.__setattr__(self, "territory", self.territory.upper())
        if self.variant is not None:
            object.__setattr__(self, "variant", self.variant.upper())

    @classmethod
    def parse(cls, code: str) -> LanguageTag:
        """Parse a hyphen-separated language identifier.

        Args:
            code: Language identifier (e.g., "en", "en-US", "pt-BR", "zh-Hans-CN")

        Returns:
            Parsed LanguageTag

        Raises:
            TagParseError: If code is not a well-formed language identifier
        """
        if not isinstance(code, str):
            msg = f"Language tag must be a string, got {type(code).__name__}"
            raise TagParseError(msg, code=repr(code))

        reason = _precheck(code)
        if reason is None:
            try:
                language, territory, script, variant = parse_locale(code, sep="-")[:4]
            except ValueError as e:
                reason = str(e)
            else:
                if not _is_primary_language(language):
                    reason = f"invalid primary language subtag {language!r}"
                else:
                    return cls(language, script, territory, variant)

        diagnostic = Diagnostic(
            code=DiagnosticCode.INVALID_LANGUAGE_TAG,
            message=f"Invalid language tag {code!r}: {reason}",
            hint="Use a BCP-47 tag such as 'en', 'en-US' or 'zh-Hans-CN'",
        )
        raise TagParseError(diagnostic, code=code)

    def __str__(self) -> str:
        """Return the canonical BCP-47 form ("en-US")."""
        return "-".join(
            part for part in (self.language, self.script, self.territory, self.variant) if part
        )


def try_parse_language_tag(code: str) -> LanguageTag | None:
    """Parse a language identifier, returning None instead of raising.

    Used while scanning the catalog root, where a name that is not a
    language tag is simply not a language.

    Args:
        code: Candidate language identifier

    Returns:
        Parsed LanguageTag, or None if code is not well-formed
    """
    try:
        return LanguageTag.parse(code)
    except TagParseError:
        return None


def _precheck(code: str) -> str | None:
    """Return a rejection reason for input Babel would misinterpret."""
    if not code:
        return "empty string"
    if code != code.strip():
        return "leading or trailing whitespace"
    if not code.isascii():
        return "non-ASCII characters"
    if _FORBIDDEN_CHARS.intersection(code):
        return "POSIX locale syntax ('_', '.', '@') is not allowed"
    return None


def _is_primary_language(subtag: str) -> bool:
    # BCP-47: 2-3 letter ISO 639 code, or a 5-8 letter registered subtag
    return subtag.isalpha() and (2 <= len(subtag) <= 3 or 5 <= len(subtag) <= 8)

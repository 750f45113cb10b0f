"""Tests for diagnostic codes, source spans, and the exception hierarchy."""

from __future__ import annotations

from pathlib import Path

import pytest

from ftlcatalog.diagnostics import (
    CatalogError,
    Diagnostic,
    DiagnosticCode,
    DuplicateMessageError,
    FormatError,
    MissingMessageError,
    NoDefaultBundleError,
    ResourceIOError,
    SourceSpan,
    TagParseError,
    TemplateCompileError,
)
from ftlcatalog.locale_utils import LanguageTag


class TestSourceSpan:
    """Test SourceSpan validation and offset conversion."""

    def test_from_offsets_first_line(self) -> None:
        """Offsets on the first line give line 1."""
        span = SourceSpan.from_offsets("hello = world", 6, 7)

        assert (span.line, span.column) == (1, 7)

    def test_from_offsets_later_line(self) -> None:
        """Line and column count from the preceding newline."""
        source = "a = 1\nb = 2\nbroken\n"
        span = SourceSpan.from_offsets(source, source.index("broken"), len(source))

        assert (span.line, span.column) == (3, 1)

    def test_from_offsets_clamps(self) -> None:
        """Out-of-range offsets are clamped to the source."""
        span = SourceSpan.from_offsets("abc", 10, 20)

        assert span.start == span.end == 3

    @pytest.mark.parametrize(
        ("start", "end", "line", "column"),
        [(-1, 0, 1, 1), (5, 4, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)],
    )
    def test_invalid_values_rejected(
        self, start: int, end: int, line: int, column: int
    ) -> None:
        """Negative offsets, reversed ranges and zero line/column raise."""
        with pytest.raises(ValueError, match="SourceSpan"):
            SourceSpan(start=start, end=end, line=line, column=column)


class TestDiagnosticFormat:
    """Test Diagnostic.format_error rendering."""

    def test_full_rendering(self) -> None:
        """Location, annotation code and hint all appear."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.PARSE_JUNK,
            message='Expected token: "="',
            span=SourceSpan(start=4, end=5, line=2, column=3),
            hint="Check the message syntax",
            ftl_location="locales/en/main.ftl",
            annotation_code="E0003",
        )

        assert diagnostic.format_error() == (
            'error[PARSE_JUNK]: Expected token: "=" (E0003)\n'
            "  --> locales/en/main.ftl:2:3\n"
            "  = help: Check the message syntax"
        )

    def test_location_without_span(self) -> None:
        """A file location without a span omits line and column."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.RESOURCE_UNREADABLE,
            message="Cannot read",
            ftl_location="x.ftl",
        )

        assert diagnostic.format_error().splitlines()[1] == "  --> x.ftl"

    def test_control_characters_escaped(self) -> None:
        """Terminal control characters from file content are escaped."""
        diagnostic = Diagnostic(code=DiagnosticCode.PARSE_JUNK, message="bad\x1b[31m")

        rendered = diagnostic.format_error()

        assert "\x1b" not in rendered
        assert "\\x1b" in rendered

    def test_str_is_message(self) -> None:
        """str() of a diagnostic is its plain message."""
        assert str(Diagnostic(code=DiagnosticCode.PARSE_JUNK, message="oops")) == "oops"


class TestExceptionHierarchy:
    """Test error taxonomy and builtin compatibility."""

    @pytest.mark.parametrize(
        "error_type",
        [
            ResourceIOError,
            TagParseError,
            TemplateCompileError,
            DuplicateMessageError,
            NoDefaultBundleError,
            MissingMessageError,
            FormatError,
        ],
    )
    def test_all_derive_from_catalog_error(self, error_type: type[Exception]) -> None:
        """Every error is a CatalogError."""
        assert issubclass(error_type, CatalogError)

    def test_builtin_bases(self) -> None:
        """Errors can be caught by their natural builtin category."""
        assert issubclass(ResourceIOError, OSError)
        assert issubclass(TagParseError, ValueError)
        assert issubclass(NoDefaultBundleError, LookupError)
        assert issubclass(MissingMessageError, LookupError)
        assert issubclass(DuplicateMessageError, TemplateCompileError)

    def test_diagnostic_message(self) -> None:
        """A Diagnostic argument is kept and rendered as the message."""
        diagnostic = Diagnostic(code=DiagnosticCode.MESSAGE_NOT_FOUND, message="gone")
        error = CatalogError(diagnostic)

        assert error.diagnostic is diagnostic
        assert str(error) == "error[MESSAGE_NOT_FOUND]: gone"

    def test_plain_message(self) -> None:
        """A string argument leaves diagnostic unset."""
        error = CatalogError("plain")

        assert error.diagnostic is None
        assert str(error) == "plain"

    def test_resource_io_error_str(self) -> None:
        """ResourceIOError renders its message, not errno fields."""
        error = ResourceIOError("cannot read x", path="x.ftl")

        assert str(error) == "cannot read x"
        assert error.path == Path("x.ftl")

    def test_missing_message_error_fields(self) -> None:
        """MissingMessageError keeps key and both languages, unquoted."""
        en = LanguageTag.parse("en")
        fr = LanguageTag.parse("fr")
        error = MissingMessageError("no hello", key="hello", language=en, requested=fr)

        assert str(error) == "no hello"
        assert (error.key, error.language, error.requested) == ("hello", en, fr)
        assert error.attribute is None

    def test_template_compile_error_diagnostics(self) -> None:
        """The first diagnostic becomes the primary one."""
        first = Diagnostic(code=DiagnosticCode.PARSE_JUNK, message="one")
        second = Diagnostic(code=DiagnosticCode.PARSE_JUNK, message="two")
        error = TemplateCompileError("bad", path="a.ftl", diagnostics=(first, second))

        assert error.diagnostic is first
        assert error.format_errors() == "error[PARSE_JUNK]: one\nerror[PARSE_JUNK]: two"

    def test_format_error_partial(self) -> None:
        """FormatError carries the best-effort output."""
        error = FormatError(
            "failed",
            key="k",
            language=LanguageTag.parse("en"),
            fluent_errors=(),
            diagnostics=(),
            partial="Hello, name!",
        )

        assert error.partial == "Hello, name!"
        assert error.diagnostic is None

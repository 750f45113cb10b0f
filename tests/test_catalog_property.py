"""Property-based tests for Catalog loading and lookup.

Generated catalog roots are written to fresh temporary directories and
loaded from disk.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import assume, event, given
from hypothesis import strategies as st

from ftlcatalog import Catalog, CatalogConfig, LanguageTag, MissingMessageError
from tests.helpers.tree import write_tree
from tests.strategies import catalog_layouts, invalid_tag_names, message_sets, render_ftl

PLAIN = CatalogConfig(use_isolating=False)


def _expected(layout: dict[str, str]) -> dict[LanguageTag, dict[str, str]]:
    """Recover language -> {id: text} from a generated layout."""
    result: dict[LanguageTag, dict[str, str]] = {}
    for relative, source in layout.items():
        name = relative.split("/", 1)[0].removesuffix(".ftl")
        messages = result.setdefault(LanguageTag.parse(name), {})
        for line in source.splitlines():
            key, _, value = line.partition(" = ")
            messages[key] = value
    return result


class TestCatalogLoadProperties:
    """Properties of loading generated trees."""

    @given(layout=catalog_layouts())
    def test_every_message_retrievable(
        self, tmp_path_factory: pytest.TempPathFactory, layout: dict[str, str]
    ) -> None:
        """Each generated message formats to its own text in its language."""
        root = write_tree(tmp_path_factory.mktemp("catalog"), layout)
        expected = _expected(layout)
        default = next(iter(expected))

        catalog = Catalog.load(root, default, config=PLAIN)

        assert catalog.languages == frozenset(expected)
        for language, messages in expected.items():
            for key, value in messages.items():
                assert catalog.get_message(key, language) == value

    @given(layout=catalog_layouts())
    def test_load_is_idempotent(
        self, tmp_path_factory: pytest.TempPathFactory, layout: dict[str, str]
    ) -> None:
        """Two loads of an unchanged tree agree on every message."""
        root = write_tree(tmp_path_factory.mktemp("catalog"), layout)
        default = next(iter(_expected(layout)))

        first = Catalog.load(root, default, config=PLAIN)
        second = Catalog.load(root, default, config=PLAIN)

        assert first.languages == second.languages
        for language in first:
            ids = first.get_message_ids(language)
            assert ids == second.get_message_ids(language)
            for key in ids:
                assert first.get_message(key, language) == second.get_message(key, language)

    @given(layout=catalog_layouts(), workers=st.integers(min_value=1, max_value=4))
    def test_worker_pool_equivalent(
        self,
        tmp_path_factory: pytest.TempPathFactory,
        layout: dict[str, str],
        workers: int,
    ) -> None:
        """Parallel compilation loads the same bundles in the same order."""
        root = write_tree(tmp_path_factory.mktemp("catalog"), layout)
        default = next(iter(_expected(layout)))

        sequential = Catalog.load(root, default, config=PLAIN)
        parallel = Catalog.load(
            root, default, config=CatalogConfig(use_isolating=False, max_workers=workers)
        )

        for language in sequential:
            left = sequential.get_bundle(language)
            right = parallel.get_bundle(language)
            assert left is not None
            assert right is not None
            assert left.sources == right.sources
            assert left.message_ids() == right.message_ids()

    @given(name=invalid_tag_names(), messages=message_sets())
    def test_invalid_names_never_languages(
        self,
        tmp_path_factory: pytest.TempPathFactory,
        name: str,
        messages: dict[str, str],
    ) -> None:
        """Entries named by non-tags are skipped, never loaded."""
        assume(name and "/" not in name and name not in (".", ".."))
        event(f"invalid_name={name!r}")
        root = write_tree(
            tmp_path_factory.mktemp("catalog"),
            {f"{name}.ftl": render_ftl(messages), "en.ftl": "base = Base\n"},
        )

        catalog = Catalog.load(root, "en", config=PLAIN)

        assert catalog.languages == frozenset({LanguageTag.parse("en")})


class TestCatalogLookupProperties:
    """Properties of lookup against generated catalogs."""

    @given(messages=message_sets(), requested=st.sampled_from(["de", "ja", "xx-not-a-tag", "fr"]))
    def test_unavailable_language_matches_default(
        self,
        tmp_path_factory: pytest.TempPathFactory,
        messages: dict[str, str],
        requested: str,
    ) -> None:
        """Lookups for unavailable languages equal lookups in the default."""
        root = write_tree(tmp_path_factory.mktemp("catalog"), {"en.ftl": render_ftl(messages)})
        catalog = Catalog.load(root, "en", config=PLAIN)

        for key in messages:
            assert catalog.get_message(key, requested) == catalog.get_message(key, "en")

    @given(messages=message_sets(min_size=2))
    def test_missing_key_in_existing_bundle(
        self, tmp_path_factory: pytest.TempPathFactory, messages: dict[str, str]
    ) -> None:
        """A key only the default defines is missing in another existing language."""
        keys = list(messages)
        only_default, shared = keys[0], keys[1:]
        root = write_tree(
            tmp_path_factory.mktemp("catalog"),
            {
                "en.ftl": render_ftl(messages),
                "fr.ftl": render_ftl({k: messages[k] for k in shared}),
            },
        )
        catalog = Catalog.load(root, "en", config=PLAIN)

        with pytest.raises(MissingMessageError) as exc_info:
            catalog.get_message(only_default, "fr")

        assert exc_info.value.language == LanguageTag.parse("fr")
        assert exc_info.value.key == only_default


def test_write_tree_helper(tmp_path: Path) -> None:
    """The tree helper creates nested files and empty directories."""
    root = write_tree(tmp_path / "root", {"a/b.ftl": "x = 1\n", "c/": ""})

    assert (root / "a" / "b.ftl").read_text(encoding="utf-8") == "x = 1\n"
    assert (root / "c").is_dir()

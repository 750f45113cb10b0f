"""ftlcatalog Example - Fallback Policies and Observability.

Demonstrates:
1. Language fallback with an on_fallback callback
2. Per-message fallback via MessageFallback.DEFAULT_LANGUAGE
3. Inspecting the load summary (skipped and overwritten entries)

Python 3.13+.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from ftlcatalog import Catalog, CatalogConfig, FallbackInfo, MessageFallback


def build_tree(root: Path) -> Path:
    """Write an incomplete translation tree with some stray entries."""
    root.mkdir(parents=True)
    (root / "en.ftl").write_text("home = Home\nabout = About us\n", encoding="utf-8")
    (root / "lt.ftl").write_text("home = Pradžia\n", encoding="utf-8")
    (root / "notes.txt").write_text("not a template\n", encoding="utf-8")
    (root / "_drafts").mkdir()
    (root / "_drafts" / "lt.ftl").write_text("about = Apie\n", encoding="utf-8")
    return root


def report(info: FallbackInfo) -> None:
    print(
        f"  [fallback] {info.message_id}: requested {info.requested_language}, "
        f"served by {info.resolved_language}"
    )


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = build_tree(Path(tmp) / "locales")

        print("Example 1: language fallback")
        catalog = Catalog.load(root, "en", on_fallback=report)
        print(" ", catalog.get_message("home", "et"))

        print("Example 2: per-message fallback")
        config = CatalogConfig(message_fallback=MessageFallback.DEFAULT_LANGUAGE)
        catalog = Catalog.load(root, "en", config=config, on_fallback=report)
        print(" ", catalog.get_message("about", "lt"))

        print("Example 3: load summary")
        summary = catalog.get_load_summary()
        print(" ", summary)
        for record in summary.get_skipped():
            print(f"  skipped {record.path.name}: {record.reason}")


if __name__ == "__main__":
    main()

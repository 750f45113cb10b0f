"""ftlcatalog Quick Start - Load a Directory of Translations.

Builds a small catalog root in a temporary directory, loads it, and looks
messages up in several languages.

Layout created:
    locales/
        en-US/
            main.ftl
            cart/items.ftl
        lv.ftl

WARNING: Examples use default use_isolating=True behavior. You may see
FSI (U+2068) and PDI (U+2069) bidi isolation marks around placeables in
terminal output. Keep them enabled whenever RTL languages may be shown.

Python 3.13+.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ftlcatalog import Catalog, MissingMessageError

EN_MAIN = """
welcome = Welcome, { $name }!
checkout = Checkout
    .title = Proceed to payment
"""

EN_ITEMS = """
items = { $count ->
    [one] One item in your cart
   *[other] { $count } items in your cart
}
"""

LV = """
welcome = Sveiki, { $name }!
items = { $count ->
    [zero] Grozā nav preču
    [one] { $count } prece grozā
   *[other] { $count } preces grozā
}
"""


def build_tree(root: Path) -> Path:
    """Write the example catalog root."""
    (root / "en-US" / "cart").mkdir(parents=True)
    (root / "en-US" / "main.ftl").write_text(EN_MAIN, encoding="utf-8")
    (root / "en-US" / "cart" / "items.ftl").write_text(EN_ITEMS, encoding="utf-8")
    (root / "lv.ftl").write_text(LV, encoding="utf-8")
    return root


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        root = build_tree(Path(tmp) / "locales")
        catalog = Catalog.load(root, "en-US")
        print(catalog)

        print(catalog.get_message("welcome", "lv", {"name": "Anna"}))
        print(catalog.get_message("items", "lv", {"count": 0}))
        print(catalog.get_message("items", "en-US", {"count": 1}))
        print(catalog.get_message("checkout", "en-US", attribute="title"))

        # Unavailable language: served by en-US
        print(catalog.get_message("welcome", "de", {"name": "Jonas"}))

        # lv exists but has no "checkout": no silent fallback
        try:
            catalog.get_message("checkout", "lv")
        except MissingMessageError as e:
            print(f"Missing: {e.key} in {e.language}")

        # Non-raising variant for UI code
        value, errors = catalog.format_value("checkout", "lv")
        print(value, [type(err).__name__ for err in errors])


if __name__ == "__main__":
    main()

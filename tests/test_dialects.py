from pathlib import Path

import pytest

from svgshield.dialects import MARKUP, SVG, get_dialect, get_dialect_for_path, list_dialects, registered_extensions


@pytest.mark.parametrize("name,dialect,camel", [
    ("Icon.tsx", "jsx", True),
    ("icon.JSX", "jsx", True),
    ("page.mdx", "jsx", True),
    ("Icon.vue", "vue", False),
    ("Icon.svelte", "svelte", False),
    ("Icon.astro", "astro", False),
    ("logo.svg", "svg", False),
    ("index.xml", "markup", False),
    ("index.html", "markup", False),
])
def test_dialect_for_path(name, dialect, camel):
    d = get_dialect_for_path(Path("src") / name)
    assert d.name == dialect
    assert d.use_camel_case is camel


def test_unknown_extension_falls_back_to_markup():
    assert get_dialect_for_path(Path("notes.txt")) is MARKUP


def test_registry_listing():
    assert list_dialects() == ["astro", "jsx", "markup", "svelte", "svg", "vue"]
    assert ".tsx" in registered_extensions()
    assert ".md" not in registered_extensions()


def test_get_dialect_unknown():
    assert get_dialect("vue").name == "vue"
    with pytest.raises(ValueError, match="Unknown dialect"):
        get_dialect("php")


def test_only_standalone_svg_is_a_whole_document():
    assert get_dialect_for_path(Path("logo.SVG")) is SVG
    assert SVG.whole_document is True
    assert [n for n in list_dialects() if get_dialect(n).whole_document] == ["svg"]

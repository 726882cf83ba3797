from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

__all__ = [
    "Dialect",
    "MARKUP",
    "SVG",
    "register_dialect",
    "get_dialect",
    "get_dialect_for_path",
    "list_dialects",
    "registered_extensions",
]


@dataclass(frozen=True)
class Dialect:
    """
    Host document language in which SVG fragments are embedded.

    `use_camel_case` is the attribute spelling policy of the host: JSX wants
    `className`/`strokeWidth`, template languages keep plain SVG spelling.
    A `whole_document` dialect hands the entire file to the optimizer as one
    document, prolog included, without transcoding.
    """
    name: str
    extensions: Tuple[str, ...]
    use_camel_case: bool = False
    whole_document: bool = False


# Фолбэк для неизвестных расширений
MARKUP = Dialect("markup", (".html", ".htm", ".xml"), use_camel_case=False)
# Самостоятельный .svg-файл
SVG = Dialect("svg", (".svg",), whole_document=True)

_BY_NAME: Dict[str, Dialect] = {}
_BY_EXT: Dict[str, Dialect] = {}


def register_dialect(dialect: Dialect) -> None:
    """Register a dialect; a later registration wins for shared extensions."""
    _BY_NAME[dialect.name] = dialect
    for ext in dialect.extensions:
        _BY_EXT[ext.lower()] = dialect


def get_dialect(name: str) -> Dialect:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ValueError(f"Unknown dialect '{name}'. Known: {', '.join(list_dialects())}") from None


def get_dialect_for_path(path: Path) -> Dialect:
    """Dialect by file extension; unknown extensions fall back to plain markup."""
    return _BY_EXT.get(path.suffix.lower(), MARKUP)


def list_dialects() -> List[str]:
    return sorted(_BY_NAME)


def registered_extensions() -> Tuple[str, ...]:
    return tuple(sorted(_BY_EXT))


# Встроенные диалекты
register_dialect(Dialect("jsx", (".jsx", ".tsx", ".js", ".ts", ".mdx"), use_camel_case=True))
register_dialect(Dialect("vue", (".vue",)))
register_dialect(Dialect("svelte", (".svelte",)))
register_dialect(Dialect("astro", (".astro",)))
register_dialect(SVG)
register_dialect(MARKUP)

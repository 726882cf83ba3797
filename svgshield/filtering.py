from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set

import pathspec

from .config.model import FilesConfig
from .dialects import registered_extensions

__all__ = ["build_gitignore_spec", "build_exclude_spec", "collect_files"]

logger = logging.getLogger(__name__)

# Никогда не заходим в эти каталоги
_SKIP_DIRS = {".git", "node_modules"}


def _read_patterns(path: Path) -> List[str]:
    lines = []
    for ln in path.read_text(encoding="utf-8", errors="ignore").splitlines():
        ln = ln.strip()
        if ln and not ln.startswith("#"):
            lines.append(ln)
    return lines


def build_gitignore_spec(root: Path) -> Optional[pathspec.PathSpec]:
    """
    Build PathSpec from .gitignore. Return None if .gitignore is missing.
    """
    gitignore = root / ".gitignore"
    if not gitignore.is_file():
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", _read_patterns(gitignore))


def build_exclude_spec(patterns: Sequence[str]) -> Optional[pathspec.PathSpec]:
    if not patterns:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def _rel_posix(path: Path, root: Path) -> Optional[str]:
    try:
        return path.resolve().relative_to(root).as_posix()
    except ValueError:
        return None


def _is_skipped(rel: Optional[str], specs: Iterable[Optional[pathspec.PathSpec]]) -> bool:
    if rel is None:
        return False
    return any(spec is not None and spec.match_file(rel) for spec in specs)


def _walk(
    directory: Path,
    root: Path,
    extensions: Set[str],
    specs: Sequence[Optional[pathspec.PathSpec]],
) -> Iterable[Path]:
    for dirpath, dirnames, filenames in os.walk(directory):
        keep: List[str] = []
        for d in sorted(dirnames):
            if d in _SKIP_DIRS:
                continue
            rel_dir = _rel_posix(Path(dirpath, d), root)
            # каталог может быть скрыт целиком
            if rel_dir is not None and _is_skipped(rel_dir + "/", specs):
                continue
            keep.append(d)
        dirnames[:] = keep

        for fn in sorted(filenames):
            p = Path(dirpath, fn)
            if p.suffix.lower() not in extensions:
                continue
            if _is_skipped(_rel_posix(p, root), specs):
                continue
            yield p


def collect_files(root: Path, paths: Sequence[Path], cfg: FilesConfig) -> List[Path]:
    """
    Expand the CLI paths into the list of documents to process.

    Directories are walked recursively and filtered by extension, the
    configured exclude patterns and (optionally) the root .gitignore. Files
    named explicitly are always kept.
    """
    root = root.resolve()
    extensions = {e.lower() for e in (cfg.extensions or registered_extensions())}
    specs = [build_exclude_spec(cfg.exclude)]
    if cfg.respect_gitignore:
        specs.append(build_gitignore_spec(root))

    seen: Set[Path] = set()
    out: List[Path] = []
    for raw in paths:
        p = raw if raw.is_absolute() else root / raw
        if p.is_dir():
            candidates: Iterable[Path] = _walk(p, root, extensions, specs)
        elif p.is_file():
            candidates = [p]
        else:
            raise ValueError(f"Path not found: {raw}")
        for c in candidates:
            key = c.resolve()
            if key not in seen:
                seen.add(key)
                out.append(c)

    logger.debug("collected %d file(s)", len(out))
    return out

"""
Document-level optimization pipeline.

For every SVG fragment of a host document:

    find → prepare → optimizer → finalize → splice back

A standalone .svg file skips all of that: the whole file, XML prolog and
doctype included, goes to the document optimizer in one piece.

A fragment whose optimizer run fails stays as it was; the failure is
reported, the rest of the document is still processed.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .api_schema import File, Fragment, FragmentStatus, OptimizeMode, RunResult, Total
from .config import Config, TranscoderConfig, load_config
from .dialects import Dialect, get_dialect_for_path
from .errors import OptimizerError
from .filtering import collect_files
from .fragments import FragmentSpan, find_fragments, replace_fragments
from .optimizer import Optimizer, build_optimizer
from .stats import SavingsStats
from .transcoder.pipeline import finalize_after_optimization, prepare_for_optimization
from .types import RunOptions, TransformOptions

__all__ = [
    "FragmentResult",
    "DocumentResult",
    "transform_options_for",
    "optimize_document",
    "optimize_whole_document",
    "Engine",
    "run_optimize",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FragmentResult:
    span: FragmentSpan
    foreign: bool
    status: FragmentStatus
    stats: SavingsStats
    error: Optional[str] = None


@dataclass
class DocumentResult:
    dialect: Dialect
    options: TransformOptions
    fragments: List[FragmentResult] = field(default_factory=list)

    @property
    def stats(self) -> SavingsStats:
        total = SavingsStats(0, 0)
        for fr in self.fragments:
            total = total + fr.stats
        return total

    @property
    def failed(self) -> int:
        return sum(1 for fr in self.fragments if fr.status is FragmentStatus.failed)


def transform_options_for(dialect: Dialect, cfg: TranscoderConfig) -> TransformOptions:
    """Transcoder policy for a document: config overrides the dialect default."""
    use_camel_case = dialect.use_camel_case if cfg.use_camel_case is None else cfg.use_camel_case
    return TransformOptions(
        use_camel_case=use_camel_case,
        raw_text_elements=tuple(cfg.raw_text_elements),
    )


def _failed(span: FragmentSpan, foreign: bool, e: OptimizerError) -> FragmentResult:
    return FragmentResult(span, foreign, FragmentStatus.failed, SavingsStats.between(span.text, span.text), str(e))


def _finished(span: FragmentSpan, foreign: bool, final: str) -> FragmentResult:
    status = FragmentStatus.unchanged if final == span.text else FragmentStatus.optimized
    return FragmentResult(span, foreign, status, SavingsStats.between(span.text, final))


def _optimize_fragment(span: FragmentSpan, optimizer: Optimizer, opts: TransformOptions) -> Tuple[str, FragmentResult]:
    prepared = prepare_for_optimization(span.text, opts)
    try:
        optimized = optimizer(prepared.prepared_fragment)
    except OptimizerError as e:
        logger.warning("fragment at %d left unchanged: %s", span.start, e)
        return span.text, _failed(span, prepared.was_foreign, e)

    final = finalize_after_optimization(optimized, prepared.was_foreign, opts)
    return final, _finished(span, prepared.was_foreign, final)


def optimize_document(
        text: str,
        dialect: Dialect,
        optimizer: Optimizer,
        cfg: Optional[TranscoderConfig] = None,
) -> Tuple[str, DocumentResult]:
    """Optimize every SVG fragment of a host document."""
    opts = transform_options_for(dialect, cfg or TranscoderConfig())
    doc = DocumentResult(dialect=dialect, options=opts)

    replacements: List[Tuple[FragmentSpan, str]] = []
    for span in find_fragments(text):
        new_text, result = _optimize_fragment(span, optimizer, opts)
        replacements.append((span, new_text))
        doc.fragments.append(result)

    logger.debug("%s document: %d fragment(s)", dialect.name, len(doc.fragments))
    return replace_fragments(text, replacements), doc


def optimize_whole_document(text: str, dialect: Dialect, optimizer: Optimizer) -> Tuple[str, DocumentResult]:
    """
    Optimize a standalone SVG file as one document.

    Nothing is transcoded; the report holds a single fragment spanning the
    whole file.
    """
    doc = DocumentResult(dialect=dialect, options=TransformOptions(use_camel_case=dialect.use_camel_case))
    span = FragmentSpan(0, len(text), text)
    try:
        optimized = optimizer(text)
    except OptimizerError as e:
        logger.warning("%s document left unchanged: %s", dialect.name, e)
        doc.fragments.append(_failed(span, False, e))
        return text, doc

    doc.fragments.append(_finished(span, False, optimized))
    return optimized, doc


# ---------------------------------------------------------------------------

class Engine:
    """
    Runs `optimize` over a set of paths under the current directory.

    The project configuration is read once; CLI options override it.
    """

    def __init__(self, options: RunOptions, root: Optional[Path] = None):
        self.options = options
        self.root = (root or Path.cwd()).resolve()
        self.config = self._effective_config(load_config(self.root))
        self.optimizer = build_optimizer(self.config.optimizer)
        self.document_optimizer = build_optimizer(self.config.optimizer, document=True)

    def _effective_config(self, cfg: Config) -> Config:
        opt = cfg.optimizer
        if self.options.command:
            opt = dataclasses.replace(opt, command=self.options.command)
        if self.options.document_command:
            opt = dataclasses.replace(opt, document_command=self.options.document_command)
        if self.options.identity:
            opt = dataclasses.replace(opt, identity=True)
        tr = cfg.transcoder
        if self.options.use_camel_case is not None:
            tr = dataclasses.replace(tr, use_camel_case=self.options.use_camel_case)
        return dataclasses.replace(cfg, optimizer=opt, transcoder=tr)

    def _display_path(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def process_file(self, path: Path) -> File:
        dialect = get_dialect_for_path(path)
        text = path.read_text(encoding="utf-8")
        if dialect.whole_document:
            mode = OptimizeMode.document
            new_text, doc = optimize_whole_document(text, dialect, self.document_optimizer)
        else:
            mode = OptimizeMode.inline
            new_text, doc = optimize_document(text, dialect, self.optimizer, self.config.transcoder)

        written = False
        if self.options.write and new_text != text:
            path.write_text(new_text, encoding="utf-8")
            written = True
            logger.info("%s: %s", self._display_path(path), doc.stats.message())

        return File(
            path=self._display_path(path),
            dialect=dialect.name,
            mode=mode,
            useCamelCase=doc.options.use_camel_case,
            fragments=[_fragment_model(fr, text) for fr in doc.fragments],
            originalBytes=doc.stats.original_bytes,
            optimizedBytes=doc.stats.optimized_bytes,
            written=written,
        )

    def run(self, paths: Sequence[Path]) -> RunResult:
        files = [self.process_file(p) for p in collect_files(self.root, paths, self.config.files)]

        stats = SavingsStats(
            sum(f.originalBytes for f in files),
            sum(f.optimizedBytes for f in files),
        )
        total = Total(
            files=len(files),
            fragments=sum(len(f.fragments) for f in files),
            failed=sum(1 for f in files for fr in f.fragments if fr.status is FragmentStatus.failed),
            originalBytes=stats.original_bytes,
            optimizedBytes=stats.optimized_bytes,
            savedBytes=stats.saved_bytes,
            savedPct=round(stats.saving_percent, 2),
            message=stats.message(),
        )
        return RunResult(
            optimizer=repr(self.optimizer),
            documentOptimizer=repr(self.document_optimizer),
            files=files,
            total=total,
        )


def _fragment_model(fr: FragmentResult, document: str) -> Fragment:
    return Fragment(
        start=fr.span.start,
        end=fr.span.end,
        line=fr.span.line_in(document),
        foreign=fr.foreign,
        status=fr.status,
        originalBytes=fr.stats.original_bytes,
        optimizedBytes=fr.stats.optimized_bytes,
        savedBytes=fr.stats.saved_bytes,
        savedPct=round(fr.stats.saving_percent, 2),
        error=fr.error,
    )


def run_optimize(paths: Sequence[Path], options: RunOptions) -> RunResult:
    """Entry point for `svgshield optimize`."""
    return Engine(options).run(paths)

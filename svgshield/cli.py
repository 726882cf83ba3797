from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .engine import run_optimize
from .errors import SvgShieldUserError
from .jsonic import dumps as jdumps
from .transcoder.detector import is_foreign
from .transcoder.pipeline import finalize_after_optimization, prepare_for_optimization
from .types import RunOptions, TransformOptions
from .version import tool_version

_LOG_FORMAT = "[%(levelname)s] %(message)s"


def _setup_logging(debug: bool) -> None:
    logger = logging.getLogger("svgshield")
    if getattr(_setup_logging, "_inited", False):
        return
    _setup_logging._inited = True  # type: ignore[attr-defined]
    level = logging.DEBUG if (debug or os.environ.get("SVGSHIELD_DEBUG")) else logging.INFO
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="svgshield",
        description="Reversible SVG transcoder for JSX/Vue/Svelte/Astro fragments",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--debug", action="store_true", help="подробный лог в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_source(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "source",
            nargs="?",
            default="-",
            metavar="FILE|-",
            help="файл с фрагментом или - для чтения из stdin (по умолчанию)",
        )

    def add_camel(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--no-camel-case",
            action="store_true",
            help="не переводить className/strokeWidth ↔ class/stroke-width (Vue, Svelte, Astro)",
        )

    sp_detect = sub.add_parser("detect", help="Есть ли во фрагменте синтаксис шаблонов (JSON)")
    add_source(sp_detect)

    sp_prepare = sub.add_parser("prepare", help="Фрагмент → XML для оптимизатора (JSON)")
    add_source(sp_prepare)
    add_camel(sp_prepare)

    sp_finalize = sub.add_parser("finalize", help="Вывод оптимизатора → исходный диалект (текст)")
    add_source(sp_finalize)
    add_camel(sp_finalize)
    sp_finalize.add_argument(
        "--was-foreign",
        action="store_true",
        help="значение wasForeign из вывода prepare; без флага вход возвращается как есть",
    )

    sp_opt = sub.add_parser("optimize", help="Оптимизировать SVG-фрагменты в файлах (JSON-отчёт)")
    sp_opt.add_argument("paths", nargs="+", metavar="PATH", help="файлы и каталоги")
    sp_opt.add_argument("--write", action="store_true", help="записать результат обратно в файлы")
    sp_opt.add_argument("--command", metavar="CMD", help="команда оптимизатора (stdin → stdout)")
    sp_opt.add_argument(
        "--document-command",
        metavar="CMD",
        help="команда для самостоятельных .svg-файлов целиком (по умолчанию --command)",
    )
    sp_opt.add_argument(
        "--identity",
        action="store_true",
        help="не запускать оптимизатор (проверка обратимости)",
    )
    camel = sp_opt.add_mutually_exclusive_group()
    camel.add_argument("--camel-case", dest="camel_case", action="store_const", const=True, default=None)
    camel.add_argument("--no-camel-case", dest="camel_case", action="store_const", const=False)

    return p


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise ValueError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def _transform_options(ns: argparse.Namespace) -> TransformOptions:
    return TransformOptions(use_camel_case=not ns.no_camel_case)


def _run_options(ns: argparse.Namespace) -> RunOptions:
    return RunOptions(
        write=bool(ns.write),
        command=ns.command,
        document_command=ns.document_command,
        identity=bool(ns.identity),
        use_camel_case=ns.camel_case,
    )


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(ns.debug))

    try:
        if ns.cmd == "detect":
            text = _read_source(ns.source)
            sys.stdout.write(jdumps({"foreign": is_foreign(text)}))
            return 0

        if ns.cmd == "prepare":
            prepared = prepare_for_optimization(_read_source(ns.source), _transform_options(ns))
            sys.stdout.write(jdumps({
                "preparedFragment": prepared.prepared_fragment,
                "wasForeign": prepared.was_foreign,
            }))
            return 0

        if ns.cmd == "finalize":
            text = finalize_after_optimization(_read_source(ns.source), bool(ns.was_foreign), _transform_options(ns))
            sys.stdout.write(text)
            return 0

        if ns.cmd == "optimize":
            result = run_optimize([Path(p) for p in ns.paths], _run_options(ns))
            sys.stdout.write(jdumps(result.model_dump(mode="json")))
            return 0 if result.total.failed == 0 else 1

    except SvgShieldUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())

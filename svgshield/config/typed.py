from __future__ import annotations

import dataclasses
import logging
import sys
import typing as t
from types import UnionType
from typing import Any, Callable, Dict, get_args, get_origin

from ..errors import SvgShieldUserError

_LOG = logging.getLogger(__name__)

_NONE = type(None)


class ConfigLoadError(SvgShieldUserError, ValueError):
    """Значение конфига не подходит под аннотацию; сообщение начинается с пути поля."""
    pass


def _name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)


def _fail(path: str, msg: str) -> ConfigLoadError:
    _LOG.debug("config error at %s: %s", path, msg)
    return ConfigLoadError(f"{path}: {msg}")


# -------------------- dataclass sections --------------------

def _hints(tp: Any) -> Dict[str, Any]:
    # модели пишутся с `from __future__ import annotations`
    module = sys.modules.get(tp.__module__)
    return t.get_type_hints(tp, globalns=vars(module) if module else None)


def _is_optional(tp: Any) -> bool:
    return get_origin(tp) in (t.Union, UnionType) and _NONE in get_args(tp)


def _load_section(tp: Any, val: Any, path: str) -> Any:
    # пустая секция ("optimizer:") → значения по умолчанию
    raw = {} if val is None else val
    if not isinstance(raw, dict):
        raise _fail(path, f"expected mapping for {_name(tp)}, got {type(raw).__name__}")

    declared = {f.name: f for f in dataclasses.fields(tp)}
    unknown = sorted(set(raw) - set(declared))
    if unknown:
        raise _fail(path, f"unknown key(s): {unknown}")

    hints = _hints(tp)
    kwargs: Dict[str, Any] = {}
    for name, f in declared.items():
        ftype = hints.get(name, f.type)
        if name in raw:
            kwargs[name] = load_typed(ftype, raw[name], path=f"{path}.{name}")
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            if not _is_optional(ftype):
                raise _fail(f"{path}.{name}", "required field missing")
            kwargs[name] = None
    return tp(**kwargs)


# -------------------- generic annotations --------------------

def _load_literal(tp: Any, val: Any, path: str) -> Any:
    allowed = get_args(tp)
    if val not in allowed:
        raise _fail(path, f"expected one of {list(allowed)}, got {val!r}")
    return val


def _load_union(tp: Any, val: Any, path: str) -> Any:
    if val is None and _NONE in get_args(tp):
        return None
    problems = []
    for variant in get_args(tp):
        if variant is _NONE:
            continue
        try:
            return load_typed(variant, val, path=path)
        except ConfigLoadError as e:
            problems.append(str(e))
    raise _fail(path, " | ".join(problems) or f"no variant of {_name(tp)} matched")


def _load_list(tp: Any, val: Any, path: str) -> Any:
    if not isinstance(val, (list, tuple)):
        raise _fail(path, f"expected list, got {type(val).__name__}")
    item_tp = (get_args(tp) or (Any,))[0]
    items = [load_typed(item_tp, v, path=f"{path}[{i}]") for i, v in enumerate(val)]
    return tuple(items) if get_origin(tp) is tuple else items


def _load_dict(tp: Any, val: Any, path: str) -> Any:
    if not isinstance(val, dict):
        raise _fail(path, f"expected mapping, got {type(val).__name__}")
    key_tp, val_tp = get_args(tp) or (Any, Any)
    return {
        load_typed(key_tp, k, path=f"{path}.<key>"): load_typed(val_tp, v, path=f"{path}.{k}")
        for k, v in val.items()
    }


def _load_scalar(tp: Any, val: Any, path: str) -> Any:
    # bool является подклассом int: в числовом поле это ошибка
    if isinstance(val, bool) and tp is not bool:
        raise _fail(path, f"expected {_name(tp)}, got bool")
    if tp is float and isinstance(val, int):
        return float(val)
    if not isinstance(val, tp):
        raise _fail(path, f"expected {_name(tp)}, got {type(val).__name__}")
    return val


_BY_ORIGIN: Dict[Any, Callable[[Any, Any, str], Any]] = {
    t.Literal: _load_literal,
    t.Union: _load_union,
    UnionType: _load_union,
    list: _load_list,
    tuple: _load_list,
    dict: _load_dict,
}


def load_typed(tp: Any, val: Any, *, path: str = "$") -> Any:
    """
    Coerce raw YAML data into the annotated type `tp`.

    Understands dataclasses, Optional/Union, Literal, list/tuple/dict and the
    scalars str/int/float/bool. Errors carry the dotted path of the field.
    """
    if tp is Any or tp is object:
        return val
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _load_section(tp, val, path)

    loader = _BY_ORIGIN.get(get_origin(tp))
    if loader is not None:
        return loader(tp, val, path)
    if tp in (str, int, float, bool):
        return _load_scalar(tp, val, path)
    raise _fail(path, f"unsupported annotation {_name(tp)}")


__all__ = ["ConfigLoadError", "load_typed"]

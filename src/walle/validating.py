## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# walle — Argument checks for command handlers and query functions, derived from Python annotations.
#

import inspect
from typing import Any, Callable

from .types import Value, is_value, type_name
from .errors import WalleTypeMissing


_SIGNATURES: dict[Callable, dict] = {}

def _normalize_expected_type(tp):
    if tp is Any or tp == Value: return Any
    if tp in (int, bool, str): return tp
    raise WalleTypeMissing(f"Unsupported argument annotation `{tp}`, use int, bool, str or Value.")

def get_signature(fn: Callable, name: str | None = None) -> dict:
    """Read arity and argument tags from a handler; the first parameter receives the interpreter."""
    if fn in _SIGNATURES:
        return _SIGNATURES[fn]

    sig = inspect.signature(fn)
    params = list(sig.parameters.values())[1:]
    op_name = name or getattr(fn, '__name__', '<unnamed>')

    if any(p.kind not in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD) for p in params):
        raise WalleTypeMissing(f"Handler `{op_name}` must only take positional parameters.")
    if missing := [p.name for p in params if p.annotation is inspect.Parameter.empty]:
        raise WalleTypeMissing(f"Handler `{op_name}` must annotate parameters: {', '.join(missing)}.")

    meta = {
        'name': op_name,
        'arity': len(params),
        'inputs': [_normalize_expected_type(p.annotation) for p in params],
        'labels': [p.name for p in params],
    }
    _SIGNATURES[fn] = meta
    return meta


def check_arguments(meta: dict, args: list) -> tuple[bool, str]:
    """Validate evaluated arguments against a handler signature; returns `(ok, reason)`."""
    for i, (actual, expected) in enumerate(zip(args, meta['inputs'])):
        if expected is Any: continue
        if not is_value(actual, expected):
            return False, (f"`{meta['name']}` expects {type_name(expected)} for `{meta['labels'][i]}` "
                           f"(argument {i+1}), got {type_name(actual)}.")
    return True, ""

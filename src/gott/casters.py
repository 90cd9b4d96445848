"""Built-in type casters for ``NAME:TYPE=VALUE`` definitions.

Every caster takes the current value as a string and returns either a typed
value (``bool``, ``int``, ``float``, decoded JSON) or a string that can feed
the next caster in a chain (``string``, ``file``, ``env``).

Exports
-------
BUILTIN_CASTERS
    Read-only mapping from type name to caster function.
    Types: string, bool, int, int64, float, float64, json, file, env.

Caster
    Type alias for a caster callable.

Custom casters can be supplied by passing a mapping to
``parse_definition(..., casters=...)`` or ``build_context(..., casters=...)``.
"""

from __future__ import annotations

import json
import math
import os
import re
from types import MappingProxyType
from typing import Any, Callable, Mapping

from .core import CoercionError

Caster = Callable[[str], Any]

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")
_INF_LITERAL = re.compile(r"[+-]?(inf|infinity)", re.IGNORECASE)

_TRUE_LITERALS = frozenset({"1", "t", "true"})
_FALSE_LITERALS = frozenset({"0", "f", "false"})


# ─────────────────────────────────────────────────────────────────────────────
# Casters
# ─────────────────────────────────────────────────────────────────────────────


def cast_string(value: str) -> str:
    """Identity."""
    return value


def cast_bool(value: str) -> bool:
    """``1 t true`` / ``0 f false``, case-insensitive."""
    lowered = value.lower()
    if lowered in _TRUE_LITERALS:
        return True
    if lowered in _FALSE_LITERALS:
        return False
    raise CoercionError("bool", f"invalid syntax: {value!r}")


def cast_int(value: str) -> int:
    """Base-10 signed 64-bit integer.

    Unlike ``int()``, surrounding whitespace and ``_`` digit separators are
    rejected.
    """
    if not _INT_LITERAL.fullmatch(value):
        raise CoercionError("int64", f"invalid syntax: {value!r}")
    result = int(value)
    if not _INT64_MIN <= result <= _INT64_MAX:
        raise CoercionError("int64", f"value out of range: {value!r}")
    return result


def cast_float(value: str) -> float:
    """Base-10 floating point; a finite literal that overflows is an error."""
    if value != value.strip() or "_" in value:
        raise CoercionError("float64", f"invalid syntax: {value!r}")
    try:
        result = float(value)
    except ValueError:
        raise CoercionError("float64", f"invalid syntax: {value!r}") from None
    if math.isinf(result) and not _INF_LITERAL.fullmatch(value):
        raise CoercionError("float64", f"value out of range: {value!r}")
    return result


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def cast_json(value: str) -> Any:
    """Decode one JSON document.

    ``NaN`` and ``Infinity`` are rejected; nesting deep enough to exhaust the
    decoder's recursion is a coercion error, not a crash.
    """
    try:
        return json.loads(value, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise CoercionError("json", e) from e


def cast_file(value: str) -> str:
    """Read the file named by *value* and return its UTF-8 text."""
    try:
        with open(value, "rb") as fh:
            data = fh.read()
    except OSError as e:
        raise CoercionError("file", f"failed loading file: {e}") from e
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CoercionError("file", f"file {value!r} contains invalid utf-8") from e


def cast_env(value: str) -> str:
    """Environment variable named by *value*, or ``""`` when unset."""
    return os.environ.get(value, "")


# ─────────────────────────────────────────────────────────────────────────────
# Registry
# ─────────────────────────────────────────────────────────────────────────────

BUILTIN_CASTERS: Mapping[str, Caster] = MappingProxyType({
    "string": cast_string,
    "bool": cast_bool,
    "int": cast_int,
    "int64": cast_int,
    "float": cast_float,
    "float64": cast_float,
    "json": cast_json,
    "file": cast_file,
    "env": cast_env,
})

# Shown in ``gott --help``.
CASTER_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    "bool": "boolean: 1, t, true / 0, f, false (any case)",
    "env": "string, read value from environment variable (chainable)",
    "file": "string, read value from utf-8 file (chainable)",
    "float": "float, base-10 floating point",
    "float64": "alias of float",
    "int": "int, base-10 signed 64-bit integer",
    "int64": "alias of int",
    "json": "any, decoded JSON document",
    "string": "string (chainable)",
})

"""Helper filters and globals available inside every template.

Exports
-------
default_helpers
    Returns ``(filters, globals)``; registered on the Jinja2 environment by
    ``build_default_renderer``.

make_regex_helpers
    Factory for the ``regex_*`` filters, bounded by a timeout and an allowed
    flags mask.

Built-in filters
----------------
* ``jmespath(expr)``                  – query a value with JMESPath
* ``regex_match(pattern, flags=0)``   – True if the whole string matches
* ``regex_search(pattern, flags=0)``  – first match or ``None``
* ``regex_findall(pattern, flags=0)`` – list of all matches
* ``regex_replace(pattern, repl, count=0, flags=0)``
* ``to_json(indent=None)``            – serialise to JSON text

Built-in globals
----------------
* ``env(name)``        – environment variable, ``""`` when unset
* ``from_json(text)``  – decode JSON text
* ``jmespath(data, expr)``

Built-in JMESPath functions
---------------------------
* ``add(a, b)`` – arithmetic addition
* ``subtract(a, b)`` – arithmetic subtraction

Example::

    {{ config | jmespath("servers[?enabled].name") | join(", ") }}
    {{ version | regex_replace("^v", "") }}
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, Dict, Tuple

import jmespath
import regex
from jmespath import functions as _jp_funcs

from .casters import cast_env

# IGNORECASE, MULTILINE, DOTALL, VERBOSE, ASCII
DEFAULT_ALLOWED_FLAGS = re.IGNORECASE | re.MULTILINE | re.DOTALL | re.VERBOSE | re.ASCII


# ─────────────────────────────────────────────────────────────────────────────
# JMESPath
# ─────────────────────────────────────────────────────────────────────────────


class _BuiltinJMESFunctions(_jp_funcs.Functions):
    """Custom JMESPath functions for template queries."""

    @_jp_funcs.signature({"types": ["number"]}, {"types": ["number"]})
    def _func_add(self, a: float, b: float) -> float:
        """Arithmetic addition: ``add(a, b)`` → ``a + b``."""
        return a + b

    @_jp_funcs.signature({"types": ["number"]}, {"types": ["number"]})
    def _func_subtract(self, a: float, b: float) -> float:
        """Arithmetic subtraction: ``subtract(a, b)`` → ``a - b``."""
        return a - b


JMES_OPTIONS = jmespath.Options(custom_functions=_BuiltinJMESFunctions())


def make_jmespath_helper(options: jmespath.Options = JMES_OPTIONS) -> Callable[[Any, str], Any]:
    def jmespath_query(data: Any, expression: str) -> Any:
        return jmespath.search(expression, data, options=options)

    return jmespath_query


# ─────────────────────────────────────────────────────────────────────────────
# Regular expressions
# ─────────────────────────────────────────────────────────────────────────────


def make_regex_helpers(
        timeout: float = 2.0,
        allowed_flags: int | None = None,
) -> Dict[str, Callable[..., Any]]:
    """Build the ``regex_*`` filters.

    Args:
        timeout: Timeout in seconds for each regex operation.
        allowed_flags: Bitmask of allowed flags.  ``None`` means
                       ``DEFAULT_ALLOWED_FLAGS``; ``-1`` allows every flag.

    Returns:
        ``{filter_name: callable}``.
    """
    if allowed_flags is None:
        allowed_flags = DEFAULT_ALLOWED_FLAGS
    elif allowed_flags == -1:
        allowed_flags = 0xFFFFFFFF

    def _check(name: str, string: Any, flags: int) -> None:
        if not isinstance(string, str):
            raise ValueError(f"{name} expects a string, got {type(string).__name__}")
        if flags & ~allowed_flags:
            raise ValueError(
                f"Regex flags {flags} contain disallowed flags. "
                f"Allowed flags bitmask: {allowed_flags}"
            )

    def _timed_out(name: str) -> TimeoutError:
        return TimeoutError(f"{name} exceeded timeout of {timeout}s")

    def regex_match(string: str, pattern: str, flags: int = 0) -> bool:
        _check("regex_match", string, flags)
        try:
            return regex.fullmatch(pattern, string, flags, timeout=timeout) is not None
        except TimeoutError:
            raise _timed_out("regex_match")

    def regex_search(string: str, pattern: str, flags: int = 0) -> str | None:
        _check("regex_search", string, flags)
        try:
            match = regex.search(pattern, string, flags, timeout=timeout)
        except TimeoutError:
            raise _timed_out("regex_search")
        return match.group(0) if match else None

    def regex_findall(string: str, pattern: str, flags: int = 0) -> list:
        _check("regex_findall", string, flags)
        try:
            return regex.findall(pattern, string, flags, timeout=timeout)
        except TimeoutError:
            raise _timed_out("regex_findall")

    def regex_replace(string: str, pattern: str, repl: str, count: int = 0, flags: int = 0) -> str:
        _check("regex_replace", string, flags)
        try:
            return regex.sub(pattern, repl, string, count=count, flags=flags, timeout=timeout)
        except TimeoutError:
            raise _timed_out("regex_replace")

    return {
        "regex_match": regex_match,
        "regex_search": regex_search,
        "regex_findall": regex_findall,
        "regex_replace": regex_replace,
    }


# ─────────────────────────────────────────────────────────────────────────────
# JSON
# ─────────────────────────────────────────────────────────────────────────────


def to_json(value: Any, indent: int | None = None) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)


def from_json(text: str) -> Any:
    return json.loads(text)


# ─────────────────────────────────────────────────────────────────────────────
# Assembly
# ─────────────────────────────────────────────────────────────────────────────


def default_helpers(
        *,
        regex_timeout: float = 2.0,
        regex_allowed_flags: int | None = None,
        jmes_options: jmespath.Options | None = None,
) -> Tuple[Dict[str, Callable[..., Any]], Dict[str, Callable[..., Any]]]:
    """Return ``(filters, globals)`` for a new environment."""
    query = make_jmespath_helper(jmes_options if jmes_options else JMES_OPTIONS)

    filters: Dict[str, Callable[..., Any]] = {
        "jmespath": query,
        "to_json": to_json,
    }
    filters.update(make_regex_helpers(regex_timeout, regex_allowed_flags))

    globals_: Dict[str, Callable[..., Any]] = {
        "env": cast_env,
        "from_json": from_json,
        "jmespath": query,
    }
    return filters, globals_


"""Renderer factory — the single place where all pieces are assembled.

``build_default_renderer`` is the recommended entry point for users who want
a ready Jinja2 environment without hand-wiring filters and globals.

Customisation points:

* **casters**          – type registry for ``-d`` definitions.
* **helpers**          – extra filters/globals, merged over the defaults.
* **regex_timeout**    – per-call limit for the ``regex_*`` filters.
* **strict_undefined** – fail on undefined variables instead of rendering "".
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

import jmespath
from jinja2 import Environment, StrictUndefined, Undefined

from .casters import BUILTIN_CASTERS, Caster
from .helpers import default_helpers
from .rendering import Renderer


def build_default_renderer(
        *,
        casters: Mapping[str, Caster] | None = None,
        filters: Mapping[str, Callable[..., Any]] | None = None,
        globals: Mapping[str, Any] | None = None,
        include_default_helpers: bool = True,
        regex_timeout: float = 2.0,
        regex_allowed_flags: int | None = None,
        jmes_options: jmespath.Options | None = None,
        strict_undefined: bool = False,
        trim_blocks: bool = False,
        lstrip_blocks: bool = False,
) -> Renderer:
    """Assemble a ``Renderer`` over a fresh ``jinja2.Environment``.

    What gets wired
    ---------------
    casters
        ``BUILTIN_CASTERS`` unless *casters* is given; exposed as
        ``Renderer.casters``.

    environment
        ``autoescape=False`` (text templates), ``keep_trailing_newline=True``,
        ``Undefined`` or ``StrictUndefined``.

    filters
        ``jmespath``, ``regex_match``, ``regex_search``, ``regex_findall``,
        ``regex_replace``, ``to_json`` (see ``gott.helpers``), then *filters*.

    globals
        ``env``, ``from_json``, ``jmespath``, then *globals*.

    Args:
        casters:                 Type registry for definitions.  ``None`` →
                                 ``BUILTIN_CASTERS``; a mapping replaces it.
        filters:                 Extra Jinja2 filters; override defaults by name.
        globals:                 Extra Jinja2 globals; override defaults by name.
        include_default_helpers: ``False`` → register only *filters*/*globals*.
        regex_timeout:           Seconds allowed per regex helper call.
        regex_allowed_flags:     Flag mask for regex helpers (``-1`` → all).
        jmes_options:            Custom JMESPath options.  ``None`` → built-in
                                 ``add``/``subtract`` functions.
        strict_undefined:        Raise on undefined variables.
        trim_blocks:             Jinja2 ``trim_blocks``.
        lstrip_blocks:           Jinja2 ``lstrip_blocks``.

    Returns:
        Ready ``Renderer``.

    Example::

        renderer = build_default_renderer()
        renderer.render("{{ name | upper }}", {"name": "gott"})
        # → "GOTT"
    """
    env = Environment(
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=trim_blocks,
        lstrip_blocks=lstrip_blocks,
        undefined=StrictUndefined if strict_undefined else Undefined,
    )

    if include_default_helpers:
        default_filters, default_globals = default_helpers(
            regex_timeout=regex_timeout,
            regex_allowed_flags=regex_allowed_flags,
            jmes_options=jmes_options,
        )
        env.filters.update(default_filters)
        env.globals.update(default_globals)

    if filters:
        env.filters.update(filters)
    if globals:
        env.globals.update(globals)

    return Renderer(env, casters if casters is not None else BUILTIN_CASTERS)

"""Jinja2 binding: compile template text and render it against a context.

Context keys become top-level template variables::

    gott -d Flag:bool=true <<< '{% if Flag %}YES{% else %}NO{% endif %}'
    → YES

Jinja2 errors are re-raised as ``TemplateParseError`` (while compiling) or
``TemplateExecutionError`` (while rendering), chained to the original.
"""

from __future__ import annotations

from typing import Any, Mapping

from jinja2 import Environment, Template, TemplateSyntaxError

from .casters import BUILTIN_CASTERS, Caster
from .core import TemplateExecutionError, TemplateParseError


class Renderer:
    """Thin wrapper around a configured ``jinja2.Environment``.

    Built by ``gott.factory.build_default_renderer``; construct directly only
    to supply a hand-made environment.

    ``casters`` is the type registry used to build contexts for this
    renderer (see ``gott.context.build_context``).
    """

    def __init__(
            self,
            environment: Environment,
            casters: Mapping[str, Caster] = BUILTIN_CASTERS,
    ) -> None:
        self.environment = environment
        self.casters = casters

    def compile(self, source: str, name: str = "main") -> Template:
        try:
            return self.environment.from_string(source)
        except TemplateSyntaxError as e:
            raise TemplateParseError(name, e.lineno, e.message or str(e)) from e

    def execute(self, template: Template, context: Mapping[str, Any], name: str = "main") -> str:
        try:
            return template.render(context)
        except Exception as e:
            raise TemplateExecutionError(name, f"{type(e).__name__}: {e}") from e

    def render(self, source: str, context: Mapping[str, Any], name: str = "main") -> str:
        """Compile *source* and render it with *context*."""
        return self.execute(self.compile(source, name), context, name)

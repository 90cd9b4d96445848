"""Build the template context from an ordered list of definitions."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping

import structlog

from .casters import BUILTIN_CASTERS, Caster
from .core import ContextBuildError, DefinitionError
from .definitions import apply_type_chain, split_definition

logger = structlog.get_logger()


def build_context(
        definitions: Iterable[str],
        casters: Mapping[str, Caster] = BUILTIN_CASTERS,
) -> Mapping[str, Any]:
    """Parse *definitions* in order and bind each one by name.

    Later definitions overwrite earlier ones with the same name.  The first
    failure aborts the build with a ``ContextBuildError`` naming the
    offending definition; nothing after it is parsed.

    Returns a read-only view of the context.
    """
    context: dict[str, Any] = {}
    for text in definitions:
        try:
            definition = split_definition(text)
            value = apply_type_chain(definition.types, definition.value, casters)
        except DefinitionError as e:
            raise ContextBuildError(text, e) from e

        if definition.name in context:
            logger.debug("context.overwrite", name=definition.name)
        context[definition.name] = value
        logger.debug(
            "context.bound",
            name=definition.name,
            types=list(definition.types),
            value_type=type(value).__name__,
        )
    return MappingProxyType(context)

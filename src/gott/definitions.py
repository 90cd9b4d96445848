"""Variable definition grammar: ``NAME[:TYPE[:TYPE...]]=VALUE``.

The type chain is read right to left: ``NAME:A:B=VALUE`` feeds ``VALUE`` to
``B``, then ``B``'s output to ``A``, then binds the result to ``NAME``::

    config:json:file=/etc/config.json   →  json(file("/etc/config.json"))
    IsRelease:bool:env=IS_RELEASE       →  bool(env("IS_RELEASE"))

Every caster after the first one applied must receive a string.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence, Tuple

from .casters import BUILTIN_CASTERS, Caster
from .core import (
    ChainTypeMismatchError,
    CoercionError,
    Definition,
    DefinitionError,
    MalformedDefinitionError,
    UnknownTypeError,
)


def split_definition(text: str) -> Definition:
    """Split *text* on the first ``=``, then the left side on ``:``.

    Raises:
        MalformedDefinitionError: no ``=`` in *text*.
    """
    left, sep, value = text.partition("=")
    if not sep:
        raise MalformedDefinitionError(text)
    name, *types = left.split(":")
    return Definition(name=name, types=tuple(types), value=value, text=text)


def apply_type_chain(
        types: Sequence[str],
        value: str,
        casters: Mapping[str, Caster] = BUILTIN_CASTERS,
) -> Any:
    """Run *value* through *types* from last to first.

    Each caster is looked up and called exactly once.  A caster is looked up
    before its input is checked, so an unknown type wins over a mismatch.
    An empty *types* returns *value* unchanged.  Anything a caster raises
    that is not a ``DefinitionError`` is wrapped in ``CoercionError``.
    """
    current: Any = value
    for step, type_name in enumerate(reversed(types)):
        caster = casters.get(type_name)
        if caster is None:
            raise UnknownTypeError(type_name)
        if step != 0 and not isinstance(current, str):
            raise ChainTypeMismatchError(type_name, current)
        try:
            current = caster(current)
        except DefinitionError:
            raise
        except Exception as e:
            raise CoercionError(type_name, e) from e
    return current


def parse_definition(
        text: str,
        casters: Mapping[str, Caster] = BUILTIN_CASTERS,
) -> Tuple[str, Any]:
    """Parse one definition into ``(name, value)``.

    Examples::

        parse_definition("name=John")            → ("name", "John")
        parse_definition("x=a=b")                → ("x", "a=b")
        parse_definition("debug:bool=false")     → ("debug", False)
        parse_definition("a:int:string=5")       → ("a", 5)
        parse_definition("a:string:int=5")       → ChainTypeMismatchError
    """
    definition = split_definition(text)
    return definition.name, apply_type_chain(definition.types, definition.value, casters)

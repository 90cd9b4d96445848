"""Core types: the error hierarchy and the parsed ``Definition`` record.

Nothing here depends on a concrete implementation.  Coercion functions live
in ``casters``, the grammar in ``definitions``, and the Jinja2 binding in
``rendering``.

Processing flow (``gott.cli.main`` entry point)::

    -d definitions (raw strings)
      │
      ▼
    build_context(definitions)                ← context.py
      └─ parse_definition(text)               ← definitions.py
           └─ BUILTIN_CASTERS[type](value)    ← casters.py, right to left
      │
      ▼
    Renderer.render(template_text, context)   ← rendering.py (Jinja2)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────


class GottError(Exception):
    """Base class for every failure the CLI reports."""


class DefinitionError(GottError):
    """A single ``NAME[:TYPE[:TYPE]]=VALUE`` definition could not be parsed."""


class MalformedDefinitionError(DefinitionError):
    """The definition has no ``=`` separating name and types from the value."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__("variable definition format is: NAME[:TYPE[:TYPE]]=VALUE")


class UnknownTypeError(DefinitionError):
    """A type segment does not name a registered caster."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"unsupported type: {type_name!r}")


class ChainTypeMismatchError(DefinitionError):
    """A chained caster received a non-string intermediate value."""

    def __init__(self, type_name: str, value: Any) -> None:
        self.type_name = type_name
        self.value_type = type(value).__name__
        super().__init__(
            f"when chaining types, output of the preceding type must be a string, "
            f"but it is {self.value_type} (feeding {type_name!r})"
        )


class CoercionError(DefinitionError):
    """A caster rejected its input."""

    def __init__(self, type_name: str, cause: Any) -> None:
        self.type_name = type_name
        self.cause = cause
        super().__init__(f"{type_name}: {cause}")


class ContextBuildError(GottError):
    """Wraps a ``DefinitionError`` together with the offending definition text."""

    def __init__(self, definition: str, error: DefinitionError) -> None:
        self.definition = definition
        self.error = error
        super().__init__(f"error parsing variable definition {definition!r}: {error}")


class TemplateInputError(GottError):
    """The template source could not be read or is not valid UTF-8."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(message)


class OutputError(GottError):
    """The rendered output could not be written."""

    def __init__(self, destination: str, message: str) -> None:
        self.destination = destination
        super().__init__(message)


class TemplateParseError(GottError):
    """Jinja2 rejected the template text."""

    def __init__(self, name: str, lineno: int | None, message: str) -> None:
        self.name = name
        self.lineno = lineno
        where = f"{name}:{lineno}" if lineno is not None else name
        super().__init__(f"error parsing template {where}: {message}")


class TemplateExecutionError(GottError):
    """The template raised while being rendered."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"failed executing template {name}: {message}")


# ─────────────────────────────────────────────────────────────────────────────
# Definition
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Definition:
    """One ``-d`` argument split into its parts.

    Attributes:
        name:  Variable name (may be empty; not validated).
        types: Type chain in written order, i.e. outermost first.  Applied
               right to left.
        value: Raw value text (everything after the first ``=``).
        text:  The original definition string.
    """

    name: str
    types: Tuple[str, ...]
    value: str
    text: str

    @property
    def is_typed(self) -> bool:
        return bool(self.types)

"""gott — render Jinja2 templates with typed ``NAME[:TYPE[:TYPE]]=VALUE`` variables."""

from .casters import BUILTIN_CASTERS, Caster
from .context import build_context
from .core import (
    ChainTypeMismatchError,
    CoercionError,
    ContextBuildError,
    Definition,
    DefinitionError,
    GottError,
    MalformedDefinitionError,
    OutputError,
    TemplateExecutionError,
    TemplateInputError,
    TemplateParseError,
    UnknownTypeError,
)
from .definitions import apply_type_chain, parse_definition, split_definition
from .factory import build_default_renderer
from .rendering import Renderer

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Casters
    "BUILTIN_CASTERS",
    "Caster",
    # Definitions / context
    "Definition",
    "split_definition",
    "apply_type_chain",
    "parse_definition",
    "build_context",
    # Rendering
    "Renderer",
    "build_default_renderer",
    # Errors
    "GottError",
    "DefinitionError",
    "MalformedDefinitionError",
    "UnknownTypeError",
    "ChainTypeMismatchError",
    "CoercionError",
    "ContextBuildError",
    "TemplateInputError",
    "OutputError",
    "TemplateParseError",
    "TemplateExecutionError",
]

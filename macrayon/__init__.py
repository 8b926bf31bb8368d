"""
Macrayon
========

A text-substitution preprocessor.  Named, parameterised templates are read
from a definitions file and every ``##name#arg##`` call found in a source
file is replaced by the template with its arguments substituted.

Quick start
-----------
>>> from macrayon import load_definitions, expand
>>> table = load_definitions("##greet#name##Hello, name!##")
>>> expand(table, "##greet#World##")
'Hello, World!'

File-level use goes through :class:`MacroTranslation`:

>>> from macrayon import MacroTranslation
>>> translation = MacroTranslation(macros_path="MACROS")
>>> results = translation.translate_tree("src")   # doctest: +SKIP
"""

from .errors import (
    ArgumentCountMismatch,
    MacroError,
    MalformedDefinition,
    MalformedInvocation,
    UnknownMacro,
)
from .models import MacroDefinition, MacroTable, TranslationResult
from .passes.call_expander import CallExpansionPass, expand, substitute
from .passes.definition_loader import DefinitionLoadPass, load_definitions
from .pipeline.translation import MacroTranslation

__version__ = "0.1.0"
__all__ = [
    "ArgumentCountMismatch",
    "MacroError",
    "MalformedDefinition",
    "MalformedInvocation",
    "UnknownMacro",
    "MacroDefinition",
    "MacroTable",
    "TranslationResult",
    "CallExpansionPass",
    "DefinitionLoadPass",
    "MacroTranslation",
    "expand",
    "load_definitions",
    "substitute",
]

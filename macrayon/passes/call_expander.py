"""
CallExpansionPass
=================

Replaces macro calls in a source document with their expanded bodies.

Algorithm:

1.  Text outside calls is copied through unchanged and in order.
2.  Each call ``##name#arg1#arg2##`` is resolved against the macro table.
    An unknown name or a wrong number of arguments aborts the document.
3.  The body is expanded by replacing, in parameter order, every occurrence
    of each parameter's literal text with the matching argument.  Each
    replacement runs over the result of the previous ones, so a parameter
    that is a substring of another parameter (or of an earlier argument)
    can match inside text that was already substituted.
4.  The expansion is emitted as-is.  It is never scanned again, so calls
    appearing inside a body are left literally in the output.

The whole document is expanded in memory; no output exists until every call
in it has been expanded successfully.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from ..errors import ArgumentCountMismatch, MalformedInvocation, UnknownMacro
from ..models import MacroDefinition, MacroTable
from ..scanning.delimiters import DEFAULT_MARK, DelimiterScanner

logger = logging.getLogger(__name__)


def substitute(definition: MacroDefinition, args: Sequence[str]) -> str:
    """Expand *definition* with *args* by sequential literal replacement."""
    body = definition.body
    for param, arg in zip(definition.params, args):
        body = body.replace(param, arg)
    return body


class CallExpansionPass:
    """
    Expands macro calls against a fixed macro table.

    Parameters
    ----------
    table:
        Definitions produced by the definition loader.  Never modified.
    mark:
        Delimiter character; must match the one used for the definitions.
    """

    def __init__(self, table: MacroTable, mark: str = DEFAULT_MARK) -> None:
        self._table = table
        self._scanner = DelimiterScanner(mark)

    def run(self, text: str, source_name: str = "<inline>") -> str:
        """
        Return *text* with every macro call replaced by its expansion.

        Raises
        ------
        MalformedInvocation
            A call is cut short by the end of the document.
        UnknownMacro
            A call names a macro missing from the table.
        ArgumentCountMismatch
            A call passes a different number of arguments than the
            definition has parameters.
        """
        out: List[str] = []
        calls = 0
        for literal, match in self._scanner.invocations(text, MalformedInvocation, source_name):
            out.append(literal)
            if match is None:
                break

            definition = self._table.get(match.name)
            if definition is None:
                raise UnknownMacro(
                    match.name, text=text, offset=match.start, source_name=source_name
                )
            if len(match.items) != len(definition.params):
                raise ArgumentCountMismatch(
                    match.name,
                    expected=len(definition.params),
                    actual=len(match.items),
                    text=text,
                    offset=match.start,
                    source_name=source_name,
                )
            out.append(substitute(definition, match.items))
            calls += 1

        logger.debug("Expanded %d call(s) in %s", calls, source_name)
        return "".join(out)


def expand(
    table: MacroTable,
    text: str,
    source_name: str = "<inline>",
    mark: str = DEFAULT_MARK,
) -> str:
    """Shortcut for ``CallExpansionPass(table, mark).run(text, source_name)``."""
    return CallExpansionPass(table, mark).run(text, source_name)

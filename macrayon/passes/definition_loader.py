"""
DefinitionLoadPass
==================

Builds a :class:`~macrayon.models.MacroTable` from a definitions document.

Definitions document format::

    Any text before the first definition is ignored.

    ##greet#name##
        Hello, name!
    ##

    ##shout##LOUD##

Text between definitions is skipped and never echoed.  When a name is
defined twice the later definition replaces the earlier one; a warning is
logged so the overwrite is visible.
"""
from __future__ import annotations

import logging
from typing import Dict

from ..errors import MalformedDefinition
from ..models import MacroDefinition, MacroTable
from ..scanning.delimiters import DEFAULT_MARK, DelimiterScanner

logger = logging.getLogger(__name__)


class DefinitionLoadPass:
    """Parses macro definitions out of a document."""

    def __init__(self, mark: str = DEFAULT_MARK) -> None:
        self._scanner = DelimiterScanner(mark)

    def run(self, text: str, source_name: str = "<inline>") -> MacroTable:
        """
        Load every definition in *text*.

        Parameters
        ----------
        text:
            Full contents of the definitions document.
        source_name:
            Label used in error messages and log records.

        Returns
        -------
        MacroTable
            Read-only mapping from macro name to definition.

        Raises
        ------
        MalformedDefinition
            A definition is cut short by the end of the document.
        """
        definitions: Dict[str, MacroDefinition] = {}
        for _, match in self._scanner.definitions(text, MalformedDefinition, source_name):
            if match is None:
                break
            if match.name in definitions:
                logger.warning(
                    "%s: macro %r redefined at offset %d; the earlier definition is replaced",
                    source_name,
                    match.name,
                    match.start,
                )
            definitions[match.name] = MacroDefinition(match.name, match.items, match.body)

        logger.debug("Loaded %d macro(s) from %s", len(definitions), source_name)
        return MacroTable(definitions)


def load_definitions(
    text: str,
    source_name: str = "<inline>",
    mark: str = DEFAULT_MARK,
) -> MacroTable:
    """Shortcut for ``DefinitionLoadPass(mark).run(text, source_name)``."""
    return DefinitionLoadPass(mark).run(text, source_name)

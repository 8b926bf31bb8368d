"""
DelimiterScanner
================

Recognises macro definitions and macro calls in otherwise opaque text.

The grammar uses a single *mark* character (``#`` by default) and the
*double mark* made of two of them::

    Definition := "##" Name ("#" Param)* "##" Body "##"
    Invocation := "##" Name ("#" Arg)* "##"

Names, parameters and arguments are trimmed and may not contain a mark.  A
body is trimmed and ends at the first double mark after it starts; it may
contain single marks.  There is no escaping.

After the name the scanner repeatedly asks whether another parameter follows
or the list is closed.  It searches for the next double mark and the next
single mark independently: when both land on the same offset the next mark
is a double mark and the list is closed, otherwise the single mark comes
first and bounds one more item.  A name followed directly by a double mark
therefore has no parameters.

The scanner is a small state machine::

    SEEK_MACRO_START -> READ_NAME -> READ_PARAM_OR_BODY -> READ_BODY
                                  -> READ_ARG_OR_END

and is shared by :class:`~macrayon.passes.definition_loader.DefinitionLoadPass`
and :class:`~macrayon.passes.call_expander.CallExpansionPass`.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Type

from ..errors import MacroError

logger = logging.getLogger(__name__)

DEFAULT_MARK = "#"


class ScanState(enum.Enum):
    SEEK_MACRO_START = "seek-macro-start"
    READ_NAME = "read-name"
    READ_PARAM_OR_BODY = "read-param-or-body"
    READ_ARG_OR_END = "read-arg-or-end"
    READ_BODY = "read-body"


@dataclass(frozen=True)
class ScanCursor:
    """Read-only view of *text* from offset *pos* onwards."""

    text: str
    pos: int = 0

    def find(self, token: str) -> int:
        """Absolute offset of the next *token* at or after the cursor, or -1."""
        return self.text.find(token, self.pos)

    def moved_to(self, pos: int) -> ScanCursor:
        return ScanCursor(self.text, pos)

    def upto(self, pos: int) -> str:
        return self.text[self.pos:pos]

    def rest(self) -> str:
        return self.text[self.pos:]


@dataclass(frozen=True)
class MacroMatch:
    """
    One definition or invocation found by the scanner.

    ``items`` holds the parameters of a definition or the arguments of an
    invocation.  ``body`` is ``None`` for invocations.
    """

    name: str
    items: Tuple[str, ...]
    body: Optional[str]
    start: int
    end: int


class DelimiterScanner:
    """
    Finds definitions or invocations in a document.

    Parameters
    ----------
    mark:
        The single delimiter character.  The double mark is two of them.
    """

    def __init__(self, mark: str = DEFAULT_MARK) -> None:
        if len(mark) != 1:
            raise ValueError(f"mark must be a single character, got {mark!r}")
        self.mark = mark
        self.double_mark = mark * 2

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def definitions(
        self,
        text: str,
        error: Type[MacroError],
        source_name: str = "<inline>",
    ) -> Iterator[Tuple[str, Optional[MacroMatch]]]:
        """Scan *text* for definitions (name, parameters and a body)."""
        return self._scan(text, ScanState.READ_PARAM_OR_BODY, error, source_name)

    def invocations(
        self,
        text: str,
        error: Type[MacroError],
        source_name: str = "<inline>",
    ) -> Iterator[Tuple[str, Optional[MacroMatch]]]:
        """Scan *text* for invocations (name and arguments, no body)."""
        return self._scan(text, ScanState.READ_ARG_OR_END, error, source_name)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _scan(
        self,
        text: str,
        item_state: ScanState,
        error: Type[MacroError],
        source_name: str,
    ) -> Iterator[Tuple[str, Optional[MacroMatch]]]:
        """
        Yield ``(literal, match)`` pairs in document order.

        *literal* is the text between the previous match (or the start of the
        document) and *match*.  The last pair carries the trailing text and
        ``None``.  A missing mark raises *error* pointing at the opening
        double mark of the macro being read.
        """
        cursor = ScanCursor(text)
        state = ScanState.SEEK_MACRO_START
        start = 0
        name = ""
        items: List[str] = []

        def require(token: str) -> int:
            found = cursor.find(token)
            if found < 0:
                raise error(
                    f"expected {token!r} before end of text",
                    text=text,
                    offset=start,
                    source_name=source_name,
                )
            return found

        while True:
            if state is ScanState.SEEK_MACRO_START:
                start = cursor.find(self.double_mark)
                if start < 0:
                    yield cursor.rest(), None
                    return
                literal = cursor.upto(start)
                cursor = cursor.moved_to(start + 2)
                items = []
                state = ScanState.READ_NAME

            elif state is ScanState.READ_NAME:
                # The name runs up to the next mark; the cursor stays put so
                # the item search below sees that mark.
                name = cursor.upto(require(self.mark)).strip()
                state = item_state

            elif state in (ScanState.READ_PARAM_OR_BODY, ScanState.READ_ARG_OR_END):
                double_at = require(self.double_mark)
                single_at = require(self.mark)
                if double_at == single_at:
                    cursor = cursor.moved_to(double_at + 2)
                    if state is ScanState.READ_ARG_OR_END:
                        logger.debug("Call %r%s at offset %d", name, items, start)
                        yield literal, MacroMatch(name, tuple(items), None, start, cursor.pos)
                        state = ScanState.SEEK_MACRO_START
                    else:
                        state = ScanState.READ_BODY
                else:
                    cursor = cursor.moved_to(single_at + 1)
                    item_end = require(self.mark)
                    items.append(cursor.upto(item_end).strip())
                    cursor = cursor.moved_to(item_end)

            elif state is ScanState.READ_BODY:
                body_end = require(self.double_mark)
                body = cursor.upto(body_end).strip()
                cursor = cursor.moved_to(body_end + 2)
                logger.debug("Definition %r%s at offset %d", name, items, start)
                yield literal, MacroMatch(name, tuple(items), body, start, cursor.pos)
                state = ScanState.SEEK_MACRO_START

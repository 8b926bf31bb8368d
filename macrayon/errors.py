"""
Error types raised by the definition loader and the call expander.

Every error is fatal to the document being processed.  When the scanner knows
where the offending definition or invocation starts, the error carries the
character offset and the matching line / column so the message can point at it.
"""
from __future__ import annotations

from typing import Optional


def line_and_column(text: str, offset: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of *offset* within *text*."""
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


class MacroError(Exception):
    """Base class for every macro processing failure."""

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        offset: Optional[int] = None,
        source_name: str = "<inline>",
    ) -> None:
        self.message = message
        self.offset = offset
        self.source_name = source_name
        if text is not None and offset is not None:
            self.line, self.column = line_and_column(text, offset)
        else:
            self.line = self.column = None
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.source_name}: {self.message}"
        return f"{self.source_name}:{self.line}:{self.column}: {self.message}"


class MalformedDefinition(MacroError):
    """A definition ran out of text before a required mark."""


class MalformedInvocation(MacroError):
    """An invocation ran out of text before a required mark."""


class UnknownMacro(MacroError):
    """An invocation names a macro that was never defined."""

    def __init__(self, name: str, **kwargs) -> None:
        self.name = name
        super().__init__(f"unknown macro {name!r}", **kwargs)


class ArgumentCountMismatch(MacroError):
    """An invocation passes the wrong number of arguments."""

    def __init__(self, name: str, expected: int, actual: int, **kwargs) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"macro {name!r} takes {expected} argument"
            f"{'' if expected == 1 else 's'} but {actual} "
            f"{'was' if actual == 1 else 'were'} given",
            **kwargs,
        )


class UndecodableSource(MacroError):
    """A document could not be decoded with the configured encoding."""

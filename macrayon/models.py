"""
Core data models for the macro preprocessor.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

from .errors import MacroError


# ---------------------------------------------------------------------------
# Macro definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MacroDefinition:
    """A named, parameterised text template."""

    name: str
    params: Tuple[str, ...]
    body: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "params": list(self.params),
            "body": self.body,
        }


class MacroTable(Mapping):
    """
    Read-only mapping from macro name to :class:`MacroDefinition`.

    Built once by the definition loader and shared, unchanged, by every
    expansion that uses it.
    """

    def __init__(self, definitions: Optional[Dict[str, MacroDefinition]] = None) -> None:
        self._definitions: Dict[str, MacroDefinition] = dict(definitions or {})

    def __getitem__(self, name: str) -> MacroDefinition:
        return self._definitions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"MacroTable({sorted(self._definitions)})"

    def to_dict(self) -> Dict[str, Any]:
        return {name: d.to_dict() for name, d in self._definitions.items()}


# ---------------------------------------------------------------------------
# Translation result – one per source file handled by the pipeline
# ---------------------------------------------------------------------------


@dataclass
class TranslationResult:
    """Outcome of translating one source file into its target file."""

    source: str
    target: str
    error: Optional[MacroError] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "ok": self.ok,
            "error": str(self.error) if self.error else None,
        }

    def __str__(self) -> str:
        if self.ok:
            return f"{self.source} -> {self.target}"
        return f"{self.source} [FAILED] {self.error}"

"""
MacroTranslation
================

File-level driver around the definition loader and the call expander.

Loads one definitions file, then turns macro sources into their expanded
targets.  A source is recognised by its suffix (``.macry`` by default) and
written next to itself with the target suffix (``.cry`` by default), so
``src/app.macry`` becomes ``src/app.cry``.

Every source is expanded against the same read-only
:class:`~macrayon.models.MacroTable`.  A target is written only once its
source expanded without error.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..errors import MacroError, UndecodableSource
from ..models import MacroTable, TranslationResult
from ..passes.call_expander import CallExpansionPass
from ..passes.definition_loader import DefinitionLoadPass
from ..scanning.delimiters import DEFAULT_MARK

logger = logging.getLogger(__name__)

DEFAULT_MACROS_FILE = "MACROS"
DEFAULT_SOURCE_SUFFIX = ".macry"
DEFAULT_TARGET_SUFFIX = ".cry"


def _check_suffix(option: str, suffix: str) -> str:
    if not suffix.startswith(".") or suffix == "." or "/" in suffix or "\\" in suffix:
        raise ValueError(f"{option} must look like '.ext', got {suffix!r}")
    return suffix


class MacroTranslation:
    """
    High-level facade for macro expansion over files.

    Parameters
    ----------
    macros_path:
        Definitions file, loaded once on first use.
    source_suffix:
        Suffix of the files :meth:`translate_tree` picks up.
    target_suffix:
        Suffix that replaces *source_suffix* on the written file.
    mark:
        Delimiter character of the macro grammar.
    encoding:
        Encoding used to read and write every file.  Line endings are kept
        exactly as they are in the file.
    """

    def __init__(
        self,
        macros_path: str = DEFAULT_MACROS_FILE,
        source_suffix: str = DEFAULT_SOURCE_SUFFIX,
        target_suffix: str = DEFAULT_TARGET_SUFFIX,
        mark: str = DEFAULT_MARK,
        encoding: str = "utf-8",
    ) -> None:
        self.macros_path = macros_path
        self.source_suffix = _check_suffix("source suffix", source_suffix)
        self.target_suffix = _check_suffix("target suffix", target_suffix)
        self.mark = mark
        self.encoding = encoding
        self._loader = DefinitionLoadPass(mark)
        self._table: Optional[MacroTable] = None
        #: Populated by :meth:`translate_tree` when ``keep_going`` is set –
        #: one entry for every source that failed to expand.
        self.failures: List[TranslationResult] = []

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    def load(self) -> MacroTable:
        """Read and parse the definitions file, replacing any cached table."""
        path = Path(self.macros_path)
        logger.info("Loading macros from %s", path)
        text = self._read(path)
        self._table = self._loader.run(text, source_name=str(path))
        return self._table

    def _read(self, path: Path) -> str:
        try:
            with path.open(encoding=self.encoding, newline="") as fh:
                return fh.read()
        except UnicodeDecodeError as exc:
            raise UndecodableSource(
                f"not valid {self.encoding} (byte {exc.start})",
                source_name=str(path),
            ) from exc

    @property
    def table(self) -> MacroTable:
        if self._table is None:
            return self.load()
        return self._table

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate_text(self, text: str, source_name: str = "<inline>") -> str:
        """Expand every macro call in *text*."""
        return CallExpansionPass(self.table, self.mark).run(text, source_name)

    def target_for(self, source: Path) -> Path:
        return source.with_suffix(self.target_suffix)

    def translate_file(
        self,
        source: str,
        target: Optional[str] = None,
    ) -> TranslationResult:
        """
        Expand *source* and write the result to *target*.

        *target* defaults to *source* with the target suffix.  A
        :class:`~macrayon.errors.MacroError` propagates and leaves *target*
        untouched.
        """
        source_path = Path(source)
        target_path = Path(target) if target else self.target_for(source_path)
        logger.info("Transforming %s to %s.", source_path, target_path)

        text = self._read(source_path)
        expanded = self.translate_text(text, source_name=str(source_path))
        with target_path.open("w", encoding=self.encoding, newline="") as fh:
            fh.write(expanded)
        return TranslationResult(source=str(source_path), target=str(target_path))

    def discover(self, root: str = ".") -> List[Tuple[Path, Path]]:
        """Return ``(source, target)`` pairs for every macro source under *root*."""
        root_path = Path(root)
        if not root_path.is_dir():
            logger.warning("Not a directory: %s", root_path)
            return []
        return [
            (path, self.target_for(path))
            for path in sorted(root_path.rglob(f"*{self.source_suffix}"))
            if path.is_file() and path.suffix == self.source_suffix
        ]

    def translate_tree(
        self,
        root: str = ".",
        keep_going: bool = False,
        progress: Optional[Callable[[Path, Path], None]] = None,
    ) -> List[TranslationResult]:
        """
        Translate every macro source found under *root*.

        Parameters
        ----------
        root:
            Directory searched recursively.
        keep_going:
            When false the first :class:`~macrayon.errors.MacroError` is
            raised.  When true the failure is recorded in :attr:`failures`
            and the remaining sources are still translated.
        progress:
            Called with ``(source, target)`` before each source is translated.

        Returns
        -------
        List[TranslationResult]
            One entry per discovered source, in path order.
        """
        self.failures = []
        table = self.table
        logger.debug("Translating tree %s with %d macro(s)", root, len(table))

        results: List[TranslationResult] = []
        for source, target in self.discover(root):
            if progress is not None:
                progress(source, target)
            try:
                result = self.translate_file(str(source), str(target))
            except MacroError as exc:
                if not keep_going:
                    raise
                result = TranslationResult(str(source), str(target), error=exc)
                self.failures.append(result)
                logger.warning("Skipping %s: %s", source, exc)
            results.append(result)

        if self.failures:
            logger.warning(
                "%d of %d file%s failed to expand",
                len(self.failures),
                len(results),
                "" if len(results) == 1 else "s",
            )
        return results

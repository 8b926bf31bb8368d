"""
Macrayon – command-line interface
=================================

Usage
-----
::

    python -m macrayon.cli [MACROS SOURCE TARGET] [OPTIONS]

With no positional arguments the definitions are read from ``--macros``
(default ``MACROS``) and every ``*.macry`` file under ``--root`` is expanded
into a ``*.cry`` file beside it.  With three positional arguments one source
file is expanded into one target file.

Options
-------
--macros, -m          Definitions file for tree mode (default: MACROS).
--root, -r            Directory searched in tree mode (default: .).
--source-suffix       Suffix of macro sources (default: .macry).
--target-suffix       Suffix of expanded files (default: .cry).
--mark                Delimiter character (default: #).
--keep-going, -k      In tree mode, continue past files that fail.
--list-macros         Print the loaded definitions instead of expanding.
--format, -f          Output format for --list-macros: json or text.
--verbose, -v         Enable DEBUG logging.

Examples
--------
::

    python -m macrayon.cli
    python -m macrayon.cli -m defs/MACROS -r src --keep-going
    python -m macrayon.cli MACROS main.macry main.cry
    python -m macrayon.cli -m MACROS --list-macros -f text
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from .errors import MacroError
from .models import MacroTable
from .pipeline.translation import (
    DEFAULT_MACROS_FILE,
    DEFAULT_SOURCE_SUFFIX,
    DEFAULT_TARGET_SUFFIX,
    MacroTranslation,
)
from .scanning.delimiters import DEFAULT_MARK

USAGE = "macrayon [<macros file> <macrayon source> <crayon source>]"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="macrayon",
        usage=USAGE,
        description="Macrayon – expand ##macro## calls in source files",
    )
    p.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Either nothing (tree mode) or MACROS SOURCE TARGET",
    )
    p.add_argument(
        "--macros", "-m",
        default=DEFAULT_MACROS_FILE,
        metavar="FILE",
        help="Definitions file used in tree mode (default: MACROS)",
    )
    p.add_argument(
        "--root", "-r",
        default=".",
        metavar="DIR",
        help="Directory searched recursively in tree mode (default: .)",
    )
    p.add_argument(
        "--source-suffix",
        default=DEFAULT_SOURCE_SUFFIX,
        metavar="EXT",
        help="Suffix of macro source files (default: .macry)",
    )
    p.add_argument(
        "--target-suffix",
        default=DEFAULT_TARGET_SUFFIX,
        metavar="EXT",
        help="Suffix given to expanded files (default: .cry)",
    )
    p.add_argument(
        "--mark",
        default=DEFAULT_MARK,
        metavar="CHAR",
        help="Delimiter character of the macro grammar (default: #)",
    )
    p.add_argument(
        "--keep-going", "-k",
        action="store_true",
        help="In tree mode, report failing files and continue with the rest",
    )
    p.add_argument(
        "--list-macros",
        action="store_true",
        help="Print the loaded definitions instead of expanding anything",
    )
    p.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="json",
        help="Output format for --list-macros (default: json)",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def _format_text(table: MacroTable) -> str:
    lines: list[str] = []
    for name in sorted(table):
        definition = table[name]
        params = ", ".join(definition.params) or "(none)"
        lines.append(f"\n{'─'*60}\n  Macro : {name}\n  Params: {params}")
        for body_line in definition.body.splitlines():
            lines.append(f"    {body_line}")
    return "\n".join(lines)


def _report_progress(source: object, target: object) -> None:
    print(f"Transforming {source} to {target}.", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if len(args.files) not in (0, 3):
        print(f"Usage: {USAGE}", file=sys.stderr)
        return 2

    macros_path = args.files[0] if args.files else args.macros
    try:
        translation = MacroTranslation(
            macros_path=macros_path,
            source_suffix=args.source_suffix,
            target_suffix=args.target_suffix,
            mark=args.mark,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        # ------------------------------------------------------------------
        # Definition listing
        # ------------------------------------------------------------------
        if args.list_macros:
            table = translation.load()
            if args.format == "json":
                print(json.dumps(table.to_dict(), indent=2))
            else:
                print(_format_text(table))
            return 0

        # ------------------------------------------------------------------
        # Single-file mode
        # ------------------------------------------------------------------
        if args.files:
            _, source, target = args.files
            _report_progress(source, target)
            translation.translate_file(source, target)
            return 0

        # ------------------------------------------------------------------
        # Tree mode
        # ------------------------------------------------------------------
        translation.translate_tree(
            args.root,
            keep_going=args.keep_going,
            progress=_report_progress,
        )
    except (MacroError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if translation.failures:
        print(
            f"\nWARNING: {len(translation.failures)} file"
            f"{'' if len(translation.failures) == 1 else 's'} failed to expand:",
            file=sys.stderr,
        )
        for failure in translation.failures:
            print(f"  [FAILED] {failure.source}: {failure.error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

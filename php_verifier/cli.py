from __future__ import annotations
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

import colorama

from .policy import exit_code
from .report import render_report
from .verifier import verify

def _should_color(mode: str) -> bool:
    """Decide if we should emit ANSI colors."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    # auto
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False

def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="PHP project modernization verifier")
    ap.add_argument("path", nargs="?", type=Path, default=Path("."),
                    help="Project directory to verify (default: current directory)")
    ap.add_argument("--color", choices=["auto", "always", "never"], default="auto",
                    help="Colorize output (default: auto)")
    ap.add_argument("--skip-analyzer", action="store_true",
                    help="Do not run vendor/bin/phpstan even if installed")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    color_enabled = _should_color(args.color)
    if color_enabled:
        colorama.just_fix_windows_console()

    report = verify(args.path, skip_analyzer=args.skip_analyzer)
    sys.stdout.write(render_report(report, color=color_enabled))
    return exit_code(report.error_count, report.warning_count)

if __name__ == "__main__":
    raise SystemExit(main())

"""
Command-line driver: parse a JSON document and pretty-print it.

Reads the whole document from standard input (or a file), prints
``ERROR:<line>: <message>`` when it is malformed and the tab-indented tree
otherwise. The exit status is 0 in both cases.
"""

import argparse
import logging
import sys
from typing import Callable, Optional, TextIO, Union

from .core.engine import Parser
from .core.interfaces import EventRecorder
from .utils.config import ParseConfig, ParseLimits
from .utils.printer import dump_value, format_string


class _ReportingRecorder(EventRecorder):
    def __init__(self, report: Callable[[int, str], None]) -> None:
        super().__init__()
        self.report = report

    def on_error(self, line: int, message: str) -> None:
        self.report(line, message)


def _print_events(recorder: EventRecorder, out: TextIO) -> None:
    for name, args in recorder.events:
        if not args:
            out.write(f"{name}\n")
        elif isinstance(args[0], str):
            out.write(f"{name} {format_string(args[0])}\n")
        elif isinstance(args[0], bool):
            out.write(f"{name} {'true' if args[0] else 'false'}\n")
        else:
            out.write(f"{name} {args[0]:f}\n")


def _cli(argv: list[str], stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="jsonsax", description="Parse a JSON document and pretty-print it"
    )
    ap.add_argument("file", nargs="?", help="JSON file to parse (default: standard input)")
    ap.add_argument("--max-depth", type=int, default=None, help="maximum nesting depth")
    ap.add_argument("--events", action="store_true", help="print the SAX event stream instead")
    ap.add_argument("--verbose", action="store_true", help="log parser activity to stderr")
    args = ap.parse_args(argv)

    stdin = stdin or sys.stdin
    out = stdout or sys.stdout

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if args.file:
        with open(args.file, "rb") as fp:
            data: Union[str, bytes] = fp.read()
    else:
        # Raw bytes where available so invalid UTF-8 is reported as a parse error.
        data = getattr(stdin, "buffer", stdin).read()

    config = ParseConfig()
    if args.max_depth is not None:
        try:
            config.limits = ParseLimits(max_nesting_depth=args.max_depth)
        except ValueError as exc:
            ap.error(str(exc))

    def report(line: int, message: str) -> None:
        out.write(f"ERROR:{line}: {message}\n")

    with Parser(config) as parser:
        if args.events:
            recorder = _ReportingRecorder(report)
            if parser.parse_events(data, recorder):
                _print_events(recorder, out)
            return 0

        value = parser.parse_tree(data, report)
        if value is not None:
            dump_value(value, out)
            out.write("\n")
    return 0


def main() -> None:
    """Console-script entry point."""
    sys.exit(_cli(sys.argv[1:]))

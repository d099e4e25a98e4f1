"""Command-line entry point: extract key=value records from a log stream.

Reads a file (standard input by default), renders every line that carries at
least one ``key=value`` binding, and writes one output line per record.

Usage:
    kvline -f app.log -t "{ts} {level} {msg}"
    tail -f app.log | kvline --threaded
    python -m kvline -f app.log --profile
    kvline -f app.log --memprofile scan.heap

"""

from __future__ import annotations

import argparse
import cProfile
import json
import logging
import sys
import tracemalloc
from collections.abc import Sequence
from contextlib import ExitStack
from typing import IO

from kvline import __version__
from kvline.config import ScanConfig, scan_config_context
from kvline.errors import EndOfSource, RenderError
from kvline.pipeline import threaded_tokens
from kvline.profiling import profiled_scan
from kvline.reducer import Reducer
from kvline.renderers import JsonRenderer, RecordRenderer, TemplateRenderer
from kvline.scanner import Scanner
from kvline.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_SCAN_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kvline",
        description="Extract key=value records from each line of a text stream",
    )
    parser.add_argument(
        "-t",
        "--template",
        default=None,
        help="str.format template rendered for each record, e.g. '{level} {msg}' "
        "(default: one JSON object per record)",
    )
    parser.add_argument(
        "-f",
        "--file",
        default="-",
        help="path of file to parse (default: standard input)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="-",
        help="path to send output (default: standard output)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="trace scanning and reduction on standard error",
    )
    parser.add_argument(
        "--encoding",
        default=ScanConfig().encoding,
        help="encoding of the input (default: %(default)s)",
    )
    parser.add_argument(
        "--threaded",
        action="store_true",
        help="scan on a separate thread from reduction and rendering",
    )
    parser.add_argument(
        "--keep-empty",
        action="store_true",
        help="also render records of lines without bindings",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="print token/record counts and timing as JSON on standard error",
    )
    parser.add_argument(
        "--cpuprofile",
        default=None,
        metavar="PATH",
        help="write cProfile statistics to PATH",
    )
    parser.add_argument(
        "--memprofile",
        default=None,
        metavar="PATH",
        help="write a tracemalloc snapshot of allocations made while scanning to PATH",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    """Send kvline's logs to standard error, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="PARSE: %(asctime)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def run(
    source: IO[bytes] | IO[str],
    out: IO[str],
    renderer: RecordRenderer,
    *,
    keep_empty: bool = False,
    threaded: bool = False,
) -> int:
    """Scan ``source`` and write each rendered record to ``out``.

    Returns:
        Exit status: EXIT_OK on a clean end of input, EXIT_SCAN_FAILED if
        scanning stopped on an error (the records before it are written).
    """
    scanner = Scanner(source)
    tokens = threaded_tokens(scanner) if threaded else scanner
    reducer = Reducer(tokens)

    for record in reducer:
        if not record and not keep_empty:
            continue
        try:
            rendered = renderer.render(record)
        except RenderError as exc:
            logger.error("skipping record %r: %s", record, exc)
            continue
        out.write(rendered)
        out.write("\n")
        # Records must reach a downstream pipe as their lines end
        out.flush()

    error = reducer.terminal_error
    if error is not None and not isinstance(error, EndOfSource):
        logger.error("scan stopped early: %s", error)
        return EXIT_SCAN_FAILED
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        renderer: RecordRenderer = (
            TemplateRenderer(args.template) if args.template is not None else JsonRenderer()
        )
    except RenderError as exc:
        logger.error("%s", exc)
        return EXIT_USAGE

    config = ScanConfig(encoding=args.encoding, threaded=args.threaded)

    with ExitStack() as stack:
        try:
            source = (
                sys.stdin.buffer
                if args.file == "-"
                else stack.enter_context(open(args.file, "rb"))
            )
            out = (
                sys.stdout
                if args.output == "-"
                else stack.enter_context(open(args.output, "w", encoding="utf-8"))
            )
        except OSError as exc:
            logger.error("could not open %s: %s", exc.filename, exc.strerror)
            return EXIT_USAGE

        stack.enter_context(scan_config_context(config))
        metrics = stack.enter_context(profiled_scan()) if args.profile else None

        profiler = cProfile.Profile() if args.cpuprofile else None
        if profiler is not None:
            profiler.enable()
        if args.memprofile:
            tracemalloc.start()
        try:
            status = run(
                source,
                out,
                renderer,
                keep_empty=args.keep_empty,
                threaded=config.threaded,
            )
        finally:
            if profiler is not None:
                profiler.disable()
                profiler.dump_stats(args.cpuprofile)
            if args.memprofile:
                tracemalloc.take_snapshot().dump(args.memprofile)
                tracemalloc.stop()

        if metrics is not None:
            print(json.dumps(metrics.summary()), file=sys.stderr)

    return status


if __name__ == "__main__":
    sys.exit(main())

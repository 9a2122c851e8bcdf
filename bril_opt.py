#!/usr/bin/env python3
"""Command-line interface for the block IR front end and dead code optimiser."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from brilopt import (
    DecodeError,
    IRTextRenderer,
    load_program,
    optimize_program,
    render_program_cfg,
    serialize_program,
)
from brilopt.optimizer import DEFAULT_PASSES
from brilopt.optimizer.pipeline import resolve_passes

MODES = ("main", "cfg", "opt", "dse")

logger = logging.getLogger("bril_opt")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "mode",
        nargs="?",
        default="main",
        type=str.lower,
        choices=MODES,
        help="main prints the decoded program, cfg prints a graph per function,"
        " opt runs the configured passes and dse runs dead store elimination",
    )
    parser.add_argument(
        "--input",
        "-i",
        default="-",
        help="Program JSON file, '-' (the default) reads standard input",
    )
    parser.add_argument(
        "--passes",
        default=None,
        help="Comma separated pass list for opt mode (default: %s)" % ",".join(DEFAULT_PASSES),
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the optimised program as JSON instead of before/after text",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the result to this file instead of standard output",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def selected_passes(args: argparse.Namespace) -> Tuple[str, ...]:
    if args.mode == "dse" and args.passes is None:
        return ("dse",)
    if args.passes is None:
        return DEFAULT_PASSES
    return tuple(name for name in args.passes.split(",") if name.strip())


def run(args: argparse.Namespace) -> str:
    program = load_program(args.input)
    renderer = IRTextRenderer()

    if args.mode == "main":
        return renderer.render(program)
    if args.mode == "cfg":
        return render_program_cfg(program)

    optimised = optimize_program(program, selected_passes(args))
    if args.json:
        return json.dumps(serialize_program(optimised), indent=2, sort_keys=True) + "\n"
    return f"[BEFORE] {renderer.render(program)}\n[AFTER] {renderer.render(optimised)}"


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        resolve_passes(selected_passes(args))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        output = run(args)
    except DecodeError as exc:
        print(f"Problem decoding program: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"Problem parsing {args.input}: {exc}", file=sys.stderr)
        return 1

    if args.output is not None:
        args.output.write_text(output, "utf-8")
        logger.info("output written to %s", args.output)
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

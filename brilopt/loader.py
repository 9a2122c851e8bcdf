"""Read program trees from files or standard input."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from .ir.model import Program
from .ir.pipeline import decode_program

Source = Union[str, Path, None]


def load_tree(source: Source = None, *, stdin: Optional[TextIO] = None) -> Any:
    """Parse the JSON document at ``source``.

    ``None`` and ``"-"`` select standard input.  Malformed JSON surfaces as
    :class:`json.JSONDecodeError`, a :class:`ValueError` subclass.
    """

    if source is None or str(source) == "-":
        stream = stdin if stdin is not None else sys.stdin
        return json.load(stream)
    return json.loads(Path(source).read_text("utf-8"))


def load_program(source: Source = None, *, stdin: Optional[TextIO] = None) -> Program:
    return decode_program(load_tree(source, stdin=stdin))


__all__ = ["Source", "load_program", "load_tree"]

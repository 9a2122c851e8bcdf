"""Drive named optimisation passes over functions and programs."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Sequence, Tuple

from ..ir.model import Function, Program
from .dse import eliminate_dead_stores_in_function
from .dve import eliminate_dead_variables, eliminate_dead_variables_worklist

logger = logging.getLogger(__name__)

FunctionPass = Callable[[Function], Function]

PASSES: Dict[str, FunctionPass] = {
    "dve": eliminate_dead_variables,
    "dve-worklist": eliminate_dead_variables_worklist,
    "dse": eliminate_dead_stores_in_function,
}

DEFAULT_PASSES: Tuple[str, ...] = ("dve",)


def resolve_passes(names: Iterable[str]) -> Tuple[Tuple[str, FunctionPass], ...]:
    """Look up pass callables, rejecting unknown names before anything runs."""

    resolved = []
    for name in names:
        key = name.strip().lower()
        if key not in PASSES:
            known = ", ".join(sorted(PASSES))
            raise ValueError(f"unknown pass {name!r} (expected one of: {known})")
        resolved.append((key, PASSES[key]))
    return tuple(resolved)


def optimize_function(function: Function, passes: Sequence[str] = DEFAULT_PASSES) -> Function:
    current = function
    for name, run in resolve_passes(passes):
        before = current.instruction_count()
        current = run(current)
        logger.debug(
            "%s on %s: %d -> %d instructions",
            name,
            function.name,
            before,
            current.instruction_count(),
        )
    return current


def optimize_program(program: Program, passes: Sequence[str] = DEFAULT_PASSES) -> Program:
    """Return a new program with ``passes`` applied to every function in order."""

    resolve_passes(passes)
    return program.with_functions(optimize_function(function, passes) for function in program)


__all__ = [
    "DEFAULT_PASSES",
    "FunctionPass",
    "PASSES",
    "optimize_function",
    "optimize_program",
    "resolve_passes",
]

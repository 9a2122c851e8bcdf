"""Function scoped dead variable elimination.

An instruction is dead when it writes a destination that no instruction in
the same function reads.  The check is purely syntactic: it asks whether the
name appears in any ``args`` list and ignores definition order, so a variable
that is redefined later but read anywhere keeps all of its definitions alive.
Instructions without a destination (``print``, branches, returns, ``nop`` and
calls whose result is discarded) are always kept.

Two strategies are provided.  :func:`eliminate_dead_variables` recomputes the
used set and compares whole functions until nothing changes.
:func:`eliminate_dead_variables_worklist` maintains per-name use counts and
only revisits names whose count dropped to zero.  Both return the same
function for every input.
"""

from __future__ import annotations

from collections import Counter, defaultdict, deque
from typing import DefaultDict, Deque, FrozenSet, List, Set, Tuple

from ..ir.model import Function, Instruction


def used_variables(function: Function) -> FrozenSet[str]:
    """Return every name read by any instruction of ``function``."""

    return frozenset(
        name for instruction in function.instructions() for name in instruction.uses()
    )


def _is_live(instruction: Instruction, used: FrozenSet[str]) -> bool:
    return instruction.dst is None or instruction.dst in used


def sweep_dead_variables(function: Function) -> Function:
    """Run a single elimination round over ``function``."""

    used = used_variables(function)
    return function.with_blocks(
        block.with_instructions(
            instruction for instruction in block.instructions if _is_live(instruction, used)
        )
        for block in function.blocks
    )


def eliminate_dead_variables(function: Function) -> Function:
    """Remove unread definitions until the function stops changing."""

    current = function
    while True:
        candidate = sweep_dead_variables(current)
        if candidate == current:
            return current
        current = candidate


def eliminate_dead_variables_worklist(function: Function) -> Function:
    """Work-list formulation of :func:`eliminate_dead_variables`."""

    uses: Counter = Counter()
    definitions: DefaultDict[str, List[Tuple[int, int]]] = defaultdict(list)
    for block_index, block in enumerate(function.blocks):
        for index, instruction in enumerate(block.instructions):
            uses.update(instruction.uses())
            if instruction.dst is not None:
                definitions[instruction.dst].append((block_index, index))

    pending: Deque[str] = deque(name for name in definitions if uses[name] == 0)
    removed: Set[Tuple[int, int]] = set()
    while pending:
        name = pending.popleft()
        for position in definitions.pop(name, ()):
            removed.add(position)
            block_index, index = position
            for arg in function.blocks[block_index].instructions[index].uses():
                uses[arg] -= 1
                if uses[arg] == 0 and arg in definitions:
                    pending.append(arg)

    if not removed:
        return function
    return function.with_blocks(
        block.with_instructions(
            instruction
            for index, instruction in enumerate(block.instructions)
            if (block_index, index) not in removed
        )
        for block_index, block in enumerate(function.blocks)
    )


__all__ = [
    "eliminate_dead_variables",
    "eliminate_dead_variables_worklist",
    "sweep_dead_variables",
    "used_variables",
]

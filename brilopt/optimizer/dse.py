"""Block local dead store elimination.

A definition is dropped when the same block redefines its destination before
anything reads it.  The pass never looks past the block boundary: a value that
is only read by a successor block is not protected from a later local
redefinition, and a definition that is live out but never redefined locally
is always kept.
"""

from __future__ import annotations

from typing import Dict, Set

from ..ir.model import BasicBlock, Function


def sweep_dead_stores(block: BasicBlock) -> BasicBlock:
    """Scan ``block`` once and drop every superseded definition."""

    pending: Dict[str, int] = {}
    dead: Set[int] = set()
    for index, instruction in enumerate(block.instructions):
        for name in instruction.uses():
            pending.pop(name, None)
        if instruction.dst is not None:
            previous = pending.get(instruction.dst)
            if previous is not None:
                dead.add(previous)
            pending[instruction.dst] = index

    if not dead:
        return block
    return block.with_instructions(
        instruction
        for index, instruction in enumerate(block.instructions)
        if index not in dead
    )


def eliminate_dead_stores(block: BasicBlock) -> BasicBlock:
    """Repeat :func:`sweep_dead_stores` until ``block`` stops changing."""

    current = block
    while True:
        candidate = sweep_dead_stores(current)
        if candidate == current:
            return current
        current = candidate


def eliminate_dead_stores_in_function(function: Function) -> Function:
    """Apply :func:`eliminate_dead_stores` to every block independently."""

    return function.with_blocks(eliminate_dead_stores(block) for block in function.blocks)


__all__ = ["eliminate_dead_stores", "eliminate_dead_stores_in_function", "sweep_dead_stores"]

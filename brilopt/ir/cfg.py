"""Control-flow graph construction for decoded functions."""

from __future__ import annotations

from typing import Dict, Iterator, Mapping, Sequence, Tuple

from .model import Function, OpCode, Program

SuccessorMap = Dict[str, Tuple[str, ...]]


def successors(function: Function) -> SuccessorMap:
    """Return the ordered successor block names of every block in ``function``.

    ``jmp`` contributes its single target and ``br`` its true and false
    targets, in that order.  Any other final instruction, ``ret`` included,
    falls through to the next block in program order.  The last block never
    has successors, whatever its final instruction is.
    """

    blocks = function.blocks
    cfg: SuccessorMap = {}
    for index, block in enumerate(blocks):
        if index == len(blocks) - 1:
            cfg[block.name] = ()
            continue
        last = block.instructions[-1] if block.instructions else None
        if last is not None and last.op is OpCode.JMP:
            cfg[block.name] = (last.labels[0],)
        elif last is not None and last.op is OpCode.BR:
            cfg[block.name] = (last.labels[0], last.labels[1])
        else:
            cfg[block.name] = (blocks[index + 1].name,)
    return cfg


def program_successors(program: Program) -> Dict[str, SuccessorMap]:
    return {function.name: successors(function) for function in program}


def predecessors(cfg: Mapping[str, Sequence[str]]) -> Dict[str, Tuple[str, ...]]:
    """Invert a successor mapping.

    Targets that do not name a block of the function (for example a jump to
    an undefined label) still receive an entry so callers can spot them.
    """

    result: Dict[str, Tuple[str, ...]] = {name: () for name in cfg}
    for source, targets in cfg.items():
        for target in targets:
            result[target] = result.get(target, ()) + (source,)
    return result


def iter_edges(cfg: Mapping[str, Sequence[str]]) -> Iterator[Tuple[str, str]]:
    """Yield ``(source, target)`` pairs with sources in lexicographic order."""

    for source in sorted(cfg):
        for target in cfg[source]:
            yield source, target


__all__ = ["SuccessorMap", "iter_edges", "predecessors", "program_successors", "successors"]

"""Group a function's flat instruction stream into basic blocks."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

from .decoder import (
    MalformedRecord,
    decode_instruction,
    decode_label,
    is_instruction_record,
    is_label_record,
)
from .model import BasicBlock, Instruction


def synthesize_block_name(index: int) -> str:
    return f"block_{index}"


class BlockBuilder:
    """Accumulate instructions into a single pending block.

    Labels and terminators (``jmp``, ``br``, ``ret``) close the pending block.
    A label that arrives while the pending buffer is empty only renames the
    block that is about to start, so consecutive labels never produce empty
    blocks; the last label wins.  Unlabelled blocks are named after the number
    of blocks finalised so far.  Collisions between synthesized names and
    explicit labels are not detected.
    """

    def __init__(self) -> None:
        self._blocks: List[BasicBlock] = []
        self._pending: List[Instruction] = []
        self._pending_name: Optional[str] = None

    def add_label(self, name: str) -> None:
        if self._pending:
            self._finalize()
        self._pending_name = name

    def add_instruction(self, instruction: Instruction) -> None:
        self._pending.append(instruction)
        if instruction.is_terminator:
            self._finalize()

    def add_record(self, node: Any) -> None:
        if is_instruction_record(node):
            self.add_instruction(decode_instruction(node))
        elif is_label_record(node):
            self.add_label(decode_label(node))
        else:
            raise MalformedRecord(f"record is neither an instruction nor a label: {node!r}")

    def finish(self) -> Tuple[BasicBlock, ...]:
        if self._pending:
            self._finalize()
        return tuple(self._blocks)

    def _finalize(self) -> None:
        name = self._pending_name
        if name is None:
            name = synthesize_block_name(len(self._blocks))
        self._blocks.append(BasicBlock(name, tuple(self._pending)))
        self._pending = []
        self._pending_name = None


def build_blocks(nodes: Iterable[Any]) -> Tuple[BasicBlock, ...]:
    """Decode ``nodes`` and split them into an ordered block sequence."""

    builder = BlockBuilder()
    for node in nodes:
        builder.add_record(node)
    return builder.finish()


__all__ = ["BlockBuilder", "build_blocks", "synthesize_block_name"]

"""Utilities for rendering decoded programs into a readable text format."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .model import BasicBlock, Function, Instruction, OpCode, Program


class IRTextRenderer:
    """Render :class:`Program` instances into a stable textual form."""

    indent = "    "

    def render(self, program: Program) -> str:
        sections = [self.render_function(function) for function in program]
        return "\n".join(sections)

    def write(self, program: Program, output_path: Path) -> None:
        output_path.write_text(self.render(program), "utf-8")

    def render_function(self, function: Function) -> str:
        lines: List[str] = [self._render_signature(function)]
        for block in function.blocks:
            lines.extend(self._render_block(block))
        lines.append("}")
        return "\n".join(lines) + "\n"

    def render_block(self, block: BasicBlock) -> str:
        return "\n".join(self._render_block(block)) + "\n"

    def render_instruction(self, instruction: Instruction) -> str:
        op = instruction.op
        if op is OpCode.CONST:
            body = f"const {instruction.value.describe() if instruction.value else '?'}"
        elif op is OpCode.JMP:
            body = f"jmp {_labels(instruction.labels)}"
        elif op is OpCode.BR:
            body = f"br {' '.join(instruction.args)} {_labels(instruction.labels)}"
        elif op is OpCode.CALL:
            body = " ".join(["call", *(f"@{name}" for name in instruction.funcs), *instruction.args])
        else:
            body = " ".join([op.mnemonic, *instruction.args])

        if instruction.dst is not None:
            type_name = instruction.dst_type.mnemonic if instruction.dst_type else "?"
            return f"{instruction.dst}: {type_name} = {body};"
        return f"{body};"

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _render_signature(self, function: Function) -> str:
        params = ", ".join(f"{name}: {kind.mnemonic}" for name, kind in function.args)
        ret = function.ret_type.mnemonic if function.ret_type else "void"
        return f"@{function.name}({params}): {ret} {{"

    def _render_block(self, block: BasicBlock) -> Iterable[str]:
        yield f".{block.name}:"
        for instruction in block.instructions:
            yield f"{self.indent}{self.render_instruction(instruction)}"


def _labels(labels: Iterable[str]) -> str:
    return " ".join(f".{label}" for label in labels)


__all__ = ["IRTextRenderer"]

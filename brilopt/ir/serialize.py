"""Helpers to serialise decoded programs back into the JSON record layout."""

from __future__ import annotations

from typing import Any, Dict, List

from .model import BasicBlock, Function, Instruction, Program, Value


def serialize_program(program: Program) -> Dict[str, Any]:
    """Convert a :class:`Program` into a JSON-serialisable mapping."""

    return {"functions": [serialize_function(function) for function in program]}


def serialize_function(function: Function) -> Dict[str, Any]:
    """Serialise a :class:`Function`, flattening its blocks into ``instrs``.

    Every block is preceded by a label record so that decoding the output
    reproduces the block names, synthesized ones included.
    """

    payload: Dict[str, Any] = {"name": function.name}
    if function.args:
        payload["args"] = [
            {"name": name, "type": kind.mnemonic} for name, kind in function.args
        ]
    if function.ret_type is not None:
        payload["type"] = function.ret_type.mnemonic
    instrs: List[Dict[str, Any]] = []
    for block in function.blocks:
        instrs.extend(serialize_block(block))
    payload["instrs"] = instrs
    return payload


def serialize_block(block: BasicBlock) -> List[Dict[str, Any]]:
    """Serialise a block as its label record followed by its instructions.

    A block with no instructions is written as a single ``nop`` so the label
    still opens a block when the output is decoded again.
    """

    if not block.instructions:
        return [{"label": block.name}, {"op": "nop"}]
    return [{"label": block.name}] + [
        serialize_instruction(instruction) for instruction in block.instructions
    ]


def serialize_instruction(instruction: Instruction) -> Dict[str, Any]:
    """Serialise an :class:`Instruction`, omitting unset fields."""

    payload: Dict[str, Any] = {"op": instruction.op.mnemonic}
    if instruction.dst is not None:
        payload["dest"] = instruction.dst
    if instruction.dst_type is not None:
        payload["type"] = instruction.dst_type.mnemonic
    if instruction.args:
        payload["args"] = list(instruction.args)
    if instruction.funcs:
        payload["funcs"] = list(instruction.funcs)
    if instruction.labels:
        payload["labels"] = list(instruction.labels)
    if instruction.value is not None:
        payload["value"] = serialize_value(instruction.value)
    return payload


def serialize_value(value: Value) -> Any:
    return value.payload


__all__ = [
    "serialize_block",
    "serialize_function",
    "serialize_instruction",
    "serialize_program",
    "serialize_value",
]

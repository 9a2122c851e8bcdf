"""Front end and local dead code optimiser for a block structured IR."""

from .graphviz import render_cfg, render_program_cfg
from .ir import (
    BasicBlock,
    DecodeError,
    Function,
    Instruction,
    InvalidType,
    IRTextRenderer,
    MalformedRecord,
    OpCode,
    Program,
    Type,
    UnknownOpcode,
    Value,
    decode,
    serialize_program,
    successors,
)
from .loader import load_program, load_tree
from .optimizer import (
    eliminate_dead_stores,
    eliminate_dead_variables,
    optimize_function,
    optimize_program,
)

__all__ = [
    "BasicBlock",
    "DecodeError",
    "Function",
    "IRTextRenderer",
    "Instruction",
    "InvalidType",
    "MalformedRecord",
    "OpCode",
    "Program",
    "Type",
    "UnknownOpcode",
    "Value",
    "decode",
    "eliminate_dead_stores",
    "eliminate_dead_variables",
    "load_program",
    "load_tree",
    "optimize_function",
    "optimize_program",
    "render_cfg",
    "render_program_cfg",
    "serialize_program",
    "successors",
]

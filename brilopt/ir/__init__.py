"""Public exports for the IR model, decoder and CFG builder."""

from .blocks import BlockBuilder, build_blocks
from .cfg import iter_edges, predecessors, program_successors, successors
from .decoder import (
    DecodeError,
    InvalidType,
    MalformedRecord,
    UnknownOpcode,
    decode_instruction,
)
from .model import (
    BasicBlock,
    Function,
    Instruction,
    OpCode,
    OpFamily,
    Program,
    Type,
    Value,
)
from .pipeline import decode, decode_function, decode_program
from .printer import IRTextRenderer
from .serialize import serialize_program

__all__ = [
    "BasicBlock",
    "BlockBuilder",
    "DecodeError",
    "Function",
    "IRTextRenderer",
    "Instruction",
    "InvalidType",
    "MalformedRecord",
    "OpCode",
    "OpFamily",
    "Program",
    "Type",
    "UnknownOpcode",
    "Value",
    "build_blocks",
    "decode",
    "decode_function",
    "decode_instruction",
    "decode_program",
    "iter_edges",
    "predecessors",
    "program_successors",
    "serialize_program",
    "successors",
]

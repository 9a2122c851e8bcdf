"""Dataclasses describing the block structured intermediate representation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union


class Type(Enum):
    """Scalar types understood by the IR."""

    INT = "int"
    BOOL = "bool"

    @property
    def mnemonic(self) -> str:
        return self.value


class OpFamily(Enum):
    """Coarse grouping of opcodes, mirroring the mnemonic families of the encoding."""

    CONST = auto()
    ARITHMETIC = auto()
    COMPARISON = auto()
    LOGIC = auto()
    CONTROL = auto()
    MISC = auto()


class OpCode(Enum):
    """Closed set of instruction opcodes.

    Every member carries its family and the mnemonic used by the textual
    encoding.  The mnemonic table in :mod:`brilopt.ir.decoder` is derived from
    these members, so adding an opcode here is the only change needed to make
    the decoder aware of it.
    """

    CONST = (OpFamily.CONST, "const")
    ADD = (OpFamily.ARITHMETIC, "add")
    SUB = (OpFamily.ARITHMETIC, "sub")
    MUL = (OpFamily.ARITHMETIC, "mul")
    DIV = (OpFamily.ARITHMETIC, "div")
    EQ = (OpFamily.COMPARISON, "eq")
    LT = (OpFamily.COMPARISON, "lt")
    GT = (OpFamily.COMPARISON, "gt")
    LE = (OpFamily.COMPARISON, "le")
    GE = (OpFamily.COMPARISON, "ge")
    NOT = (OpFamily.LOGIC, "not")
    AND = (OpFamily.LOGIC, "and")
    OR = (OpFamily.LOGIC, "or")
    JMP = (OpFamily.CONTROL, "jmp")
    BR = (OpFamily.CONTROL, "br")
    CALL = (OpFamily.CONTROL, "call")
    RET = (OpFamily.CONTROL, "ret")
    ID = (OpFamily.MISC, "id")
    PRINT = (OpFamily.MISC, "print")
    NOP = (OpFamily.MISC, "nop")

    @property
    def family(self) -> OpFamily:
        return self.value[0]

    @property
    def mnemonic(self) -> str:
        return self.value[1]

    @property
    def is_terminator(self) -> bool:
        return self in TERMINATORS


TERMINATORS = frozenset({OpCode.JMP, OpCode.BR, OpCode.RET})


@dataclass(frozen=True)
class Value:
    """Literal carried by ``const`` instructions.

    The type tag takes part in equality so ``Value.of(True)`` and
    ``Value.of(1)`` never compare equal even though Python would treat the
    payloads as interchangeable.
    """

    type: Type
    payload: Union[int, bool]

    @classmethod
    def of(cls, payload: Union[int, bool]) -> "Value":
        if isinstance(payload, bool):
            return cls(Type.BOOL, payload)
        return cls(Type.INT, int(payload))

    def describe(self) -> str:
        if self.type is Type.BOOL:
            return "true" if self.payload else "false"
        return str(self.payload)


@dataclass(frozen=True)
class Instruction:
    """Single decoded instruction.

    Optional fields mirror the record layout: ``dst``/``dst_type`` for value
    producing operations, ``args`` for variable operands, ``funcs`` for the
    callee of ``call``, ``labels`` for branch targets and ``value`` for
    ``const``.  Operand sequences are always tuples, empty when absent.
    """

    op: OpCode
    dst: Optional[str] = None
    dst_type: Optional[Type] = None
    args: Tuple[str, ...] = ()
    funcs: Tuple[str, ...] = ()
    labels: Tuple[str, ...] = ()
    value: Optional[Value] = None

    @property
    def is_terminator(self) -> bool:
        return self.op.is_terminator

    def uses(self) -> Tuple[str, ...]:
        """Return the variable names read by this instruction."""

        return self.args


@dataclass(frozen=True)
class BasicBlock:
    """Named straight-line run of instructions."""

    name: str
    instructions: Tuple[Instruction, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    @property
    def terminator(self) -> Optional[Instruction]:
        """Return the final instruction if it ends the block explicitly."""

        if self.instructions and self.instructions[-1].is_terminator:
            return self.instructions[-1]
        return None

    def with_instructions(self, instructions: Iterable[Instruction]) -> "BasicBlock":
        return replace(self, instructions=tuple(instructions))


@dataclass(frozen=True)
class Function:
    name: str
    args: Tuple[Tuple[str, Type], ...] = ()
    ret_type: Optional[Type] = None
    blocks: Tuple[BasicBlock, ...] = ()

    def block(self, name: str) -> BasicBlock:
        for block in self.blocks:
            if block.name == name:
                return block
        raise KeyError(name)

    def block_names(self) -> Tuple[str, ...]:
        return tuple(block.name for block in self.blocks)

    def instructions(self) -> Iterator[Instruction]:
        for block in self.blocks:
            yield from block.instructions

    def instruction_count(self) -> int:
        return sum(len(block) for block in self.blocks)

    def with_blocks(self, blocks: Iterable[BasicBlock]) -> "Function":
        return replace(self, blocks=tuple(blocks))


@dataclass(frozen=True)
class Program:
    """Collection of functions keyed by name, in declaration order."""

    functions: Tuple[Function, ...] = ()

    def __iter__(self) -> Iterator[Function]:
        return iter(self.functions)

    def __len__(self) -> int:
        return len(self.functions)

    def names(self) -> Tuple[str, ...]:
        return tuple(function.name for function in self.functions)

    def function(self, name: str) -> Function:
        for function in self.functions:
            if function.name == name:
                return function
        raise KeyError(name)

    def as_mapping(self) -> Dict[str, Function]:
        return {function.name: function for function in self.functions}

    def with_functions(self, functions: Iterable[Function]) -> "Program":
        return replace(self, functions=tuple(functions))


__all__ = [
    "BasicBlock",
    "Function",
    "Instruction",
    "OpCode",
    "OpFamily",
    "Program",
    "TERMINATORS",
    "Type",
    "Value",
]

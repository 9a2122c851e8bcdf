"""Decode raw instruction records into :class:`Instruction` values.

The decoder consumes the generic mapping/sequence/scalar tree produced by a
JSON parser.  Every record either describes a label (``{"label": name}``) or a
real instruction (``{"op": mnemonic, ...}``).  Opcode and type strings are
resolved through fixed lookup tables; anything outside of those tables aborts
decoding immediately.  Instruction records are additionally validated against
the per-opcode field layout in :data:`FIELD_SHAPES` so a decoded
:class:`Instruction` always has exactly the operands its opcode requires.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .model import Instruction, OpCode, Type, Value

OPCODES: Dict[str, OpCode] = {op.mnemonic: op for op in OpCode}
TYPES: Dict[str, Type] = {kind.mnemonic: kind for kind in Type}


class DecodeError(ValueError):
    """Base class for failures raised while decoding a program tree.

    ``function`` names the enclosing function once it is known and is
    prefixed to the message.
    """

    function: Optional[str] = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.function is not None:
            return f"{self.function}: {message}"
        return message


class UnknownOpcode(DecodeError):
    """Raised when an ``op`` string is not one of the known mnemonics."""

    def __init__(self, opcode: object) -> None:
        super().__init__(f"unknown opcode: {opcode!r}")
        self.opcode = opcode


class InvalidType(DecodeError):
    """Raised when a ``type`` field is neither ``"int"`` nor ``"bool"``."""

    def __init__(self, type_name: object) -> None:
        super().__init__(f"invalid type: {type_name!r}")
        self.type_name = type_name


class MalformedRecord(DecodeError):
    """Raised for records whose structure does not match their kind."""


@dataclass(frozen=True)
class FieldShape:
    """Operand layout accepted for a single opcode.

    ``dest`` is one of ``"required"``, ``"optional"`` or ``"forbidden"`` and
    governs the ``dest``/``type`` pair.  The ``args``, ``funcs`` and ``labels``
    entries hold an inclusive ``(minimum, maximum)`` count where ``None`` as the
    maximum means unbounded.  A ``(0, 0)`` range forbids the field.
    """

    dest: str = "forbidden"
    args: Tuple[int, Optional[int]] = (0, 0)
    funcs: Tuple[int, Optional[int]] = (0, 0)
    labels: Tuple[int, Optional[int]] = (0, 0)
    value: bool = False


_BINARY = FieldShape(dest="required", args=(2, 2))

FIELD_SHAPES: Dict[OpCode, FieldShape] = {
    OpCode.CONST: FieldShape(dest="required", value=True),
    OpCode.ADD: _BINARY,
    OpCode.SUB: _BINARY,
    OpCode.MUL: _BINARY,
    OpCode.DIV: _BINARY,
    OpCode.EQ: _BINARY,
    OpCode.LT: _BINARY,
    OpCode.GT: _BINARY,
    OpCode.LE: _BINARY,
    OpCode.GE: _BINARY,
    OpCode.NOT: FieldShape(dest="required", args=(1, 1)),
    OpCode.AND: _BINARY,
    OpCode.OR: _BINARY,
    OpCode.JMP: FieldShape(labels=(1, 1)),
    OpCode.BR: FieldShape(args=(1, 1), labels=(2, 2)),
    OpCode.CALL: FieldShape(dest="optional", args=(0, None), funcs=(1, 1)),
    OpCode.RET: FieldShape(args=(0, 1)),
    OpCode.ID: FieldShape(dest="required", args=(1, 1)),
    OpCode.PRINT: FieldShape(args=(0, None)),
    OpCode.NOP: FieldShape(),
}


def decode_opcode(raw: Any) -> OpCode:
    """Resolve an ``op`` string to its :class:`OpCode` member."""

    if isinstance(raw, str):
        opcode = OPCODES.get(raw)
        if opcode is not None:
            return opcode
    raise UnknownOpcode(raw)


def decode_type(raw: Any) -> Type:
    """Resolve a ``type`` string to its :class:`Type` member."""

    if isinstance(raw, str):
        kind = TYPES.get(raw)
        if kind is not None:
            return kind
    raise InvalidType(raw)


def decode_value(raw: Any) -> Value:
    """Tag ``raw`` by its own literal kind rather than the declared type."""

    if isinstance(raw, bool):
        return Value(Type.BOOL, raw)
    if isinstance(raw, int):
        return Value(Type.INT, raw)
    raise MalformedRecord(f"const value must be an integer or boolean literal, got {raw!r}")


def is_label_record(node: Any) -> bool:
    return isinstance(node, Mapping) and "op" not in node and "label" in node


def is_instruction_record(node: Any) -> bool:
    return isinstance(node, Mapping) and "op" in node


def decode_label(node: Any) -> str:
    """Return the block name carried by a label record."""

    if not is_label_record(node):
        raise MalformedRecord(f"expected a label record, got {node!r}")
    name = node["label"]
    if not isinstance(name, str):
        raise MalformedRecord(f"label name must be a string, got {name!r}")
    return name


def decode_instruction(node: Any) -> Instruction:
    """Convert one instruction record into an :class:`Instruction`.

    Raises :class:`UnknownOpcode`, :class:`InvalidType` or
    :class:`MalformedRecord`; no partially decoded instruction is ever
    returned.
    """

    if not is_instruction_record(node):
        raise MalformedRecord(f"expected an instruction record, got {node!r}")

    op = decode_opcode(node["op"])
    shape = FIELD_SHAPES[op]

    dst = node.get("dest")
    if dst is not None and not isinstance(dst, str):
        raise MalformedRecord(f"{op.mnemonic}: dest must be a string, got {dst!r}")
    dst_type = decode_type(node["type"]) if "type" in node else None
    _check_destination(op, shape, dst, dst_type)

    args = _string_sequence(node, "args", op)
    funcs = _string_sequence(node, "funcs", op)
    labels = _string_sequence(node, "labels", op)
    _check_count(op, "args", args, shape.args)
    _check_count(op, "funcs", funcs, shape.funcs)
    _check_count(op, "labels", labels, shape.labels)

    value: Optional[Value] = None
    if "value" in node:
        if not shape.value:
            raise MalformedRecord(f"{op.mnemonic}: unexpected value field")
        value = decode_value(node["value"])
    elif shape.value:
        raise MalformedRecord(f"{op.mnemonic}: missing value field")

    return Instruction(
        op=op,
        dst=dst,
        dst_type=dst_type,
        args=args,
        funcs=funcs,
        labels=labels,
        value=value,
    )


def _check_destination(
    op: OpCode,
    shape: FieldShape,
    dst: Optional[str],
    dst_type: Optional[Type],
) -> None:
    if shape.dest == "forbidden":
        if dst is not None or dst_type is not None:
            raise MalformedRecord(f"{op.mnemonic}: does not produce a value")
        return
    if (dst is None) != (dst_type is None):
        raise MalformedRecord(f"{op.mnemonic}: dest and type must be given together")
    if shape.dest == "required" and dst is None:
        raise MalformedRecord(f"{op.mnemonic}: missing dest")


def _string_sequence(node: Mapping[str, Any], key: str, op: OpCode) -> Tuple[str, ...]:
    raw = node.get(key)
    if raw is None:
        return ()
    if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple)):
        raise MalformedRecord(f"{op.mnemonic}: {key} must be a list of strings")
    for item in raw:
        if not isinstance(item, str):
            raise MalformedRecord(f"{op.mnemonic}: {key} entries must be strings, got {item!r}")
    return tuple(raw)


def _check_count(
    op: OpCode,
    key: str,
    items: Tuple[str, ...],
    bounds: Tuple[int, Optional[int]],
) -> None:
    minimum, maximum = bounds
    count = len(items)
    if count < minimum or (maximum is not None and count > maximum):
        if maximum is None:
            expected = f"at least {minimum}"
        elif minimum == maximum:
            expected = f"exactly {minimum}"
        else:
            expected = f"{minimum} to {maximum}"
        raise MalformedRecord(f"{op.mnemonic}: expected {expected} {key}, got {count}")


__all__ = [
    "DecodeError",
    "FIELD_SHAPES",
    "FieldShape",
    "InvalidType",
    "MalformedRecord",
    "OPCODES",
    "TYPES",
    "UnknownOpcode",
    "decode_instruction",
    "decode_label",
    "decode_opcode",
    "decode_type",
    "decode_value",
    "is_instruction_record",
    "is_label_record",
]

"""High level entry points turning a parsed tree into a :class:`Program`."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Set, Tuple

from .blocks import build_blocks
from .decoder import DecodeError, MalformedRecord, decode_type
from .model import Function, Program, Type

logger = logging.getLogger(__name__)


def decode_function_args(node: Mapping[str, Any]) -> Tuple[Tuple[str, Type], ...]:
    raw = node.get("args")
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise MalformedRecord("function args must be a list")
    params: List[Tuple[str, Type]] = []
    for entry in raw:
        if not isinstance(entry, Mapping) or not isinstance(entry.get("name"), str):
            raise MalformedRecord(f"malformed function argument: {entry!r}")
        if "type" not in entry:
            raise MalformedRecord(f"function argument {entry['name']!r} has no type")
        params.append((entry["name"], decode_type(entry["type"])))
    return tuple(params)


def decode_function(node: Any) -> Function:
    """Decode one function record, building its basic blocks."""

    if not isinstance(node, Mapping):
        raise MalformedRecord(f"expected a function record, got {node!r}")
    name = node.get("name")
    if not isinstance(name, str):
        raise MalformedRecord(f"function name must be a string, got {name!r}")
    instrs = node.get("instrs")
    if not isinstance(instrs, list):
        raise MalformedRecord(f"function {name!r} has no instruction list")

    try:
        args = decode_function_args(node)
        ret_type = decode_type(node["type"]) if "type" in node else None
        blocks = build_blocks(instrs)
    except DecodeError as exc:
        if exc.function is None:
            exc.function = name
        raise

    logger.debug("decoded function %s: %d blocks", name, len(blocks))
    return Function(name=name, args=args, ret_type=ret_type, blocks=blocks)


def decode_program(tree: Any) -> Program:
    """Decode a whole ``{"functions": [...]}`` tree.

    Any failure aborts the entire decode; there is no per-function recovery.
    """

    if not isinstance(tree, Mapping):
        raise MalformedRecord("program must be a mapping")
    raw_functions = tree.get("functions")
    if not isinstance(raw_functions, list):
        raise MalformedRecord("program has no function list")

    functions: List[Function] = []
    seen: Set[str] = set()
    for node in raw_functions:
        function = decode_function(node)
        if function.name in seen:
            raise MalformedRecord(f"duplicate function name: {function.name!r}")
        seen.add(function.name)
        functions.append(function)
    return Program(tuple(functions))


decode = decode_program


__all__ = ["decode", "decode_function", "decode_function_args", "decode_program"]

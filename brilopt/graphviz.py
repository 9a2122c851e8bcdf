"""Render control-flow graphs as Graphviz ``digraph`` descriptions."""

from __future__ import annotations

from typing import List

from .ir.cfg import iter_edges, successors
from .ir.model import Function, Program


def render_cfg(function: Function) -> str:
    """Describe ``function``'s CFG with nodes and edges sorted by name."""

    cfg = successors(function)
    lines: List[str] = [f"digraph {function.name} {{"]
    for name in sorted(cfg):
        lines.append(f"  {name};")
    for source, target in iter_edges(cfg):
        lines.append(f"  {source} -> {target};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_program_cfg(program: Program) -> str:
    return "".join(render_cfg(function) for function in program)


__all__ = ["render_cfg", "render_program_cfg"]

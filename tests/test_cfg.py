from brilopt import decode
from brilopt.ir import Function, predecessors, program_successors, successors
from brilopt.ir.cfg import iter_edges


def _function(instrs: list, name: str = "main") -> Function:
    return decode({"functions": [{"name": name, "instrs": instrs}]}).function(name)


def _const(dest: str, value: object = 1) -> dict:
    kind = "bool" if isinstance(value, bool) else "int"
    return {"op": "const", "dest": dest, "type": kind, "value": value}


def test_jump_has_single_successor() -> None:
    function = _function(
        [
            {"label": "entry"},
            {"op": "jmp", "labels": ["exit"]},
            {"label": "skipped"},
            {"op": "nop"},
            {"label": "exit"},
            {"op": "ret"},
        ]
    )

    assert successors(function) == {
        "entry": ("exit",),
        "skipped": ("exit",),
        "exit": (),
    }


def test_branch_keeps_true_then_false_order() -> None:
    function = _function(
        [
            _const("c", True),
            {"op": "br", "args": ["c"], "labels": ["else", "then"]},
            {"label": "then"},
            {"op": "nop"},
            {"label": "else"},
            {"op": "nop"},
        ]
    )

    cfg = successors(function)
    assert cfg["block_0"] == ("else", "then")
    assert cfg["then"] == ("else",)
    assert cfg["else"] == ()


def test_return_in_non_last_block_falls_through() -> None:
    function = _function(
        [
            {"label": "early"},
            {"op": "ret"},
            {"label": "late"},
            {"op": "ret"},
        ]
    )

    assert successors(function) == {"early": ("late",), "late": ()}


def test_call_and_plain_instructions_fall_through() -> None:
    function = _function(
        [
            {"label": "a"},
            {"op": "call", "funcs": ["f"]},
            {"label": "b"},
            _const("x"),
            {"label": "c"},
            {"op": "print", "args": ["x"]},
        ]
    )

    assert successors(function) == {"a": ("b",), "b": ("c",), "c": ()}


def test_last_block_has_no_successors_even_when_jumping() -> None:
    function = _function(
        [
            {"label": "loop"},
            _const("x"),
            {"op": "jmp", "labels": ["loop"]},
        ]
    )

    assert successors(function) == {"loop": ()}


def test_unreachable_blocks_keep_an_entry() -> None:
    function = _function(
        [
            {"op": "jmp", "labels": ["end"]},
            {"op": "jmp", "labels": ["end"]},
            {"label": "end"},
            {"op": "ret"},
        ]
    )

    cfg = successors(function)
    assert list(cfg) == ["block_0", "block_1", "end"]
    assert cfg["block_1"] == ("end",)


def test_empty_function_has_empty_cfg() -> None:
    assert successors(_function([])) == {}


def test_predecessors_invert_successors() -> None:
    function = _function(
        [
            _const("c", False),
            {"op": "br", "args": ["c"], "labels": ["left", "right"]},
            {"label": "left"},
            {"op": "jmp", "labels": ["join"]},
            {"label": "right"},
            {"op": "nop"},
            {"label": "join"},
            {"op": "ret"},
        ]
    )

    preds = predecessors(successors(function))
    assert preds["block_0"] == ()
    assert preds["left"] == ("block_0",)
    assert preds["join"] == ("left", "right")


def test_iter_edges_sorts_sources() -> None:
    cfg = {"z": ("a",), "b": ("z", "a"), "a": ()}
    assert list(iter_edges(cfg)) == [("b", "z"), ("b", "a"), ("z", "a")]


def test_program_successors_covers_every_function() -> None:
    program = decode(
        {
            "functions": [
                {"name": "main", "instrs": [{"op": "nop"}]},
                {"name": "helper", "instrs": [{"op": "ret"}]},
            ]
        }
    )

    assert program_successors(program) == {
        "main": {"block_0": ()},
        "helper": {"block_0": ()},
    }

import pytest

from brilopt import decode
from brilopt.ir import DecodeError, InvalidType, MalformedRecord, Type, UnknownOpcode


def _program(*functions: dict) -> dict:
    return {"functions": list(functions)}


def test_decode_program_preserves_function_order_and_signature() -> None:
    tree = _program(
        {
            "name": "main",
            "instrs": [{"op": "call", "funcs": ["add2"], "args": []}],
        },
        {
            "name": "add2",
            "args": [{"name": "a", "type": "int"}, {"name": "flag", "type": "bool"}],
            "type": "int",
            "instrs": [{"op": "ret", "args": ["a"]}],
        },
    )

    program = decode(tree)

    assert program.names() == ("main", "add2")
    callee = program.function("add2")
    assert callee.args == (("a", Type.INT), ("flag", Type.BOOL))
    assert callee.ret_type is Type.INT
    assert program.function("main").ret_type is None
    assert program.as_mapping()["add2"] is callee


def test_function_without_instructions_has_no_blocks() -> None:
    program = decode(_program({"name": "empty", "instrs": []}))
    assert program.function("empty").blocks == ()


def test_decode_errors_name_the_function() -> None:
    tree = _program({"name": "broken", "instrs": [{"op": "frobnicate"}]})

    with pytest.raises(UnknownOpcode) as info:
        decode(tree)

    assert info.value.function == "broken"
    assert str(info.value).startswith("broken: ")


def test_invalid_argument_type_aborts_decode() -> None:
    tree = _program({"name": "f", "args": [{"name": "a", "type": "ptr"}], "instrs": []})
    with pytest.raises(InvalidType):
        decode(tree)


def test_invalid_return_type_aborts_decode() -> None:
    with pytest.raises(InvalidType):
        decode(_program({"name": "f", "type": "float", "instrs": []}))


@pytest.mark.parametrize(
    "tree",
    [
        [],
        {},
        {"functions": {"name": "main"}},
        {"functions": [{"instrs": []}]},
        {"functions": [{"name": "main"}]},
        {"functions": [{"name": "main", "args": [{"name": "a"}], "instrs": []}]},
        {"functions": [{"name": "main", "instrs": [{"dest": "x"}]}]},
        {"functions": [{"name": "f", "instrs": []}, {"name": "f", "instrs": []}]},
    ],
)
def test_malformed_trees_are_rejected(tree: object) -> None:
    with pytest.raises(MalformedRecord):
        decode(tree)


def test_one_bad_instruction_rejects_the_whole_program() -> None:
    tree = _program(
        {"name": "ok", "instrs": [{"op": "nop"}]},
        {"name": "bad", "instrs": [{"op": "nop"}, {"op": "jmp"}]},
    )
    with pytest.raises(DecodeError):
        decode(tree)

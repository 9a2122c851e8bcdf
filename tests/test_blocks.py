from typing import Any, Dict, List

import pytest

from brilopt.ir import BlockBuilder, MalformedRecord, OpCode, build_blocks, decode_instruction


def _op(op: str, **fields: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {"op": op}
    record.update(fields)
    return record


def _add(dest: str = "x") -> Dict[str, Any]:
    return _op("add", dest=dest, type="int", args=["a", "b"])


def _jmp(label: str) -> Dict[str, Any]:
    return _op("jmp", labels=[label])


def _label(name: str) -> Dict[str, Any]:
    return {"label": name}


def _ops(block) -> List[OpCode]:
    return [instr.op for instr in block.instructions]


def test_unlabelled_stream_ending_in_jump_is_one_block() -> None:
    blocks = build_blocks([_add(), _add("y"), _jmp("L")])

    assert len(blocks) == 1
    assert blocks[0].name == "block_0"
    assert _ops(blocks[0]) == [OpCode.ADD, OpCode.ADD, OpCode.JMP]


def test_consecutive_labels_do_not_create_empty_blocks() -> None:
    blocks = build_blocks([_label("first"), _label("second"), _add(), _op("ret")])

    assert [block.name for block in blocks] == ["second"]
    assert len(blocks[0]) == 2


def test_trailing_instructions_without_terminator_form_a_block() -> None:
    blocks = build_blocks([_label("entry"), _add(), _op("print", args=["x"])])

    assert [block.name for block in blocks] == ["entry"]
    assert _ops(blocks[0]) == [OpCode.ADD, OpCode.PRINT]


def test_label_closes_pending_block() -> None:
    blocks = build_blocks([_add(), _label("next"), _add("y")])

    assert [block.name for block in blocks] == ["block_0", "next"]


def test_terminator_clears_pending_name() -> None:
    blocks = build_blocks(
        [
            _label("entry"),
            _op("br", args=["c"], labels=["a", "b"]),
            _add(),
            _op("ret"),
            _label("a"),
            _add("z"),
        ]
    )

    assert [block.name for block in blocks] == ["entry", "block_1", "a"]


def test_synthesized_names_count_finalised_blocks() -> None:
    blocks = build_blocks(
        [_label("top"), _jmp("top"), _add(), _jmp("top"), _add(), _jmp("top")]
    )

    assert [block.name for block in blocks] == ["top", "block_1", "block_2"]


def test_trailing_label_without_instructions_is_dropped() -> None:
    blocks = build_blocks([_add(), _op("ret"), _label("dangling")])

    assert [block.name for block in blocks] == ["block_0"]


def test_empty_stream_yields_no_blocks() -> None:
    assert build_blocks([]) == ()


def test_non_terminal_instructions_never_branch() -> None:
    blocks = build_blocks(
        [
            _add(),
            _jmp("b"),
            _label("b"),
            _op("br", args=["c"], labels=["b", "c"]),
            _label("c"),
            _op("nop"),
            _op("ret"),
        ]
    )

    for block in blocks:
        for instr in block.instructions[:-1]:
            assert not instr.is_terminator


def test_unrecognised_record_is_rejected() -> None:
    with pytest.raises(MalformedRecord):
        build_blocks([{"dest": "x"}])


def test_builder_accepts_decoded_instructions_directly() -> None:
    builder = BlockBuilder()
    builder.add_label("entry")
    builder.add_instruction(decode_instruction(_add()))
    builder.add_instruction(decode_instruction(_op("ret")))
    builder.add_instruction(decode_instruction(_op("nop")))

    blocks = builder.finish()
    assert [block.name for block in blocks] == ["entry", "block_1"]
    assert blocks[0].terminator is not None
    assert blocks[1].terminator is None

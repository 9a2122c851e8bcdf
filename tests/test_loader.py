import io
import json
from pathlib import Path

import pytest

from brilopt import load_program, load_tree

TREE = {"functions": [{"name": "main", "instrs": [{"op": "nop"}]}]}


def test_load_tree_from_file(tmp_path: Path) -> None:
    path = tmp_path / "prog.json"
    path.write_text(json.dumps(TREE), "utf-8")

    assert load_tree(path) == TREE
    assert load_tree(str(path)) == TREE


def test_load_program_from_stream() -> None:
    program = load_program("-", stdin=io.StringIO(json.dumps(TREE)))
    assert program.names() == ("main",)


def test_none_source_reads_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(TREE)))
    assert load_tree() == TREE


def test_invalid_json_raises_value_error() -> None:
    with pytest.raises(ValueError):
        load_tree(None, stdin=io.StringIO("{not json"))

"""
Tests for the resolution pass over a commit log.
"""

import pytest
from codebuilder.errors import NegativeIndentError
from codebuilder.model import Indent, Operation
from codebuilder.resolver import final_depth, indented, resolve, walk_depths


def test_indented_repeats_unit():
    assert indented(3, "ab") == "ababab"
    assert indented(0, "\t") == ""


def test_indented_rejects_negative():
    with pytest.raises(ValueError):
        indented(-1, "\t")


def test_walk_depths_reports_emit_depth():
    ops = [
        Operation("{", Indent.OPEN),
        Operation("x"),
        Operation("} {", Indent.CLOSE_THEN_OPEN),
        Operation("}", Indent.CLOSE),
    ]
    depths = [depth for _, _, depth in walk_depths(ops, 0)]
    assert depths == [0, 1, 0, 0]


def test_balanced_sequence_returns_to_base():
    ops = [
        Operation("a", Indent.OPEN),
        Operation(None, Indent.OPEN),
        Operation("b"),
        Operation(None, Indent.CLOSE),
        Operation("c", Indent.CLOSE),
    ]
    assert final_depth(ops, 2) == 2


def test_final_depth_of_empty_log():
    assert final_depth([], 4) == 4


def test_resolve_skips_invisible_operations():
    ops = [Operation(None, Indent.OPEN), Operation("", Indent.OPEN), Operation("x")]
    assert resolve(ops, 0, "-") == "--x"


def test_resolve_does_not_mutate():
    ops = [Operation("a\n", Indent.OPEN), Operation("b\n")]
    before = list(ops)
    assert resolve(ops, 0, " ") == resolve(ops, 0, " ")
    assert ops == before


def test_resolve_underflow_reports_index():
    ops = [Operation("a"), Operation("b", Indent.CLOSE)]
    with pytest.raises(NegativeIndentError) as exc:
        resolve(ops, 0, "\t")
    assert exc.value.index == 1
    assert exc.value.operation == ops[1]

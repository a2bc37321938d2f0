"""
Tests for composing builders.

Sub-builders are resolved at the host's depth when the host is finalized,
plus their own starting depth.
"""

import pytest
from codebuilder import BuilderConfig, CodeBuilder, CodeBuilderError, Indent


def two_spaces(indent_base: int = 0) -> CodeBuilder:
    return CodeBuilder(indent_base, config=BuilderConfig(indentation="  "))


def build_function() -> CodeBuilder:
    sub = CodeBuilder(0)
    sub.append("int f() {\n", Indent.OPEN)
    sub.push("}\n")
    sub.append("return 1;\n")
    return sub


class TestMergeIntoLog:
    """Test merge_into_log."""

    def test_merged_fragments_take_host_depth(self):
        """Merged fragments should be indented where they land in the host."""
        host = two_spaces()
        host.append("class A {\n", Indent.OPEN)
        host.merge_into_log(build_function())
        host.append("};\n", Indent.CLOSE)
        assert host.finalize() == "class A {\n  int f() {\n    return 1;\n  }\n};\n"

    def test_merge_drains_other(self):
        """The merged builder's deferred stack should be drained."""
        sub = build_function()
        host = CodeBuilder(0)
        host.merge_into_log(sub)
        assert sub.stack_depth == 0
        assert len(host.log) == 3

    def test_merge_keeps_directives(self):
        """Merged operations should keep their own directives."""
        sub = build_function()
        host = CodeBuilder(0)
        host.merge_into_log(sub)
        assert [op.directive for op in host.log] == [Indent.OPEN, Indent.NONE, Indent.CLOSE]

    def test_sub_builder_base_is_added(self):
        """A sub-builder's starting depth should add to the host's depth."""
        sub = two_spaces(1)
        sub.append("x\n")

        host = two_spaces()
        host.append("{\n", Indent.OPEN)
        host.merge_into_log(sub)
        host.append("}\n", Indent.CLOSE)
        assert host.finalize() == "{\n    x\n}\n"

    def test_merge_order_does_not_need_host_depth(self):
        """A sub-builder merged before the host opens stays at the host's level."""
        host = two_spaces()
        host.merge_into_log(build_function())
        assert host.finalize() == "int f() {\n  return 1;\n}\n"

    def test_merge_into_itself(self):
        """Merging a builder into itself should be rejected."""
        code = CodeBuilder(0)
        with pytest.raises(CodeBuilderError):
            code.merge_into_log(code)


class TestMergeOntoStack:
    """Test merge_onto_stack."""

    def test_merged_group_replayed_on_drain(self):
        """The merged log should become one deferred group."""
        tail = CodeBuilder(0)
        tail.append("tail\n")

        host = two_spaces()
        host.append("a {\n", Indent.OPEN)
        host.merge_onto_stack(tail)
        assert host.stack_depth == 1
        host.append("b\n")
        assert host.finalize() == "a {\n  b\n  tail\n"

    def test_merged_group_popped_explicitly(self):
        """pop() should replay the merged group like any other."""
        closer = CodeBuilder(0)
        closer.append("}\n", Indent.CLOSE)

        host = two_spaces()
        host.append("{\n", Indent.OPEN)
        host.merge_onto_stack(closer)
        host.append("x\n")
        host.pop()
        host.append("y\n")
        assert host.finalize() == "{\n  x\n}\ny\n"

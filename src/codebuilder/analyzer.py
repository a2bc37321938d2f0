"""
Builder Analyzer: early diagnostics of a CodeBuilder before finalize().

Provides a dry run over what finalize() would resolve:
    - Operation inventory (visible, raw, attributed)
    - Depth profile (final and maximum depth)
    - First underflow, if the directives close too many blocks
    - Left-over staging and pending deferred groups

IMPORTANT: This is read-only. It does NOT drain the stack or touch the log.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import List, Optional

from codebuilder.builder import CodeBuilder, normalized
from codebuilder.errors import NegativeIndentError
from codebuilder.model import Operation
from codebuilder.resolver import walk_depths


@dataclass
class BuilderReport:
    """Analysis results for one builder."""
    indent_base: int = 0

    total_operations: int = 0
    visible_operations: int = 0
    raw_operations: int = 0
    attributed_operations: int = 0

    pending_groups: int = 0
    staged_operations: int = 0
    snapshot_names: List[str] = field(default_factory=list)

    final_depth: int = 0
    max_depth: int = 0
    underflow_index: Optional[int] = None

    warnings: List[str] = field(default_factory=list)

    @property
    def balanced(self) -> bool:
        return self.underflow_index is None and self.final_depth == self.indent_base

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def drained_operations(builder: CodeBuilder) -> List[Operation]:
    """Return the log as finalize() would see it, without mutating builder."""
    ops = list(builder.log)
    for group in reversed(builder.pending):
        for op in group:
            op = normalized(op)
            if op is not None:
                ops.append(op)
    return ops


def analyze_builder(builder: CodeBuilder, warn: bool = False) -> BuilderReport:
    """
    Analyze a builder without changing it.

    Args:
        builder: Builder to inspect
        warn: Also emit each warning with warnings.warn

    Returns:
        BuilderReport with counts, depth profile and warnings
    """
    report = BuilderReport(indent_base=builder.indent_base)
    ops = drained_operations(builder)

    report.total_operations = len(ops)
    report.visible_operations = sum(1 for op in ops if op.visible)
    report.raw_operations = sum(1 for op in ops if op.raw)
    report.attributed_operations = sum(1 for op in ops if op.attribution is not None)
    report.pending_groups = builder.stack_depth
    report.staged_operations = len(builder.staged)
    report.snapshot_names = builder.snapshot_names

    depth = builder.indent_base
    report.max_depth = depth
    try:
        for _, op, emitted in walk_depths(ops, builder.indent_base):
            depth = emitted + 1 if op.directive.opens else emitted
            report.max_depth = max(report.max_depth, depth)
    except NegativeIndentError as e:
        report.underflow_index = e.index
        report.add_warning(f"Operation {e.index} closes a block below depth 0")
    report.final_depth = depth

    if report.underflow_index is None and report.final_depth != builder.indent_base:
        report.add_warning(
            f"Unbalanced directives: ends at depth {report.final_depth}, started at {builder.indent_base}"
        )
    if report.staged_operations:
        report.add_warning(f"{report.staged_operations} staged operations were never committed")

    if warn:
        for msg in report.warnings:
            warnings.warn(msg, UserWarning)

    return report

"""
CodeBuilder: lazy-indentation text assembly.

A CodeBuilder collects fragments of text, each tagged with an Indent
directive, and only decides how deeply each fragment is indented when
finalize() replays them.

It keeps four sequences:
    - log      (commit log)    fragments in final output order
    - stack    (deferred)      LIFO groups replayed into the log by pop()
    - staging                  a group being built in reading order
    - snapshots                named, reusable copies of staged groups

Typical use:

    code = CodeBuilder(0)
    code.append("void main() {\\n", Indent.OPEN)
    code.push("}\\n")              # closer registered next to its opener
    code.append("run();\\n")
    code.pop()
    code.finalize()               # "void main() {\\n\\trun();\\n}\\n"

ARCHITECTURAL RULE:
    Indentation is a property of an operation's position in the final
    sequence, not of the moment it was appended. Nothing here computes a
    depth before finalize().
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple, Union

from codebuilder.config import BuilderConfig
from codebuilder.errors import (
    CodeBuilderError,
    ConfigError,
    EmptyStackError,
    InvalidDirectiveError,
    UnknownSnapshotError,
)
from codebuilder.model import Attribution, Indent, Operation
from codebuilder.resolver import resolve


logger = logging.getLogger(__name__)

AttributionLike = Union[Attribution, Tuple[str, int], None]

# Fragments that only break the line are never indented.
_LINE_BREAKS = ("\n", "\r\n")


def _check_directive(directive: Indent) -> Indent:
    if not isinstance(directive, Indent):
        raise InvalidDirectiveError(f"Expected an Indent directive, got {directive!r}")
    return directive


def _attribution(value: AttributionLike) -> Optional[Attribution]:
    if value is None or isinstance(value, Attribution):
        return value
    file, line = value
    return Attribution(file=file, line=line)


def normalized(op: Operation) -> Optional[Operation]:
    """Return op as the log stores it, or None if it would be dropped."""
    if not op.text and not op.directive:
        return None
    if op.text in _LINE_BREAKS and not op.raw:
        return replace(op, raw=True)
    return op


@dataclass
class Memory:
    """
    A detachable copy of a builder's named snapshots.

    Lets several builders share the same saved closing sequences:

        other.use_memory(code.memory())
    """

    saved: Dict[str, Tuple[Operation, ...]] = field(default_factory=dict)

    def names(self) -> List[str]:
        return sorted(self.saved)


class CodeBuilder:
    """
    Builds a string of code out of fragments with deferred indentation.

    Operations:
        append / raw_append          place a fragment in the log
        push / raw_push / push_indent
                                     register a fragment on the deferred stack
        pop                          replay the top deferred group into the log
        stage / raw_stage / stage_indent
                                     build a group in reading order
        commit_stage_to_log / commit_stage_to_stack
                                     flush the staged group
        save_snapshot / recall_snapshot / recall_and_commit
                                     named reusable groups
        merge_into_log / merge_onto_stack
                                     splice another builder in
        finalize                     drain the stack and resolve the text
    """

    def __init__(self, indent_base: Optional[int] = None, config: Optional[BuilderConfig] = None):
        config = config or BuilderConfig()
        if indent_base is None:
            indent_base = config.initial_indent
        if isinstance(indent_base, bool) or not isinstance(indent_base, int) or indent_base < 0:
            raise ConfigError(f"indent_base must be a non-negative integer, got {indent_base!r}")

        self.indent_base: int = indent_base
        self.indentation: str = config.indentation
        self._log: List[Operation] = []
        self._stack: List[List[Operation]] = []
        self._staging: List[Operation] = []
        self._snapshots: Dict[str, Tuple[Operation, ...]] = {}

    def __repr__(self) -> str:
        return (
            f"CodeBuilder(indent_base={self.indent_base}, log={len(self._log)}, "
            f"stack={len(self._stack)}, staged={len(self._staging)})"
        )

    # =========================================================================
    # INSPECTION
    # =========================================================================

    @property
    def log(self) -> Tuple[Operation, ...]:
        return tuple(self._log)

    @property
    def pending(self) -> Tuple[Tuple[Operation, ...], ...]:
        """Deferred groups, bottom of the stack first."""
        return tuple(tuple(group) for group in self._stack)

    @property
    def stack_depth(self) -> int:
        return len(self._stack)

    @property
    def staged(self) -> Tuple[Operation, ...]:
        return tuple(self._staging)

    @property
    def snapshot_names(self) -> List[str]:
        return sorted(self._snapshots)

    def snapshot(self, name: str) -> Tuple[Operation, ...]:
        try:
            return self._snapshots[name]
        except KeyError:
            raise UnknownSnapshotError(name) from None

    # =========================================================================
    # COMMIT LOG
    # =========================================================================

    def _put(self, op: Operation) -> None:
        op = normalized(op)
        if op is not None:
            self._log.append(op)

    def append(
        self,
        text: Optional[str],
        directive: Indent = Indent.NONE,
        raw: bool = False,
        attribution: AttributionLike = None,
    ) -> None:
        """
        Place text into the log.

        append("text", Indent.OPEN) indents "text" at the current level and
        following fragments one level deeper.

        append("}", Indent.CLOSE) indents "}" one level less, as are the
        fragments after it.

        append("} else {", Indent.CLOSE_THEN_OPEN) indents one level less
        and keeps following fragments at the current level.

        An empty fragment with Indent.NONE is dropped.
        """
        self._put(Operation(text, _check_directive(directive), raw, _attribution(attribution)))

    def raw_append(self, text: Optional[str], directive: Indent = Indent.NONE, attribution: AttributionLike = None) -> None:
        """Place text into the log without leading indentation."""
        self.append(text, directive, raw=True, attribution=attribution)

    def append_indent(self, directive: Indent, attribution: AttributionLike = None) -> None:
        """Change depth without emitting anything."""
        self.append(None, directive, attribution=attribution)

    # =========================================================================
    # DEFERRED STACK
    # =========================================================================

    def push(
        self,
        text: Optional[str],
        directive: Indent = Indent.CLOSE,
        raw: bool = False,
        attribution: AttributionLike = None,
    ) -> None:
        """
        Register text on the deferred stack for a later pop().

        The default directive is CLOSE, the usual case being a block
        terminator registered next to the fragment that opens the block.
        """
        op = Operation(text, _check_directive(directive), raw, _attribution(attribution))
        self._stack.append([op])

    def raw_push(self, text: Optional[str], directive: Indent = Indent.CLOSE, attribution: AttributionLike = None) -> None:
        self.push(text, directive, raw=True, attribution=attribution)

    def push_indent(self, directive: Indent, attribution: AttributionLike = None) -> None:
        """Register a depth change with no text."""
        self.push(None, directive, attribution=attribution)

    def pop(self) -> None:
        """
        Replay the top deferred group into the log.

        The group's operations are appended in the order they were
        registered; nothing is reversed.

        Raises:
            EmptyStackError: If nothing is on the deferred stack
        """
        if not self._stack:
            raise EmptyStackError("Can't pop empty deferred stack")
        group = self._stack.pop()
        for op in group:
            self._put(op)
        logger.debug("Popped group of %d operations, %d left", len(group), len(self._stack))

    def drain(self) -> None:
        """Pop until the deferred stack is empty."""
        while self._stack:
            self.pop()

    # =========================================================================
    # STAGING AND SNAPSHOTS
    # =========================================================================

    def stage(
        self,
        text: Optional[str],
        directive: Indent = Indent.NONE,
        raw: bool = False,
        attribution: AttributionLike = None,
    ) -> None:
        """
        Add a fragment to the staging group.

        Used to write a closing sequence in reading order instead of pushing
        its fragments in reverse.
        """
        self._staging.append(Operation(text, _check_directive(directive), raw, _attribution(attribution)))

    def raw_stage(self, text: Optional[str], directive: Indent = Indent.NONE, attribution: AttributionLike = None) -> None:
        self.stage(text, directive, raw=True, attribution=attribution)

    def stage_indent(self, directive: Indent, attribution: AttributionLike = None) -> None:
        self.stage(None, directive, attribution=attribution)

    def commit_stage_to_log(self) -> None:
        """Append every staged fragment to the log and clear staging."""
        staged, self._staging = self._staging, []
        for op in staged:
            self._put(op)

    def commit_stage_to_stack(self) -> None:
        """Push the staged fragments as one deferred group and clear staging."""
        staged, self._staging = self._staging, []
        self._stack.append(staged)

    def save_snapshot(self, name: str) -> None:
        """
        Store the staged group under name and clear staging.

        Saving an existing name replaces it.
        """
        if name in self._snapshots:
            logger.debug("Overwriting snapshot %r", name)
        self._snapshots[name] = tuple(self._staging)
        self._staging = []

    def recall_snapshot(self, name: str) -> None:
        """
        Push a copy of a saved group onto the deferred stack.

        Raises:
            UnknownSnapshotError: If name was never saved
        """
        ops = self.snapshot(name)
        self._stack.append(list(ops))
        logger.debug("Recalled snapshot %r (%d operations)", name, len(ops))

    def recall_and_commit(self, name: str) -> None:
        """Place a copy of a saved group directly into the log."""
        self.recall_snapshot(name)
        self.pop()

    def memory(self) -> Memory:
        return Memory(saved=dict(self._snapshots))

    def use_memory(self, memory: Memory) -> None:
        """Replace this builder's snapshots with a copy of memory's."""
        self._snapshots = {name: tuple(ops) for name, ops in memory.saved.items()}

    # =========================================================================
    # COMPOSITION
    # =========================================================================

    def _take(self, other: CodeBuilder) -> List[Operation]:
        if other is self:
            raise CodeBuilderError("Cannot merge a builder into itself")
        other.drain()
        ops = list(other._log)
        # The other builder's base depth is added to the host's at resolution.
        if other.indent_base:
            ops = (
                [Operation(None, Indent.OPEN)] * other.indent_base
                + ops
                + [Operation(None, Indent.CLOSE)] * other.indent_base
            )
        logger.debug("Merging %d operations from %r", len(ops), other)
        return ops

    def merge_into_log(self, other: CodeBuilder) -> None:
        """
        Drain other and append its log to this builder's log.

        The merged fragments keep their own directives, so their depth is
        decided when this builder is finalized.
        """
        self._log.extend(self._take(other))

    def merge_onto_stack(self, other: CodeBuilder) -> None:
        """Drain other and push its log as one deferred group."""
        self._stack.append(self._take(other))

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def finalize(self, indentation: Optional[str] = None) -> str:
        """
        Return the built text, applying anything left on the stack.

        Args:
            indentation: Unit string for this call only; defaults to the
                builder's configured unit

        Raises:
            NegativeIndentError: If the directives close more blocks than
                they open. The log is left as it was, so the caller can
                fix it and finalize again.
        """
        self.drain()
        unit = self.indentation if indentation is None else indentation
        return resolve(self._log, self.indent_base, unit)


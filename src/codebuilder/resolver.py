"""
Indentation resolution.

Turns a drained commit log into the final text in a single pass. The pass
only reads the operations, so resolving the same log twice yields the same
string.

Algorithm, per operation in order:
    1. CLOSE: decrement the counter (underflow is a NegativeIndentError)
    2. Emit the indentation unit `counter` times, unless the operation is
       raw or has nothing visible to emit
    3. Emit the text
    4. OPEN: increment the counter
"""

import logging
from typing import Iterable, Iterator, List, Tuple

from codebuilder.errors import NegativeIndentError
from codebuilder.model import Operation


logger = logging.getLogger(__name__)


def indented(depth: int, indentation: str) -> str:
    """Return the indentation string for depth levels."""
    if depth < 0:
        raise ValueError("Indentation can never be less than 0.")
    return indentation * depth


def walk_depths(operations: Iterable[Operation], indent_base: int) -> Iterator[Tuple[int, Operation, int]]:
    """
    Yield (index, operation, depth) for every operation.

    depth is the counter value the operation is emitted at, i.e. after its
    CLOSE and before its OPEN is applied.

    Raises:
        NegativeIndentError: If a CLOSE would take the counter below zero
    """
    depth = indent_base
    for index, op in enumerate(operations):
        if op.directive.closes:
            if depth == 0:
                raise NegativeIndentError(index, op)
            depth -= 1
        yield index, op, depth
        if op.directive.opens:
            depth += 1


def final_depth(operations: Iterable[Operation], indent_base: int) -> int:
    """Return the counter value after every operation has been applied."""
    depth = indent_base
    for _, op, emitted in walk_depths(operations, indent_base):
        depth = emitted + 1 if op.directive.opens else emitted
    return depth


def resolve(operations: List[Operation], indent_base: int, indentation: str) -> str:
    """
    Resolve operations into text.

    Args:
        operations: The commit log, already drained of deferred groups
        indent_base: Starting depth
        indentation: Unit string repeated once per depth level

    Returns:
        The concatenated output
    """
    parts: List[str] = []
    for _, op, depth in walk_depths(operations, indent_base):
        if not op.visible:
            continue
        if not op.raw:
            parts.append(indented(depth, indentation))
        parts.append(op.text)

    logger.debug("Resolved %d operations from depth %d", len(operations), indent_base)
    return "".join(parts)

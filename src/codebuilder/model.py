"""
Core Operation Model Objects

Defines the leaf data structures every builder sequence is made of:
    - Indent (how a fragment moves the running indentation counter)
    - Attribution (where a fragment was requested from)
    - Operation (one fragment of text plus its directive)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about any target language grammar
        - Are immutable once created
        - Are fully serializable
        - Represent structure, not resolution
"""

from dataclasses import dataclass
from enum import Flag
from typing import Optional


class Indent(Flag):
    """
    Indentation directive attached to a fragment.

    OPEN and CLOSE are independent bits:
        NONE            - no change
        OPEN            - increment the counter after this fragment
        CLOSE           - decrement the counter before this fragment
        CLOSE_THEN_OPEN - decrement, emit, then increment again
                          (e.g. "} else {")
    """

    NONE = 0
    OPEN = 1
    CLOSE = 4
    CLOSE_THEN_OPEN = OPEN | CLOSE

    @property
    def opens(self) -> bool:
        return bool(self & Indent.OPEN)

    @property
    def closes(self) -> bool:
        return bool(self & Indent.CLOSE)


@dataclass(frozen=True)
class Attribution:
    """
    Source location of the builder call that produced an operation.

    Stored on the Operation, never emitted or interpreted by the builder.
    A post-processing step may use it to write "#line" style markers.
    """

    file: str
    line: int


@dataclass(frozen=True)
class Operation:
    """
    A single fragment of text tagged with an indentation directive.

    Properties:
        text:
            The characters to emit. None means a pure indentation
            adjustment with nothing visible.

        directive:
            Indent flags applied around this fragment at resolution.

        raw:
            If True the fragment never receives a leading indentation
            string. The directive still moves the counter.

        attribution:
            Optional (file, line) of the originating call.

    IMPORTANT:
        Newlines are ordinary characters inside text.
        Nothing is inserted between fragments.
    """

    text: Optional[str] = None
    directive: Indent = Indent.NONE
    raw: bool = False
    attribution: Optional[Attribution] = None

    @property
    def visible(self) -> bool:
        """True when this operation emits characters."""
        return bool(self.text)

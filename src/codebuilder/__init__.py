"""
Code Builder Package

Structured text assembly with lazy indentation.

Callers issue small fragments of text, each tagged with an Indent
directive. Closing fragments can be registered on a deferred stack at the
point their opening fragment is written. The depth of every fragment is
only decided when finalize() replays the whole sequence.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Any target language grammar
    - Parsing or validating the text it is given
    - File or command-line I/O

It tracks a single integer depth and arranges text records.
"""

from codebuilder.builder import CodeBuilder, Memory
from codebuilder.config import BuilderConfig, DEFAULT_INDENTATION
from codebuilder.errors import (
    CodeBuilderError,
    ConfigError,
    EmptyStackError,
    InvalidDirectiveError,
    NegativeIndentError,
    UnknownSnapshotError,
)
from codebuilder.model import Attribution, Indent, Operation

__version__ = "0.1.0"

__all__ = [
    "Attribution",
    "BuilderConfig",
    "CodeBuilder",
    "CodeBuilderError",
    "ConfigError",
    "DEFAULT_INDENTATION",
    "EmptyStackError",
    "Indent",
    "InvalidDirectiveError",
    "Memory",
    "NegativeIndentError",
    "Operation",
    "UnknownSnapshotError",
]

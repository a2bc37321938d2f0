"""Exception hierarchy for the code builder."""

from typing import Optional

from codebuilder.model import Operation


class CodeBuilderError(Exception):
    """Base class for every error raised by this package."""
    pass


class NegativeIndentError(CodeBuilderError):
    """Raised when resolution would close a block below depth zero."""

    def __init__(self, index: int, operation: Optional[Operation] = None):
        self.index = index
        self.operation = operation
        super().__init__(
            f"Indentation can never be less than 0 (operation {index}: {operation!r})"
        )


class EmptyStackError(CodeBuilderError):
    """Raised when pop() is called with nothing on the deferred stack."""
    pass


class UnknownSnapshotError(CodeBuilderError, KeyError):
    """Raised when a snapshot name was never saved."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No saved snapshot named {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidDirectiveError(CodeBuilderError, ValueError):
    """Raised when a directive is not a valid Indent value."""
    pass


class ConfigError(CodeBuilderError, ValueError):
    """Raised when builder configuration is invalid."""
    pass

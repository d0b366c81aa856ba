"""Exception types raised by the equation engine."""

from typing import Optional


class EquationParseError(ValueError):
    """A signature was malformed or collides with the registered symbols.

    Recoverable: the equation set is left unchanged and the caller may retry
    with a corrected signature.
    """

    def __init__(self, message: str, symbol: Optional[str] = None, offset: int = 0):
        super().__init__(message)
        self.symbol = symbol
        self.offset = offset


class NodeEvaluationError(RuntimeError):
    """A malformed expression tree reached evaluation."""

    def __init__(self, message: str, node_id=None):
        super().__init__(message)
        self.node_id = node_id


class DomainError(KeyError):
    """A domain could not supply values for a variable."""

    def __str__(self) -> str:
        # KeyError quotes its argument
        return str(self.args[0]) if self.args else ''

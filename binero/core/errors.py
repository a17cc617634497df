"""Error types raised by the Binero grid model, parser, and solver."""

from typing import Optional


class BineroError(Exception):
    """Base class for every error raised by this package."""


class GridFormatError(BineroError, ValueError):
    """Puzzle text or row data is not a well-formed square grid."""

    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class OutOfBounds(BineroError, IndexError):
    def __init__(self, row: int, col: int, size: int):
        super().__init__(f"cell ({row}, {col}) is outside a {size}x{size} grid")
        self.row = row
        self.col = col
        self.size = size


class InvalidInput(BineroError):
    """The starting grid already breaks a rule, or has an unusable size."""


class Unsolvable(BineroError):
    """
    No completion exists. `reason` tells why the search stopped:
      - "exhausted": every branch was explored
      - "contradiction": forced moves produced a rule violation
      - "budget": the node budget ran out before the search finished
    """

    def __init__(self, message: str = "no valid completion exists", reason: str = "exhausted"):
        super().__init__(message)
        self.reason = reason

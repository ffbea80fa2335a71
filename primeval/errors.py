"""
primeval - Evaluation Failures

Every recoverable failure derives from EvalError so the interpreter can
render it as a diagnostic for the program being run. InternalInvariantViolation
is kept outside that hierarchy: it means the caller (or this package) broke
the operand-kind contract, and it should not be caught as a user error.
"""


class EvalError(Exception):
    """Base class for failures surfaced to the interpreted program."""


class UnimplementedOperation(EvalError):
    """Raised when an (operator, kind) combination has no defined result."""

    def __init__(self, message: str, op=None, operands: tuple = (), kinds: tuple = ()):
        self.op = op
        self.operands = operands
        self.kinds = kinds
        super().__init__(message)


class InvalidPointerArithmetic(EvalError):
    """Ordered comparison between pointers into different allocations."""

    def __init__(self, message: str = "attempted to do invalid arithmetic on pointers"):
        super().__init__(message)


class ReadPointerAsBytes(EvalError):
    """A pointer's bits were used where plain integer data is required."""

    def __init__(self, message: str = "a raw memory access tried to access part of a pointer value as raw bytes"):
        super().__init__(message)


class DivisionByZero(EvalError):
    """Integer DIV or REM with a zero divisor at the operand width."""

    def __init__(self, op=None):
        self.op = op
        name = op.name if op is not None else "division"
        super().__init__(f"attempted {name} with a divisor of zero")


class InternalInvariantViolation(Exception):
    """Unreachable code path reached. Not an interpreter-level error."""


def bug(msg: str):
    """Abort evaluation: the operand-kind contract was broken."""
    raise InternalInvariantViolation(msg)

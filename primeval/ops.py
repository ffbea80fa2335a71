"""
primeval - Operation Selectors

Binary and unary operator codes. The decoder upstream picks one of these;
the evaluator only dispatches on them.
"""

from enum import Enum


class BinOp(Enum):
    # ── Arithmetic ──
    ADD = 'add'
    SUB = 'sub'
    MUL = 'mul'
    DIV = 'div'
    REM = 'rem'

    # ── Bitwise ──
    BIT_OR  = 'bitor'
    BIT_AND = 'bitand'
    BIT_XOR = 'bitxor'

    # ── Shifts ──
    SHL = 'shl'
    SHR = 'shr'

    # ── Comparison ──
    EQ = 'eq'
    NE = 'ne'
    LT = 'lt'
    LE = 'le'
    GT = 'gt'
    GE = 'ge'

    @property
    def is_arithmetic(self) -> bool:
        return self in _ARITHMETIC

    @property
    def is_bitwise(self) -> bool:
        return self in _BITWISE

    @property
    def is_shift(self) -> bool:
        return self in (BinOp.SHL, BinOp.SHR)

    @property
    def is_comparison(self) -> bool:
        return self in _COMPARISON

    @property
    def is_ordering(self) -> bool:
        """Comparisons that need an order between operands (not EQ/NE)."""
        return self in (BinOp.LT, BinOp.LE, BinOp.GT, BinOp.GE)


class UnOp(Enum):
    NOT = 'not'
    NEG = 'neg'


_ARITHMETIC = frozenset((BinOp.ADD, BinOp.SUB, BinOp.MUL, BinOp.DIV, BinOp.REM))
_BITWISE = frozenset((BinOp.BIT_OR, BinOp.BIT_AND, BinOp.BIT_XOR))
_COMPARISON = frozenset((BinOp.EQ, BinOp.NE, BinOp.LT, BinOp.LE, BinOp.GT, BinOp.GE))

"""
primeval - Operator Evaluator

binary_op / unary_op: evaluate one operator on already-decoded primitive
values. Both are pure functions; every failure is raised to the caller.

binary_op evaluation order:
  1. Operands in different allocations -> unrelated pointer rules
  2. SHL/SHR -> width taken from the left kind, amount masked to it
  3. Kinds must match from here on
  4. F32/F64 comparisons and arithmetic (IEEE semantics)
  5. Comparisons on everything else (raw unsigned bit patterns)
  6. Bitwise ops on raw bits
  7. Integer arithmetic at exact width, returning (result, overflowed)

Integer results are computed exactly with Python ints and then wrapped to
the kind's width; the overflow flag is set when the exact result does not
fit. Wraparound is reported, never raised.
"""

import logging
import math
import operator

from .config import F32_MASK, F32_SIGN_BIT, F64_SIGN_BIT
from .errors import (
    DivisionByZero, InvalidPointerArithmetic, ReadPointerAsBytes,
    UnimplementedOperation, bug,
)
from .ops import BinOp, UnOp
from .value import (
    Pointer, PrimVal, PrimValKind,
    bits_to_bool, bits_to_f32, bits_to_f64, f32_to_bits, f64_to_bits,
)

log = logging.getLogger('primeval.evaluator')


# ──────────────────────────────────────────────
# Dispatch tables
# ──────────────────────────────────────────────

_COMPARE = {
    BinOp.EQ: operator.eq,
    BinOp.NE: operator.ne,
    BinOp.LT: operator.lt,
    BinOp.LE: operator.le,
    BinOp.GT: operator.gt,
    BinOp.GE: operator.ge,
}

_BITWISE = {
    BinOp.BIT_OR:  operator.or_,
    BinOp.BIT_AND: operator.and_,
    BinOp.BIT_XOR: operator.xor,
}

# F32 is evaluated in double precision and rounded once on the way back to
# bits; for + - * / and fmod that single rounding gives the f32 result.
_FLOAT_FORMATS = {
    PrimValKind.F32: (bits_to_f32, f32_to_bits),
    PrimValKind.F64: (bits_to_f64, f64_to_bits),
}


def _div_trunc(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


def _float_div(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _float_rem(a: float, b: float) -> float:
    """Truncated remainder (sign of the dividend)."""
    if b == 0.0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    return math.fmod(a, b)


_INT_ARITHMETIC = {
    BinOp.ADD: operator.add,
    BinOp.SUB: operator.sub,
    BinOp.MUL: operator.mul,
    BinOp.DIV: _div_trunc,
}

_FLOAT_ARITHMETIC = {
    BinOp.ADD: operator.add,
    BinOp.SUB: operator.sub,
    BinOp.MUL: operator.mul,
    BinOp.DIV: _float_div,
    BinOp.REM: _float_rem,
}


# ══════════════════════════════════════════════
# Per-width helpers
# ══════════════════════════════════════════════

def int_arithmetic(bin_op: BinOp, kind: PrimValKind, l: int, r: int) -> tuple:
    """ADD/SUB/MUL/DIV/REM at the exact width of `kind`.

    Returns (PrimVal, overflowed). A zero divisor raises DivisionByZero.
    """
    if not kind.is_int:
        bug(f"int_arithmetic called on non-integer kind {kind.label}")
    a = kind.wrap(l)
    b = kind.wrap(r)

    if bin_op in (BinOp.DIV, BinOp.REM) and b == 0:
        log.debug("%s by zero at %s", bin_op.name, kind.label)
        raise DivisionByZero(bin_op)

    if bin_op is BinOp.REM:
        # REM overflows exactly when the matching DIV does (MIN % -1)
        quotient = _div_trunc(a, b)
        exact = a - b * quotient
        overflowed = not kind.fits(quotient)
    else:
        exact = _INT_ARITHMETIC[bin_op](a, b)
        overflowed = not kind.fits(exact)

    return PrimVal.from_int(exact, kind), overflowed


def int_shift(bin_op: BinOp, kind: PrimValKind, l: int, amount: int) -> PrimVal:
    """Shift `l` read at the exact width of `kind`. SHR is arithmetic for
    signed kinds and logical for unsigned ones. `amount` is already masked.
    """
    value = kind.wrap(l)
    if bin_op is BinOp.SHL:
        return PrimVal.from_int(value << amount, kind)
    return PrimVal.from_int(value >> amount, kind)


def _unimplemented_binary(bin_op, left, left_kind, right, right_kind):
    msg = (f"unimplemented binary op: {left.describe(left_kind)}, "
           f"{right.describe(right_kind)}, {bin_op.name}")
    log.debug(msg)
    return UnimplementedOperation(msg, op=bin_op, operands=(left, right),
                                  kinds=(left_kind, right_kind))


# ══════════════════════════════════════════════
# Entry points
# ══════════════════════════════════════════════

def binary_op(bin_op: BinOp, left: PrimVal, left_kind: PrimValKind,
              right: PrimVal, right_kind: PrimValKind) -> tuple:
    """Returns the result of the operation and whether it overflowed."""

    # Same allocation (or both plain data) falls through to the general
    # dispatch below, where comparisons run on `bits`: the offsets.
    left_ptr = left.to_ptr()
    right_ptr = right.to_ptr()
    if left_ptr.alloc_id != right_ptr.alloc_id:
        return unrelated_ptr_ops(bin_op, left_ptr, right_ptr), False

    l, r = left.bits, right.bits

    # Shift RHS may have any integer kind; the LHS alone decides the width.
    if bin_op.is_shift:
        if not left_kind.is_int:
            bug(f"bitshift lhs is not integral: {left_kind.label}")
        type_bits = left_kind.width
        # e.g. u16 shifts by 0..16, so mask with 0b1111
        amount = r & (type_bits - 1)
        # the masked amount is always in range, so no overflow is reported
        return int_shift(bin_op, left_kind, l, amount), False

    if left_kind is not right_kind:
        raise _unimplemented_binary(bin_op, left, left_kind, right, right_kind)

    if left_kind.is_float:
        to_float, to_bits = _FLOAT_FORMATS[left_kind]
        if bin_op.is_comparison:
            result = _COMPARE[bin_op](to_float(l), to_float(r))
            return PrimVal.from_bool(result), False
        if bin_op.is_arithmetic:
            result = _FLOAT_ARITHMETIC[bin_op](to_float(l), to_float(r))
            return PrimVal(to_bits(result)), False

    # Raw 64-bit patterns compared as unsigned, signed kinds included
    if bin_op.is_comparison:
        return PrimVal.from_bool(_COMPARE[bin_op](l, r)), False

    if bin_op.is_bitwise:
        return PrimVal(_BITWISE[bin_op](l, r)), False

    if bin_op.is_arithmetic and left_kind.is_int:
        return int_arithmetic(bin_op, left_kind, l, r)

    raise _unimplemented_binary(bin_op, left, left_kind, right, right_kind)


def unrelated_ptr_ops(bin_op: BinOp, left: Pointer, right: Pointer) -> PrimVal:
    """Operators on pointers into different allocations (or a pointer and
    plain data). Only equality is defined.
    """
    if bin_op is BinOp.EQ:
        return PrimVal.from_bool(False)
    if bin_op is BinOp.NE:
        return PrimVal.from_bool(True)
    if bin_op.is_ordering:
        log.debug("ordered %s across allocations: %r, %r", bin_op.name, left, right)
        raise InvalidPointerArithmetic()
    if left.points_to_alloc != right.points_to_alloc:
        log.debug("%s mixes a pointer with plain data: %r, %r", bin_op.name, left, right)
        raise ReadPointerAsBytes()
    bug(f"{bin_op.name} on unrelated pointers {left!r}, {right!r}")


def unary_op(un_op: UnOp, val: PrimVal, val_kind: PrimValKind) -> PrimVal:
    bits = val.bits

    if un_op is UnOp.NOT:
        if val_kind.is_bool:
            return PrimVal.from_bool(not bits_to_bool(bits))
        if val_kind.is_int:
            return PrimVal.from_int(~val_kind.wrap(bits), val_kind)

    elif un_op is UnOp.NEG:
        # MIN wraps to itself; unary negation reports no overflow
        if val_kind.is_signed_int:
            return PrimVal.from_int(-val_kind.wrap(bits), val_kind)
        if val_kind is PrimValKind.F32:
            return PrimVal((bits & F32_MASK) ^ F32_SIGN_BIT)
        if val_kind is PrimValKind.F64:
            return PrimVal(bits ^ F64_SIGN_BIT)

    msg = f"unimplemented unary op: {un_op.name}, {val.describe(val_kind)}"
    log.debug(msg)
    raise UnimplementedOperation(msg, op=un_op, operands=(val,), kinds=(val_kind,))

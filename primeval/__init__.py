"""
primeval - Primitive Operator Evaluator
=======================================
Evaluates the arithmetic, bitwise, comparison, shift and unary operators of
an abstract-machine interpreter on typed primitive values: fixed-width
integers (8/16/32/64, signed and unsigned), IEEE floats, booleans and
pointers tagged with an allocation identity.

Architecture:
    ┌──────────────┐    ┌────────────────┐    ┌────────────────────────┐
    │ decoder      │───>│ PrimVal + Kind │───>│ binary_op / unary_op   │───> (PrimVal, overflowed)
    │ (caller)     │    │ BinOp / UnOp   │    │ (evaluator.py)         │     or EvalError
    └──────────────┘    └────────────────┘    └────────────────────────┘

    - value.py:     PrimValKind, PrimVal, Pointer, bit reinterpretation
    - ops.py:       BinOp / UnOp selectors
    - evaluator.py: the operator semantics
    - errors.py:    EvalError hierarchy + InternalInvariantViolation
    - config.py:    container layout and logging constants
"""

__version__ = "0.1.0"

from .errors import (
    EvalError, UnimplementedOperation, InvalidPointerArithmetic,
    ReadPointerAsBytes, DivisionByZero, InternalInvariantViolation,
)
from .ops import BinOp, UnOp
from .value import (
    NEVER_ALLOC, Pointer, PrimVal, PrimValKind,
    bits_to_bool, bits_to_f32, bits_to_f64, f32_to_bits, f64_to_bits,
)
from .evaluator import binary_op, unary_op, unrelated_ptr_ops

__all__ = [
    "EvalError", "UnimplementedOperation", "InvalidPointerArithmetic",
    "ReadPointerAsBytes", "DivisionByZero", "InternalInvariantViolation",
    "BinOp", "UnOp",
    "NEVER_ALLOC", "Pointer", "PrimVal", "PrimValKind",
    "bits_to_bool", "bits_to_f32", "bits_to_f64", "f32_to_bits", "f64_to_bits",
    "binary_op", "unary_op", "unrelated_ptr_ops",
]

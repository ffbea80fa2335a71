"""
primeval - Typed Primitive Values

Value model for the operator evaluator:

  PrimValKind  scalar kind tag. Each member carries its own interpretation
               (width, signedness, category) so per-width wrapping and
               extension rules are defined once, here.
  PrimVal      64-bit bit container plus an optional relocation. A value
               with a relocation is a genuine pointer (bits = offset into
               that allocation); a value without one is plain data.
  Pointer      (alloc_id, offset) view used for provenance checks.

Container invariant: integer kinds are stored sign/zero-extended to 64 bits,
F32 occupies the low 32 bits, F64 the full word, Bool is 0 or 1.
"""

import math
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Hashable

from .config import WORD_MASK, F32_MASK
from .errors import ReadPointerAsBytes, bug


class _NeverAlloc:
    """Alloc id of values that do not point into any allocation."""

    __slots__ = ()

    def __repr__(self):
        return "NEVER_ALLOC"


NEVER_ALLOC = _NeverAlloc()


# ──────────────────────────────────────────────
# Kind categories
# ──────────────────────────────────────────────

CAT_BOOL  = 'bool'
CAT_INT   = 'int'
CAT_FLOAT = 'float'
CAT_PTR   = 'ptr'


class PrimValKind(Enum):
    # member = (label, bit width, signed, category)
    BOOL = ('bool', 1,  False, CAT_BOOL)
    I8   = ('i8',   8,  True,  CAT_INT)
    I16  = ('i16',  16, True,  CAT_INT)
    I32  = ('i32',  32, True,  CAT_INT)
    I64  = ('i64',  64, True,  CAT_INT)
    U8   = ('u8',   8,  False, CAT_INT)
    U16  = ('u16',  16, False, CAT_INT)
    U32  = ('u32',  32, False, CAT_INT)
    U64  = ('u64',  64, False, CAT_INT)
    F32  = ('f32',  32, True,  CAT_FLOAT)
    F64  = ('f64',  64, True,  CAT_FLOAT)
    PTR  = ('ptr',  64, False, CAT_PTR)

    def __init__(self, label: str, width: int, signed: bool, category: str):
        self.label = label
        self.width = width
        self.signed = signed
        self.category = category

    def __str__(self):
        return self.label

    @classmethod
    def from_label(cls, label: str) -> 'PrimValKind':
        """Look up a kind by its short name ('u8', 'f64', 'ptr', ...)."""
        for kind in cls:
            if kind.label == label.lower():
                return kind
        raise ValueError(f"unknown primitive kind: {label!r}")

    # --- Category predicates ---

    @property
    def is_int(self) -> bool:
        return self.category == CAT_INT

    @property
    def is_signed_int(self) -> bool:
        return self.category == CAT_INT and self.signed

    @property
    def is_float(self) -> bool:
        return self.category == CAT_FLOAT

    @property
    def is_bool(self) -> bool:
        return self.category == CAT_BOOL

    @property
    def is_ptr(self) -> bool:
        return self.category == CAT_PTR

    # --- Integer interpretation ---

    @property
    def min_value(self) -> int:
        if self.signed:
            return -(1 << (self.width - 1))
        return 0

    @property
    def max_value(self) -> int:
        if self.signed:
            return (1 << (self.width - 1)) - 1
        return (1 << self.width) - 1

    def wrap(self, value: int) -> int:
        """Reduce an exact integer modulo 2**width, read back at this kind's
        signedness. Also serves to read a 64-bit container at exact width.
        """
        if self.is_float:
            bug(f"integer view requested for float kind {self.label}")
        value &= (1 << self.width) - 1
        if self.signed and value >> (self.width - 1):
            value -= 1 << self.width
        return value

    def fits(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def extend(self, value: int) -> int:
        """Wrap `value` to this kind, then sign/zero-extend it into 64 bits."""
        return self.wrap(value) & WORD_MASK


# ══════════════════════════════════════════════
# Bit reinterpretation helpers
# ══════════════════════════════════════════════

def bits_to_f32(bits: int) -> float:
    return struct.unpack('<f', struct.pack('<I', bits & F32_MASK))[0]


def f32_to_bits(value: float) -> int:
    """Round a Python float to single precision and return its bit pattern.

    Finite values past the f32 range round to a signed infinity, as a
    native float32 operation would.
    """
    try:
        packed = struct.pack('<f', value)
    except OverflowError:
        packed = struct.pack('<f', math.copysign(math.inf, value))
    return struct.unpack('<I', packed)[0]


def bits_to_f64(bits: int) -> float:
    return struct.unpack('<d', struct.pack('<Q', bits & WORD_MASK))[0]


def f64_to_bits(value: float) -> int:
    return struct.unpack('<Q', struct.pack('<d', value))[0]


def bits_to_bool(bits: int) -> bool:
    if bits > 1:
        bug(f"invalid boolean bit pattern: {bits:#x}")
    return bits == 1


# ══════════════════════════════════════════════
# Pointers
# ══════════════════════════════════════════════

@dataclass(frozen=True)
class Pointer:
    """An (allocation identity, offset) pair.

    Pointers with equal alloc ids are related; only related pointers have
    a defined ordering.
    """

    alloc_id: Hashable
    offset: int

    @classmethod
    def from_int(cls, value: int) -> 'Pointer':
        return cls(NEVER_ALLOC, value)

    @property
    def points_to_alloc(self) -> bool:
        return self.alloc_id is not NEVER_ALLOC

    def to_int(self) -> int:
        """Offset of a plain integer in pointer form. Genuine pointers have no
        integer value.
        """
        if self.points_to_alloc:
            raise ReadPointerAsBytes()
        return self.offset


# ══════════════════════════════════════════════
# Primitive values
# ══════════════════════════════════════════════

@dataclass(frozen=True)
class PrimVal:
    bits: int
    relocation: Hashable = NEVER_ALLOC

    def __post_init__(self):
        if not 0 <= self.bits <= WORD_MASK:
            raise ValueError(f"bit pattern does not fit the 64-bit container: {self.bits:#x}")

    # --- Construction ---

    @classmethod
    def new(cls, bits: int) -> 'PrimVal':
        """Plain data from a raw bit pattern (truncated to 64 bits)."""
        return cls(bits & WORD_MASK)

    @classmethod
    def from_bool(cls, value: bool) -> 'PrimVal':
        return cls(1 if value else 0)

    @classmethod
    def from_ptr(cls, ptr: Pointer) -> 'PrimVal':
        return cls(ptr.offset & WORD_MASK, ptr.alloc_id)

    @classmethod
    def from_int(cls, value: int, kind: PrimValKind) -> 'PrimVal':
        """Wrap `value` to `kind` and store it extended into the container."""
        return cls(kind.extend(value))

    @classmethod
    def from_float(cls, value: float, kind: PrimValKind) -> 'PrimVal':
        if kind is PrimValKind.F32:
            return cls(f32_to_bits(value))
        if kind is PrimValKind.F64:
            return cls(f64_to_bits(value))
        raise ValueError(f"not a float kind: {kind.label}")

    # --- Views ---

    @property
    def is_ptr(self) -> bool:
        return self.relocation is not NEVER_ALLOC

    def to_ptr(self) -> Pointer:
        """Pointer view. Plain data becomes (NEVER_ALLOC, bits)."""
        return Pointer(self.relocation, self.bits)

    def to_int(self, kind: PrimValKind) -> int:
        return kind.wrap(self.bits)

    def to_float(self, kind: PrimValKind) -> float:
        if kind is PrimValKind.F32:
            return bits_to_f32(self.bits)
        if kind is PrimValKind.F64:
            return bits_to_f64(self.bits)
        raise ValueError(f"not a float kind: {kind.label}")

    def to_bool(self) -> bool:
        return bits_to_bool(self.bits)

    def describe(self, kind: PrimValKind) -> str:
        """Render for diagnostics, e.g. '250u8', '-0.0f32', 'alloc7+0x10'."""
        if self.is_ptr:
            return f"alloc{self.relocation}+{self.bits:#x}"
        if kind.is_bool:
            if self.bits > 1:
                return f"bool({self.bits:#x})"
            return 'true' if self.bits else 'false'
        if kind.is_float:
            return f"{self.to_float(kind)!r}{kind.label}"
        if kind.is_ptr:
            return f"{self.bits:#x}"
        return f"{self.to_int(kind)}{kind.label}"

"""
primeval - Value Model Tests

Kind interpretation (wrap / extend), float and bool bit reinterpretation,
PrimVal construction and views, and the Pointer pair.
"""

import dataclasses

import pytest

from primeval import (
    NEVER_ALLOC, Pointer, PrimVal, PrimValKind,
    InternalInvariantViolation, ReadPointerAsBytes,
    bits_to_bool, bits_to_f32, bits_to_f64, f32_to_bits, f64_to_bits,
)
from primeval.config import WORD_MASK


# ─── Kinds ─────────────────────

class TestKinds:
    def test_from_label(self):
        assert PrimValKind.from_label("u8") is PrimValKind.U8
        assert PrimValKind.from_label("F64") is PrimValKind.F64
        assert PrimValKind.from_label("ptr") is PrimValKind.PTR

    def test_from_label_unknown(self):
        with pytest.raises(ValueError):
            PrimValKind.from_label("u128")

    def test_widths(self):
        widths = {k.label: k.width for k in PrimValKind if k.is_int}
        assert widths == {
            "i8": 8, "i16": 16, "i32": 32, "i64": 64,
            "u8": 8, "u16": 16, "u32": 32, "u64": 64,
        }

    def test_categories(self):
        assert PrimValKind.BOOL.is_bool
        assert PrimValKind.I32.is_signed_int
        assert not PrimValKind.U32.is_signed_int
        assert PrimValKind.F32.is_float and not PrimValKind.F32.is_int
        assert PrimValKind.PTR.is_ptr and not PrimValKind.PTR.is_int

    def test_min_max(self):
        assert PrimValKind.I8.min_value == -128
        assert PrimValKind.I8.max_value == 127
        assert PrimValKind.U16.max_value == 0xFFFF
        assert PrimValKind.I64.min_value == -(1 << 63)
        assert PrimValKind.U64.min_value == 0

    def test_wrap_unsigned(self):
        """0x1FF read as u8 is 0xFF"""
        assert PrimValKind.U8.wrap(0x1FF) == 0xFF
        assert PrimValKind.U8.wrap(-1) == 0xFF

    def test_wrap_signed(self):
        """0x80 read as i8 is -128; a sign-extended container reads back"""
        assert PrimValKind.I8.wrap(0x80) == -128
        assert PrimValKind.I8.wrap(WORD_MASK) == -1
        assert PrimValKind.I16.wrap(0x7FFF) == 0x7FFF

    def test_extend(self):
        """Signed kinds sign-extend into 64 bits, unsigned zero-extend"""
        assert PrimValKind.I8.extend(-1) == WORD_MASK
        assert PrimValKind.U16.extend(-1) == 0xFFFF
        assert PrimValKind.I32.extend(0x8000_0000) == 0xFFFF_FFFF_8000_0000

    def test_fits(self):
        assert PrimValKind.U8.fits(255)
        assert not PrimValKind.U8.fits(256)
        assert not PrimValKind.U8.fits(-1)
        assert PrimValKind.I8.fits(-128)

    def test_wrap_float_kind_is_a_bug(self):
        with pytest.raises(InternalInvariantViolation):
            PrimValKind.F32.wrap(1)


# ─── Bit reinterpretation ─────────────────────

class TestBitHelpers:
    def test_f32_round_trip_constants(self):
        assert f32_to_bits(1.0) == 0x3F80_0000
        assert bits_to_f32(0x3F80_0000) == 1.0
        assert f32_to_bits(-0.0) == 0x8000_0000

    def test_f64_constants(self):
        assert f64_to_bits(1.0) == 0x3FF0_0000_0000_0000
        assert bits_to_f64(0xBFF0_0000_0000_0000) == -1.0

    def test_f32_rounds_to_single(self):
        """0.1 is not representable in f32; the f32 value differs from the double"""
        assert bits_to_f32(f32_to_bits(0.1)) != 0.1
        assert f32_to_bits(0.1) == 0x3DCC_CCCD

    def test_f32_out_of_range_becomes_infinity(self):
        assert f32_to_bits(1e39) == 0x7F80_0000
        assert f32_to_bits(-1e39) == 0xFF80_0000

    def test_f32_max_is_kept(self):
        flt_max = float.fromhex("0x1.fffffep+127")
        assert f32_to_bits(flt_max) == 0x7F7F_FFFF

    def test_bits_to_f32_ignores_high_word(self):
        assert bits_to_f32(0xFFFF_FFFF_3F80_0000) == 1.0

    def test_bits_to_bool(self):
        assert bits_to_bool(0) is False
        assert bits_to_bool(1) is True

    def test_bits_to_bool_rejects_other_patterns(self):
        with pytest.raises(InternalInvariantViolation):
            bits_to_bool(2)


# ─── PrimVal ─────────────────────

class TestPrimVal:
    def test_new_truncates_to_word(self):
        assert PrimVal.new(-1).bits == WORD_MASK
        assert PrimVal.new(1 << 64 | 5).bits == 5

    def test_constructor_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            PrimVal(-1)
        with pytest.raises(ValueError):
            PrimVal(1 << 64)

    def test_from_bool(self):
        assert PrimVal.from_bool(True).bits == 1
        assert PrimVal.from_bool(False).bits == 0
        assert PrimVal.from_bool(True).to_bool() is True

    def test_from_int_sign_extends(self):
        v = PrimVal.from_int(-8, PrimValKind.I8)
        assert v.bits == 0xFFFF_FFFF_FFFF_FFF8
        assert v.to_int(PrimValKind.I8) == -8

    def test_from_int_wraps(self):
        assert PrimVal.from_int(260, PrimValKind.U8).bits == 4

    def test_from_float(self):
        assert PrimVal.from_float(-0.0, PrimValKind.F32).bits == 0x8000_0000
        assert PrimVal.from_float(2.0, PrimValKind.F64).to_float(PrimValKind.F64) == 2.0

    def test_from_float_rejects_int_kind(self):
        with pytest.raises(ValueError):
            PrimVal.from_float(1.0, PrimValKind.U8)

    def test_plain_value_pointer_view(self):
        """Plain data views as (NEVER_ALLOC, bits)"""
        v = PrimVal.new(42)
        assert not v.is_ptr
        assert v.to_ptr() == Pointer(NEVER_ALLOC, 42)
        assert v.to_ptr().to_int() == 42

    def test_genuine_pointer(self):
        v = PrimVal.from_ptr(Pointer(3, 16))
        assert v.is_ptr
        assert v.bits == 16
        assert v.to_ptr() == Pointer(3, 16)

    def test_genuine_pointer_has_no_int_value(self):
        with pytest.raises(ReadPointerAsBytes):
            Pointer(3, 16).to_int()

    def test_pointer_from_int(self):
        assert Pointer.from_int(5).to_int() == 5
        assert not Pointer.from_int(5).points_to_alloc

    def test_values_are_immutable(self):
        v = PrimVal.new(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            v.bits = 2

    def test_describe(self):
        assert PrimVal.from_int(250, PrimValKind.U8).describe(PrimValKind.U8) == "250u8"
        assert PrimVal.from_int(-8, PrimValKind.I8).describe(PrimValKind.I8) == "-8i8"
        assert PrimVal.from_bool(True).describe(PrimValKind.BOOL) == "true"
        assert PrimVal.from_float(-0.0, PrimValKind.F32).describe(PrimValKind.F32) == "-0.0f32"
        assert PrimVal.from_ptr(Pointer(7, 16)).describe(PrimValKind.PTR) == "alloc7+0x10"
        assert PrimVal.new(16).describe(PrimValKind.PTR) == "0x10"

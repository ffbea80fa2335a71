#!/usr/bin/env python3
"""
primevalkit - Primitive Operator Evaluator CLI
==============================================

Evaluate a single interpreter operator from the command line:
    primevalkit bin    - Run a binary operator on two typed operands
    primevalkit un     - Run a unary operator on one typed operand
    primevalkit kinds  - List primitive kinds

Usage:
    python primevalkit.py [-v|-q] [--log-file PATH] <command> [options]

Operands:
    42, -8, 0xFF, $FF   integers (decimal, C hex, Motorola hex)
    1.5, nan, inf       floats for f32 / f64
    true, false         booleans
    7:0x10              pointer into allocation 7 at offset 0x10

Examples:
    python primevalkit.py bin add u8 250 10          # 4u8 overflow=true
    python primevalkit.py bin shr i8 -8 100 --right-kind u32   # -1i8 overflow=false
    python primevalkit.py bin lt ptr 1:0 2:0         # error: invalid pointer arithmetic
    python primevalkit.py un neg f32 0.0             # -0.0f32
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from primeval import (
    __version__, BinOp, UnOp, EvalError, Pointer, PrimVal, PrimValKind,
    binary_op, unary_op,
)
from primeval.config import (
    CONSOLE_LOG_FORMAT, FILE_LOG_FORMAT, DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV,
)

log = logging.getLogger('primevalkit')

KIND_LABELS = [kind.label for kind in PrimValKind]


def parse_int_arg(value: str) -> int:
    """Parse an integer that may be hex (0x...), $ prefix, or decimal."""
    value = value.strip()
    sign = 1
    if value.startswith("-"):
        sign = -1
        value = value[1:]
    if value.startswith("0x") or value.startswith("0X"):
        return sign * int(value, 16)
    if value.startswith("$"):
        return sign * int(value[1:], 16)  # Motorola hex convention
    return sign * int(value)


def parse_operand(text: str, kind: PrimValKind) -> PrimVal:
    """Build a PrimVal of `kind` from command-line text."""
    if kind.is_bool:
        lowered = text.strip().lower()
        if lowered in ("true", "1"):
            return PrimVal.from_bool(True)
        if lowered in ("false", "0"):
            return PrimVal.from_bool(False)
        raise ValueError(f"invalid bool operand: {text!r}")
    if kind.is_float:
        return PrimVal.from_float(float(text), kind)
    if ":" in text:
        alloc, offset = text.split(":", 1)
        return PrimVal.from_ptr(Pointer(parse_int_arg(alloc), parse_int_arg(offset)))
    return PrimVal.from_int(parse_int_arg(text), kind)


def setup_logging(verbose: int = 0, quiet: bool = False, log_file: str = None):
    """Console logging on stderr; optional file log at DEBUG."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
        level = getattr(logging, name, logging.WARNING)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    handlers = [console]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if log_file else level,
        handlers=handlers,
        force=True,
    )


# ══════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════

def cmd_bin(args) -> int:
    op = BinOp(args.op)
    kind = PrimValKind.from_label(args.kind)
    right_kind = PrimValKind.from_label(args.right_kind) if args.right_kind else kind
    left = parse_operand(args.left, kind)
    right = parse_operand(args.right, right_kind)

    log.debug("bin %s %s %s", op.name, left.describe(kind), right.describe(right_kind))
    result, overflowed = binary_op(op, left, kind, right, right_kind)

    result_kind = PrimValKind.BOOL if op.is_comparison else kind
    flag = "true" if overflowed else "false"
    print(f"{result.describe(result_kind)} overflow={flag}")
    return 0


def cmd_un(args) -> int:
    op = UnOp(args.op)
    kind = PrimValKind.from_label(args.kind)
    val = parse_operand(args.value, kind)

    log.debug("un %s %s", op.name, val.describe(kind))
    result = unary_op(op, val, kind)
    print(result.describe(kind))
    return 0


def cmd_kinds(args) -> int:
    for kind in PrimValKind:
        sign = "signed" if kind.signed else "unsigned"
        print(f"{kind.label:5s} {kind.width:3d} bits  {sign:8s}  {kind.category}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="primevalkit",
        description="Evaluate interpreter operators on typed primitive values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="kinds: " + ", ".join(KIND_LABELS),
    )
    parser.add_argument("--version", action="version", version=f"primevalkit {__version__}")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Log evaluation details (DEBUG)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--log-file", help="Also write a DEBUG log to this file")
    sub = parser.add_subparsers(dest="command", metavar="command")

    # ── bin ──────────────────────────────────────────────────────────────
    p_bin = sub.add_parser("bin", help="Evaluate a binary operator")
    p_bin.add_argument("op", choices=[op.value for op in BinOp])
    p_bin.add_argument("kind", choices=KIND_LABELS, help="Left operand kind")
    p_bin.add_argument("left")
    p_bin.add_argument("right")
    p_bin.add_argument("--right-kind", choices=KIND_LABELS, default=None,
                       help="Right operand kind (default: same as left)")
    p_bin.set_defaults(func=cmd_bin)

    # ── un ───────────────────────────────────────────────────────────────
    p_un = sub.add_parser("un", help="Evaluate a unary operator")
    p_un.add_argument("op", choices=[op.value for op in UnOp])
    p_un.add_argument("kind", choices=KIND_LABELS)
    p_un.add_argument("value")
    p_un.set_defaults(func=cmd_un)

    # ── kinds ────────────────────────────────────────────────────────────
    p_kinds = sub.add_parser("kinds", help="List primitive kinds")
    p_kinds.set_defaults(func=cmd_kinds)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose, args.quiet, args.log_file)

    try:
        return args.func(args)
    except ValueError as e:
        parser.error(str(e))
    except EvalError as e:
        log.debug("evaluation failed: %s", type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

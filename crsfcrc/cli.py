from __future__ import annotations

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from crsfcrc import GenericCRC
from crsfcrc.constants import BYTE_MASK
from crsfcrc.errors import CRCError
from crsfcrc.strategy import build_table


def _parse_int(text: str) -> int:
    """Parse a decimal or 0x-prefixed integer argument."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")


def _parse_byte(text: str) -> int:
    value = _parse_int(text)
    if not 0 <= value <= BYTE_MASK:
        raise argparse.ArgumentTypeError(f"value out of byte range: {text!r}")
    return value


def _parse_hex(tokens: List[str]) -> bytes:
    """Join hex tokens ("c8 0c", "c80c", "0xc8") into bytes."""
    cleaned = []
    for tok in tokens:
        tok = tok.strip()
        if tok[:2].lower() == "0x":
            tok = tok[2:]
        cleaned.append(tok)
    try:
        return bytes.fromhex(" ".join(cleaned))
    except ValueError as e:
        raise ValueError(f"invalid hex input: {e}")


def _load_input(hex_tokens: List[str], file: Optional[str]) -> bytes:
    if file is not None:
        if hex_tokens:
            raise ValueError("give either hex bytes or --file, not both")
        return Path(file).read_bytes()
    return _parse_hex(hex_tokens)


def _format_table(fmt: str) -> str:
    table = build_table()
    lines = []
    if fmt == "c":
        lines.append("static const uint8_t crc_8_dvb_s2_table[256] = {")
    else:
        lines.append("CRC_8_DVB_S2_TABLE = (")
    for i in range(0, len(table), 8):
        row = ", ".join(f"0x{val:02X}" for val in table[i:i + 8])
        lines.append("    " + row + ",")
    lines.append("};" if fmt == "c" else ")")
    return "\n".join(lines)


def cmd_calc(hex_tokens: List[str], *, start: int = 0, offset: Optional[int] = None, file: Optional[str] = None) -> int:
    """Print and return the checksum of the given bytes.

    Args:
        hex_tokens: Hex byte tokens; ignored when file is given.
        start: Seed for the three-argument form.
        offset: When set, use the offset form over the whole buffer.
        file: Read raw bytes from this path instead of hex tokens.
    """
    data = _load_input(hex_tokens, file)
    with GenericCRC() as crc:
        if offset is None:
            value = crc.calculate(start, data, len(data))
        else:
            if not 0 <= offset < len(data):
                raise ValueError(f"offset {offset} is outside the {len(data)}-byte buffer")
            if start:
                print("Warning: --start is ignored when --offset is given", file=sys.stderr)
            value = crc.calculate(offset, start, data, len(data))
    print(f"0x{value:02X}")
    return value


def cmd_check(expected: int, hex_tokens: List[str], *, start: int = 0, file: Optional[str] = None) -> bool:
    data = _load_input(hex_tokens, file)
    with GenericCRC() as crc:
        ok = crc.verify(expected, start, data, len(data))
        computed = crc.calculate(start, data, len(data))
    if ok:
        print("OK")
    else:
        print(f"MISMATCH computed=0x{computed:02X} expected=0x{expected:02X}")
    return ok


def cmd_table(fmt: str = "c") -> None:
    print(_format_table(fmt))


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="crsfcrc",
        description="CRC-8/DVB-S2 (poly 0xD5) checksum tool",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_calc = sub.add_parser("calc", help="Compute the checksum of a byte buffer")
    ap_calc.add_argument("bytes", nargs="*", help="Hex bytes, e.g. 'c8 0c 14' or 'c80c14'")
    ap_calc.add_argument("--start", type=_parse_byte, default=0, help="Seed value (default 0)")
    ap_calc.add_argument(
        "--offset",
        type=_parse_int,
        help="Seed from the byte at this index and fold the rest of the buffer (ignores --start)",
    )
    ap_calc.add_argument("--file", help="Read raw bytes from a file instead")

    ap_check = sub.add_parser("check", help="Compare a buffer's checksum with an expected value")
    ap_check.add_argument("expected", type=_parse_byte, help="Expected checksum byte")
    ap_check.add_argument("bytes", nargs="*", help="Hex bytes")
    ap_check.add_argument("--start", type=_parse_byte, default=0, help="Seed value (default 0)")
    ap_check.add_argument("--file", help="Read raw bytes from a file instead")

    ap_table = sub.add_parser("table", help="Print the 256-entry lookup table")
    ap_table.add_argument("--format", choices=["c", "python"], default="c", help="Output syntax (default c)")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "calc":
            cmd_calc(args.bytes, start=args.start, offset=args.offset, file=args.file)
        elif args.cmd == "check":
            ok = cmd_check(args.expected, args.bytes, start=args.start, file=args.file)
            sys.exit(0 if ok else 1)
        elif args.cmd == "table":
            cmd_table(args.format)
        else:
            raise RuntimeError("Unknown command")
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (CRCError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()

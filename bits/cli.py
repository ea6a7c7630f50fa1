#!/usr/bin/env python3
"""
BITS — Packet Decoder

Command-line interface for decoding and evaluating BITS transmissions.

Usage:
    bits tree <input>       Show the decoded packet tree
    bits sum <input>        Sum of all packet versions
    bits eval <input>       Evaluate the operator tree
    bits inspect <input>    Show bit coverage and trailing padding

<input> is a file containing hex text, or the hex text itself.
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from pathlib import Path
from typing import Optional

from bits import __version__
from bits.config import DecoderConfig, OverflowPolicy
from bits.core import HEX_DIGITS, Transmission
from bits.errors import BitsError
from bits.packet import Literal, Packet


# ============================================================================
# Formatting helpers
# ============================================================================

class C:
    """ANSI colors."""
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    RESET = "\033[0m"

    @staticmethod
    def off():
        C.BOLD = C.DIM = C.RED = C.GREEN = C.YELLOW = C.CYAN = C.RESET = ""


def header(text: str) -> str:
    return f"\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}\n{C.BOLD}  {text}{C.RESET}\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}"


def ok(text: str) -> str:
    return f"  {C.GREEN}✓{C.RESET} {text}"


def warn(text: str) -> str:
    return f"  {C.YELLOW}⚠{C.RESET} {text}"


def fail(text: str) -> str:
    return f"  {C.RED}✗{C.RESET} {text}"


def bar(ratio: float, width: int = 30) -> str:
    filled = int(ratio * width)
    empty = width - filled
    if ratio > 0.8:
        color = C.GREEN
    elif ratio > 0.4:
        color = C.YELLOW
    else:
        color = C.RED
    return f"{color}{'█' * filled}{'░' * empty}{C.RESET} {ratio:.1%}"


def describe(packet: Packet) -> str:
    """One-line label for a packet."""
    span = f" {C.DIM}[bits {packet.span.start}:{packet.span.end}]{C.RESET}" if packet.span else ""
    if isinstance(packet.body, Literal):
        return f"v{packet.version} {C.GREEN}{packet.body.value}{C.RESET}{span}"
    code = packet.body.code
    return f"v{packet.version} {C.BOLD}{code.name}{C.RESET} ({code.symbol}){span}"


def render_tree(packet: Packet, prefix: str = "", last: bool = True, root: bool = True) -> list[str]:
    """Draw a packet tree with box-drawing connectors."""
    if root:
        lines = [describe(packet)]
        child_prefix = ""
    else:
        lines = [f"{prefix}{'└─ ' if last else '├─ '}{describe(packet)}"]
        child_prefix = prefix + ("   " if last else "│  ")

    children = packet.children
    for i, child in enumerate(children):
        lines.extend(render_tree(child, child_prefix, i == len(children) - 1, root=False))
    return lines


# ============================================================================
# Input
# ============================================================================

def config_from_args(args) -> DecoderConfig:
    return DecoderConfig(max_depth=args.max_depth, strict_padding=args.strict_padding)


def load_input(args) -> Transmission:
    """Read <input> as a hex file when it names one, else as hex text."""
    config = config_from_args(args)
    text = args.input.strip()
    if text and all(char in HEX_DIGITS for char in text):
        return Transmission.from_hex(text, config)
    try:
        is_file = Path(args.input).is_file()
    except OSError:
        # Names the OS refuses outright (too long, bad bytes) are not files
        is_file = False
    if is_file:
        return Transmission.from_file(args.input, config)
    return Transmission.from_hex(args.input, config)


# ============================================================================
# Commands
# ============================================================================

def cmd_tree(args):
    """Show the decoded packet tree."""
    tx = load_input(args)
    print(header(f"TREE: {tx.origin}"))
    for line in render_tree(tx.packet):
        print(f"  {line}")


def cmd_sum(args):
    """Print the version sum."""
    print(load_input(args).version_sum())


def cmd_eval(args):
    """Print the value of the operator tree."""
    policy = OverflowPolicy.WRAP if args.wrap else OverflowPolicy.CHECK
    print(load_input(args).evaluate(policy))


def cmd_inspect(args):
    """Show how much of the buffer the packet tree claims."""
    tx = load_input(args)
    report = tx.report()

    print(header(f"INSPECT: {tx.origin}"))
    print(f"  {C.DIM}Size: {len(tx)} B  |  SHA-256: {tx.hash[:16]}{C.RESET}")
    print(f"\n  Coverage: {bar(report.coverage)}")
    print(f"  Consumed: {report.consumed_bits}/{report.total_bits} bits")
    print(f"  Packets:  {report.packet_count}")
    print(f"  Depth:    {report.depth}")

    if report.trailing_bits == 0:
        print(ok("No trailing bits"))
    elif report.padding_is_zero:
        print(ok(f"{report.trailing_bits} trailing bit(s) of zero padding"))
    else:
        print(warn(
            f"{report.trailing_bits} trailing bit(s) are not zero "
            f"(value {report.trailing_value:#x})"
        ))


# ============================================================================
# CLI setup
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bits",
        description="BITS — Packet Decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        examples:
          bits tree D2FE28
          bits sum inputs/16
          bits eval 9C0141080250320F1802104A08
          bits inspect transmission.hex --strict-padding
        """),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log decoder progress (-vv for every packet)")
    parser.add_argument("--max-depth", type=int, default=DecoderConfig.max_depth,
                        help="Maximum packet nesting depth")
    parser.add_argument("--strict-padding", action="store_true",
                        help="Reject non-zero bits after the outermost packet")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    p = sub.add_parser("tree", help="Show the decoded packet tree")
    p.add_argument("input", help="Hex file or hex string")

    p = sub.add_parser("sum", help="Sum of all packet versions")
    p.add_argument("input", help="Hex file or hex string")

    p = sub.add_parser("eval", aliases=["evaluate"], help="Evaluate the operator tree")
    p.add_argument("input", help="Hex file or hex string")
    p.add_argument("--wrap", action="store_true",
                   help="Wrap results modulo 2**64 instead of failing on overflow")

    p = sub.add_parser("inspect", aliases=["info"], help="Show bit coverage and padding")
    p.add_argument("input", help="Hex file or hex string")

    return parser


def main(argv: Optional[list[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        C.off()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if not args.command:
        parser.print_help()
        return

    commands = {
        "tree": cmd_tree,
        "sum": cmd_sum,
        "eval": cmd_eval, "evaluate": cmd_eval,
        "inspect": cmd_inspect, "info": cmd_inspect,
    }

    handler = commands.get(args.command)
    if handler:
        try:
            handler(args)
        except FileNotFoundError as e:
            print(fail(f"File not found: {e}"))
            sys.exit(1)
        except (BitsError, ValueError) as e:
            print(fail(str(e)))
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

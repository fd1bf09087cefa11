"""anoto command line.

Commands:
    anoto generate   -- Generate a page matrix for a section (JSON or text file)
    anoto lookup     -- Print the patch at a grid point of a section's page
    anoto decode     -- Decode an observed patch given as JSON

Exit codes: 0 on success, 1 when a patch is not recognized (rescan),
2 when the input is malformed or the arguments are invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import structlog

from .codec import Codec
from .config import DEFAULT_PRESET, PRESET_INDEX, select_preset
from .errors import CodecError
from .ingest import decode_patch_json
from .persist import save_matrix_json, save_matrix_txt
from .renderer import render_arrows, render_bits

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_UNRECOGNIZED = 1
EXIT_MALFORMED = 2


def _configure_logging(verbose: bool) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _parse_cli(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="anoto",
        description="Absolute-position dot pattern encoder/decoder",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESET_INDEX),
        default=DEFAULT_PRESET,
        help=f"Codec preset (default: {DEFAULT_PRESET})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug events to stderr")
    sub = parser.add_subparsers(dest="cmd", required=True)

    # ------------------------------------------------------------
    # generate sub-command
    # ------------------------------------------------------------
    p_gen = sub.add_parser("generate", help="Generate the dot matrix of one page")
    p_gen.add_argument("output", type=Path, help="Output file (.json or .txt)")
    p_gen.add_argument("--sect-u", type=int, default=10, help="Horizontal section (default: 10)")
    p_gen.add_argument("--sect-v", type=int, default=10, help="Vertical section (default: 10)")
    p_gen.add_argument("--height", type=int, help="Grid rows (default: fill an A4 page)")
    p_gen.add_argument("--width", type=int, help="Grid columns (default: fill an A4 page)")

    # ------------------------------------------------------------
    # lookup sub-command
    # ------------------------------------------------------------
    p_lookup = sub.add_parser("lookup", help="Print the patch at a grid point of a page")
    p_lookup.add_argument("x", type=int, help="Grid column")
    p_lookup.add_argument("y", type=int, help="Grid row")
    p_lookup.add_argument("--sect-u", type=int, default=10, help="Horizontal section (default: 10)")
    p_lookup.add_argument("--sect-v", type=int, default=10, help="Vertical section (default: 10)")
    p_lookup.add_argument("--bits", action="store_true", help="Print [x, y] bit pairs instead of arrows")

    # ------------------------------------------------------------
    # decode sub-command
    # ------------------------------------------------------------
    p_decode = sub.add_parser("decode", help="Decode an observed patch")
    p_decode.add_argument("input", nargs="?", default="-", help="JSON file, or - for stdin (default)")

    return parser.parse_args(argv)


def _generate(codec: Codec, args: argparse.Namespace) -> int:
    height, width = codec.page_shape()
    height = args.height if args.height is not None else height
    width = args.width if args.width is not None else width

    matrix = codec.generate_matrix(height, width, args.sect_u, args.sect_v)
    if args.output.suffix == ".txt":
        save_matrix_txt(args.output, matrix)
    else:
        save_matrix_json(
            args.output,
            matrix,
            preset=codec.config.name,
            sect_u=args.sect_u,
            sect_v=args.sect_v,
        )
    print(f"[anoto] Generated {height}x{width} matrix for section ({args.sect_u}, {args.sect_v}) -> {args.output}")
    return EXIT_OK


def _lookup(codec: Codec, args: argparse.Namespace) -> int:
    patch = codec.lookup_patch(args.sect_u, args.sect_v, args.x, args.y)
    print(render_bits(patch) if args.bits else render_arrows(patch))
    return EXIT_OK


def _decode(codec: Codec, args: argparse.Namespace) -> int:
    if args.input == "-":
        text = sys.stdin.read()
    else:
        text = Path(args.input).read_text(encoding="utf-8")

    result = decode_patch_json(codec, text)
    if result.ok:
        x, y = result.position
        print(f"Position: ({x}, {y})")
        return EXIT_OK

    print(f"Decoding Error: {result.error}", file=sys.stderr)
    return EXIT_UNRECOGNIZED if result.error_kind == "unrecognized" else EXIT_MALFORMED


COMMANDS = {
    "generate": _generate,
    "lookup": _lookup,
    "decode": _decode,
}


def main(argv: list[str] | None = None) -> int:
    args = _parse_cli(argv)
    _configure_logging(args.verbose)

    try:
        codec = Codec(select_preset(args.preset))
        return COMMANDS[args.cmd](codec, args)
    except (CodecError, ValueError, OSError) as e:
        logger.debug("command_failed", cmd=args.cmd, error=str(e))
        print(f"[anoto] {e}", file=sys.stderr)
        return EXIT_MALFORMED


if __name__ == "__main__":
    sys.exit(main())

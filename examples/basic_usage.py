#!/usr/bin/env python3
"""Basic usage example for anoto.

Demonstrates generating a page, looking up a patch, and decoding it back.

Usage:
    python examples/basic_usage.py
"""

import os
import sys

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from anoto.codec import anoto_6x6_a4_fixed
from anoto.errors import AmbiguousOrUnknownWindow
from anoto.ingest import decode_patch_json
from anoto.renderer import render_arrows
from anoto.tiler import extract_6x6_section


def example_page_roundtrip(codec):
    """Generate an A4 page and decode patches cut from it."""
    print("=" * 60)
    print("Example 1: Page Generation and Decoding")
    print("=" * 60)

    height, width = codec.page_shape()
    page = codec.generate_matrix(height, width, sect_u=10, sect_v=10)
    print(f"  Page grid:   {height}x{width}")
    print(f"  Period:      {codec.mns_length}")

    for row, col in [(0, 0), (12, 30), (height - 6, width - 6)]:
        patch = extract_6x6_section(page, row, col)
        x, y = codec.decode_position(patch)
        print(f"  Patch at row {row:2d}, col {col:2d} -> position ({x}, {y})")
    print()


def example_lookup(codec):
    """Render the patch a reader sees at a grid point, then decode the text."""
    print("=" * 60)
    print("Example 2: Pattern Lookup")
    print("=" * 60)

    text = render_arrows(codec.lookup_patch(10, 10, 0, 0))
    print(text)

    result = decode_patch_json(codec, text)
    print(f"  Decoded:     {result.position}")
    print()


def example_unrecognized(codec):
    """A pattern that was never printed is reported, not guessed."""
    print("=" * 60)
    print("Example 3: Unrecognized Pattern")
    print("=" * 60)

    blank = [[0] * 6 for _ in range(6)]
    try:
        codec.decode_position(blank)
    except AmbiguousOrUnknownWindow as e:
        print(f"  Rejected:    {e}")
    print()


if __name__ == "__main__":
    codec = anoto_6x6_a4_fixed()
    example_page_roundtrip(codec)
    example_lookup(codec)
    example_unrecognized(codec)

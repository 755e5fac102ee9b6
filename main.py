#!/usr/bin/env python3
"""
ptistitch command line.

Usage:
    python main.py build kit.pti kick.wav snare.wav hat.wav --name "my kit"
    python main.py build kit.pti kick.wav --layer 1:sub.wav --trim both
    python main.py inspect kit.pti
"""
import argparse
import asyncio
import sys
from pathlib import Path

from ptistitch.core import SliceComposer, TrimOption
from ptistitch.pti import parse_header
from ptistitch.utils.logger import setup_logger


async def build_kit(composer, sources, layers, trim):
    for path in sources:
        await composer.add_slice(path.name, path.read_bytes())

    for entry in layers:
        index, _, file_name = entry.partition(":")
        path = Path(file_name)
        if not index.isdigit() or not path.is_file():
            print(f"Error: bad layer argument {entry!r}")
            continue
        slice_index = int(index) - 1
        if not 0 <= slice_index < composer.total_slices:
            print(f"Error: no slice {index} for layer {file_name}")
            continue
        await composer.add_layer(composer.slices[slice_index], path.name, path.read_bytes())

    if trim is not TrimOption.NONE:
        for s in composer.slices:
            composer.trim_audio(s, trim)


def cmd_build(args):
    """Handle build command."""
    sources = [Path(p) for p in args.sources]
    missing = [str(p) for p in sources if not p.is_file()]
    if missing:
        print(f"Error: file(s) not found: {', '.join(missing)}")
        return 1

    composer = SliceComposer()
    try:
        asyncio.run(build_kit(composer, sources, args.layer, TrimOption(args.trim)))
        if composer.total_slices == 0:
            print("Error: no usable sources")
            return 1
        output = Path(args.output)
        output.write_bytes(composer.export_instrument(args.name or output.stem))
        print(f"Wrote {output} ({composer.total_slices} slices, {composer.total_duration:.2f}s)")
        return 0
    finally:
        composer.close()


def cmd_inspect(args):
    """Handle inspect command."""
    path = Path(args.file)
    if not path.is_file():
        print(f"Error: {path} not found")
        return 1

    header = parse_header(path.read_bytes())
    print(f"Name: {header.instrument_name}")
    print(f"Playback: {header.sample_playback.name}")
    print(f"Sample bytes: {header.sample_length}")
    print(f"Filter: {header.filter_type.name} ({'on' if header.filter_enabled else 'off'})")
    print(f"Slices: {header.total_slices}")
    for i, start in enumerate(header.slices, 1):
        print(f"  {i:2d}: {start * 100:6.2f}%")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Build Polyend Tracker drum kits from audio files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Stitch audio files into a beat-sliced .pti")
    build.add_argument("output", help="Output .pti path")
    build.add_argument("sources", nargs="+", help="Audio files, one slice each")
    build.add_argument("-n", "--name", default="", help="Instrument name (default: output file name)")
    build.add_argument("-l", "--layer", action="append", default=[], metavar="N:FILE",
                       help="Layer FILE onto slice N (1-based); repeatable")
    build.add_argument("-t", "--trim", choices=[o.value for o in TrimOption], default="none",
                       help="Trim silence from every slice")
    build.set_defaults(func=cmd_build)

    inspect = subparsers.add_parser("inspect", help="Print the header of a .pti file")
    inspect.add_argument("file", help=".pti file")
    inspect.set_defaults(func=cmd_inspect)

    args = parser.parse_args()
    setup_logger("DEBUG" if args.verbose else None)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

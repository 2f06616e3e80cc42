# run_from_file.py

import argparse
import sys

from lunatex.app_logic import convert_file
from lunatex.config import load_note_style
from lunatex.errors import ConversionError


def build_parser():
    parser = argparse.ArgumentParser(
        prog="lunatex",
        description=(
            "Convert a Lua script, a Python script or a text note with LaTeX markup "
            "into a TI-Nspire .tns document."
        ),
    )
    parser.add_argument("input", help="Input file (.lua, .py or .txt)")
    parser.add_argument("output", help="Output .tns file")
    parser.add_argument("--style", help="YAML file with the text note layout (font_size, line_height, ...)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print the final result line")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        style = load_note_style(args.style)
        convert_file(args.input, args.output, style=style, logger=None if args.quiet else print)
    except (ConversionError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Created {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

import argparse
import sys
from pathlib import Path

from asciify.charsets import PRESETS
from asciify.converter import convert, convert_to_file
from asciify.decoder import DecodeError
from asciify.options import InvalidConfiguration, build_options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="asciify", description="Render an image as ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument("-w", "--width", type=int, default=80, help="Output width in columns (default: 80)")
    parser.add_argument(
        "-H", "--height", type=int, default=0, help="Output height in rows (default: 0, derived from aspect ratio)"
    )
    parser.add_argument("-c", "--charset", default=None, help="Characters ordered from darkest to brightest pixel")
    parser.add_argument(
        "-p", "--preset", default="default", choices=sorted(PRESETS), help="Named charset, ignored with --charset"
    )
    parser.add_argument("-o", "--output", default=None, help="Write to this file instead of standard output")
    parser.add_argument("--color", action="store_true", default=False, help="Enable truecolor ANSI output")
    parser.add_argument("--invert", action="store_true", default=False, help="Invert brightness")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    image_path = Path(args.image)
    if not image_path.is_file():
        print(f"Error: file not found: {image_path}", file=sys.stderr)
        return 1

    try:
        options = build_options(
            width=args.width,
            height=args.height,
            charset=args.charset if args.charset is not None else PRESETS[args.preset],
            colored=args.color,
            inverted=args.invert,
        )
        data = image_path.read_bytes()
        if args.output:
            convert_to_file(data, args.output, options)
        else:
            sys.stdout.write(convert(data, options))
    except (DecodeError, InvalidConfiguration, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

from pathlib import Path
from typing import BinaryIO, TextIO

import numpy as np
from PIL import Image

from asciify.decoder import decode_image
from asciify.options import DEFAULT_OPTIONS, ConvertOptions
from asciify.sampling import brightness, channels, char_indices, colours, sample_pixels, target_size

RESET = "\033[0m"


def _format_colour(rows: list[list[str]], rgb: np.ndarray) -> list[str]:
    """Prefix every glyph with its own truecolor foreground escape."""
    out = []
    for r, row in enumerate(rows):
        parts = []
        for c, char in enumerate(row):
            red, green, blue = (int(v) for v in rgb[r, c])
            parts.append(f"\033[38;2;{red};{green};{blue}m{char}")
        out.append("".join(parts))
    return out


def image_to_lines(image: Image.Image | str | Path, options: ConvertOptions = DEFAULT_OPTIONS) -> list[str]:
    """Render an image to output rows without line terminators.

    When colour escapes were emitted, the reset escape is appended as the
    final element.
    """
    if not isinstance(image, Image.Image):
        with open(image, "rb") as f:
            image = decode_image(f)
    cols, rows = target_size(image.width, image.height, options.width, options.height)
    if rows == 0:
        return []

    samples = sample_pixels(channels(image), cols, rows)
    glyphs = np.array(list(options.charset))
    indices = char_indices(brightness(samples, options.inverted), len(options.charset))
    grid = glyphs[indices].tolist()

    if options.colored:
        return _format_colour(grid, colours(samples)) + [RESET]
    return ["".join(row) for row in grid]


def image_to_ascii(image: Image.Image | str | Path, options: ConvertOptions = DEFAULT_OPTIONS) -> str:
    lines = image_to_lines(image, options)
    if options.colored and lines:
        *rows, reset = lines
        return "".join(row + "\n" for row in rows) + reset
    return "".join(line + "\n" for line in lines)


def write_ascii(image: Image.Image | str | Path, stream: TextIO, options: ConvertOptions = DEFAULT_OPTIONS) -> None:
    stream.write(image_to_ascii(image, options))


def convert(data: bytes | BinaryIO, options: ConvertOptions | None = None, **overrides) -> str:
    """Decode image bytes and render them.

    Overrides are applied on top of ``options`` (or the defaults), one field
    per named option; None leaves a field unchanged.
    """
    options = (options or DEFAULT_OPTIONS).override(**overrides)
    return image_to_ascii(decode_image(data), options)


def convert_to_file(
    data: bytes | BinaryIO, path: str | Path, options: ConvertOptions | None = None, **overrides
) -> None:
    text = convert(data, options, **overrides)
    # Only touch the destination once the whole conversion has succeeded
    Path(path).write_text(text, encoding="utf-8")

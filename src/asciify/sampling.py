import numpy as np
from PIL import Image

# 8-bit channels are widened so that 255 maps to 65535
CHANNEL_MAX = 65535
WIDEN = 257
QUANTIZE = 256
BRIGHTNESS_MAX = CHANNEL_MAX // QUANTIZE

# Pillow modes holding greyscale samples wider than 8 bits
WIDE_GREY_MODES = {"I", "I;16", "I;16L", "I;16B", "I;16N"}

# Character cells are roughly twice as tall as they are wide
CELL_ASPECT = 0.5


def target_size(src_width: int, src_height: int, width: int, height: int = 0) -> tuple[int, int]:
    """Return the (columns, rows) of the output grid.

    A height of 0 derives the row count from the source aspect ratio, halved
    to compensate for tall character cells.
    """
    if height > 0:
        return width, height
    aspect = src_height / src_width
    return width, max(0, int(width * aspect * CELL_ASPECT))


def channels(image: Image.Image) -> np.ndarray:
    """Return the image as an (h, w, 3) array on the 0..65535 scale.

    16-bit greyscale keeps its samples. Transparent pixels are premultiplied
    by their alpha, so fully transparent areas read as black.
    """
    if image.mode in WIDE_GREY_MODES:
        grey = np.clip(np.asarray(image), 0, CHANNEL_MAX).astype(np.uint32)
        return np.repeat(grey[..., None], 3, axis=2)

    if image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info:
        rgba = np.asarray(image.convert("RGBA"), dtype=np.uint64) * WIDEN
        alpha = rgba[..., 3:]
        return (rgba[..., :3] * alpha // CHANNEL_MAX).astype(np.uint32)

    if image.mode != "RGB":
        image = image.convert("RGB")
    return np.asarray(image, dtype=np.uint32) * WIDEN


def sample_pixels(pixels: np.ndarray, cols: int, rows: int) -> np.ndarray:
    """Nearest-neighbour resample of an (h, w, c) array to (rows, cols, c).

    Each output cell takes exactly one source pixel; nothing is averaged.
    """
    src_height, src_width = pixels.shape[:2]
    xs = np.arange(cols, dtype=np.int64) * src_width // cols
    ys = np.arange(rows, dtype=np.int64) * src_height // rows
    return pixels[ys[:, None], xs[None, :]]


def brightness(samples: np.ndarray, inverted: bool = False) -> np.ndarray:
    """Mean of the RGB channels quantized to 0..255.

    Inversion happens on the 16-bit scale, before quantization.
    """
    level = samples[..., :3].sum(axis=-1) // 3
    if inverted:
        level = CHANNEL_MAX - level
    return level // QUANTIZE


def char_indices(levels: np.ndarray, charset_length: int) -> np.ndarray:
    return levels * (charset_length - 1) // BRIGHTNESS_MAX


def colours(samples: np.ndarray) -> np.ndarray:
    """Per-cell 8-bit RGB of the sampled pixels."""
    return (samples[..., :3] // QUANTIZE).astype(np.uint8)

import io

import pytest
from PIL import Image

from asciify.charsets import DEFAULT
from asciify.converter import RESET, convert, convert_to_file, image_to_ascii, image_to_lines, write_ascii
from asciify.decoder import DecodeError
from asciify.options import ConvertOptions
from tests.conftest import encode


def test_solid_white_maps_to_brightest(white_png):
    assert convert(white_png, width=2, height=1, charset=" #") == "##\n"


def test_solid_black_maps_to_darkest():
    img = Image.new("RGB", (30, 40), (0, 0, 0))
    result = image_to_ascii(img, ConvertOptions(width=3, height=2, charset=" #"))
    assert result == "   \n   \n"


def test_inverted_black_maps_to_brightest():
    img = Image.new("RGB", (30, 40), (0, 0, 0))
    result = image_to_ascii(img, ConvertOptions(width=3, height=2, charset=" .:#", inverted=True))
    assert result == "###\n###\n"


def test_gradient_produces_varying_characters(gradient_image):
    result = image_to_ascii(gradient_image, ConvertOptions(width=2, height=1, charset=" #"))
    assert result == " #\n"


def test_default_charset_mid_grey():
    img = Image.new("L", (4, 4), 128)
    assert image_to_ascii(img, ConvertOptions(width=1, height=1)) == DEFAULT[4] + "\n"


def test_single_character_charset_fills_grid(gradient_image):
    result = image_to_ascii(gradient_image, ConvertOptions(width=7, height=3, charset="x"))
    assert result == "xxxxxxx\n" * 3


def test_output_dimensions():
    img = Image.new("RGB", (100, 50), (90, 120, 200))
    lines = image_to_lines(img, ConvertOptions(width=80))
    assert len(lines) == 20
    assert all(len(line) == 80 for line in lines)


def test_every_row_is_newline_terminated():
    img = Image.new("L", (10, 10), 200)
    result = image_to_ascii(img, ConvertOptions(width=4, height=3))
    assert result.count("\n") == 3
    assert result.endswith("\n")
    assert not result.endswith("\n\n")


def test_zero_derived_rows_gives_empty_output():
    img = Image.new("RGB", (1000, 1), (255, 255, 255))
    assert image_to_ascii(img, ConvertOptions(width=80)) == ""
    assert image_to_ascii(img, ConvertOptions(width=80, colored=True)) == ""


def test_one_pixel_image_repeats_one_glyph():
    img = Image.new("RGB", (1, 1), (255, 255, 255))
    result = image_to_ascii(img, ConvertOptions(width=5, height=3, charset=" .#"))
    assert result == "#####\n" * 3


def test_conversion_is_deterministic():
    img = Image.effect_noise((37, 23), 64).convert("RGB")
    options = ConvertOptions(width=31, colored=True)
    assert image_to_ascii(img, options) == image_to_ascii(img, options)


def test_colour_output_escapes_every_glyph():
    img = Image.new("RGB", (20, 20), (255, 0, 0))
    result = image_to_ascii(img, ConvertOptions(width=4, height=2, charset=" #", colored=True))
    assert result.count("\033[38;2;255;0;0m") == 8
    assert result.count(RESET) == 1
    assert result.endswith("\n" + RESET)
    assert result.split("\n")[0] == "\033[38;2;255;0;0m " * 4


def test_colour_false_has_no_escapes():
    img = Image.new("RGB", (20, 20), (255, 0, 0))
    result = image_to_ascii(img, ConvertOptions(width=4, height=2))
    assert "\033" not in result


def test_colour_lines_end_with_reset():
    img = Image.new("RGB", (2, 2), (0, 255, 0))
    lines = image_to_lines(img, ConvertOptions(width=2, height=2, colored=True))
    assert len(lines) == 3
    assert lines[-1] == RESET


def test_accepts_file_path(tmp_path):
    path = tmp_path / "white.png"
    Image.new("RGB", (4, 4), (255, 255, 255)).save(path)
    assert image_to_ascii(path, ConvertOptions(width=2, height=1, charset=" #")) == "##\n"


def test_accepts_binary_stream(white_png):
    assert convert(io.BytesIO(white_png), width=2, height=1, charset=" #") == "##\n"


def test_overrides_apply_on_top_of_options(white_png):
    base = ConvertOptions(width=3, height=1, charset=" #")
    assert convert(white_png, base, inverted=True) == "   \n"


def test_jpeg_input():
    data = encode(Image.new("RGB", (8, 8), (0, 0, 0)), "JPEG")
    assert convert(data, width=2, height=1, charset=" #") == "  \n"


def test_decode_error_propagates():
    with pytest.raises(DecodeError):
        convert(b"definitely not an image")


def test_write_ascii_to_stream(gradient_image):
    out = io.StringIO()
    write_ascii(gradient_image, out, ConvertOptions(width=2, height=1, charset=" #"))
    assert out.getvalue() == " #\n"


def test_convert_to_file(tmp_path, white_png):
    path = tmp_path / "out.txt"
    convert_to_file(white_png, path, width=2, height=1, charset=" #")
    assert path.read_text(encoding="utf-8") == "##\n"


def test_convert_to_file_unwritable_destination(tmp_path, white_png):
    with pytest.raises(OSError):
        convert_to_file(white_png, tmp_path / "missing" / "out.txt", width=2, height=1)


def test_convert_to_file_leaves_no_output_on_decode_error(tmp_path):
    path = tmp_path / "out.txt"
    with pytest.raises(DecodeError):
        convert_to_file(b"\x89PNG\r\n\x1a\ngarbage", path)
    assert not path.exists()


def test_16_bit_grey_png_keeps_full_depth():
    data = encode(Image.new("I;16", (2, 2), 0x4000))
    # 0x4000 quantizes to 64, well below the brightest glyph
    assert convert(data, width=2, height=1, charset=" #") == "  \n"
    assert convert(data, width=1, height=1, charset=" .:-=+*#%@") == ":\n"


def test_transparent_png_reads_black():
    data = encode(Image.new("RGBA", (2, 2), (255, 255, 255, 0)))
    assert convert(data, width=2, height=1, charset=" #") == "  \n"
    assert convert(data, width=1, height=1, charset=" #", colored=True) == "\033[38;2;0;0;0m \n\033[0m"

import io
from dataclasses import dataclass
from typing import BinaryIO, Protocol

from PIL import Image

# Longest magic number we compare against
HEADER_SIZE = 8


class DecodeError(ValueError):
    """Raised when image bytes are corrupt or in an unsupported format."""


class Decoder(Protocol):
    format_name: str

    def matches(self, header: bytes) -> bool:
        """Return True if the leading bytes identify this decoder's format."""
        ...

    def decode(self, data: bytes) -> Image.Image:
        """Decode a complete image, raising DecodeError on failure."""
        ...


@dataclass(frozen=True)
class PillowDecoder:
    """Decodes a single format with Pillow, refusing every other format."""

    format_name: str
    signatures: tuple[bytes, ...]

    def matches(self, header: bytes) -> bool:
        return header.startswith(self.signatures)

    def decode(self, data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data), formats=[self.format_name])
            # Image.open is lazy; force pixel decoding so truncated data fails here
            image.load()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Cannot decode {self.format_name} image: {exc}") from exc
        return image


DECODERS: tuple[Decoder, ...] = (
    PillowDecoder("PNG", (b"\x89PNG\r\n\x1a\n",)),
    PillowDecoder("JPEG", (b"\xff\xd8\xff",)),
    PillowDecoder("GIF", (b"GIF87a", b"GIF89a")),
    PillowDecoder("BMP", (b"BM",)),
)


def sniff(data: bytes, decoders: tuple[Decoder, ...] = DECODERS) -> Decoder:
    header = data[:HEADER_SIZE]
    for decoder in decoders:
        if decoder.matches(header):
            return decoder
    if not data:
        raise DecodeError("Empty image data")
    raise DecodeError("Unsupported image format")


def decode_image(source: bytes | bytearray | BinaryIO, decoders: tuple[Decoder, ...] = DECODERS) -> Image.Image:
    """Decode raw bytes or a binary stream into a Pillow image."""
    data = bytes(source) if isinstance(source, (bytes, bytearray)) else source.read()
    return sniff(data, decoders).decode(data)

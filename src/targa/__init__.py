"""targa - Truevision TGA image decoder."""

from targa.decoder import (
    DecodedImage,
    TGAImageDecoder,
    TGAInfo,
    build_palette,
    decode,
)
from targa.errors import TGAError, TGAFormatError, TGAIOError, TGAParseError
from targa.extension import TGAExtensionArea
from targa.footer import TGAFooter
from targa.header import TGAHeader
from targa.types import (
    Color,
    ColorMapType,
    FirstPixelDestination,
    ImageType,
    PixelFormat,
    TGAFormat,
)

__version__ = "0.1.0"

__all__ = [
    "Color",
    "ColorMapType",
    "DecodedImage",
    "FirstPixelDestination",
    "ImageType",
    "PixelFormat",
    "TGAError",
    "TGAExtensionArea",
    "TGAFooter",
    "TGAFormat",
    "TGAFormatError",
    "TGAHeader",
    "TGAIOError",
    "TGAImageDecoder",
    "TGAInfo",
    "TGAParseError",
    "build_palette",
    "decode",
]

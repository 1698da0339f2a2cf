"""TGA形式の共通型定義

ヘッダーやフッターのフィールド値を表す列挙型と、
フォーマット上の固定長を定義する。
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

FOOTER_SIGNATURE = "TRUEVISION-XFILE"
"""拡張形式（TGA 2.0）を示すフッターシグネチャ"""

FOOTER_BYTE_LENGTH = 26
FOOTER_SIGNATURE_OFFSET_FROM_END = 18
FOOTER_SIGNATURE_BYTE_LENGTH = 16
FOOTER_RESERVED_CHAR_BYTE_LENGTH = 1

HEADER_BYTE_LENGTH = 18

EXTENSION_AREA_AUTHOR_NAME_BYTE_LENGTH = 41
EXTENSION_AREA_AUTHOR_COMMENTS_BYTE_LENGTH = 324
EXTENSION_AREA_JOB_NAME_BYTE_LENGTH = 41
EXTENSION_AREA_SOFTWARE_ID_BYTE_LENGTH = 41
EXTENSION_AREA_SOFTWARE_VERSION_LETTER_BYTE_LENGTH = 1
EXTENSION_AREA_COLOR_CORRECTION_TABLE_LENGTH = 256


class TGAFormat(Enum):
    """TGAファイルの形式

    フッターシグネチャの有無で判別される。
    NEW_TGA: フッターあり（拡張形式）
    ORIGINAL_TGA: フッターなし（旧形式）
    """

    ORIGINAL_TGA = "original"
    NEW_TGA = "new"


class ColorMapType(IntEnum):
    """カラーマップの有無"""

    NO_COLOR_MAP = 0
    COLOR_MAP_INCLUDED = 1


class ImageType(IntEnum):
    """画像データの種類"""

    NO_IMAGE_DATA = 0
    UNCOMPRESSED_COLOR_MAPPED = 1
    UNCOMPRESSED_TRUE_COLOR = 2
    UNCOMPRESSED_BLACK_AND_WHITE = 3
    RUN_LENGTH_ENCODED_COLOR_MAPPED = 9
    RUN_LENGTH_ENCODED_TRUE_COLOR = 10
    RUN_LENGTH_ENCODED_BLACK_AND_WHITE = 11

    @property
    def is_color_mapped(self) -> bool:
        """カラーマップを必要とする種類かどうか"""
        return self in (
            ImageType.UNCOMPRESSED_COLOR_MAPPED,
            ImageType.RUN_LENGTH_ENCODED_COLOR_MAPPED,
        )

    @property
    def is_run_length_encoded(self) -> bool:
        """RLE圧縮された種類かどうか"""
        return self in (
            ImageType.RUN_LENGTH_ENCODED_COLOR_MAPPED,
            ImageType.RUN_LENGTH_ENCODED_TRUE_COLOR,
            ImageType.RUN_LENGTH_ENCODED_BLACK_AND_WHITE,
        )

    @property
    def is_black_and_white(self) -> bool:
        """グレースケールの種類かどうか"""
        return self in (
            ImageType.UNCOMPRESSED_BLACK_AND_WHITE,
            ImageType.RUN_LENGTH_ENCODED_BLACK_AND_WHITE,
        )


class VerticalTransferOrder(IntEnum):
    """ピクセルの上下方向の転送順"""

    UNKNOWN = -1
    BOTTOM = 0
    TOP = 1


class HorizontalTransferOrder(IntEnum):
    """ピクセルの左右方向の転送順"""

    UNKNOWN = -1
    RIGHT = 0
    LEFT = 1


class FirstPixelDestination(Enum):
    """最初に格納されたピクセルが対応する画面上の角"""

    UNKNOWN = "unknown"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


class RLEPacketType(IntEnum):
    """RLEパケットの種類"""

    RAW = 0
    RUN_LENGTH = 1


class PixelFormat(Enum):
    """デコード後のピクセル形式"""

    INDEXED_8 = "8bpp_indexed"
    RGB_555 = "16bpp_rgb555"
    ARGB_1555 = "16bpp_argb1555"
    RGB_24 = "24bpp_rgb"
    RGB_32 = "32bpp_rgb"
    ARGB_32 = "32bpp_argb"
    PARGB_32 = "32bpp_pargb"


@dataclass(frozen=True)
class Color:
    """ARGB色

    Attributes:
        r: 赤（0-255）
        g: 緑（0-255）
        b: 青（0-255）
        a: アルファ（0-255、255が不透明）
    """

    r: int
    g: int
    b: int
    a: int = 255

    def with_alpha(self, a: int) -> "Color":
        """アルファ値だけを差し替えた色を返す"""
        return Color(self.r, self.g, self.b, a)

    def to_tuple(self) -> tuple[int, int, int, int]:
        """(R, G, B, A) のタプルを返す"""
        return (self.r, self.g, self.b, self.a)

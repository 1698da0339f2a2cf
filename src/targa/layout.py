"""ピクセル配置モジュール

行の並び順の正規化、ストライドの計算、出力ピクセル形式の決定を行う。
"""

from dataclasses import dataclass

from targa.errors import TGAFormatError
from targa.types import FirstPixelDestination, PixelFormat


@dataclass(frozen=True)
class RowOrientation:
    """行の並べ替え方法

    Attributes:
        reverse_rows: 行の順序を反転するか
        reverse_bytes_within_row: 各行内のバイト順を反転するか
    """

    reverse_rows: bool
    reverse_bytes_within_row: bool


_ROW_ORIENTATIONS: dict[FirstPixelDestination, RowOrientation] = {
    FirstPixelDestination.TOP_LEFT: RowOrientation(False, True),
    FirstPixelDestination.TOP_RIGHT: RowOrientation(False, False),
    FirstPixelDestination.BOTTOM_LEFT: RowOrientation(True, True),
    FirstPixelDestination.BOTTOM_RIGHT: RowOrientation(True, False),
    FirstPixelDestination.UNKNOWN: RowOrientation(True, False),
}


def row_orientation(destination: FirstPixelDestination) -> RowOrientation:
    """最初のピクセルの位置から行の並べ替え方法を決定する"""
    return _ROW_ORIENTATIONS[destination]


def calculate_stride(width: int, pixel_depth: int) -> int:
    """32ビット境界に揃えた1行あたりのバイト数を計算する"""
    return ((width * pixel_depth + 31) & ~31) >> 3


def calculate_padding(width: int, pixel_depth: int) -> int:
    """1行をストライドに揃えるための埋め草バイト数を計算する"""
    return calculate_stride(width, pixel_depth) - (width * pixel_depth + 7) // 8


def normalize_rows(
    rows: list[bytes], destination: FirstPixelDestination, padding: int
) -> bytes:
    """行を表示順に並べ替え、パディングを付けて1つのバッファに連結する

    Args:
        rows: ファイル格納順の行のリスト
        destination: 最初のピクセルが対応する画面上の角
        padding: 各行の末尾に付ける0埋めバイト数

    Returns:
        行優先のピクセルバッファ
    """
    orientation = row_orientation(destination)
    ordered = reversed(rows) if orientation.reverse_rows else iter(rows)
    pad = bytes(padding)

    buffer = bytearray()
    for row in ordered:
        buffer += row[::-1] if orientation.reverse_bytes_within_row else row
        buffer += pad
    return bytes(buffer)


# attributes_type: 0=アルファなし、1/2=未定義、3=アルファあり、4=乗算済みアルファ
_FORMATS_16_BY_ATTRIBUTES_TYPE: dict[int, PixelFormat] = {
    0: PixelFormat.RGB_555,
    1: PixelFormat.RGB_555,
    2: PixelFormat.RGB_555,
    3: PixelFormat.ARGB_1555,
}
_FORMATS_16_BY_ATTRIBUTE_BITS: dict[int, PixelFormat] = {
    0: PixelFormat.RGB_555,
    1: PixelFormat.ARGB_1555,
}
_FORMATS_32_BY_ATTRIBUTES_TYPE: dict[int, PixelFormat] = {
    0: PixelFormat.RGB_32,
    1: PixelFormat.RGB_32,
    2: PixelFormat.RGB_32,
    3: PixelFormat.ARGB_32,
    4: PixelFormat.PARGB_32,
}
_FORMATS_32_BY_ATTRIBUTE_BITS: dict[int, PixelFormat] = {
    0: PixelFormat.RGB_32,
    8: PixelFormat.ARGB_32,
}


def resolve_pixel_format(
    pixel_depth: int, attribute_bits: int, attributes_type: int | None = None
) -> PixelFormat:
    """ピクセル深度と属性値から出力ピクセル形式を決定する

    拡張領域がある場合はattributes_typeを、ない場合はヘッダーのattribute_bitsを使う。

    Args:
        pixel_depth: ピクセル深度（ビット）
        attribute_bits: ヘッダーのイメージ記述子ビット0-3
        attributes_type: 拡張領域のattributes_type（拡張領域がない場合はNone）

    Returns:
        出力ピクセル形式

    Raises:
        TGAFormatError: 組み合わせに対応する形式がない場合
    """
    if pixel_depth == 8:
        return PixelFormat.INDEXED_8
    if pixel_depth == 24:
        return PixelFormat.RGB_24

    use_extension = attributes_type is not None
    selector = attributes_type if attributes_type is not None else attribute_bits

    if pixel_depth == 16:
        table = _FORMATS_16_BY_ATTRIBUTES_TYPE if use_extension else _FORMATS_16_BY_ATTRIBUTE_BITS
    elif pixel_depth == 32:
        table = _FORMATS_32_BY_ATTRIBUTES_TYPE if use_extension else _FORMATS_32_BY_ATTRIBUTE_BITS
    else:
        table = {}

    resolved = table.get(selector)
    if resolved is None:
        name = "attributes_type" if use_extension else "attribute_bits"
        raise TGAFormatError(f"ピクセル形式を決定できません: {pixel_depth}ビット, {name}={selector}")
    return resolved

"""TGAヘッダー解析モジュール

ファイル先頭の18バイト固定ヘッダーと可変長の画像IDを読み取る。
"""

import logging
from dataclasses import dataclass

from targa.errors import TGAFormatError
from targa.reader import ByteReader
from targa.types import (
    Color,
    ColorMapType,
    FirstPixelDestination,
    HorizontalTransferOrder,
    ImageType,
    VerticalTransferOrder,
)

logger = logging.getLogger(__name__)

SUPPORTED_PIXEL_DEPTHS: tuple[int, ...] = (8, 16, 24, 32)
"""サポートするピクセル深度（ビット）"""


def get_bits(value: int, offset: int, count: int) -> int:
    """整数の指定ビット範囲を取り出す

    Args:
        value: 対象の値
        offset: 最下位ビットの位置
        count: 取り出すビット数

    Returns:
        取り出したビット値
    """
    return (value >> offset) & ((1 << count) - 1)


@dataclass(frozen=True)
class TGAHeader:
    """TGAヘッダー情報

    Attributes:
        image_id_length: 画像IDフィールドのバイト長
        color_map_type: カラーマップの有無
        image_type: 画像データの種類
        color_map_first_entry_index: カラーマップの先頭エントリのインデックス
        color_map_length: カラーマップのエントリ数
        color_map_entry_size: カラーマップ1エントリのビット数（15/16/24/32）
        x_origin: 画像左下のX座標
        y_origin: 画像左下のY座標
        width: 画像の幅（ピクセル）
        height: 画像の高さ（ピクセル）
        pixel_depth: ピクセル深度（8/16/24/32）
        attribute_bits: イメージ記述子のビット0-3
        vertical_transfer_order: イメージ記述子のビット5
        horizontal_transfer_order: イメージ記述子のビット4
        image_id_value: 画像ID文字列
        color_map: カラーマップ（カラーマップ読み込み後に設定される）
        image_data_offset: 画像データの開始位置（カラーマップ読み込み後に設定される）
    """

    image_id_length: int
    color_map_type: ColorMapType
    image_type: ImageType
    color_map_first_entry_index: int
    color_map_length: int
    color_map_entry_size: int
    x_origin: int
    y_origin: int
    width: int
    height: int
    pixel_depth: int
    attribute_bits: int
    vertical_transfer_order: VerticalTransferOrder
    horizontal_transfer_order: HorizontalTransferOrder
    image_id_value: str = ""
    color_map: tuple[Color, ...] = ()
    image_data_offset: int = 0

    @property
    def bytes_per_pixel(self) -> int:
        """1ピクセルあたりのバイト数"""
        return self.pixel_depth // 8

    @property
    def first_pixel_destination(self) -> FirstPixelDestination:
        """最初のピクセルが対応する画面上の角"""
        vertical = self.vertical_transfer_order
        horizontal = self.horizontal_transfer_order
        if vertical == VerticalTransferOrder.TOP:
            if horizontal == HorizontalTransferOrder.LEFT:
                return FirstPixelDestination.TOP_LEFT
            if horizontal == HorizontalTransferOrder.RIGHT:
                return FirstPixelDestination.TOP_RIGHT
        elif vertical == VerticalTransferOrder.BOTTOM:
            if horizontal == HorizontalTransferOrder.LEFT:
                return FirstPixelDestination.BOTTOM_LEFT
            if horizontal == HorizontalTransferOrder.RIGHT:
                return FirstPixelDestination.BOTTOM_RIGHT
        return FirstPixelDestination.UNKNOWN


def parse_header(reader: ByteReader) -> TGAHeader:
    """ストリーム先頭からヘッダーを読み取る

    読み取り後のカーソルは画像IDの直後（カラーマップの先頭）を指す。

    Args:
        reader: 読み取り対象のリーダー

    Returns:
        解析されたヘッダー情報（カラーマップは未設定）

    Raises:
        TGAFormatError: サポート外のフィールド値の場合
        TGAIOError: ヘッダーの途中でデータが終端した場合
    """
    reader.seek(0)

    image_id_length = reader.read_uint8()
    raw_color_map_type = reader.read_uint8()
    raw_image_type = reader.read_uint8()
    color_map_first_entry_index = reader.read_uint16()
    color_map_length = reader.read_uint16()
    color_map_entry_size = reader.read_uint8()
    x_origin = reader.read_int16()
    y_origin = reader.read_int16()
    width = reader.read_uint16()
    height = reader.read_uint16()
    pixel_depth = reader.read_uint8()
    image_descriptor = reader.read_uint8()

    try:
        color_map_type = ColorMapType(raw_color_map_type)
    except ValueError:
        raise TGAFormatError(f"不明なカラーマップ種別です: {raw_color_map_type}") from None

    try:
        image_type = ImageType(raw_image_type)
    except ValueError:
        raise TGAFormatError(f"不明な画像種別です: {raw_image_type}") from None

    if pixel_depth not in SUPPORTED_PIXEL_DEPTHS:
        raise TGAFormatError(
            f"ピクセル深度は8/16/24/32ビットのみサポートしています: {pixel_depth}"
        )

    image_id_value = ""
    if image_id_length > 0:
        image_id_value = reader.read_ascii(image_id_length)

    header = TGAHeader(
        image_id_length=image_id_length,
        color_map_type=color_map_type,
        image_type=image_type,
        color_map_first_entry_index=color_map_first_entry_index,
        color_map_length=color_map_length,
        color_map_entry_size=color_map_entry_size,
        x_origin=x_origin,
        y_origin=y_origin,
        width=width,
        height=height,
        pixel_depth=pixel_depth,
        attribute_bits=get_bits(image_descriptor, 0, 4),
        vertical_transfer_order=VerticalTransferOrder(get_bits(image_descriptor, 5, 1)),
        horizontal_transfer_order=HorizontalTransferOrder(get_bits(image_descriptor, 4, 1)),
        image_id_value=image_id_value,
    )
    logger.debug(
        "ヘッダー: %dx%d, %dbpp, image_type=%s, origin=%s",
        width,
        height,
        pixel_depth,
        image_type.name,
        header.first_pixel_destination.name,
    )
    return header

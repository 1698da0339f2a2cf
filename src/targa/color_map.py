"""カラーマップ読み込みモジュール

ヘッダーの直後に格納されたカラーマップ（パレット）を読み込む。
エントリ幅は15/16/24/32ビットに対応する。
"""

import dataclasses
import logging

from targa.errors import TGAFormatError
from targa.header import TGAHeader, get_bits
from targa.reader import ByteReader
from targa.types import Color, ColorMapType

logger = logging.getLogger(__name__)

COLOR_MAP_ENTRY_BYTES: dict[int, int] = {15: 2, 16: 2, 24: 3, 32: 4}
"""エントリ幅（ビット）ごとの1エントリのバイト数"""


def _expand_5bit(value: int) -> int:
    """5ビットのチャンネル値を8ビットに拡張する（31 -> 255）"""
    return (value << 3) | (value >> 2)


def color_from_2_bytes(one: int, two: int, *, has_alpha: bool = True) -> Color:
    """2バイトにパックされた5-5-5(-1)形式の色を展開する

    ファイル上は下位バイトが先に格納されるため、
    呼び出し側は逆順（上位バイト、下位バイト）で渡す。

    Args:
        one: 上位バイト（A1 R5 G2）
        two: 下位バイト（G3 B5）
        has_alpha: 最上位ビットをアルファとして扱うか（Falseの場合は常に不透明）

    Returns:
        展開された色
    """
    r = get_bits(one, 2, 5)
    g = (get_bits(one, 0, 2) << 3) | get_bits(two, 5, 3)
    b = get_bits(two, 0, 5)
    a = 255 * get_bits(one, 7, 1) if has_alpha else 255
    return Color(_expand_5bit(r), _expand_5bit(g), _expand_5bit(b), a)


def _read_entry(reader: ByteReader, entry_size: int) -> Color:
    if entry_size in (15, 16):
        low, high = reader.read_bytes(2)
        return color_from_2_bytes(high, low, has_alpha=entry_size == 16)
    if entry_size == 24:
        b, g, r = reader.read_bytes(3)
        return Color(r, g, b)
    if entry_size == 32:
        a, b, g, r = reader.read_bytes(4)
        return Color(r, g, b, a)
    raise TGAFormatError(
        f"カラーマップのエントリ幅は15/16/24/32ビットのみサポートしています: {entry_size}"
    )


def load_color_map(reader: ByteReader, header: TGAHeader) -> TGAHeader:
    """カラーマップを読み込み、画像データの開始位置を確定する

    カーソルは画像IDの直後を指している必要がある。
    カラーマップが不要な画像種別に含まれている場合も読み込むが、エラーにはしない。
    その場合にエントリ幅が読めないときはカラーマップを無視する。

    Args:
        reader: 読み取り対象のリーダー
        header: parse_header()で得たヘッダー

    Returns:
        color_mapとimage_data_offsetを設定したヘッダー

    Raises:
        TGAFormatError: カラーマップが必要なのに含まれていない場合、
            またはカラーマップが必要でエントリ幅がサポート外の場合
    """
    requires_color_map = header.image_type.is_color_mapped

    if header.color_map_type != ColorMapType.COLOR_MAP_INCLUDED:
        if requires_color_map:
            raise TGAFormatError("この画像種別にはカラーマップが必要ですが、ファイルに含まれていません")
        return dataclasses.replace(header, image_data_offset=reader.tell())

    if requires_color_map and header.color_map_length == 0:
        raise TGAFormatError("この画像種別にはカラーマップが必要ですが、エントリ数が0です")

    if header.color_map_length > 0 and header.color_map_entry_size not in COLOR_MAP_ENTRY_BYTES:
        if not requires_color_map:
            # 読めないカラーマップは0バイトとして扱い、画像データの直前とみなす
            logger.debug("不要なカラーマップを無視します（%dビット）", header.color_map_entry_size)
            return dataclasses.replace(header, image_data_offset=reader.tell())
        raise TGAFormatError(
            "カラーマップのエントリ幅は15/16/24/32ビットのみサポートしています: "
            f"{header.color_map_entry_size}"
        )

    colors = tuple(
        _read_entry(reader, header.color_map_entry_size) for _ in range(header.color_map_length)
    )
    logger.debug("カラーマップ: %dエントリ（%dビット）", len(colors), header.color_map_entry_size)

    return dataclasses.replace(header, color_map=colors, image_data_offset=reader.tell())

"""TGAフッター解析モジュール

ストリーム末尾のシグネチャを確認し、拡張形式（NEW_TGA）か
旧形式（ORIGINAL_TGA）かを判別する。
"""

import io
import logging
from dataclasses import dataclass

from targa.errors import TGAIOError
from targa.reader import ByteReader
from targa.types import (
    FOOTER_BYTE_LENGTH,
    FOOTER_RESERVED_CHAR_BYTE_LENGTH,
    FOOTER_SIGNATURE,
    FOOTER_SIGNATURE_BYTE_LENGTH,
    FOOTER_SIGNATURE_OFFSET_FROM_END,
    TGAFormat,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TGAFooter:
    """TGAフッター情報

    旧形式のファイルでは全フィールドがデフォルト値になる。

    Attributes:
        format: ファイル形式（NEW_TGAまたはORIGINAL_TGA）
        extension_area_offset: 拡張領域のオフセット（0の場合は拡張領域なし）
        developer_directory_offset: 開発者ディレクトリのオフセット
        signature: フッターシグネチャ
        reserved_character: 予約文字
    """

    format: TGAFormat = TGAFormat.ORIGINAL_TGA
    extension_area_offset: int = 0
    developer_directory_offset: int = 0
    signature: str = ""
    reserved_character: str = ""

    @property
    def has_extension_area(self) -> bool:
        """拡張領域が存在するかどうか"""
        return self.format == TGAFormat.NEW_TGA and self.extension_area_offset > 0


def parse_footer(reader: ByteReader) -> TGAFooter:
    """ストリーム末尾からフッターを読み取る

    Args:
        reader: 読み取り対象のリーダー

    Returns:
        解析されたフッター情報。シグネチャが一致しない場合は旧形式のデフォルト値

    Raises:
        TGAIOError: フッター領域を含むにはストリームが短すぎる場合
    """
    if reader.length < FOOTER_SIGNATURE_OFFSET_FROM_END:
        raise TGAIOError(f"データが短すぎます: {reader.length}バイト")

    reader.seek(-FOOTER_SIGNATURE_OFFSET_FROM_END, io.SEEK_END)
    signature = reader.read_ascii(FOOTER_SIGNATURE_BYTE_LENGTH)

    if signature != FOOTER_SIGNATURE or reader.length < FOOTER_BYTE_LENGTH:
        logger.debug("フッターシグネチャなし: 旧形式として扱います")
        return TGAFooter(format=TGAFormat.ORIGINAL_TGA)

    reader.seek(-FOOTER_BYTE_LENGTH, io.SEEK_END)
    extension_area_offset = reader.read_int32()
    developer_directory_offset = reader.read_int32()
    # シグネチャは読み取り済み
    reader.read_bytes(FOOTER_SIGNATURE_BYTE_LENGTH)
    reserved_character = reader.read_ascii(FOOTER_RESERVED_CHAR_BYTE_LENGTH)

    logger.debug(
        "拡張形式: extension_area_offset=%d, developer_directory_offset=%d",
        extension_area_offset,
        developer_directory_offset,
    )
    return TGAFooter(
        format=TGAFormat.NEW_TGA,
        extension_area_offset=extension_area_offset,
        developer_directory_offset=developer_directory_offset,
        signature=signature,
        reserved_character=reserved_character,
    )

"""TGA拡張領域解析モジュール

フッターが指す拡張領域から作者情報、タイムスタンプ、ガンマ値、
スキャンライン表、色補正表などのメタ情報を読み取る。
ガンマ値やアスペクト比は読み取るのみで、画素には適用しない。
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from targa.footer import TGAFooter
from targa.header import TGAHeader
from targa.reader import ByteReader
from targa.types import (
    EXTENSION_AREA_AUTHOR_COMMENTS_BYTE_LENGTH,
    EXTENSION_AREA_AUTHOR_NAME_BYTE_LENGTH,
    EXTENSION_AREA_COLOR_CORRECTION_TABLE_LENGTH,
    EXTENSION_AREA_JOB_NAME_BYTE_LENGTH,
    EXTENSION_AREA_SOFTWARE_ID_BYTE_LENGTH,
    EXTENSION_AREA_SOFTWARE_VERSION_LETTER_BYTE_LENGTH,
    Color,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TGAExtensionArea:
    """TGA拡張領域の情報

    Attributes:
        extension_size: 拡張領域のサイズ（バイト）
        author_name: 作者名
        author_comments: 作者コメント
        date_time_stamp: 保存日時（解釈できない場合はNone）
        job_name: ジョブ名
        job_time: ジョブの所要時間
        software_id: 作成ソフトウェアのID
        software_version: 作成ソフトウェアのバージョン（例: "1.50a"）
        key_color: キーカラー
        pixel_aspect_ratio_numerator: ピクセルアスペクト比の分子
        pixel_aspect_ratio_denominator: ピクセルアスペクト比の分母
        gamma_numerator: ガンマ値の分子
        gamma_denominator: ガンマ値の分母
        color_correction_offset: 色補正表のオフセット
        postage_stamp_offset: サムネイルのオフセット
        scan_line_offset: スキャンライン表のオフセット
        attributes_type: アルファの扱い（0-4）
        scan_line_table: 各行の開始オフセット
        color_correction_table: 色補正表（16ビット精度のARGB）
    """

    extension_size: int = 0
    author_name: str = ""
    author_comments: str = ""
    date_time_stamp: datetime | None = None
    job_name: str = ""
    job_time: timedelta = timedelta()
    software_id: str = ""
    software_version: str = ""
    key_color: Color = Color(0, 0, 0, 0)
    pixel_aspect_ratio_numerator: int = 0
    pixel_aspect_ratio_denominator: int = 0
    gamma_numerator: int = 0
    gamma_denominator: int = 0
    color_correction_offset: int = 0
    postage_stamp_offset: int = 0
    scan_line_offset: int = 0
    attributes_type: int = 0
    scan_line_table: tuple[int, ...] = ()
    color_correction_table: tuple[Color, ...] = ()

    @property
    def pixel_aspect_ratio(self) -> float | None:
        """ピクセルアスペクト比（分母が0の場合はNone）"""
        if self.pixel_aspect_ratio_denominator == 0:
            return None
        return self.pixel_aspect_ratio_numerator / self.pixel_aspect_ratio_denominator

    @property
    def gamma(self) -> float | None:
        """ガンマ値（分母が0の場合はNone）"""
        if self.gamma_denominator == 0:
            return None
        return self.gamma_numerator / self.gamma_denominator


def _to_datetime(
    month: int, day: int, year: int, hour: int, minute: int, second: int
) -> datetime | None:
    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None


def _read_argb_int16(reader: ByteReader) -> Color:
    # 格納順は A, R, B, G
    a = reader.read_int16()
    r = reader.read_int16()
    b = reader.read_int16()
    g = reader.read_int16()
    return Color(r, g, b, a)


def parse_extension_area(
    reader: ByteReader, footer: TGAFooter, header: TGAHeader
) -> TGAExtensionArea | None:
    """拡張領域を読み取る

    Args:
        reader: 読み取り対象のリーダー
        footer: parse_footer()で得たフッター
        header: ヘッダー（スキャンライン表の行数に使用）

    Returns:
        拡張領域の情報。フッターが拡張領域を指していない場合はNone

    Raises:
        TGAIOError: 拡張領域の途中でデータが終端した場合
    """
    if not footer.has_extension_area:
        return None

    reader.seek(footer.extension_area_offset)

    extension_size = reader.read_uint16()
    author_name = reader.read_ascii(EXTENSION_AREA_AUTHOR_NAME_BYTE_LENGTH)
    author_comments = reader.read_ascii(EXTENSION_AREA_AUTHOR_COMMENTS_BYTE_LENGTH)

    month, day, year, hour, minute, second = (reader.read_int16() for _ in range(6))
    date_time_stamp = _to_datetime(month, day, year, hour, minute, second)

    job_name = reader.read_ascii(EXTENSION_AREA_JOB_NAME_BYTE_LENGTH)
    job_hours, job_minutes, job_seconds = (reader.read_int16() for _ in range(3))
    job_time = timedelta(hours=job_hours, minutes=job_minutes, seconds=job_seconds)

    software_id = reader.read_ascii(EXTENSION_AREA_SOFTWARE_ID_BYTE_LENGTH)
    version_number = reader.read_int16() / 100.0
    version_letter = reader.read_ascii(EXTENSION_AREA_SOFTWARE_VERSION_LETTER_BYTE_LENGTH)
    software_version = f"{version_number:.2f}{version_letter}"

    # キーカラーの格納順は A, R, B, G
    a, r, b, g = reader.read_bytes(4)
    key_color = Color(r, g, b, a)

    pixel_aspect_ratio_numerator = reader.read_int16()
    pixel_aspect_ratio_denominator = reader.read_int16()
    gamma_numerator = reader.read_int16()
    gamma_denominator = reader.read_int16()
    color_correction_offset = reader.read_int32()
    postage_stamp_offset = reader.read_int32()
    scan_line_offset = reader.read_int32()
    attributes_type = reader.read_uint8()

    scan_line_table: tuple[int, ...] = ()
    if scan_line_offset > 0:
        reader.seek(scan_line_offset)
        scan_line_table = tuple(reader.read_int32() for _ in range(header.height))

    color_correction_table: tuple[Color, ...] = ()
    if color_correction_offset > 0:
        reader.seek(color_correction_offset)
        color_correction_table = tuple(
            _read_argb_int16(reader) for _ in range(EXTENSION_AREA_COLOR_CORRECTION_TABLE_LENGTH)
        )

    logger.debug(
        "拡張領域: attributes_type=%d, scan_lines=%d, color_correction=%d",
        attributes_type,
        len(scan_line_table),
        len(color_correction_table),
    )
    return TGAExtensionArea(
        extension_size=extension_size,
        author_name=author_name,
        author_comments=author_comments,
        date_time_stamp=date_time_stamp,
        job_name=job_name,
        job_time=job_time,
        software_id=software_id,
        software_version=software_version,
        key_color=key_color,
        pixel_aspect_ratio_numerator=pixel_aspect_ratio_numerator,
        pixel_aspect_ratio_denominator=pixel_aspect_ratio_denominator,
        gamma_numerator=gamma_numerator,
        gamma_denominator=gamma_denominator,
        color_correction_offset=color_correction_offset,
        postage_stamp_offset=postage_stamp_offset,
        scan_line_offset=scan_line_offset,
        attributes_type=attributes_type,
        scan_line_table=scan_line_table,
        color_correction_table=color_correction_table,
    )

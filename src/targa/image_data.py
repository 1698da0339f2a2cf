"""画像データ読み込みモジュール

非圧縮またはRLE圧縮の画像データを、ファイル格納順の行リストとして読み取る。
"""

import logging

from targa.errors import TGAFormatError
from targa.header import TGAHeader
from targa.reader import ByteReader
from targa.rle import RLEDecoder, RLEDecoderProtocol
from targa.types import ImageType

logger = logging.getLogger(__name__)


def read_image_rows(
    reader: ByteReader,
    header: TGAHeader,
    rle_decoder: RLEDecoderProtocol | None = None,
) -> list[bytes]:
    """画像データを行ごとに読み取る

    Args:
        reader: 読み取り対象のリーダー
        header: load_color_map()で画像データの開始位置を確定したヘッダー
        rle_decoder: RLE解凍に使うデコーダー（Noneの場合はRLEDecoder）

    Returns:
        ファイル格納順の行のリスト（各行は width * bytes_per_pixel バイト）

    Raises:
        TGAFormatError: 画像データが存在しない場合
        TGAIOError: 非圧縮データの途中でデータが終端した場合
        TGAParseError: RLEデータの途中でデータが終端した場合
    """
    if header.image_type == ImageType.NO_IMAGE_DATA or header.image_data_offset <= 0:
        raise TGAFormatError("画像データがありません")

    reader.seek(header.image_data_offset)
    row_byte_size = header.width * header.bytes_per_pixel

    if header.image_type.is_run_length_encoded:
        decoder = rle_decoder or RLEDecoder()
        rows = decoder.decode(reader, header.bytes_per_pixel, row_byte_size, header.height)
    else:
        rows = [reader.read_bytes(row_byte_size) for _ in range(header.height)]

    logger.debug("画像データ: %d行（%dバイト/行）", len(rows), row_byte_size)
    return rows

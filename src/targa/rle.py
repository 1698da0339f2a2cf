"""RLE解凍アルゴリズムモジュール

TGA形式のランレングス圧縮されたピクセルデータを行単位に展開する。
"""

from typing import Protocol

from targa.errors import TGAIOError, TGAParseError
from targa.header import get_bits
from targa.reader import ByteReader
from targa.types import RLEPacketType


class RLEDecoderProtocol(Protocol):
    """RLE解凍インターフェース"""

    def decode(
        self, reader: ByteReader, bytes_per_pixel: int, row_byte_size: int, height: int
    ) -> list[bytes]:
        """RLE圧縮データを行ごとのバイト列に解凍する

        Args:
            reader: 画像データ先頭を指すリーダー
            bytes_per_pixel: 1ピクセルあたりのバイト数
            row_byte_size: 1行あたりのバイト数
            height: 行数

        Returns:
            ファイル格納順の行のリスト

        Raises:
            TGAParseError: 期待するバイト数に達する前にデータが終端した場合
        """
        ...


class RLEDecoder:
    """TGA RLE解凍クラス

    各パケットは制御バイト1つとペイロードからなる。
    - 制御バイトの最上位ビット: パケット種別（0=RAW、1=RUN_LENGTH）
    - 下位7ビット + 1: ピクセル数
    RUN_LENGTHは1ピクセル分を読み取りピクセル数だけ繰り返し、
    RAWはピクセル数分のバイトをそのまま読み取る。
    パケットは行の境界をまたいでよく、1行分たまるたびに行を確定する。
    """

    def decode(
        self, reader: ByteReader, bytes_per_pixel: int, row_byte_size: int, height: int
    ) -> list[bytes]:
        """RLE圧縮データを行ごとのバイト列に解凍する

        画像全体のバイト数に達した時点で終了し、
        最後のパケットがはみ出した分は切り捨てる。

        Args:
            reader: 画像データ先頭を指すリーダー
            bytes_per_pixel: 1ピクセルあたりのバイト数
            row_byte_size: 1行あたりのバイト数
            height: 行数

        Returns:
            ファイル格納順の行のリスト

        Raises:
            TGAParseError: 期待するバイト数に達する前にデータが終端した場合
        """
        total_byte_size = row_byte_size * height
        if total_byte_size == 0:
            return [b"" for _ in range(height)]

        rows: list[bytes] = []
        row = bytearray()
        bytes_read = 0

        while bytes_read < total_byte_size:
            try:
                packet = reader.read_uint8()
                packet_type = RLEPacketType(get_bits(packet, 7, 1))
                pixel_count = get_bits(packet, 0, 7) + 1

                if packet_type == RLEPacketType.RUN_LENGTH:
                    payload = reader.read_bytes(bytes_per_pixel) * pixel_count
                else:
                    payload = reader.read_bytes(bytes_per_pixel * pixel_count)
            except TGAIOError as e:
                raise TGAParseError(
                    f"RLEデータが途中で終端しました: {bytes_read}/{total_byte_size}バイト"
                ) from e

            # 画像全体を超える分は切り捨て
            payload = payload[: total_byte_size - bytes_read]
            bytes_read += len(payload)

            pos = 0
            while pos < len(payload):
                take = min(row_byte_size - len(row), len(payload) - pos)
                row += payload[pos : pos + take]
                pos += take
                if len(row) == row_byte_size:
                    rows.append(bytes(row))
                    row = bytearray()

        return rows

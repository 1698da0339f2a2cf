"""画像データ読み込みのテスト"""

import pytest

from targa.color_map import load_color_map
from targa.errors import TGAFormatError, TGAIOError
from targa.header import parse_header
from targa.image_data import read_image_rows
from targa.reader import ByteReader


def _read(data: bytes) -> list[bytes]:
    reader = ByteReader.from_bytes(data)
    header = load_color_map(reader, parse_header(reader))
    return read_image_rows(reader, header)


class TestReadImageRows:
    """read_image_rows()のテスト"""

    def test_uncompressed(self, tga) -> None:
        """非圧縮データを行ごとにファイル順で読む"""
        data = tga.header(width=2, height=2, pixel_depth=16) + bytes(range(8))
        assert _read(data) == [b"\x00\x01\x02\x03", b"\x04\x05\x06\x07"]

    def test_uncompressed_after_color_map(self, tga) -> None:
        """カラーマップの後ろから画像データを読む"""
        data = tga.header(
            image_id=b"x",
            color_map_type=1,
            image_type=1,
            color_map_length=2,
            color_map_entry_size=24,
            width=3,
            height=1,
            pixel_depth=8,
        )
        data += b"\xff" * 6 + b"\x00\x01\x01"
        assert _read(data) == [b"\x00\x01\x01"]

    def test_run_length_encoded(self, tga) -> None:
        data = tga.header(image_type=11, width=3, height=2, pixel_depth=8) + b"\x85\x42"
        assert _read(data) == [b"\x42\x42\x42", b"\x42\x42\x42"]

    def test_no_image_data(self, tga) -> None:
        """画像種別がNO_IMAGE_DATAの場合はTGAFormatError"""
        data = tga.header(image_type=0) + b"\x00" * 4
        with pytest.raises(TGAFormatError, match="画像データがありません"):
            _read(data)

    def test_truncated_uncompressed(self, tga) -> None:
        """非圧縮データが不足している場合はTGAIOError"""
        data = tga.header(width=4, height=4, pixel_depth=32) + b"\x00" * 10
        with pytest.raises(TGAIOError):
            _read(data)

"""ヘッダー解析のテスト"""

import pytest

from targa.errors import TGAFormatError, TGAIOError
from targa.header import TGAHeader, get_bits, parse_header
from targa.reader import ByteReader
from targa.types import (
    ColorMapType,
    FirstPixelDestination,
    HorizontalTransferOrder,
    ImageType,
    VerticalTransferOrder,
)


class TestGetBits:
    """get_bits()のテスト"""

    @pytest.mark.parametrize(
        "value, offset, count, expected",
        [
            pytest.param(0b1010_1111, 0, 4, 0b1111, id="正常系: 下位4ビット"),
            pytest.param(0b1010_1111, 4, 1, 0, id="正常系: ビット4"),
            pytest.param(0b1010_1111, 5, 1, 1, id="正常系: ビット5"),
            pytest.param(0x85, 7, 1, 1, id="正常系: 最上位ビット"),
            pytest.param(0x85, 0, 7, 5, id="正常系: 下位7ビット"),
        ],
    )
    def test_get_bits(self, value: int, offset: int, count: int, expected: int) -> None:
        assert get_bits(value, offset, count) == expected


class TestParseHeader:
    """parse_header()のテスト"""

    def test_parse_all_fields(self, tga) -> None:
        """全フィールドが正しく解析される"""
        data = tga.header(
            image_id=b"hello\x00\x00",
            color_map_type=1,
            image_type=9,
            color_map_first_entry_index=3,
            color_map_length=256,
            color_map_entry_size=24,
            x_origin=-5,
            y_origin=7,
            width=640,
            height=480,
            pixel_depth=8,
            image_descriptor=0x28,
        )
        reader = ByteReader.from_bytes(data + b"\x00" * 32)
        header = parse_header(reader)

        assert isinstance(header, TGAHeader)
        assert header.image_id_length == 7
        assert header.color_map_type == ColorMapType.COLOR_MAP_INCLUDED
        assert header.image_type == ImageType.RUN_LENGTH_ENCODED_COLOR_MAPPED
        assert header.color_map_first_entry_index == 3
        assert header.color_map_length == 256
        assert header.color_map_entry_size == 24
        assert header.x_origin == -5
        assert header.y_origin == 7
        assert header.width == 640
        assert header.height == 480
        assert header.pixel_depth == 8
        assert header.bytes_per_pixel == 1
        assert header.attribute_bits == 8
        assert header.vertical_transfer_order == VerticalTransferOrder.TOP
        assert header.horizontal_transfer_order == HorizontalTransferOrder.RIGHT
        assert header.image_id_value == "hello"
        assert header.color_map == ()
        # カーソルは画像IDの直後
        assert reader.tell() == 18 + 7

    @pytest.mark.parametrize(
        "descriptor, expected",
        [
            pytest.param(0x00, FirstPixelDestination.BOTTOM_RIGHT, id="正常系: ビット4=0, ビット5=0"),
            pytest.param(0x10, FirstPixelDestination.BOTTOM_LEFT, id="正常系: ビット4=1, ビット5=0"),
            pytest.param(0x20, FirstPixelDestination.TOP_RIGHT, id="正常系: ビット4=0, ビット5=1"),
            pytest.param(0x30, FirstPixelDestination.TOP_LEFT, id="正常系: ビット4=1, ビット5=1"),
        ],
    )
    def test_first_pixel_destination(self, tga, descriptor: int, expected) -> None:
        """イメージ記述子から最初のピクセルの位置が決まる"""
        data = tga.header(image_descriptor=descriptor) + b"\x00" * 8
        header = parse_header(ByteReader.from_bytes(data))
        assert header.first_pixel_destination == expected

    @pytest.mark.parametrize(
        "pixel_depth",
        [
            pytest.param(8, id="正常系: 8ビット"),
            pytest.param(16, id="正常系: 16ビット"),
            pytest.param(24, id="正常系: 24ビット"),
            pytest.param(32, id="正常系: 32ビット"),
        ],
    )
    def test_supported_pixel_depths(self, tga, pixel_depth: int) -> None:
        data = tga.header(pixel_depth=pixel_depth) + b"\x00" * 8
        assert parse_header(ByteReader.from_bytes(data)).pixel_depth == pixel_depth

    @pytest.mark.parametrize(
        "pixel_depth",
        [
            pytest.param(1, id="異常系: 1ビット"),
            pytest.param(15, id="異常系: 15ビット"),
            pytest.param(48, id="異常系: 48ビット"),
        ],
    )
    def test_unsupported_pixel_depth(self, tga, pixel_depth: int) -> None:
        """サポート外のピクセル深度でTGAFormatErrorを発生させる"""
        data = tga.header(pixel_depth=pixel_depth) + b"\x00" * 8
        with pytest.raises(TGAFormatError, match="ピクセル深度"):
            parse_header(ByteReader.from_bytes(data))

    def test_unknown_image_type(self, tga) -> None:
        data = tga.header(image_type=5) + b"\x00" * 8
        with pytest.raises(TGAFormatError, match="画像種別"):
            parse_header(ByteReader.from_bytes(data))

    def test_unknown_color_map_type(self, tga) -> None:
        data = tga.header(color_map_type=2) + b"\x00" * 8
        with pytest.raises(TGAFormatError, match="カラーマップ種別"):
            parse_header(ByteReader.from_bytes(data))

    def test_truncated_header(self, tga) -> None:
        """ヘッダー途中で終端した場合はTGAIOErrorを発生させる"""
        with pytest.raises(TGAIOError):
            parse_header(ByteReader.from_bytes(tga.header()[:10]))

    def test_truncated_image_id(self, tga) -> None:
        """画像IDが途中で終端した場合はTGAIOErrorを発生させる"""
        data = tga.header(image_id=b"x" * 20)[:25]
        with pytest.raises(TGAIOError):
            parse_header(ByteReader.from_bytes(data))

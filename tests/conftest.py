"""TGAテスト用フィクスチャ"""

import struct

import pytest

FOOTER_SIGNATURE = b"TRUEVISION-XFILE"


class TGABuilder:
    """テスト用のTGAバイト列を組み立てる"""

    @staticmethod
    def header(
        *,
        image_id: bytes = b"",
        color_map_type: int = 0,
        image_type: int = 2,
        color_map_first_entry_index: int = 0,
        color_map_length: int = 0,
        color_map_entry_size: int = 0,
        x_origin: int = 0,
        y_origin: int = 0,
        width: int = 1,
        height: int = 1,
        pixel_depth: int = 24,
        image_descriptor: int = 0,
    ) -> bytes:
        """18バイトのヘッダーと画像IDを生成する"""
        return (
            struct.pack(
                "<BBBHHBhhHHBB",
                len(image_id),
                color_map_type,
                image_type,
                color_map_first_entry_index,
                color_map_length,
                color_map_entry_size,
                x_origin,
                y_origin,
                width,
                height,
                pixel_depth,
                image_descriptor,
            )
            + image_id
        )

    @staticmethod
    def footer(extension_area_offset: int = 0, developer_directory_offset: int = 0) -> bytes:
        """26バイトのフッターを生成する"""
        return (
            struct.pack("<ii", extension_area_offset, developer_directory_offset)
            + FOOTER_SIGNATURE
            + b".\x00"
        )

    @staticmethod
    def extension_area(
        *,
        author_name: bytes = b"",
        author_comments: bytes = b"",
        stamp: tuple[int, int, int, int, int, int] = (0, 0, 0, 0, 0, 0),
        job_name: bytes = b"",
        job_time: tuple[int, int, int] = (0, 0, 0),
        software_id: bytes = b"",
        version_number: int = 0,
        version_letter: bytes = b" ",
        key_color: bytes = b"\x00\x00\x00\x00",
        pixel_aspect: tuple[int, int] = (0, 0),
        gamma: tuple[int, int] = (0, 0),
        color_correction_offset: int = 0,
        postage_stamp_offset: int = 0,
        scan_line_offset: int = 0,
        attributes_type: int = 0,
    ) -> bytes:
        """495バイトの拡張領域を生成する"""
        data = struct.pack("<H", 495)
        data += author_name.ljust(41, b"\x00")
        data += author_comments.ljust(324, b"\x00")
        data += struct.pack("<6h", *stamp)
        data += job_name.ljust(41, b"\x00")
        data += struct.pack("<3h", *job_time)
        data += software_id.ljust(41, b"\x00")
        data += struct.pack("<h", version_number)
        data += version_letter
        data += key_color
        data += struct.pack("<2h", *pixel_aspect)
        data += struct.pack("<2h", *gamma)
        data += struct.pack(
            "<iii", color_correction_offset, postage_stamp_offset, scan_line_offset
        )
        data += struct.pack("B", attributes_type)
        assert len(data) == 495
        return data

    def extended(self, body: bytes, **extension_fields: object) -> bytes:
        """本体の後ろに拡張領域とフッターを付けた拡張形式のTGAを生成する"""
        offset = len(body)
        return body + self.extension_area(**extension_fields) + self.footer(offset)  # type: ignore[arg-type]


@pytest.fixture
def tga() -> TGABuilder:
    """TGAバイト列ビルダー"""
    return TGABuilder()

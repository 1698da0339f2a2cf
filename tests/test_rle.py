"""RLE解凍のテスト"""

import pytest

from targa.errors import TGAParseError
from targa.reader import ByteReader
from targa.rle import RLEDecoder


def rle_encode(pixels: list[bytes]) -> bytes:
    """テスト用のRLEエンコーダー

    同じピクセルが2つ以上続く箇所はRUN_LENGTHパケット、
    それ以外はRAWパケットにまとめる（いずれも最大128ピクセル）。
    """
    out = bytearray()
    raw: list[bytes] = []

    def flush_raw() -> None:
        while raw:
            chunk = raw[:128]
            del raw[:128]
            out.append(len(chunk) - 1)
            out.extend(b"".join(chunk))

    i = 0
    while i < len(pixels):
        run = 1
        while i + run < len(pixels) and pixels[i + run] == pixels[i] and run < 128:
            run += 1
        if run >= 2:
            flush_raw()
            out.append(0x80 | (run - 1))
            out.extend(pixels[i])
        else:
            raw.append(pixels[i])
        i += run
    flush_raw()
    return bytes(out)


def _decode(data: bytes, bytes_per_pixel: int, width: int, height: int) -> list[bytes]:
    reader = ByteReader.from_bytes(data)
    return RLEDecoder().decode(reader, bytes_per_pixel, width * bytes_per_pixel, height)


def _rows(pixels: list[bytes], width: int) -> list[bytes]:
    return [b"".join(pixels[i : i + width]) for i in range(0, len(pixels), width)]


class TestRLEDecoderPackets:
    """RLEDecoder.decode()のパケット単位のテスト"""

    def test_run_length_packet(self) -> None:
        """RUN_LENGTHパケットは1ピクセルを指定数繰り返す"""
        rows = _decode(b"\x83\x01\x02\x03", 3, 4, 1)
        assert rows == [b"\x01\x02\x03" * 4]

    def test_raw_packet(self) -> None:
        """RAWパケットはピクセル数分をそのまま読み取る"""
        rows = _decode(b"\x02\x0a\x0b\x0c", 1, 3, 1)
        assert rows == [b"\x0a\x0b\x0c"]

    def test_packet_spans_rows(self) -> None:
        """1パケットが行の境界をまたいで次の行に続く"""
        rows = _decode(b"\x85\x07", 1, 2, 3)
        assert rows == [b"\x07\x07", b"\x07\x07", b"\x07\x07"]

    def test_raw_packet_spans_rows(self) -> None:
        rows = _decode(b"\x03\x01\x02\x03\x04", 1, 2, 2)
        assert rows == [b"\x01\x02", b"\x03\x04"]

    def test_overshoot_is_truncated(self) -> None:
        """画像全体を超える分のピクセルは切り捨てる"""
        rows = _decode(b"\xff\x09", 1, 2, 2)
        assert rows == [b"\x09\x09", b"\x09\x09"]

    def test_stops_at_total(self) -> None:
        """必要なバイト数に達したら残りのデータは読まない"""
        reader = ByteReader.from_bytes(b"\x81\x05\xff\xff\xff")
        rows = RLEDecoder().decode(reader, 1, 2, 1)
        assert rows == [b"\x05\x05"]
        assert reader.tell() == 2

    def test_empty_image(self) -> None:
        assert _decode(b"\x00", 3, 0, 2) == [b"", b""]
        assert _decode(b"\x00", 3, 2, 0) == []

    @pytest.mark.parametrize(
        "data",
        [
            pytest.param(b"\x83\x01", id="異常系: RUN_LENGTHのピクセル不足"),
            pytest.param(b"\x03\x01\x02\x03", id="異常系: RAWのデータ不足"),
            pytest.param(b"\x81\x01\x02\x03", id="異常系: パケットが途中で終わる"),
        ],
    )
    def test_truncated_stream(self, data: bytes) -> None:
        """期待するバイト数に達する前に終端した場合はTGAParseError"""
        with pytest.raises(TGAParseError, match="RLEデータが途中で終端しました"):
            _decode(data, 3, 4, 2)


class TestRLEDecoderRoundTrip:
    """参照エンコーダーとの往復テスト"""

    def test_single_pixel_runs(self) -> None:
        """長さ1のランのみ"""
        pixels = [bytes([i, 255 - i, i // 2]) for i in range(12)]
        data = rle_encode(pixels)
        assert _decode(data, 3, 4, 3) == _rows(pixels, 4)

    def test_max_length_run(self) -> None:
        """128ピクセル（最大）のラン"""
        pixels = [b"\x11\x22"] * 128 + [b"\x33\x44"] * 128
        data = rle_encode(pixels)
        assert data[0] == 0xFF
        assert _decode(data, 2, 16, 16) == _rows(pixels, 16)

    def test_runs_straddle_rows(self) -> None:
        """行の境界をまたぐランと生データの混在"""
        width, height = 5, 4
        pixels = (
            [b"\x01\x01\x01\x01"] * 7
            + [bytes([i, i, i, i]) for i in range(2, 6)]
            + [b"\x09\x09\x09\x09"] * 9
        )
        assert len(pixels) == width * height
        data = rle_encode(pixels)
        assert _decode(data, 4, width, height) == _rows(pixels, width)

    def test_long_raw_sequence(self) -> None:
        """128ピクセルを超える生データは複数のRAWパケットになる"""
        pixels = [bytes([i % 256]) for i in range(300)]
        data = rle_encode(pixels)
        assert _decode(data, 1, 30, 10) == _rows(pixels, 30)

"""TGA画像デコーダーモジュール

フッター、ヘッダー、カラーマップ、拡張領域、画像データの順に読み取り、
行の並べ替えとピクセル形式の決定を経てDecodedImageを組み立てる。
各段階は前段の結果を受け取って新しい値を返すだけで、
途中で失敗した場合は何も返さずに例外を送出する。
"""

import io
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from PIL import Image

from targa.color_map import load_color_map
from targa.extension import TGAExtensionArea, parse_extension_area
from targa.footer import TGAFooter, parse_footer
from targa.header import TGAHeader, parse_header
from targa.image_data import read_image_rows
from targa.layout import (
    calculate_padding,
    calculate_stride,
    normalize_rows,
    resolve_pixel_format,
    row_orientation,
)
from targa.reader import ByteReader
from targa.types import Color, PixelFormat, TGAFormat

logger = logging.getLogger(__name__)

Source = str | Path | bytes | bytearray | BinaryIO
"""decode()が受け付ける入力"""

GRAYSCALE_PALETTE: tuple[Color, ...] = tuple(Color(i, i, i, 255) for i in range(256))
"""白黒画像用の256階調パレット"""

# ピクセル形式ごとの (PILモード, rawモード)
_PIL_MODES: dict[PixelFormat, tuple[str, str]] = {
    PixelFormat.RGB_555: ("RGB", "BGR;15"),
    PixelFormat.ARGB_1555: ("RGBA", "BGRA;15"),
    PixelFormat.RGB_24: ("RGB", "BGR"),
    PixelFormat.RGB_32: ("RGB", "BGRX"),
    PixelFormat.ARGB_32: ("RGBA", "BGRA"),
    PixelFormat.PARGB_32: ("RGBa", "BGRa"),
}


@dataclass(frozen=True)
class DecodedImage:
    """デコード済みのTGA画像

    Attributes:
        width: 画像の幅（ピクセル）
        height: 画像の高さ（ピクセル）
        stride: 32ビット境界に揃えた1行あたりのバイト数
        padding: 各行末尾の埋め草バイト数
        pixel_format: ピクセル形式
        pixel_bytes: 行優先のピクセルバッファ（stride * height バイト）
        palette: インデックスカラー画像のパレット（それ以外はNone）
        header: ヘッダー情報
        footer: フッター情報
        extension_area: 拡張領域（存在しない場合はNone）
    """

    width: int
    height: int
    stride: int
    padding: int
    pixel_format: PixelFormat
    pixel_bytes: bytes
    palette: tuple[Color, ...] | None
    header: TGAHeader
    footer: TGAFooter
    extension_area: TGAExtensionArea | None = None

    @property
    def format(self) -> TGAFormat:
        """ファイル形式（NEW_TGAまたはORIGINAL_TGA）"""
        return self.footer.format

    @property
    def has_alpha(self) -> bool:
        """アルファチャンネルを持つ形式かどうか"""
        return self.pixel_format in (
            PixelFormat.ARGB_1555,
            PixelFormat.ARGB_32,
            PixelFormat.PARGB_32,
        )

    def to_pil(self) -> Image.Image:
        """PIL.Imageオブジェクトに変換する

        乗算済みアルファはRGBAに戻して返す。
        ピクセルバッファはリトルエンディアンのビットマップ配置
        （BGR / BGRX / BGRA、5-5-5、パレットインデックス）として解釈する。

        行内のバイトを反転した画像（最初のピクセルが左側の角）は各ピクセルの
        バイト順も逆になっているため、行を元の順に戻して読み込んだ後に左右反転する。
        ピクセルの並びはpixel_bytesと同じになる。

        Returns:
            変換されたPIL.Imageオブジェクト
        """
        reversed_within_row = row_orientation(
            self.header.first_pixel_destination
        ).reverse_bytes_within_row
        data = self._restore_row_bytes() if reversed_within_row else self.pixel_bytes

        image = self._frombytes(data)
        if reversed_within_row:
            return image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
        return image

    def _restore_row_bytes(self) -> bytes:
        """各行のピクセル部分を反転し、ファイル上のバイト順に戻す"""
        row_byte_size = self.stride - self.padding
        buffer = bytearray()
        for offset in range(0, self.stride * self.height, self.stride):
            buffer += self.pixel_bytes[offset : offset + row_byte_size][::-1]
            buffer += self.pixel_bytes[offset + row_byte_size : offset + self.stride]
        return bytes(buffer)

    def _frombytes(self, data: bytes) -> Image.Image:
        size = (self.width, self.height)

        if self.pixel_format == PixelFormat.INDEXED_8:
            if self.palette is None:
                return Image.frombytes("L", size, data, "raw", "L", self.stride, 1)
            image = Image.frombytes("P", size, data, "raw", "P", self.stride, 1)
            flat = bytes(channel for color in self.palette for channel in color.to_tuple())
            image.putpalette(flat, rawmode="RGBA")
            return image

        mode, rawmode = _PIL_MODES[self.pixel_format]
        image = Image.frombytes(mode, size, data, "raw", rawmode, self.stride, 1)
        if mode == "RGBa":
            # 乗算済みアルファは保存できる形式に戻す
            return image.convert("RGBA")
        return image


def _governing_attributes(header: TGAHeader, extension_area: TGAExtensionArea | None) -> int:
    if extension_area is not None:
        return extension_area.attributes_type
    return header.attribute_bits


def build_palette(
    header: TGAHeader, extension_area: TGAExtensionArea | None = None
) -> tuple[Color, ...] | None:
    """インデックスカラー画像のパレットを作成する

    カラーマップがある場合はその色を使い、属性値が0または1（有効なアルファなし）なら
    アルファを不透明に揃える。カラーマップがない8ビット白黒画像には256階調を作成する。

    Args:
        header: カラーマップ読み込み済みのヘッダー
        extension_area: 拡張領域（属性値の判定に使用）

    Returns:
        パレット。作成できない場合はNone
    """
    if header.color_map:
        if _governing_attributes(header, extension_area) in (0, 1):
            return tuple(color.with_alpha(255) for color in header.color_map)
        return header.color_map

    if header.pixel_depth == 8 and header.image_type.is_black_and_white:
        return GRAYSCALE_PALETTE

    return None


def _decode_reader(reader: ByteReader) -> DecodedImage:
    footer = parse_footer(reader)
    header = parse_header(reader)
    header = load_color_map(reader, header)
    extension_area = parse_extension_area(reader, footer, header)

    rows = read_image_rows(reader, header)

    stride = calculate_stride(header.width, header.pixel_depth)
    padding = calculate_padding(header.width, header.pixel_depth)
    pixel_bytes = normalize_rows(rows, header.first_pixel_destination, padding)

    pixel_format = resolve_pixel_format(
        header.pixel_depth,
        header.attribute_bits,
        extension_area.attributes_type if extension_area is not None else None,
    )
    palette = build_palette(header, extension_area) if pixel_format == PixelFormat.INDEXED_8 else None

    logger.debug("デコード完了: %s, stride=%d, padding=%d", pixel_format.name, stride, padding)
    return DecodedImage(
        width=header.width,
        height=header.height,
        stride=stride,
        padding=padding,
        pixel_format=pixel_format,
        pixel_bytes=pixel_bytes,
        palette=palette,
        header=header,
        footer=footer,
        extension_area=extension_area,
    )


@contextmanager
def _open_reader(source: Source) -> Iterator[ByteReader]:
    """入力からリーダーを作成する

    パスの場合はファイルを開き、ブロックを抜けるときに必ず閉じる。
    呼び出し側が渡したストリームは閉じない。
    """
    if isinstance(source, (bytes, bytearray)):
        yield ByteReader(io.BytesIO(bytes(source)))
    elif isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {path}")
        with path.open("rb") as f:
            yield ByteReader(f)
    else:
        yield ByteReader(source)


def decode(source: Source) -> DecodedImage:
    """TGA画像をデコードする

    Args:
        source: ファイルパス、バイト列、またはシーク可能なバイナリストリーム

    Returns:
        デコード済みの画像

    Raises:
        FileNotFoundError: パスが存在しない場合
        TGAIOError: 読み取りエラー、空またはシーク不可のストリーム、データ不足の場合
        TGAFormatError: サポート外のフィールド値の場合
        TGAParseError: RLEデータが途中で終端した場合
    """
    with _open_reader(source) as reader:
        return _decode_reader(reader)


@dataclass(frozen=True)
class TGAInfo:
    """TGA画像のメタ情報

    画像データを展開せずに読み取れる情報を保持する不変データクラス。

    Attributes:
        header: ヘッダー情報（カラーマップ読み込み済み）
        footer: フッター情報
        extension_area: 拡張領域（存在しない場合はNone）
    """

    header: TGAHeader
    footer: TGAFooter
    extension_area: TGAExtensionArea | None = None

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height

    @property
    def format(self) -> TGAFormat:
        return self.footer.format


class TGAImageDecoder:
    """TGA画像デコーダー

    .tga拡張子のファイルを読み込み、DecodedImageまたはPIL.Imageに変換する。
    """

    EXTENSION = ".tga"

    def is_tga_file(self, file_path: Path) -> bool:
        """指定されたファイルがTGAとして読み込めるかどうかを判定する

        拡張子とヘッダーのピクセル深度・画像種別を確認する。

        Args:
            file_path: 判定対象のファイルパス

        Returns:
            TGAとして読み込める場合True、そうでない場合False
        """
        if file_path.suffix.lower() != self.EXTENSION or not file_path.is_file():
            return False

        try:
            with _open_reader(file_path) as reader:
                parse_header(reader)
        except (OSError, ValueError):
            return False
        return True

    def _validate_path(self, file_path: Path) -> None:
        if not file_path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {file_path}")
        if file_path.suffix.lower() != self.EXTENSION:
            raise ValueError(f"拡張子が{self.EXTENSION}ではありません: {file_path}")

    def get_info(self, file_path: Path) -> TGAInfo:
        """TGA画像のメタ情報を取得する

        Args:
            file_path: TGA画像ファイルのパス

        Returns:
            TGA画像のメタ情報

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: 拡張子が.tgaでない場合
            TGAError: 不正なTGAデータの場合
        """
        self._validate_path(file_path)
        with _open_reader(file_path) as reader:
            footer = parse_footer(reader)
            header = load_color_map(reader, parse_header(reader))
            extension_area = parse_extension_area(reader, footer, header)
        return TGAInfo(header=header, footer=footer, extension_area=extension_area)

    def decode(self, file_path: Path) -> DecodedImage:
        """TGA画像をデコードする

        Args:
            file_path: TGA画像ファイルのパス

        Returns:
            デコード済みの画像

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: 拡張子が.tgaでない場合
            TGAError: 不正なTGAデータの場合
        """
        self._validate_path(file_path)
        return decode(file_path)

    def decode_to_image(self, file_path: Path) -> Image.Image:
        """TGA画像をデコードしてPIL.Imageオブジェクトを返す"""
        return self.decode(file_path).to_pil()

    def decode_to_file(self, source: Path, dest: Path) -> None:
        """TGA画像をデコードしてファイルに保存する

        Args:
            source: TGA画像ファイルのパス
            dest: 出力先ファイルのパス（拡張子で出力形式を決定）

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: 拡張子が.tgaでない場合
            TGAError: 不正なTGAデータの場合
        """
        image = self.decode_to_image(source)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            image.save(dest)
        finally:
            image.close()

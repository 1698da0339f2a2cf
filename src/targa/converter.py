"""画像変換モジュール

デコードしたTGA画像をPNGまたはWebP形式で保存する。
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from PIL import Image

from targa.decoder import TGAImageDecoder


@dataclass(frozen=True)
class ConversionResult:
    """変換結果を表すデータクラス

    Attributes:
        source_path: 変換元ファイルのパス
        dest_path: 変換先ファイルのパス
        bytes_before: 変換前のファイルサイズ（バイト）
        bytes_after: 変換後のファイルサイズ（バイト）
    """

    source_path: Path
    dest_path: Path
    bytes_before: int = 0
    bytes_after: int = 0


class QualityPreset(Enum):
    """WebP変換時の品質プリセット"""

    HIGH = 95
    MEDIUM = 85
    LOW = 70


class OutputFormat(Enum):
    """画像出力形式"""

    WEBP = "webp"
    PNG = "png"


def resolve_quality(quality: QualityPreset | int | str) -> int:
    """品質指定を0-100の整数に変換する

    Args:
        quality: プリセット、プリセット名（"high"等）、または0-100の整数

    Returns:
        品質値

    Raises:
        ValueError: 不明なプリセット名、または範囲外の値の場合
    """
    if isinstance(quality, QualityPreset):
        return quality.value
    if isinstance(quality, str):
        try:
            return QualityPreset[quality.upper()].value
        except KeyError:
            raise ValueError(f"不明な品質プリセットです: {quality}") from None
    if not 0 <= quality <= 100:
        raise ValueError(f"品質は0-100の範囲で指定してください: {quality}")
    return quality


class TGAConverter:
    """TGA画像変換クラス

    TGA画像をデコードし、PNG/WebP形式で保存する。

    Attributes:
        output_format: 出力形式（WebPまたはPNG）
        quality: WebP出力時の品質値（0-100）
        lossless_alpha: アルファチャンネルをロスレスで保存するか
    """

    def __init__(
        self,
        output_format: OutputFormat = OutputFormat.PNG,
        quality: QualityPreset | int | str = QualityPreset.HIGH,
        lossless_alpha: bool = True,
    ) -> None:
        """TGAConverterを初期化する

        Args:
            output_format: 出力形式（デフォルトはPNG）
            quality: WebP品質（プリセット、プリセット名、または0-100の整数）
            lossless_alpha: アルファチャンネルをロスレスで保存するか（WebP時のみ使用）
        """
        self._output_format = output_format
        self._quality = resolve_quality(quality)
        self._lossless_alpha = lossless_alpha
        self._decoder = TGAImageDecoder()

    @property
    def output_format(self) -> OutputFormat:
        """出力形式を返す"""
        return self._output_format

    @property
    def quality(self) -> int:
        """WebP品質値を返す"""
        return self._quality

    @property
    def lossless_alpha(self) -> bool:
        """ロスレスアルファ設定を返す"""
        return self._lossless_alpha

    def get_output_path(self, source: Path) -> Path:
        """変換元パスに対応するデフォルトの出力パスを返す"""
        return source.with_suffix(f".{self._output_format.value}")

    def convert(self, source: Path, dest: Path) -> ConversionResult:
        """TGA画像を指定された形式に変換する

        Args:
            source: 変換元ファイルのパス
            dest: 変換先ファイルのパス

        Returns:
            変換結果を表すConversionResultオブジェクト

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: 拡張子が.tgaでない場合
            TGAError: 不正なTGAデータの場合
        """
        img = self._decoder.decode_to_image(source)
        bytes_before = source.stat().st_size

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            if self._output_format == OutputFormat.PNG:
                self._save_as_png(img, dest)
            else:
                self._save_as_webp(img, dest)
        finally:
            img.close()

        return ConversionResult(
            source_path=source,
            dest_path=dest,
            bytes_before=bytes_before,
            bytes_after=dest.stat().st_size,
        )

    def _save_as_webp(self, image: Image.Image, dest: Path) -> None:
        # WebPはパレットを持てない
        if image.mode == "P":
            image = image.convert("RGBA")

        has_alpha = image.mode in ("RGBA", "LA")

        if has_alpha and self._lossless_alpha:
            image.save(dest, "WEBP", quality=self._quality, lossless=True)
        elif has_alpha:
            image.save(dest, "WEBP", quality=self._quality)
        else:
            if image.mode != "RGB":
                image = image.convert("RGB")
            image.save(dest, "WEBP", quality=self._quality)

    def _save_as_png(self, image: Image.Image, dest: Path) -> None:
        """PNG形式はロスレスのため品質設定は使用しない"""
        image.save(dest, "PNG")

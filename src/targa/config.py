"""Configuration module for targa."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")
QUALITY_PRESETS: tuple[str, ...] = ("high", "medium", "low")


class ConfigError(Exception):
    """設定ファイル読み込みエラー"""

    pass


@dataclass(frozen=True)
class ConvertConfig:
    """画像変換設定"""

    format: str = "png"
    quality: int | str = "high"
    lossless_alpha: bool = True


@dataclass(frozen=True)
class TargaConfig:
    """ルート設定"""

    log_level: str = "WARNING"
    convert: ConvertConfig = field(default_factory=ConvertConfig)


def load_config(path: Path) -> TargaConfig:
    """設定ファイルを読み込む

    Args:
        path: 設定ファイルパス

    Returns:
        TargaConfig: 読み込んだ設定（デフォルトとマージ済み）

    Raises:
        ConfigError: ファイル読み込みまたはパースエラー、不正な値
    """
    if not path.exists():
        raise ConfigError(f"設定ファイルが見つかりません: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML解析エラー: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("設定ファイルはYAMLのマッピング形式である必要があります")

    default = get_default_config()

    log_level = str(data.get("log_level", default.log_level)).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"不明なログレベルです: {log_level}")

    return TargaConfig(
        log_level=log_level,
        convert=_merge_convert_config(data.get("convert", {}), default.convert),
    )


def get_default_config() -> TargaConfig:
    """デフォルト設定を取得する"""
    return TargaConfig()


def _merge_convert_config(data: dict[str, Any], default: ConvertConfig) -> ConvertConfig:
    """画像変換設定をマージする"""
    if not isinstance(data, dict):
        return default
    output_format = str(data.get("format", default.format)).lower()
    if output_format not in ("png", "webp"):
        raise ConfigError(f"出力形式はpngまたはwebpを指定してください: {output_format}")
    quality = data.get("quality", default.quality)
    if isinstance(quality, str):
        quality = quality.lower()
        if quality not in QUALITY_PRESETS:
            raise ConfigError(f"不明な品質プリセットです: {quality}")
    elif isinstance(quality, bool) or not isinstance(quality, int) or not 0 <= quality <= 100:
        raise ConfigError(f"品質はhigh/medium/lowまたは0-100の整数で指定してください: {quality!r}")

    lossless_alpha = data.get("lossless_alpha", default.lossless_alpha)
    if not isinstance(lossless_alpha, bool):
        raise ConfigError(f"lossless_alphaはtrueまたはfalseで指定してください: {lossless_alpha!r}")

    return ConvertConfig(
        format=output_format,
        quality=quality,
        lossless_alpha=lossless_alpha,
    )

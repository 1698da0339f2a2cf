"""CLI entry point for targa."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from targa import __version__
from targa.config import ConfigError, TargaConfig, get_default_config, load_config
from targa.converter import OutputFormat, TGAConverter
from targa.decoder import TGAImageDecoder
from targa.errors import TGAError

app = typer.Typer(help="TGA画像をデコード・変換するCLIツール")
console = Console()


def _format_size(size_bytes: int) -> str:
    """バイト数を人間が読みやすい形式に変換する"""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def _configure_logging(verbose: int, config: TargaConfig) -> None:
    """-vの回数と設定ファイルからログレベルを決める"""
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, config.log_level)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config_or_exit(config_path: Path | None) -> TargaConfig:
    if config_path is None:
        return get_default_config()
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


@app.command()
def info(
    input_path: Annotated[Path, typer.Argument(help="TGAファイルパス")],
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True, help="詳細ログ出力")] = 0,
) -> None:
    """TGA画像のヘッダー・拡張領域を表示する"""
    _configure_logging(verbose, get_default_config())

    try:
        tga_info = TGAImageDecoder().get_info(input_path)
    except FileNotFoundError:
        console.print(f"[red]Error: ファイルが見つかりません: {input_path}[/red]")
        raise typer.Exit(1) from None
    except (TGAError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    header = tga_info.header
    table = Table(title="TGA Info")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Format", tga_info.format.name)
    table.add_row("Size", f"{header.width}x{header.height}")
    table.add_row("Pixel Depth", f"{header.pixel_depth} bit")
    table.add_row("Image Type", header.image_type.name)
    table.add_row("First Pixel", header.first_pixel_destination.name)
    table.add_row("Attribute Bits", str(header.attribute_bits))
    if header.image_id_value:
        table.add_row("Image ID", header.image_id_value)

    table.add_section()
    table.add_row("Color Map", header.color_map_type.name)
    if header.color_map:
        table.add_row("  Entries", f"{len(header.color_map)} ({header.color_map_entry_size} bit)")

    extension = tga_info.extension_area
    if extension is not None:
        table.add_section()
        table.add_row("Author", extension.author_name or "-")
        if extension.author_comments:
            table.add_row("Comments", extension.author_comments)
        table.add_row(
            "Timestamp",
            extension.date_time_stamp.isoformat() if extension.date_time_stamp else "N/A",
        )
        table.add_row("Software", f"{extension.software_id} {extension.software_version}".strip())
        table.add_row("Attributes Type", str(extension.attributes_type))
        if extension.gamma is not None:
            table.add_row("Gamma", f"{extension.gamma:.2f}")
        if extension.pixel_aspect_ratio is not None:
            table.add_row("Pixel Aspect", f"{extension.pixel_aspect_ratio:.2f}")

    console.print(table)
    raise typer.Exit(0)


@app.command()
def convert(
    source: Annotated[Path, typer.Argument(help="変換元TGAファイルパス")],
    output: Annotated[Path | None, typer.Option("-o", "--output", help="出力ファイルパス")] = None,
    output_format: Annotated[
        str | None, typer.Option("--format", help="出力形式（png/webp）")
    ] = None,
    config_path: Annotated[Path | None, typer.Option("--config", help="設定ファイル")] = None,
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True, help="詳細ログ出力")] = 0,
) -> None:
    """TGA画像をPNG/WebPに変換する"""
    config = _load_config_or_exit(config_path)
    _configure_logging(verbose, config)

    format_name = (output_format or config.convert.format).lower()
    try:
        converter = TGAConverter(
            output_format=OutputFormat(format_name),
            quality=config.convert.quality,
            lossless_alpha=config.convert.lossless_alpha,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    dest = output if output is not None else converter.get_output_path(source)

    try:
        result = converter.convert(source, dest)
    except FileNotFoundError:
        console.print(f"[red]Error: ファイルが見つかりません: {source}[/red]")
        raise typer.Exit(1) from None
    except (TGAError, ValueError) as e:
        console.print(f"[red]変換失敗: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(
        f"[green]変換完了: {result.dest_path}[/green] "
        f"({_format_size(result.bytes_before)} -> {_format_size(result.bytes_after)})"
    )
    raise typer.Exit(0)


def version_callback(value: bool) -> None:
    """バージョン表示コールバック"""
    if value:
        typer.echo(f"targa {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="バージョンを表示する",
        ),
    ] = False,
) -> None:
    """targa CLI - TGA画像のデコーダー"""
    pass

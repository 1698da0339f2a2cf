"""バイトカーソルモジュール

シーク可能なバイナリストリームからリトルエンディアンの
整数や固定長文字列を読み取る機能を提供する。
"""

import io
import struct
from typing import BinaryIO

from targa.errors import TGAIOError


class ByteReader:
    """シーク可能なバイナリリーダー

    メモリ上またはファイル上のストリームをラップし、
    TGA形式で使われる型（uint8/int16/int32/ASCII）を読み取る。
    要求したバイト数を読み取れない場合はTGAIOErrorを送出する。

    使用例:
        >>> reader = ByteReader.from_bytes(b"\\x01\\x00")
        >>> reader.read_int16()
        1
    """

    def __init__(self, stream: BinaryIO) -> None:
        """リーダーを初期化する

        Args:
            stream: シーク可能なバイナリストリーム

        Raises:
            TGAIOError: ストリームがシーク不可、または空の場合
        """
        if not stream.seekable():
            raise TGAIOError("シーク可能なストリームが必要です")
        self._stream = stream
        current = stream.tell()
        self._length = stream.seek(0, io.SEEK_END)
        stream.seek(current, io.SEEK_SET)
        if self._length == 0:
            raise TGAIOError("ストリームが空です")

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteReader":
        """バイト列からリーダーを作成する"""
        return cls(io.BytesIO(data))

    @property
    def length(self) -> int:
        """ストリームの全長（バイト）"""
        return self._length

    def tell(self) -> int:
        """現在の読み取り位置を返す"""
        return self._stream.tell()

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """読み取り位置を移動する

        Args:
            offset: オフセット
            whence: 基準位置（io.SEEK_SET / io.SEEK_CUR / io.SEEK_END）

        Returns:
            移動後の位置

        Raises:
            TGAIOError: 移動先がストリームの範囲外の場合
        """
        if whence == io.SEEK_SET:
            target = offset
        elif whence == io.SEEK_CUR:
            target = self.tell() + offset
        else:
            target = self._length + offset
        if target < 0 or target > self._length:
            raise TGAIOError(f"ストリームの範囲外へのシークです: {target}（全長 {self._length}）")
        return self._stream.seek(target, io.SEEK_SET)

    def read_bytes(self, size: int) -> bytes:
        """指定バイト数を読み取る

        Raises:
            TGAIOError: データが不足している場合
        """
        data = self._stream.read(size)
        if len(data) != size:
            raise TGAIOError(
                f"データが不足しています: {size}バイト要求、{len(data)}バイト読み取り"
                f"（位置 {self.tell() - len(data)}）"
            )
        return data

    def read_uint8(self) -> int:
        return self.read_bytes(1)[0]

    def read_int16(self) -> int:
        return struct.unpack("<h", self.read_bytes(2))[0]

    def read_uint16(self) -> int:
        return struct.unpack("<H", self.read_bytes(2))[0]

    def read_int32(self) -> int:
        return struct.unpack("<i", self.read_bytes(4))[0]

    def read_ascii(self, size: int) -> str:
        """固定長のASCII文字列を読み取り、末尾のNULを除去する"""
        return self.read_bytes(size).decode("ascii", errors="replace").rstrip("\x00")

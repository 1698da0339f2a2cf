"""TGAデコーダーの例外定義

デコード処理で発生するエラーを種類ごとに分類する。
"""


class TGAError(Exception):
    """TGAデコードエラーの基底クラス"""

    pass


class TGAIOError(TGAError, OSError):
    """ストリームの読み取りエラー

    ストリームが読み取れない、シーク不可、または
    読み取り対象の領域に対してデータが短すぎる場合に発生する。
    """

    pass


class TGAFormatError(TGAError, ValueError):
    """フィールド値が不正またはサポート外の場合のエラー"""

    pass


class TGAParseError(TGAError, ValueError):
    """ストリームの内容に矛盾がある場合のエラー

    RLEパケット列が期待するバイト数に達する前に終端した場合などに発生する。
    """

    pass

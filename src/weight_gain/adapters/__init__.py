"""
アダプター層

入力ファイル形式ごとのレコード読み込みロジックを提供します。
"""

from pathlib import Path
from typing import Optional, Union

from .record_reader import RecordReader, ReaderError
from .csv_reader import CsvRecordReader
from .xlsx_reader import XlsxRecordReader


def select_reader(path: Union[str, Path], sheet_name: Optional[str] = None) -> RecordReader:
    """
    拡張子から入力ファイルのリーダーを選択

    Args:
        path: 入力ファイルのパス
        sheet_name: スプレッドシートのシート名 (XLSX のみ)

    Returns:
        RecordReader: 対応するリーダー

    Raises:
        ReaderError: 対応していない拡張子の場合
    """
    suffix = Path(path).suffix.lower()
    if suffix in CsvRecordReader.extensions:
        return CsvRecordReader()
    if suffix in XlsxRecordReader.extensions:
        return XlsxRecordReader(sheet_name=sheet_name)
    raise ReaderError(f"Unsupported input format: {suffix or '(none)'}", path=path)


__all__ = [
    "RecordReader",
    "ReaderError",
    "CsvRecordReader",
    "XlsxRecordReader",
    "select_reader",
]

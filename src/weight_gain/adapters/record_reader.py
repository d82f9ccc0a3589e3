"""
レコードリーダー抽象基底クラス

CSV・スプレッドシートなど入力ファイル形式の差異を吸収するための抽象インターフェースを定義します。
新しい形式に対応する場合は、このクラスを継承して具象リーダーを実装します。
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union


class ReaderError(Exception):
    """
    読み込みエラー例外

    ファイルが存在しない、形式が想定と異なるなど、入力ファイルを
    レコード列に変換できない場合を表します。
    """

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        """
        Args:
            message: エラーメッセージ
            path: 読み込みに失敗したファイルのパス
        """
        super().__init__(message)
        self.path = str(path) if path is not None else None


class RecordReader(ABC):
    """
    入力ファイルリーダー抽象基底クラス

    ファイル形式ごとの差異を吸収し、列名 → 値の辞書のリストとして
    レコードを返すための抽象クラスです。
    """

    #: 対応するファイル拡張子 (小文字、ドット付き)
    extensions: tuple = ()

    @abstractmethod
    def read(self, path: Union[str, Path]) -> List[Dict[str, Any]]:
        """
        ファイルからレコードを読み込み

        Args:
            path: 入力ファイルのパス

        Returns:
            List[Dict[str, Any]]: 列名 → 値 (数値・文字列・日付・None) の辞書のリスト

        Raises:
            ReaderError: ファイルを読み込めない場合
        """
        pass

    def _rows_to_records(self, rows: Iterator[Sequence[Any]]) -> List[Dict[str, Any]]:
        """
        行データをヘッダー付きの辞書に変換

        Note:
            - ヘッダーが空の列、ヘッダーより右のセルは読み飛ばす
            - 同名のヘッダーが複数ある場合は最初の列を採用
            - 全セルが空の行はスキップ
        """
        header = next(rows, None)
        if header is None:
            return []

        columns = []
        seen = set()
        for index, name in enumerate(header):
            if self._is_blank(name):
                continue
            name = str(name).strip()
            if name in seen:
                continue
            seen.add(name)
            columns.append((index, name))

        records = []
        for row in rows:
            record = {}
            for index, name in columns:
                value = row[index] if index < len(row) else None
                record[name] = None if self._is_blank(value) else value
            if all(value is None for value in record.values()):
                continue
            records.append(record)
        return records

    @staticmethod
    def _is_blank(value: Any) -> bool:
        """セル値が空 (None・空白文字列) かどうか"""
        return value is None or (isinstance(value, str) and not value.strip())

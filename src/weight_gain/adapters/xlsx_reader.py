"""XLSX リーダー"""

import logging
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .record_reader import ReaderError, RecordReader


class XlsxRecordReader(RecordReader):
    """
    スプレッドシートのシートからレコードを読み込み

    1行目をヘッダーとして扱い、2行目以降を1レコードとします。
    セルの型 (数値・文字列・日時) はそのまま保持します。
    """

    extensions = (".xlsx", ".xlsm")

    def __init__(self, sheet_name: Optional[str] = None):
        """
        XlsxRecordReader を初期化

        Args:
            sheet_name: 読み込むシート名。None の場合は先頭のシートを使用。
        """
        self.sheet_name = sheet_name
        self.logger = logging.getLogger(__name__)

    def read(self, path: Union[str, Path]) -> List[Dict[str, Any]]:
        path = Path(path)
        try:
            workbook = load_workbook(path, read_only=True, data_only=True)
        except FileNotFoundError as e:
            raise ReaderError(f"Input file not found: {path}", path=path) from e
        except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
            raise ReaderError(f"Failed to open spreadsheet: {path}: {e}", path=path) from e

        try:
            if self.sheet_name is None:
                sheet = workbook.worksheets[0]
            elif self.sheet_name in workbook.sheetnames:
                sheet = workbook[self.sheet_name]
            else:
                raise ReaderError(f"Sheet not found: {self.sheet_name}", path=path)

            records = self._rows_to_records(sheet.iter_rows(values_only=True))
        finally:
            workbook.close()

        self.logger.info(
            f"Read {len(records)} records from {path.name}",
            extra={"path": str(path), "sheet": self.sheet_name, "record_count": len(records)}
        )
        return records

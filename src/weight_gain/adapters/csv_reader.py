"""CSV リーダー"""

import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from .record_reader import ReaderError, RecordReader


class CsvRecordReader(RecordReader):
    """
    区切り文字付きテキストからレコードを読み込み

    Responsibilities:
    - 区切り文字 (カンマ・セミコロン・タブ) の判定
    - BOM 付き UTF-8 の許容
    - 空セルを None に変換、空行のスキップ
    - 同名ヘッダーは最初の列を採用
    """

    extensions = (".csv", ".txt")
    DELIMITERS = ",;\t"
    SAMPLE_SIZE = 4096

    def __init__(self, encoding: str = "utf-8-sig"):
        """
        CsvRecordReader を初期化

        Args:
            encoding: ファイルのエンコーディング
        """
        self.encoding = encoding
        self.logger = logging.getLogger(__name__)

    def read(self, path: Union[str, Path]) -> List[Dict[str, Any]]:
        path = Path(path)
        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                sample = f.read(self.SAMPLE_SIZE)
                f.seek(0)
                # DictReader は同名ヘッダーを後の列で上書きするため csv.reader を使う
                reader = csv.reader(f, delimiter=self._detect_delimiter(sample))
                records = self._rows_to_records(row for row in reader if row)
        except FileNotFoundError as e:
            raise ReaderError(f"Input file not found: {path}", path=path) from e
        except (UnicodeDecodeError, csv.Error) as e:
            raise ReaderError(f"Failed to decode CSV file: {path}: {e}", path=path) from e

        self.logger.info(
            f"Read {len(records)} records from {path.name}",
            extra={"path": str(path), "record_count": len(records)}
        )
        return records

    def _detect_delimiter(self, sample: str) -> str:
        """
        ヘッダー行から区切り文字を判定

        データ行は小数点カンマ ("120,5") を含みうるため、ヘッダー行のみで判定する。
        判定できない場合 (1列のみのファイルなど) はカンマ区切りとみなす。
        """
        header = sample.splitlines()[0] if sample else ""
        counts = {delimiter: header.count(delimiter) for delimiter in self.DELIMITERS}
        delimiter = max(counts, key=counts.get)
        return delimiter if counts[delimiter] > 0 else ","

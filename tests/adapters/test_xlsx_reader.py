"""XlsxRecordReader のユニットテスト"""

import pytest
from datetime import datetime
from openpyxl import Workbook

from src.weight_gain.adapters.xlsx_reader import XlsxRecordReader
from src.weight_gain.adapters.record_reader import ReaderError


@pytest.fixture
def workbook_path(tmp_path):
    """計量シートを持つサンプルブックを作成"""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Pesagens"
    sheet.append(["Animal", "Data", "Peso", None])
    sheet.append(["BESS", datetime(2024, 1, 1), 100, None])
    sheet.append([None, None, None, None])
    sheet.append(["BESS", 45302, 120.5, None])

    other = workbook.create_sheet("Resumo")
    other.append(["Animal", "Peso"])
    other.append(["MIMOSA", 300])

    path = tmp_path / "pesagens.xlsx"
    workbook.save(path)
    return path


class TestXlsxRecordReader:
    """XlsxRecordReader のテストケース"""

    def test_read_first_sheet(self, workbook_path):
        """先頭シートを読み込み、セルの型を保持"""
        records = XlsxRecordReader().read(workbook_path)

        assert records == [
            {"Animal": "BESS", "Data": datetime(2024, 1, 1), "Peso": 100},
            {"Animal": "BESS", "Data": 45302, "Peso": 120.5},
        ]

    def test_read_named_sheet(self, workbook_path):
        """シート名を指定して読み込み"""
        records = XlsxRecordReader(sheet_name="Resumo").read(workbook_path)

        assert records == [{"Animal": "MIMOSA", "Peso": 300}]

    def test_unknown_sheet_raises_reader_error(self, workbook_path):
        """存在しないシート名は ReaderError"""
        with pytest.raises(ReaderError) as exc_info:
            XlsxRecordReader(sheet_name="Outra").read(workbook_path)

        assert "Outra" in str(exc_info.value)

    def test_missing_file_raises_reader_error(self, tmp_path):
        """存在しないファイルは ReaderError"""
        with pytest.raises(ReaderError):
            XlsxRecordReader().read(tmp_path / "missing.xlsx")

    def test_invalid_file_raises_reader_error(self, tmp_path):
        """スプレッドシートでないファイルは ReaderError"""
        path = tmp_path / "broken.xlsx"
        path.write_text("not a workbook", encoding="utf-8")

        with pytest.raises(ReaderError):
            XlsxRecordReader().read(path)

    def test_duplicate_header_keeps_first_column(self, tmp_path):
        """同名ヘッダーは最初の列を採用"""
        workbook = Workbook()
        workbook.active.append(["Animal", "Peso", "Peso"])
        workbook.active.append(["BESS", 100, 999])
        path = tmp_path / "duplicado.xlsx"
        workbook.save(path)

        assert XlsxRecordReader().read(path) == [{"Animal": "BESS", "Peso": 100}]

    def test_empty_sheet(self, tmp_path):
        """空シートは空リスト"""
        path = tmp_path / "empty.xlsx"
        Workbook().save(path)

        assert XlsxRecordReader().read(path) == []

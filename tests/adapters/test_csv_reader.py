"""CsvRecordReader のユニットテスト"""

import pytest

from src.weight_gain.adapters.csv_reader import CsvRecordReader
from src.weight_gain.adapters.record_reader import ReaderError


class TestCsvRecordReader:
    """CsvRecordReader のテストケース"""

    @pytest.fixture
    def reader(self):
        """CsvRecordReader インスタンスを作成"""
        return CsvRecordReader()

    def test_read_comma_delimited(self, reader, tmp_path):
        """カンマ区切りの読み込み"""
        path = tmp_path / "pesagens.csv"
        path.write_text(
            "Animal,Data,Peso\nBESS,01/01/2024,100\nBESS,11/01/2024,120\n",
            encoding="utf-8"
        )

        records = reader.read(path)

        assert records == [
            {"Animal": "BESS", "Data": "01/01/2024", "Peso": "100"},
            {"Animal": "BESS", "Data": "11/01/2024", "Peso": "120"},
        ]

    def test_read_semicolon_with_decimal_comma(self, reader, tmp_path):
        """セミコロン区切り (小数点カンマを含む)"""
        path = tmp_path / "pesagens.csv"
        path.write_text(
            "ANIMAL;DATA;PESO\nBESS;01/01/2024;100,5\nBESS;11/01/2024;120,5\n",
            encoding="utf-8"
        )

        records = reader.read(path)

        assert records[0] == {"ANIMAL": "BESS", "DATA": "01/01/2024", "PESO": "100,5"}
        assert len(records) == 2

    def test_read_tab_delimited(self, reader, tmp_path):
        """タブ区切り"""
        path = tmp_path / "pesagens.txt"
        path.write_text("animal\tpeso\nBESS\t100\n", encoding="utf-8")

        assert reader.read(path) == [{"animal": "BESS", "peso": "100"}]

    def test_read_utf8_bom(self, reader, tmp_path):
        """BOM 付き UTF-8 でも先頭列名に BOM が残らない"""
        path = tmp_path / "pesagens.csv"
        path.write_bytes("Animal,Peso\nBESS,100\n".encode("utf-8-sig"))

        assert list(reader.read(path)[0]) == ["Animal", "Peso"]

    def test_empty_cells_become_none_and_blank_rows_skipped(self, reader, tmp_path):
        """空セルは None、空行はスキップ"""
        path = tmp_path / "pesagens.csv"
        path.write_text("Animal,Sexo,Peso\nBESS,,100\n,,\n\nBESS, ,120\n", encoding="utf-8")

        records = reader.read(path)

        assert records == [
            {"Animal": "BESS", "Sexo": None, "Peso": "100"},
            {"Animal": "BESS", "Sexo": None, "Peso": "120"},
        ]

    def test_duplicate_header_keeps_first_column(self, reader, tmp_path):
        """同名ヘッダーは最初の列を採用"""
        path = tmp_path / "pesagens.csv"
        path.write_text("Animal,Peso,Peso\nBESS,100,999\n", encoding="utf-8")

        assert reader.read(path) == [{"Animal": "BESS", "Peso": "100"}]

    def test_short_and_long_rows(self, reader, tmp_path):
        """不足セルは None、ヘッダーより右のセルは読み飛ばす"""
        path = tmp_path / "pesagens.csv"
        path.write_text("Animal,Data,Peso\nBESS,01/01/2024\nBESS,11/01/2024,120,extra\n", encoding="utf-8")

        assert reader.read(path) == [
            {"Animal": "BESS", "Data": "01/01/2024", "Peso": None},
            {"Animal": "BESS", "Data": "11/01/2024", "Peso": "120"},
        ]

    def test_header_only_file(self, reader, tmp_path):
        """ヘッダーのみのファイルは空リスト"""
        path = tmp_path / "pesagens.csv"
        path.write_text("Animal,Data,Peso\n", encoding="utf-8")

        assert reader.read(path) == []

    def test_missing_file_raises_reader_error(self, reader, tmp_path):
        """存在しないファイルは ReaderError"""
        path = tmp_path / "missing.csv"

        with pytest.raises(ReaderError) as exc_info:
            reader.read(path)

        assert exc_info.value.path == str(path)

    def test_undecodable_file_raises_reader_error(self, reader, tmp_path):
        """デコードできないファイルは ReaderError"""
        path = tmp_path / "pesagens.csv"
        path.write_bytes(b"Animal,Peso\n\xff\xfe\xfa,100\n")

        with pytest.raises(ReaderError):
            reader.read(path)

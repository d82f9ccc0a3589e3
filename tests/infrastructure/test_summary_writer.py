"""SummaryWriter のユニットテスト"""

import json
from datetime import datetime
from unittest.mock import patch
import pytest

from src.weight_gain.infrastructure.summary_writer import SummaryWriter
from src.weight_gain.domain.models import GainSummary


class TestSummaryWriter:
    """SummaryWriter のテストケース"""

    @pytest.fixture
    def summary_writer(self, tmp_path):
        """SummaryWriter インスタンスを作成（一時ディレクトリ使用）"""
        return SummaryWriter(tmp_path / "output" / "gain_summaries.json")

    @pytest.fixture
    def sample_summaries(self):
        """サンプル GainSummary を作成"""
        return [
            GainSummary(
                animal="BESS",
                location="Pasto 3",
                sex="F",
                age_months=18,
                peso_inicial=100.0,
                peso_final=120.0,
                ganho_total=20.0,
                periodo_dias=10.0,
                total_pesagens=2,
                ganho_diario=2.0
            ),
            GainSummary(
                animal="MIMOSA",
                peso_inicial=300.0,
                peso_final=320.0,
                ganho_total=20.0,
                periodo_dias=20.0,
                total_pesagens=3,
                ganho_diario=1.0
            )
        ]

    def test_default_output_file(self):
        """既定の出力ファイルパス"""
        assert SummaryWriter().output_file == SummaryWriter.DEFAULT_OUTPUT_FILE

    def test_write_output_creates_directory(self, summary_writer, sample_summaries):
        """出力ディレクトリが自動作成されることを確認"""
        assert not summary_writer.output_file.parent.exists()

        summary_writer.write_output(sample_summaries)

        assert summary_writer.output_file.parent.is_dir()

    def test_write_output_returns_path(self, summary_writer, sample_summaries):
        """出力ファイルパスを返す"""
        output_path = summary_writer.write_output(sample_summaries)

        assert output_path == summary_writer.output_file
        assert output_path.is_file()

    def test_write_output_json_structure(self, summary_writer, sample_summaries):
        """JSON 構造が正しいことを確認"""
        output_path = summary_writer.write_output(sample_summaries, source="pesagens.xlsx")

        with open(output_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        assert set(data) == {"generated_at", "source", "total_count", "summaries"}
        assert data["source"] == "pesagens.xlsx"
        assert data["total_count"] == 2
        assert [s["animal"] for s in data["summaries"]] == ["BESS", "MIMOSA"]
        assert data["summaries"][1]["location"] == "N/A"

    def test_generated_at_is_iso8601_utc(self, summary_writer, sample_summaries):
        """タイムスタンプは Z サフィックス付き ISO 8601"""
        data = json.loads(summary_writer.render(sample_summaries))

        assert data["generated_at"].endswith("Z")
        datetime.fromisoformat(data["generated_at"][:-1])

    def test_write_output_empty_list(self, summary_writer):
        """空リストも出力できる"""
        output_path = summary_writer.write_output([])

        data = json.loads(output_path.read_text(encoding="utf-8"))
        assert data["total_count"] == 0
        assert data["summaries"] == []

    def test_write_output_replaces_previous_file(self, summary_writer, sample_summaries):
        """前回のファイルを置き換え、一時ファイルを残さない"""
        summary_writer.write_output(sample_summaries)
        summary_writer.write_output(sample_summaries[:1])

        data = json.loads(summary_writer.output_file.read_text(encoding="utf-8"))
        assert data["total_count"] == 1
        assert list(summary_writer.output_file.parent.iterdir()) == [summary_writer.output_file]

    def test_write_failure_keeps_previous_file(self, summary_writer, sample_summaries):
        """書き込み失敗時は前回のファイルを変更しない"""
        summary_writer.output_file.parent.mkdir(parents=True)
        summary_writer.output_file.write_text("previous", encoding="utf-8")

        with patch(
            "src.weight_gain.infrastructure.summary_writer.os.replace",
            side_effect=OSError("disk full")
        ):
            with pytest.raises(OSError):
                summary_writer.write_output(sample_summaries)

        assert summary_writer.output_file.read_text(encoding="utf-8") == "previous"
        assert list(summary_writer.output_file.parent.iterdir()) == [summary_writer.output_file]

"""JSON 出力コンポーネント"""

from typing import List, Optional
from pathlib import Path
import json
import os
import tempfile
from datetime import datetime, timezone

from ..domain.models import GainSummary


class SummaryWriter:
    """
    増体サマリーを JSON として出力

    Responsibilities:
    - GainSummary リストを JSON 文字列にレンダリング
    - JSON ファイルへのアトミックな書き込み (途中失敗時に前回の出力を壊さない)
    - 出力先ディレクトリ管理
    """

    DEFAULT_OUTPUT_FILE = Path("output") / "gain_summaries.json"

    def __init__(self, output_file: Optional[Path] = None):
        """
        SummaryWriter を初期化

        Args:
            output_file: 出力ファイルパス。None の場合は "output/gain_summaries.json" を使用。
        """
        self.output_file = Path(output_file) if output_file else self.DEFAULT_OUTPUT_FILE

    def render(self, summaries: List[GainSummary], source: Optional[str] = None) -> str:
        """
        サマリーを JSON 文字列にレンダリング

        Args:
            summaries: 増体サマリー (順序はそのまま保持)
            source: 入力ファイル名 (メタデータとして含める)

        Returns:
            str: JSON 文字列
        """
        output_data = {
            "generated_at": self._get_current_timestamp(),
            "source": source,
            "total_count": len(summaries),
            "summaries": [summary.model_dump(mode="json") for summary in summaries]
        }
        return json.dumps(output_data, ensure_ascii=False, indent=2)

    def write_output(self, summaries: List[GainSummary], source: Optional[str] = None) -> Path:
        """
        サマリーを JSON ファイルに出力

        Args:
            summaries: 増体サマリー
            source: 入力ファイル名

        Returns:
            Path: 出力ファイルパス

        Postconditions: 出力ファイルが完全な内容で置き換えられる
        """
        content = self.render(summaries, source)

        # ディレクトリ自動作成
        self.output_file.parent.mkdir(parents=True, exist_ok=True)

        # 一時ファイルに書き込んでから置き換え
        fd, tmp_name = tempfile.mkstemp(
            dir=self.output_file.parent, prefix=".", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self.output_file)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        return self.output_file

    def _get_current_timestamp(self) -> str:
        """
        現在時刻を ISO 8601 形式で取得

        Returns:
            str: ISO 8601 形式のタイムスタンプ（UTC、Z サフィックス付き）
        """
        return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"

"""環境変数による設定"""

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import os


@dataclass(frozen=True)
class Settings:
    # 出力
    output_path: Path = Path("output") / "gain_summaries.json"

    # スプレッドシート入力時のシート名 (None は先頭のシート)
    sheet_name: Optional[str] = None

    # ロギング
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """環境変数から Settings を生成 (未設定の項目は既定値)"""
        env = os.environ if environ is None else environ
        return cls(
            output_path=Path(env.get("GAIN_REPORT_OUTPUT", str(cls.output_path))),
            sheet_name=env.get("GAIN_REPORT_SHEET") or None,
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
        )

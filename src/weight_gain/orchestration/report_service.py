"""増体レポート作成サービス"""

from typing import Callable, List, Optional, Union
from pathlib import Path
import logging
import time
import uuid
from pydantic import BaseModel

from ..adapters.record_reader import RecordReader, ReaderError
from ..infrastructure.summary_writer import SummaryWriter
from .gain_pipeline import EmptyInputError, GainPipeline


class ReportResult(BaseModel):
    """
    レポート作成結果サマリー

    Attributes:
        success: レポート作成が成功したか
        total_records: 読み込んだレコード件数
        summary_count: 出力した個体サマリー件数
        output_path: 出力ファイルパス
        errors: エラーメッセージリスト
        execution_time_seconds: 実行時間（秒）
    """
    success: bool
    total_records: int = 0
    summary_count: int = 0
    output_path: Optional[str] = None
    errors: List[str] = []
    execution_time_seconds: float = 0.0


class ReportService:
    """
    レポート作成プロセス全体のオーケストレーション

    Responsibilities:
    - リーダー呼び出し、増体集計、出力書き込みの調整
    - エラーハンドリング (失敗時は何も出力しない)
    - 構造化ログ出力
    - 重複実行防止（ロックファイル）
    """

    LOCK_FILE = Path(".gain_report.lock")

    def __init__(
        self,
        reader_factory: Callable[[Union[str, Path]], RecordReader],
        pipeline: GainPipeline,
        summary_writer: SummaryWriter
    ):
        """
        ReportService を初期化

        Args:
            reader_factory: 入力パスからリーダーを選択する関数
            pipeline: 増体集計パイプライン
            summary_writer: JSON 出力サービス
        """
        self.reader_factory = reader_factory
        self.pipeline = pipeline
        self.summary_writer = summary_writer
        self.logger = logging.getLogger(__name__)

    def run_report(self, input_path: Union[str, Path]) -> ReportResult:
        """
        レポート作成を実行

        Args:
            input_path: 入力ファイルのパス

        Returns:
            ReportResult: レポート作成結果サマリー

        Preconditions: ロックファイルが存在しない（重複実行防止）
        Postconditions: 成功時のみ出力ファイルを置き換える
        Invariants: エラー発生時もログ記録とクリーンアップは実行
        """
        if self._is_running():
            self.logger.warning("Report already running, skipping...")
            return ReportResult(
                success=False,
                errors=["Already running"]
            )

        self._acquire_lock()
        start_time = time.time()
        input_path = Path(input_path)

        try:
            execution_id = self._generate_execution_id()
            self.logger.info(
                f"Starting gain report for {input_path.name}",
                extra={"input_path": str(input_path), "execution_id": execution_id}
            )

            records = self.reader_factory(input_path).read(input_path)
            summaries = self.pipeline.run(records)
            output_path = self.summary_writer.write_output(summaries, source=input_path.name)

            execution_time = time.time() - start_time
            self.logger.info(
                "Gain report completed",
                extra={
                    "total_records": len(records),
                    "summary_count": len(summaries),
                    "output_path": str(output_path),
                    "execution_time_seconds": execution_time
                }
            )

            return ReportResult(
                success=True,
                total_records=len(records),
                summary_count=len(summaries),
                output_path=str(output_path),
                execution_time_seconds=execution_time
            )

        except ReaderError as e:
            self.logger.error(f"Failed to read input: {str(e)}")
            return self._failure(f"Failed to read input: {str(e)}", start_time)

        except EmptyInputError as e:
            self.logger.error(f"No records found in {input_path.name}")
            return self._failure(f"No records found: {str(e)}", start_time)

        except Exception as e:
            self.logger.error(f"Processing failed: {str(e)}", exc_info=True)
            return self._failure("Processing failed", start_time)

        finally:
            self._release_lock()

    def _failure(self, message: str, start_time: float) -> ReportResult:
        """失敗結果を生成"""
        return ReportResult(
            success=False,
            errors=[message],
            execution_time_seconds=time.time() - start_time
        )

    def _is_running(self) -> bool:
        """
        ロックファイルの存在確認

        Returns:
            bool: ロックファイルが存在すれば True
        """
        return self.LOCK_FILE.exists()

    def _acquire_lock(self) -> None:
        """ロックファイル作成"""
        self.LOCK_FILE.touch()

    def _release_lock(self) -> None:
        """ロックファイル削除"""
        if self.LOCK_FILE.exists():
            self.LOCK_FILE.unlink()

    def _generate_execution_id(self) -> str:
        """
        実行 ID 生成（UUID）

        Returns:
            str: UUID 形式の実行 ID
        """
        return str(uuid.uuid4())

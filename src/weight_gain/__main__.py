"""CLI エントリーポイント"""

import sys
import logging
import argparse
from functools import partial

from .config import Settings
from .adapters import select_reader
from .orchestration.gain_pipeline import GainPipeline
from .orchestration.report_service import ReportService
from .infrastructure.summary_writer import SummaryWriter


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数の定義"""
    parser = argparse.ArgumentParser(
        prog="weight_gain",
        description="計量記録 (CSV / XLSX) から個体ごとの平均日増体を集計します",
    )
    parser.add_argument("input", help="入力ファイル (.csv, .txt, .xlsx, .xlsm)")
    parser.add_argument("--output", help="出力 JSON ファイル (既定: GAIN_REPORT_OUTPUT)")
    parser.add_argument("--sheet", help="読み込むシート名 (既定: GAIN_REPORT_SHEET または先頭のシート)")
    parser.add_argument(
        "--stdout", action="store_true", help="出力 JSON を標準出力にも表示する"
    )
    return parser


def main(argv=None):
    """
    CLI エントリーポイント

    Usage:
        python -m weight_gain pesagens.xlsx [--output PATH] [--sheet NAME] [--stdout]

    Exit codes:
        0: 成功
        1: 失敗
    """
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    # ロギング設定
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logger = logging.getLogger(__name__)

    try:
        # 依存関係の初期化
        summary_writer = SummaryWriter(args.output or settings.output_path)
        service = ReportService(
            reader_factory=partial(select_reader, sheet_name=args.sheet or settings.sheet_name),
            pipeline=GainPipeline(),
            summary_writer=summary_writer
        )

        # 集計実行
        logger.info(f"Starting gain report for {args.input}...")
        result = service.run_report(args.input)

        # 結果ログ出力
        if result.success:
            logger.info(
                f"Report completed successfully: "
                f"{result.total_records} records read, "
                f"{result.summary_count} animals summarized, "
                f"written to {result.output_path}"
            )
            if args.stdout:
                with open(result.output_path, "r", encoding="utf-8") as f:
                    sys.stdout.write(f.read() + "\n")
            sys.exit(0)
        else:
            logger.error(
                f"Report failed: {', '.join(result.errors)}"
            )
            sys.exit(1)

    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
